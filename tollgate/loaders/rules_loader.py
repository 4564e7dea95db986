"""Admission rules loader.

Reads hook filters and job requirement lists from the rules file and
turns them into validated models:

    hooks:
      - id: release
        branch_filter: ["release/*"]
        path_filter: ["^src/"]
        when: [success]
        conditions:
          - {variable: git.author, operator: ne, value: bot}
    jobs:
      - id: build
        requirements:
          - {name: go, type: binary, value: go}
"""

import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Union

from tollgate.config import get_settings
from tollgate.models import Condition, HookFilter, Parameter, Requirement
from tollgate.primitives.errors import AdmissionError, ErrorCode
from tollgate.runtime.conditions import conditions_from_when
from tollgate.runtime.requirements import (
    deduplicate,
    interpolate_requirements,
    validate,
)

from .config_loader import ConfigLoader

logger = logging.getLogger(__name__)


class RulesLoader(ConfigLoader):
    def __init__(self, config_name: Optional[str] = None):
        super().__init__(config_name or get_settings().rules_file)

    def get_hooks(self, project_path: Path) -> Dict[str, HookFilter]:
        """Hook filters keyed by hook id, "when" shorthands expanded first."""
        hooks = {}
        for entry in self._entries(project_path, "hooks"):
            conditions = conditions_from_when(entry.get("when") or [])
            conditions += [Condition(**c) for c in entry.get("conditions") or []]
            hooks[entry["id"]] = HookFilter(
                branch_filter=entry.get("branch_filter") or [],
                tag_filter=entry.get("tag_filter") or [],
                path_filter=entry.get("path_filter") or [],
                conditions=conditions,
            )
        return hooks

    def get_requirements(
        self,
        project_path: Path,
        params: Union[Sequence[Parameter], Mapping[str, str], None] = None,
    ) -> Dict[str, List[Requirement]]:
        """Deduplicated and validated requirement lists keyed by job id.

        When params are given, requirement names and values are
        interpolated against them before deduplication.

        Raises:
            TemplateError: If a requirement has a bad filter pipeline.
            RequirementError: If a job's requirement list is invalid.
        """
        jobs = {}
        for entry in self._entries(project_path, "jobs"):
            requirements = [Requirement(**r) for r in entry.get("requirements") or []]
            if params is not None:
                requirements = interpolate_requirements(requirements, params)
            requirements = deduplicate(requirements)
            validate(requirements)
            jobs[entry["id"]] = requirements
        logger.debug(f"Loaded requirements for jobs: {list(jobs)}")
        return jobs

    def _entries(self, project_path: Path, section: str) -> List[Dict]:
        entries = self.load(project_path).get(section) or []
        for entry in entries:
            if not isinstance(entry, dict) or not entry.get("id"):
                raise AdmissionError(
                    f"Every entry of {section!r} needs an id, got {entry!r}",
                    code=ErrorCode.CONFIG_ERROR,
                )
        return entries


_rules_loader: Optional[RulesLoader] = None


def get_rules_loader() -> RulesLoader:
    global _rules_loader
    if _rules_loader is None:
        _rules_loader = RulesLoader()
    return _rules_loader


def load(project_path: Path) -> Dict:
    return get_rules_loader().load(project_path)
