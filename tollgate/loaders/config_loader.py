from pathlib import Path
from typing import Any, Dict

import yaml

from tollgate.config import get_settings
from tollgate.primitives.errors import AdmissionError, ErrorCode

DEFAULTS_DIR = Path(__file__).parent.parent / "defaults"


class ConfigLoader:
    """Base loader for YAML configs with project overrides."""

    def __init__(self, config_name: str):
        self.config_name = config_name
        self._cache: Dict[str, Any] = {}

    def load(self, project_path: Path) -> Dict[str, Any]:
        """Load config with project overrides."""
        cache_key = str(project_path)
        if cache_key in self._cache:
            return self._cache[cache_key]

        config = self._load_yaml(DEFAULTS_DIR / self.config_name)

        project_config_path = (
            Path(project_path) / get_settings().project_dir_name / self.config_name
        )
        if project_config_path.exists():
            project_config = self._load_yaml(project_config_path)
            config = self._merge(config, project_config)

        self._cache[cache_key] = config
        return config

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise AdmissionError(
                f"Invalid YAML in {path}: {e}", code=ErrorCode.CONFIG_ERROR, cause=e
            ) from e
        if not isinstance(data, dict):
            raise AdmissionError(
                f"Expected a mapping at the top of {path}, got {type(data).__name__}",
                code=ErrorCode.CONFIG_ERROR,
            )
        return data

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge override into base.

        Merge semantics:
        - Dicts: recursive deep merge
        - Lists of dicts with `id` keys: merge-by-id
        - Lists without `id` keys: replace entirely
        - Scalars: replace
        """
        result = dict(base)
        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge(result[key], value)
            elif (
                key in result
                and isinstance(result[key], list)
                and isinstance(value, list)
                and result[key]
                and isinstance(result[key][0], dict)
                and result[key][0].get("id") is not None
            ):
                result[key] = self._merge_list_by_id(result[key], value)
            else:
                result[key] = value
        return result

    def _merge_list_by_id(self, base_list: list, override_list: list) -> list:
        """Merge two lists of dicts by their `id` field.

        Base order is kept, overridden entries replaced in place, new
        entries appended.
        """
        overrides = {
            item["id"]: item
            for item in override_list
            if isinstance(item, dict) and item.get("id") is not None
        }
        seen_ids = set()

        result = []
        for item in base_list:
            item_id = item.get("id") if isinstance(item, dict) else None
            if item_id is not None:
                result.append(overrides.get(item_id, item))
                seen_ids.add(item_id)
            else:
                result.append(item)

        for item in override_list:
            item_id = item.get("id") if isinstance(item, dict) else None
            if item_id is not None and item_id not in seen_ids:
                result.append(item)

        return result

    def clear_cache(self):
        self._cache.clear()
