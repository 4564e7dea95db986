"""Requirement list interpolation, validation and deduplication."""

import logging
from typing import Dict, List, Mapping, Sequence, Union

from tollgate.constants import RequirementType
from tollgate.models import Parameter, Requirement, parameters_to_map
from tollgate.primitives.errors import ErrorCode, RequirementError
from tollgate.primitives.interpolate import interpolate, interpolate_map

logger = logging.getLogger(__name__)

_SINGLETON_CODES = {
    RequirementType.MODEL: (
        ErrorCode.DUPLICATE_MODEL_REQUIREMENT,
        "you can't select multiple worker models",
    ),
    RequirementType.HOSTNAME: (
        ErrorCode.DUPLICATE_HOSTNAME_REQUIREMENT,
        "you can't select multiple hostname",
    ),
    RequirementType.OS_ARCH: (
        ErrorCode.DUPLICATE_OS_ARCH_REQUIREMENT,
        "you can't select multiple os-architecture",
    ),
}


def _check_format(req: Requirement) -> None:
    if req.type == RequirementType.NETWORK and ":" not in req.value:
        raise RequirementError(
            f"Invalid job requirement {req.name!r}: network requirement must "
            f"contain ':' (example: golang.org:http, golang.org:443), got {req.value!r}",
            code=ErrorCode.INVALID_NETWORK_REQUIREMENT,
            requirement=req,
        )
    if req.type == RequirementType.OS_ARCH:
        parts = req.value.split("/")
        if len(parts) != 2 or not all(parts):
            raise RequirementError(
                f"Invalid job requirement {req.name!r}: os-architecture must be "
                f"'os/arch' (example: linux/amd64), got {req.value!r}",
                code=ErrorCode.INVALID_OS_ARCH_REQUIREMENT,
                requirement=req,
            )


def validate(requirements: Sequence[Requirement]) -> None:
    """Validate a requirement list.

    Rules:
    - no two requirements share both name and type
    - at most one model, one hostname and one os-architecture requirement
    - network values look like host:port, os-architecture values like os/arch

    Raises:
        RequirementError: Naming the first offending requirement.
    """
    seen = set()
    singletons: Dict[RequirementType, Requirement] = {}

    for req in requirements:
        identity = (req.name, req.type)
        if identity in seen:
            raise RequirementError(
                f"Invalid job requirement: duplicate requirement {req.name!r} "
                f"of type {req.type.value!r}",
                code=ErrorCode.DUPLICATE_REQUIREMENT,
                requirement=req,
            )
        seen.add(identity)

        if req.type in _SINGLETON_CODES:
            if req.type in singletons:
                code, detail = _SINGLETON_CODES[req.type]
                raise RequirementError(
                    f"Invalid job requirements: {detail} "
                    f"({singletons[req.type].value!r} and {req.value!r})",
                    code=code,
                    requirement=req,
                )
            singletons[req.type] = req

        _check_format(req)


def deduplicate(requirements: Sequence[Requirement]) -> List[Requirement]:
    """Drop exact duplicates keyed by name + type + value.

    Keeps the first occurrence of each key, in declaration order. The
    input list is not modified.
    """
    result = []
    keys = set()
    for req in requirements:
        key = req.key()
        if key in keys:
            continue
        keys.add(key)
        result.append(req)
    if len(result) != len(requirements):
        logger.debug(f"Dropped {len(requirements) - len(result)} duplicate requirement(s)")
    return result


def interpolate_requirements(
    requirements: Sequence[Requirement],
    params: Union[Sequence[Parameter], Mapping[str, str], None],
) -> List[Requirement]:
    """Resolve placeholders in requirement names and values.

    Parameters may reference each other and are resolved first. Returns
    new Requirement objects; placeholders naming unknown parameters stay
    verbatim.

    Raises:
        TemplateError: A name or value has a bad filter pipeline.
    """
    values = interpolate_map(parameters_to_map(params))
    return [
        req.model_copy(
            update={
                "name": interpolate(req.name, values),
                "value": interpolate(req.value, values),
            }
        )
        for req in requirements
    ]
