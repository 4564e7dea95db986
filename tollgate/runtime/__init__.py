"""Tollgate runtime checks: conditions, requirements and hook admission."""

from tollgate.runtime.admission import admit
from tollgate.runtime.conditions import (
    apply_operator,
    check_conditions,
    conditions_from_when,
)
from tollgate.runtime.hooks import is_valid_hook_path, is_valid_hook_refs, validate_ref
from tollgate.runtime.requirements import deduplicate, interpolate_requirements, validate

__all__ = [
    "admit",
    "apply_operator",
    "check_conditions",
    "conditions_from_when",
    "is_valid_hook_path",
    "is_valid_hook_refs",
    "validate_ref",
    "validate",
    "deduplicate",
    "interpolate_requirements",
]
