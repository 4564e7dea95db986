"""Tollgate: trigger admission for pipeline stages, hooks and jobs."""

from tollgate.constants import Filter, Operator, RequirementType
from tollgate.models import (
    AdmissionEvent,
    AdmissionResult,
    Condition,
    HookFilter,
    Parameter,
    Requirement,
    parameters_to_map,
)
from tollgate.primitives import (
    AdmissionError,
    ConditionError,
    ErrorCode,
    GlobError,
    RequirementError,
    TemplateError,
    interpolate,
    interpolate_map,
)
from tollgate.runtime import (
    admit,
    check_conditions,
    conditions_from_when,
    deduplicate,
    interpolate_requirements,
    is_valid_hook_path,
    is_valid_hook_refs,
    validate,
    validate_ref,
)

__version__ = "0.1.0"

__all__ = [
    # Enumerations
    "Operator",
    "Filter",
    "RequirementType",
    # Models
    "Parameter",
    "Condition",
    "Requirement",
    "HookFilter",
    "AdmissionEvent",
    "AdmissionResult",
    "parameters_to_map",
    # Errors
    "ErrorCode",
    "AdmissionError",
    "TemplateError",
    "ConditionError",
    "RequirementError",
    "GlobError",
    # Interpolation
    "interpolate",
    "interpolate_map",
    # Checks
    "check_conditions",
    "conditions_from_when",
    "validate",
    "deduplicate",
    "interpolate_requirements",
    "is_valid_hook_path",
    "is_valid_hook_refs",
    "validate_ref",
    "admit",
]
