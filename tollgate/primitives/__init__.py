"""Tollgate primitives: stateless string and pattern operations."""

from tollgate.primitives.errors import (
    AdmissionError,
    ConditionError,
    ErrorCode,
    GlobError,
    RequirementError,
    TemplateError,
)
from tollgate.primitives.glob import Glob, match
from tollgate.primitives.interpolate import (
    apply_filters,
    interpolate,
    interpolate_map,
    parse_filters,
)

__all__ = [
    # Errors
    "ErrorCode",
    "AdmissionError",
    "TemplateError",
    "ConditionError",
    "RequirementError",
    "GlobError",
    # Glob
    "Glob",
    "match",
    # Interpolation
    "interpolate",
    "interpolate_map",
    "parse_filters",
    "apply_filters",
]
