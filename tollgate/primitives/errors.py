"""Error types for tollgate primitives and runtime checks.

Admission checks return plain booleans for expected outcomes. These errors
are for malformed input that the caller must surface as a configuration
failure:
- Primitives: bad template filters, malformed glob patterns
- Runtime checks: bad condition operators or regexes, invalid requirement lists
"""

from enum import Enum
from typing import Any, Optional


class ErrorCode(Enum):
    """Standardized error codes."""

    # Template errors
    TEMPLATE_UNKNOWN_FILTER = "TEMPLATE_UNKNOWN_FILTER"
    TEMPLATE_BAD_SYNTAX = "TEMPLATE_BAD_SYNTAX"
    TEMPLATE_BAD_ARGUMENT = "TEMPLATE_BAD_ARGUMENT"

    # Condition errors
    CONDITION_BAD_OPERATOR = "CONDITION_BAD_OPERATOR"
    CONDITION_BAD_REGEX = "CONDITION_BAD_REGEX"
    CONDITION_BAD_WHEN = "CONDITION_BAD_WHEN"

    # Requirement errors
    DUPLICATE_REQUIREMENT = "DUPLICATE_REQUIREMENT"
    DUPLICATE_MODEL_REQUIREMENT = "DUPLICATE_MODEL_REQUIREMENT"
    DUPLICATE_HOSTNAME_REQUIREMENT = "DUPLICATE_HOSTNAME_REQUIREMENT"
    DUPLICATE_OS_ARCH_REQUIREMENT = "DUPLICATE_OS_ARCH_REQUIREMENT"
    INVALID_NETWORK_REQUIREMENT = "INVALID_NETWORK_REQUIREMENT"
    INVALID_OS_ARCH_REQUIREMENT = "INVALID_OS_ARCH_REQUIREMENT"

    # Pattern errors
    GLOB_BAD_PATTERN = "GLOB_BAD_PATTERN"

    # Configuration errors
    CONFIG_ERROR = "CONFIG_ERROR"


class AdmissionError(Exception):
    """Base exception for admission failures caused by malformed input.

    Attributes:
        message: Error description.
        code: ErrorCode classifying the failure.
        cause: Optional underlying exception being wrapped.
    """

    code = ErrorCode.CONFIG_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        cause: Optional[Exception] = None,
    ):
        """Initialize AdmissionError.

        Args:
            message: Description of the error.
            code: Optional ErrorCode overriding the class default.
            cause: Optional exception that triggered this error.
        """
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.cause = cause


class TemplateError(AdmissionError):
    """Malformed placeholder: unknown filter, bad filter syntax or arguments.

    Attributes:
        placeholder: The placeholder text that failed.
    """

    code = ErrorCode.TEMPLATE_BAD_SYNTAX

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        placeholder: Optional[str] = None,
    ):
        super().__init__(message, code=code)
        self.placeholder = placeholder


class ConditionError(AdmissionError):
    """Condition could not be evaluated (bad operator, bad regex)."""

    code = ErrorCode.CONDITION_BAD_OPERATOR


class RequirementError(AdmissionError):
    """Requirement list violates a uniqueness or format rule.

    Attributes:
        requirement: The offending requirement.
    """

    code = ErrorCode.DUPLICATE_REQUIREMENT

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        requirement: Any = None,
    ):
        super().__init__(message, code=code)
        self.requirement = requirement


class GlobError(AdmissionError):
    """Glob pattern could not be compiled.

    Attributes:
        pattern: The raw glob pattern.
    """

    code = ErrorCode.GLOB_BAD_PATTERN

    def __init__(self, message: str, pattern: Optional[str] = None):
        super().__init__(message)
        self.pattern = pattern
