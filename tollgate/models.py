"""Pydantic models for admission inputs.

Conditions, requirements and hook filters are built by callers from
persisted configuration right before an admission decision; parameters and
events describe the live context being admitted.
"""

from typing import Dict, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, Field, field_validator

from tollgate.constants import Operator, RequirementType
from tollgate.primitives.errors import ConditionError, ErrorCode


class Parameter(BaseModel):
    """A resolved build parameter."""

    name: str
    type: str = "string"
    value: str = ""


def parameters_to_map(
    params: Union[Sequence[Parameter], Mapping[str, str], None],
) -> Dict[str, str]:
    """Flatten parameters into a name -> value map. Later entries win."""
    if params is None:
        return {}
    if isinstance(params, Mapping):
        return {k: "" if v is None else str(v) for k, v in params.items()}
    return {p.name: p.value for p in params}


class Condition(BaseModel):
    """A single variable/operator/value rule.

    The value may contain placeholders resolved against the same
    parameters the variable is read from.
    """

    variable: str
    operator: Operator = Operator.EQ
    value: str = ""

    @field_validator("operator", mode="before")
    @classmethod
    def check_operator(cls, v):
        if isinstance(v, Operator):
            return v
        try:
            return Operator(v)
        except ValueError:
            raise ConditionError(
                f"Unknown condition operator: {v!r}",
                code=ErrorCode.CONDITION_BAD_OPERATOR,
            ) from None

    @field_validator("value", mode="before")
    @classmethod
    def stringify_value(cls, v):
        # YAML hands back bools and numbers for unquoted values
        if v is None:
            return ""
        if isinstance(v, bool):
            return "true" if v else "false"
        return str(v)


class Requirement(BaseModel):
    """A prerequisite a job needs from its execution environment."""

    name: str
    type: RequirementType
    value: str = ""

    def key(self) -> str:
        """Deduplication key."""
        return self.name + self.type.value + self.value


class HookFilter(BaseModel):
    """Admission filters of a repository hook."""

    branch_filter: List[str] = Field(default_factory=list)
    tag_filter: List[str] = Field(default_factory=list)
    path_filter: List[str] = Field(default_factory=list)
    conditions: List[Condition] = Field(default_factory=list)


class AdmissionEvent(BaseModel):
    """Live context of a repository event."""

    ref: str = ""
    paths: List[str] = Field(default_factory=list)
    parameters: Dict[str, str] = Field(default_factory=dict)


class AdmissionResult(BaseModel):
    """Outcome of a hook admission check.

    reason names the gate that refused the event: "ref", "path" or
    "conditions". It is None when the event was admitted.
    """

    admitted: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.admitted
