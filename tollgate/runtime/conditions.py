"""Condition evaluator.

Evaluates plain conditions against build parameters. Both the parameters
and each condition value are interpolated first, so conditions may
reference other parameters.

Ordering operators compare strings lexicographically: "10" < "9".
"""

import logging
import re
from typing import Callable, Dict, Iterable, List, Mapping, Sequence, Union

from tollgate.constants import Operator, When
from tollgate.models import Condition, Parameter, parameters_to_map
from tollgate.primitives.errors import ConditionError, ErrorCode
from tollgate.primitives.interpolate import interpolate, interpolate_map

logger = logging.getLogger(__name__)


def _regex(actual: str, expected: str) -> bool:
    try:
        pattern = re.compile(expected)
    except re.error as e:
        raise ConditionError(
            f"Invalid regex {expected!r}: {e}",
            code=ErrorCode.CONDITION_BAD_REGEX,
            cause=e,
        ) from e
    return pattern.search(actual) is not None


_OPERATORS: Dict[Operator, Callable[[str, str], bool]] = {
    Operator.EQ: lambda a, e: a == e,
    Operator.NE: lambda a, e: a != e,
    Operator.LT: lambda a, e: a < e,
    Operator.LE: lambda a, e: a <= e,
    Operator.GT: lambda a, e: a > e,
    Operator.GE: lambda a, e: a >= e,
    Operator.REGEX: _regex,
}


def apply_operator(actual: str, op: Operator, expected: str) -> bool:
    """Apply a comparison operator to the parameter value and the expected value."""
    return _OPERATORS[op](actual, expected)


def check_conditions(
    conditions: Iterable[Union[Condition, Mapping]],
    params: Union[Sequence[Parameter], Mapping[str, str], None],
) -> bool:
    """Check that every condition holds.

    Args:
        conditions: Conditions, evaluated in declaration order.
        params: Build parameters, as Parameter objects or a flat map.
            A variable missing from params reads as "".

    Returns:
        True when all conditions pass (or there are none).

    Raises:
        TemplateError: A parameter or condition value fails to interpolate.
        ConditionError: A regex condition does not compile, or a
            condition mapping names an unknown operator.
    """
    values = interpolate_map(parameters_to_map(params))

    for raw in conditions:
        condition = raw if isinstance(raw, Condition) else Condition(**raw)
        expected = interpolate(condition.value, values)
        actual = values.get(condition.variable, "")
        if not apply_operator(actual, condition.operator, expected):
            logger.debug(
                f"Condition failed: {condition.variable} {condition.operator.value} "
                f"{expected!r} (got {actual!r})"
            )
            return False
    return True


def conditions_from_when(when: Iterable[str]) -> List[Condition]:
    """Expand trigger shorthands ("success", "manual") into plain conditions.

    Raises:
        ConditionError: For an unknown shorthand.
    """
    conditions = []
    for item in when:
        if item not in When.EXPANSIONS:
            raise ConditionError(
                f"Unknown when condition: {item!r} (expected one of {When.ALL})",
                code=ErrorCode.CONDITION_BAD_WHEN,
            )
        variable, operator, value = When.EXPANSIONS[item]
        conditions.append(Condition(variable=variable, operator=operator, value=value))
    return conditions
