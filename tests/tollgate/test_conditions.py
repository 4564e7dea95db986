"""Tests for condition evaluation."""

import pytest

from tollgate.constants import Operator
from tollgate.models import Condition, Parameter
from tollgate.primitives.errors import ConditionError, ErrorCode, TemplateError
from tollgate.runtime.conditions import (
    apply_operator,
    check_conditions,
    conditions_from_when,
)


def _params(**values):
    return [Parameter(name=k.replace("_", "."), value=v) for k, v in values.items()]


class TestCheckConditions:
    """AND semantics and parameter handling."""

    def test_empty_conditions_pass(self):
        assert check_conditions([], []) is True

    def test_empty_conditions_pass_without_params(self):
        assert check_conditions([], None) is True

    def test_single_eq(self):
        conditions = [Condition(variable="git.branch", operator="eq", value="main")]
        assert check_conditions(conditions, _params(git_branch="main"))

    def test_one_failing_condition_fails_all(self):
        conditions = [
            Condition(variable="git.branch", operator="eq", value="main"),
            Condition(variable="cds.status", operator="eq", value="Fail"),
            Condition(variable="git.author", operator="ne", value="bot"),
        ]
        params = _params(git_branch="main", cds_status="Success", git_author="alice")
        assert check_conditions(conditions, params) is False

    def test_all_passing(self):
        conditions = [
            Condition(variable="git.branch", operator="eq", value="main"),
            Condition(variable="git.author", operator="ne", value="bot"),
        ]
        params = _params(git_branch="main", git_author="alice")
        assert check_conditions(conditions, params) is True

    def test_missing_variable_reads_as_empty(self):
        conditions = [Condition(variable="git.tag", operator="eq", value="")]
        assert check_conditions(conditions, _params(git_branch="main"))

    def test_accepts_mapping_params(self):
        conditions = [Condition(variable="git.branch", value="main")]
        assert check_conditions(conditions, {"git.branch": "main"})

    def test_accepts_condition_dicts(self):
        conditions = [{"variable": "git.branch", "operator": "ne", "value": "main"}]
        assert check_conditions(conditions, {"git.branch": "dev"})


class TestConditionInterpolation:
    """Parameters and condition values are interpolated first."""

    def test_condition_value_references_parameter(self):
        conditions = [
            Condition(variable="git.branch", operator="eq", value="{{.cds.default.branch}}")
        ]
        params = {"git.branch": "main", "cds.default.branch": "main"}
        assert check_conditions(conditions, params)

    def test_parameter_references_parameter(self):
        conditions = [Condition(variable="deploy.target", value="prod-main")]
        params = {"git.branch": "main", "deploy.target": "prod-{{.git.branch}}"}
        assert check_conditions(conditions, params)

    def test_filter_in_condition_value(self):
        conditions = [Condition(variable="env", value="{{.name | upper}}")]
        assert check_conditions(conditions, {"env": "PROD", "name": "prod"})

    def test_unknown_filter_is_an_error(self):
        conditions = [Condition(variable="env", value="{{.name | shout}}")]
        with pytest.raises(TemplateError):
            check_conditions(conditions, {"env": "PROD", "name": "prod"})

    def test_bad_parameter_template_is_an_error(self):
        with pytest.raises(TemplateError):
            check_conditions([], {"a": "x", "b": "{{.a | shout}}"})


class TestOperators:
    """Operator semantics."""

    @pytest.mark.parametrize(
        "op,actual,expected,result",
        [
            (Operator.EQ, "a", "a", True),
            (Operator.EQ, "a", "A", False),
            (Operator.NE, "a", "b", True),
            (Operator.NE, "a", "a", False),
            (Operator.LT, "a", "b", True),
            (Operator.LE, "b", "b", True),
            (Operator.GT, "b", "a", True),
            (Operator.GE, "a", "b", False),
            (Operator.REGEX, "release/1.2", r"^release/\d", True),
            (Operator.REGEX, "main", r"^release/", False),
        ],
    )
    def test_apply_operator(self, op, actual, expected, result):
        assert apply_operator(actual, op, expected) is result

    def test_ordering_is_lexicographic(self):
        """"10" sorts before "9" as a string."""
        assert apply_operator("10", Operator.LT, "9") is True
        assert apply_operator("10", Operator.GT, "9") is False

    def test_regex_searches_anywhere(self):
        assert apply_operator("feature/login", Operator.REGEX, "login")

    def test_invalid_regex_raises(self):
        conditions = [Condition(variable="git.branch", operator="regex", value="(")]
        with pytest.raises(ConditionError) as exc:
            check_conditions(conditions, {"git.branch": "main"})
        assert exc.value.code == ErrorCode.CONDITION_BAD_REGEX
        assert exc.value.cause is not None

    def test_unknown_operator_rejected(self):
        with pytest.raises(ConditionError) as exc:
            Condition(variable="a", operator="contains", value="b")
        assert exc.value.code == ErrorCode.CONDITION_BAD_OPERATOR


class TestConditionsFromWhen:
    def test_success_and_manual(self):
        conditions = conditions_from_when(["success", "manual"])
        assert [(c.variable, c.operator, c.value) for c in conditions] == [
            ("cds.status", Operator.EQ, "Success"),
            ("cds.manual", Operator.EQ, "true"),
        ]

    def test_expanded_conditions_evaluate(self):
        conditions = conditions_from_when(["success"])
        assert check_conditions(conditions, {"cds.status": "Success"})
        assert not check_conditions(conditions, {"cds.status": "Fail"})

    def test_unknown_shorthand(self):
        with pytest.raises(ConditionError) as exc:
            conditions_from_when(["always"])
        assert exc.value.code == ErrorCode.CONDITION_BAD_WHEN
