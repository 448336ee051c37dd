"""VisibilityEvaluator unit tests: operators, actions and absent answers.

Operator reference (from VisibilityEvaluator.evaluate):
    equals, not_equals          strict, type-sensitive equality
    contains                    substring of the stringified answer
    greater_than, less_than     numeric, False when either side is not a number
    anything else               fails open (True)

Action reference:
    show, jump_to_step          visible while the predicate matches
    hide                        hidden while the predicate matches
"""

import logging

import pytest

from formflow_wizard.evaluator import VisibilityEvaluator
from formflow_wizard.models.condition import Condition
from formflow_wizard.models.field import RadioField, TextField


# --- Helpers to reduce boilerplate ---


def _cond(field_id, operator, value, action="show", target=None):
    """Shorthand to build a Condition."""
    return Condition(
        field_id=field_id, operator=operator, value=value, action=action, target=target,
    )


def _field(*conditions, field_id="target"):
    """A text field carrying the given conditions."""
    return TextField(id=field_id, label="Target", conditions=list(conditions) or None)


@pytest.fixture
def evaluator():
    """Fresh VisibilityEvaluator for each test."""
    return VisibilityEvaluator()


# =====================================================================
# Operators
# =====================================================================


class TestOperators:
    """One group per operator; each has a positive and a negative case."""

    def test_equals(self, evaluator):
        """equals matches identical values only."""
        assert evaluator.evaluate("equals", "yes", "yes") is True
        assert evaluator.evaluate("equals", "no", "yes") is False

    def test_equals_is_type_sensitive(self, evaluator):
        """A number never equals its string form, nor a bool its int value."""
        assert evaluator.evaluate("equals", 1, "1") is False
        assert evaluator.evaluate("equals", "1", 1) is False
        assert evaluator.evaluate("equals", True, 1) is False
        assert evaluator.evaluate("equals", 1, True) is False

    def test_equals_int_and_float(self, evaluator):
        """Numerically equal int and float answers match."""
        assert evaluator.evaluate("equals", 3, 3.0) is True

    def test_equals_bool(self, evaluator):
        assert evaluator.evaluate("equals", True, True) is True
        assert evaluator.evaluate("equals", False, True) is False

    def test_not_equals(self, evaluator):
        """not_equals is the exact negation of equals."""
        assert evaluator.evaluate("not_equals", "no", "yes") is True
        assert evaluator.evaluate("not_equals", "yes", "yes") is False
        assert evaluator.evaluate("not_equals", 1, "1") is True

    def test_contains_string(self, evaluator):
        """contains checks for a substring."""
        assert evaluator.evaluate("contains", "hello world", "world") is True
        assert evaluator.evaluate("contains", "hello", "world") is False

    def test_contains_list(self, evaluator):
        """A list answer is searched in its comma-joined form."""
        assert evaluator.evaluate("contains", ["email", "phone"], "phone") is True
        assert evaluator.evaluate("contains", ["email"], "phone") is False

    def test_contains_number(self, evaluator):
        """Numbers are compared in their textual form."""
        assert evaluator.evaluate("contains", 12345, 234) is True
        assert evaluator.evaluate("contains", 3.0, "3") is True

    def test_greater_than(self, evaluator):
        assert evaluator.evaluate("greater_than", 20, 18) is True
        assert evaluator.evaluate("greater_than", 18, 18) is False
        assert evaluator.evaluate("greater_than", 10, 18) is False

    def test_greater_than_coerces_numeric_strings(self, evaluator):
        """Number inputs often deliver strings; they are compared as numbers."""
        assert evaluator.evaluate("greater_than", "20", 18) is True
        assert evaluator.evaluate("greater_than", "9", "10") is False

    def test_less_than(self, evaluator):
        assert evaluator.evaluate("less_than", 5, 10) is True
        assert evaluator.evaluate("less_than", 10, 10) is False

    def test_numeric_operators_with_non_numbers(self, evaluator):
        """A non-numeric side makes both comparisons False."""
        for op in ("greater_than", "less_than"):
            assert evaluator.evaluate(op, "abc", 5) is False
            assert evaluator.evaluate(op, "", 5) is False
            assert evaluator.evaluate(op, ["1"], 5) is False
            assert evaluator.evaluate(op, 5, "abc") is False

    def test_numeric_operators_reject_python_only_literals(self, evaluator):
        """Underscored digits and infinities are not numbers in a form answer."""
        for op in ("greater_than", "less_than"):
            assert evaluator.evaluate(op, "1_000", 5) is False
            assert evaluator.evaluate(op, "infinity", 5) is False
            assert evaluator.evaluate(op, "-inf", 5) is False
            assert evaluator.evaluate(op, 5, float("inf")) is False

    def test_unknown_operator_fails_open(self, evaluator, caplog):
        """An unrecognised operator keeps the field visible and logs a warning."""
        with caplog.at_level(logging.WARNING, logger="formflow_wizard.evaluator"):
            assert evaluator.evaluate("starts_with", "abc", "a") is True
        assert "starts_with" in caplog.text


# =====================================================================
# Absent answers
# =====================================================================


class TestAbsentAnswers:
    """Unanswered fields resolve to None and never raise."""

    def test_absent_never_equals(self, evaluator):
        for value in ("", 0, False, "undefined"):
            assert evaluator.evaluate("equals", None, value) is False

    def test_absent_not_equals(self, evaluator):
        assert evaluator.evaluate("not_equals", None, "x") is True

    def test_absent_numeric(self, evaluator):
        assert evaluator.evaluate("greater_than", None, 0) is False
        assert evaluator.evaluate("less_than", None, 0) is False

    def test_absent_contains(self, evaluator):
        assert evaluator.evaluate("contains", None, "x") is False

    def test_show_condition_on_unanswered_field_hides(self, evaluator):
        field = _field(_cond("q1", "equals", "yes"))
        assert evaluator.is_visible(field, {}) is False


# =====================================================================
# is_visible: actions and combination
# =====================================================================


class TestIsVisible:
    """Visibility combines every condition of a field with logical AND."""

    def test_no_conditions_always_visible(self, evaluator):
        assert evaluator.is_visible(_field(), {}) is True
        assert evaluator.is_visible(TextField(id="x", label="X", conditions=[]), {}) is True

    def test_show_action(self, evaluator):
        field = _field(_cond("q1", "equals", "yes"))
        assert evaluator.is_visible(field, {"q1": "yes"}) is True
        assert evaluator.is_visible(field, {"q1": "no"}) is False

    def test_hide_action_scenario(self, evaluator):
        """recommend is hidden exactly when service_rating equals the value."""
        recommend = RadioField(
            id="recommend",
            label="Would you recommend us?",
            options=["Yes", "No"],
            conditions=[
                _cond("service_rating", "equals", "Zera ontevreden", action="hide"),
            ],
        )
        assert evaluator.is_visible(recommend, {"service_rating": "Zera ontevreden"}) is False
        for other in ("Tevreden", "Neutraal", "", None):
            assert evaluator.is_visible(recommend, {"service_rating": other}) is True
        assert evaluator.is_visible(recommend, {}) is True

    def test_jump_to_step_action_requires_match(self, evaluator):
        """A jump field is shown, like a show field, only while its predicate holds."""
        field = _field(_cond("q1", "equals", "No", action="jump_to_step", target="s3"))
        assert evaluator.is_visible(field, {"q1": "No"}) is True
        assert evaluator.is_visible(field, {"q1": "Yes"}) is False

    def test_all_conditions_must_hold(self, evaluator):
        field = _field(
            _cond("age", "greater_than", 17),
            _cond("country", "equals", "NL"),
        )
        assert evaluator.is_visible(field, {"age": 30, "country": "NL"}) is True
        assert evaluator.is_visible(field, {"age": 30, "country": "BE"}) is False
        assert evaluator.is_visible(field, {"age": 12, "country": "NL"}) is False

    def test_show_and_hide_combined(self, evaluator):
        field = _field(
            _cond("contact", "equals", True),
            _cond("channel", "equals", "post", action="hide"),
        )
        assert evaluator.is_visible(field, {"contact": True, "channel": "email"}) is True
        assert evaluator.is_visible(field, {"contact": True, "channel": "post"}) is False

    def test_unknown_operator_keeps_field_visible(self, evaluator):
        field = _field(_cond("q1", "matches_regex", "^a"))
        assert evaluator.is_visible(field, {"q1": "zzz"}) is True

    def test_deterministic(self, evaluator):
        """Same inputs, same answer, and the answer set is not mutated."""
        field = _field(_cond("q1", "contains", "b"))
        answers = {"q1": ["a", "b"]}
        results = {evaluator.is_visible(field, answers) for _ in range(5)}
        assert results == {True}
        assert answers == {"q1": ["a", "b"]}

    def test_matches_ignores_action(self, evaluator):
        cond = _cond("q1", "equals", "x", action="hide")
        assert evaluator.matches(cond, {"q1": "x"}) is True
