"""VisibilityEvaluator: decides whether a field is rendered.

A field without conditions is always visible.  Otherwise every condition
attached to the field must be satisfied against the current answers
(logical AND):

  - **show** / **jump_to_step**: satisfied when the predicate matches
  - **hide**: satisfied when the predicate does *not* match

Predicates compare the referenced field's raw answer with the condition
value.  Unanswered fields resolve to ``None`` and never raise.  An unknown
operator fails open (the field stays visible).

The evaluator is pure: the same (field, answers) pair always yields the same
result, so callers re-run it on every render.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping

from formflow_wizard.models.condition import Condition
from formflow_wizard.models.field import BaseFormField

logger = logging.getLogger(__name__)


class VisibilityEvaluator:
    """Evaluates field conditions against a live answer set."""

    def is_visible(self, field: BaseFormField, answers: Mapping[str, Any]) -> bool:
        """Return True if ``field`` should be rendered for ``answers``.

        Args:
            field: any field model; only ``conditions`` is read
            answers: answer set keyed by field id (raw values)
        """
        if not field.conditions:
            return True
        return all(self._is_satisfied(cond, answers) for cond in field.conditions)

    def matches(self, condition: Condition, answers: Mapping[str, Any]) -> bool:
        """Evaluate the bare predicate of ``condition``, ignoring its action."""
        return self.evaluate(condition.operator, answers.get(condition.field_id), condition.value)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _is_satisfied(self, condition: Condition, answers: Mapping[str, Any]) -> bool:
        matched = self.matches(condition, answers)
        if condition.action == "hide":
            return not matched
        return matched

    @staticmethod
    def evaluate(operator: str, answer: Any, value: Any) -> bool:
        """Apply ``operator`` to an answer and the condition value.

        Equality is strict and type-sensitive: ``1`` does not equal ``"1"``
        and ``True`` does not equal ``1``.  Numeric comparisons coerce both
        sides and return False when either side is not a number.
        """
        if operator == "equals":
            return _strict_equals(answer, value)

        if operator == "not_equals":
            return not _strict_equals(answer, value)

        if operator == "contains":
            return _to_text(value) in _to_text(answer)

        if operator in ("greater_than", "less_than"):
            ans_num = _to_number(answer)
            val_num = _to_number(value)
            if ans_num is None or val_num is None:
                return False
            if operator == "greater_than":
                return ans_num > val_num
            return ans_num < val_num

        logger.warning("Unknown condition operator: %s", operator)
        return True


# ----------------------------------------------------------------------
# Value coercion helpers
# ----------------------------------------------------------------------

def _strict_equals(answer: Any, value: Any) -> bool:
    # bool is a subclass of int in Python, so compare type families first
    if isinstance(answer, bool) != isinstance(value, bool):
        return False
    if isinstance(answer, (int, float)) and isinstance(value, (int, float)):
        return answer == value
    if type(answer) is not type(value):
        return False
    return answer == value


def _to_text(value: Any) -> str:
    """Textual form of an answer, as a browser would stringify it."""
    if value is None:
        return "undefined"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join("" if v is None else _to_text(v) for v in value)
    return str(value)


def _to_number(value: Any) -> float | None:
    """Coerce to float, or None when the value is not numeric."""
    if value is None or isinstance(value, (list, tuple, dict)):
        return None
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, str) and (not value.strip() or "_" in value):
        return None
    try:
        num = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(num):
        return None
    return num
