"""FieldValidator: single-field answer validation.

Each field type has one handler registered in ``_TYPE_HANDLERS``.  A handler
receives the field and a non-empty answer and returns a list of error
messages (empty when the answer is valid).  The ``required`` check and the
empty-answer short circuit are shared and run before the type handler.

Only visible fields are ever validated; callers filter with the
:class:`~formflow_wizard.evaluator.VisibilityEvaluator` first.
"""

from __future__ import annotations

import logging
import math
import re
from datetime import date
from typing import Any, Callable

from formflow_wizard.models.field import BaseFormField

logger = logging.getLogger(__name__)

# Deliberately loose: one "@", no whitespace, a dot in the domain part
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_empty(value: Any) -> bool:
    """True for answers that count as "not filled in"."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


class FieldValidator:
    """Validates answers against field type rules and ``Validation`` bounds."""

    def validate(self, field: BaseFormField, value: Any) -> list[str]:
        """Return the error messages for ``value`` (empty list when valid)."""
        if is_empty(value):
            if field.required:
                return [f"{field.label} is required"]
            return []

        handler = _TYPE_HANDLERS.get(field.type)
        if handler is None:
            # The FormField union makes this unreachable for parsed models
            logger.warning("No validator registered for field type %s", field.type)
            return []
        return handler(field, value)

    def validate_many(
        self, fields: list[BaseFormField], answers: dict[str, Any]
    ) -> dict[str, list[str]]:
        """Validate several fields; returns only the fields with errors."""
        errors: dict[str, list[str]] = {}
        for f in fields:
            messages = self.validate(f, answers.get(f.id))
            if messages:
                errors[f.id] = messages
        return errors


# ----------------------------------------------------------------------
# Shared rule helpers
# ----------------------------------------------------------------------

def _check_bounds(field: BaseFormField, measured: float, unit: str) -> list[str]:
    rules = field.validation
    if rules is None:
        return []
    errors = []
    if rules.min is not None and measured < rules.min:
        errors.append(f"Minimum {unit} is {_fmt(rules.min)}")
    if rules.max is not None and measured > rules.max:
        errors.append(f"Maximum {unit} is {_fmt(rules.max)}")
    return errors


def _check_pattern(field: BaseFormField, text: str) -> list[str]:
    rules = field.validation
    if rules is None or not rules.pattern:
        return []
    try:
        if re.search(rules.pattern, text) is None:
            return ["Invalid format"]
    except re.error:
        logger.warning("Field %s has an invalid pattern: %r", field.id, rules.pattern)
    return []


def _fmt(num: float) -> str:
    return str(int(num)) if float(num).is_integer() else str(num)


# ----------------------------------------------------------------------
# Type handlers
# ----------------------------------------------------------------------

def _validate_text(field: BaseFormField, value: Any) -> list[str]:
    if not isinstance(value, str):
        return ["Expected a text value"]
    return _check_bounds(field, len(value), "length") + _check_pattern(field, value)


def _validate_email(field: BaseFormField, value: Any) -> list[str]:
    errors = _validate_text(field, value)
    if errors:
        return errors
    if not _EMAIL_RE.match(value):
        return ["Invalid e-mail address"]
    return []


def _validate_number(field: BaseFormField, value: Any) -> list[str]:
    if isinstance(value, bool):
        return ["Expected a number"]
    try:
        num = float(value)
    except (TypeError, ValueError):
        return ["Expected a number"]
    if not math.isfinite(num):
        return ["Expected a number"]
    return _check_bounds(field, num, "value") + _check_pattern(field, str(value))


def _validate_single_choice(field: BaseFormField, value: Any) -> list[str]:
    if value not in field.options:
        return [f"{value!r} is not one of the available options"]
    return []


def _validate_multi_choice(field: BaseFormField, value: Any) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return ["Expected a list of options"]
    unknown = [v for v in value if v not in field.options]
    if unknown:
        return [f"Unknown options: {', '.join(map(str, unknown))}"]
    return _check_bounds(field, len(value), "number of choices")


def _validate_date(field: BaseFormField, value: Any) -> list[str]:
    if not isinstance(value, str):
        return ["Expected a date"]
    try:
        date.fromisoformat(value)
    except ValueError:
        return ["Expected a date in YYYY-MM-DD format"]
    return []


def _validate_file(field: BaseFormField, value: Any) -> list[str]:
    # Size and type are checked at upload time; the answer is only the URL
    if not isinstance(value, str):
        return ["Expected the URL of an uploaded file"]
    return []


_TYPE_HANDLERS: dict[str, Callable[[BaseFormField, Any], list[str]]] = {
    "text": _validate_text,
    "textarea": _validate_text,
    "email": _validate_email,
    "number": _validate_number,
    "select": _validate_single_choice,
    "radio": _validate_single_choice,
    "checkbox": _validate_multi_choice,
    "date": _validate_date,
    "file": _validate_file,
}
