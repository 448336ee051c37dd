"""Condition models for field visibility rules.

A condition references another field's answer by ``field_id`` and compares it
against ``value`` using ``operator``.  The ``action`` decides what a match
means for the field carrying the condition:

  - show: the field is shown only while the condition matches
  - hide: the field is hidden while the condition matches
  - jump_to_step: the field is shown while the condition matches, and
    "next" from its step moves to the step named by ``target``
"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, model_validator

ConditionAction = Literal["show", "hide", "jump_to_step"]


class Condition(BaseModel):
    """A single visibility predicate over another field's answer."""

    field_id: str
    # Kept as a plain string so an unknown operator from stored data still
    # loads; the evaluator fails open on it.
    operator: str
    # bool must come first so YAML/JSON ``true`` is not coerced to 1
    value: Union[bool, int, float, str]
    action: ConditionAction = "show"
    # Step id, only meaningful for jump_to_step
    target: Optional[str] = None

    @model_validator(mode="after")
    def _chk_target(self):
        if self.action == "jump_to_step" and not self.target:
            raise ValueError("jump_to_step conditions require a target step id")
        return self
