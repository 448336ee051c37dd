"""WizardController: multi-step navigation and final submission.

The controller owns two pieces of state for one wizard session: the current
step index and the live answer set.  Visibility is never cached; it is
recomputed from the answers whenever fields are listed or validated.

State machine::

    editing(i) --next--> editing(j)         j = i + 1, or a jump target
    editing(i) --previous--> editing(h)     h = step the user came from
    editing(last) --submit--> submitting --ok--> submitted
                                          \\-error-> submit_failed
    submit_failed --submit--> submitting    (retry; answers preserved)
    submit_failed --edit answer--> editing(last)

Validation replays the path from step 0 against the current answers, so
steps a ``jump_to_step`` condition skips never block submission, and a step
un-skipped by a later edit is checked again.
"""

from __future__ import annotations

import copy
import enum
import logging
from typing import Any

from formflow_wizard.errors import TransportError, ValidationError, WizardStateError
from formflow_wizard.evaluator import VisibilityEvaluator
from formflow_wizard.interfaces import SubmissionTransport
from formflow_wizard.models.field import BaseFormField
from formflow_wizard.models.form import FormDefinition, Step
from formflow_wizard.models.submission import SubmissionResult
from formflow_wizard.validation import FieldValidator

logger = logging.getLogger(__name__)


class WizardState(str, enum.Enum):
    """Lifecycle states of a wizard session."""

    EDITING = "editing"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"
    SUBMIT_FAILED = "submit_failed"


class WizardController:
    """Drives one user's pass through a form definition.

    Args:
        definition: the loaded form; treated as read-only
        transport: delivers the final answer set
        answers: optional initial answers (e.g. restored from auto-save)
    """

    def __init__(
        self,
        definition: FormDefinition,
        transport: SubmissionTransport,
        *,
        answers: dict[str, Any] | None = None,
    ) -> None:
        self._definition = definition
        self._transport = transport
        self._evaluator = VisibilityEvaluator()
        self._validator = FieldValidator()
        self._known_fields = set(definition.field_ids())

        self._index = 0
        # Indices of the steps visited before the current one, in order
        self._history: list[int] = []
        self._answers: dict[str, Any] = {}
        self._state = WizardState.EDITING
        self._result: SubmissionResult | None = None
        self._last_error: TransportError | None = None

        for field_id, value in (answers or {}).items():
            self.set_answer(field_id, value)

    # ==================================================================
    # Read-only views
    # ==================================================================

    @property
    def definition(self) -> FormDefinition:
        return self._definition

    @property
    def state(self) -> WizardState:
        return self._state

    @property
    def current_step_index(self) -> int:
        return self._index

    @property
    def current_step(self) -> Step:
        return self._definition.steps[self._index]

    @property
    def step_count(self) -> int:
        return self._definition.step_count

    @property
    def is_last_step(self) -> bool:
        return self._index == self.step_count - 1

    @property
    def answers(self) -> dict[str, Any]:
        """A copy of the live answer set."""
        return copy.deepcopy(self._answers)

    @property
    def result(self) -> SubmissionResult | None:
        """The collector's response once the wizard is ``submitted``."""
        return self._result

    @property
    def last_error(self) -> TransportError | None:
        """The error of the most recent failed submit attempt."""
        return self._last_error

    @property
    def progress(self) -> float:
        """Completion percentage for the progress bar."""
        return (self._index + 1) / self.step_count * 100

    @property
    def navigation_path(self) -> list[int]:
        """Step indices the user passed through, ending with the current one."""
        return [*self._history, self._index]

    @property
    def can_go_next(self) -> bool:
        return self._is_editable and self._index < self.step_count - 1

    @property
    def can_go_previous(self) -> bool:
        return self._is_editable and self._index > 0

    @property
    def can_submit(self) -> bool:
        return self._is_editable and self.is_last_step

    @property
    def _is_editable(self) -> bool:
        return self._state in (WizardState.EDITING, WizardState.SUBMIT_FAILED)

    def visible_fields(self, step_index: int | None = None) -> list[BaseFormField]:
        """Fields of a step that render for the current answers."""
        if step_index is None:
            step_index = self._index
        step = self._definition.steps[step_index]
        return [f for f in step.fields if self._evaluator.is_visible(f, self._answers)]

    def is_visible(self, field_id: str) -> bool:
        return self._evaluator.is_visible(self._definition.get_field(field_id), self._answers)

    # ==================================================================
    # Answer editing
    # ==================================================================

    def set_answer(self, field_id: str, value: Any) -> None:
        """Record the answer for ``field_id``."""
        self._ensure_editable("set an answer")
        if field_id not in self._known_fields:
            raise ValueError(f"Field not found in form {self._definition.id}: {field_id}")
        self._answers[field_id] = value
        self._reopen_after_failure()

    def clear_answer(self, field_id: str) -> None:
        """Forget the answer for ``field_id`` (no-op if unanswered)."""
        self._ensure_editable("clear an answer")
        if field_id not in self._known_fields:
            raise ValueError(f"Field not found in form {self._definition.id}: {field_id}")
        self._answers.pop(field_id, None)
        self._reopen_after_failure()

    def validate_field(self, field_id: str) -> list[str]:
        """Single-field validation as the input layer runs it on change.

        Hidden fields are never invalid.
        """
        field = self._definition.get_field(field_id)
        if not self._evaluator.is_visible(field, self._answers):
            return []
        return self._validator.validate(field, self._answers.get(field_id))

    # ==================================================================
    # Navigation
    # ==================================================================

    def next(self) -> Step:
        """Advance to the following step (or a jump target) and return it."""
        if not self.can_go_next:
            raise WizardStateError(
                f"Cannot go to the next step from step {self._index + 1} of "
                f"{self.step_count} (state={self._state.value})"
            )
        target = self._resolve_next_index()
        self._history.append(self._index)
        self._index = target
        self._state = WizardState.EDITING
        logger.debug("Form %s: moved to step %d", self._definition.id, target)
        return self.current_step

    def previous(self) -> Step:
        """Return to the step the user came from.  Answers are kept."""
        if not self.can_go_previous:
            raise WizardStateError(
                f"Cannot go to the previous step from step {self._index + 1} "
                f"(state={self._state.value})"
            )
        self._index = self._history.pop() if self._history else self._index - 1
        self._state = WizardState.EDITING
        logger.debug("Form %s: moved back to step %d", self._definition.id, self._index)
        return self.current_step

    def _resolve_next_index(self, from_index: int | None = None) -> int:
        """Pick the step that "next" leads to from ``from_index``.

        Scans the visible fields of that step in order; the first
        ``jump_to_step`` condition whose predicate holds decides the target.
        Targets are guaranteed to lie ahead by ``FormDefinition`` validation.
        """
        if from_index is None:
            from_index = self._index
        for field in self.visible_fields(from_index):
            for cond in field.conditions or []:
                if cond.action != "jump_to_step":
                    continue
                if self._evaluator.matches(cond, self._answers):
                    return self._definition.step_index(cond.target)
        return from_index + 1

    def _answer_path(self) -> list[int]:
        """Steps the current answers lead through, ending with the current one.

        Replayed from step 0 because answers on earlier steps may have
        changed since Next was pressed.
        """
        path = [0]
        while path[-1] < self._index:
            path.append(self._resolve_next_index(path[-1]))
        return [i for i in path if i < self._index] + [self._index]

    # ==================================================================
    # Submission
    # ==================================================================

    def validate(self) -> dict[str, list[str]]:
        """Validate every visible field on the steps the answers lead through.

        Returns a dict of field id to error messages; empty when valid.
        """
        errors: dict[str, list[str]] = {}
        for step_index in self._answer_path():
            errors.update(
                self._validator.validate_many(self.visible_fields(step_index), self._answers)
            )
        return errors

    async def submit(self) -> SubmissionResult | None:
        """Validate and hand the answer set to the transport.

        Returns the collector's result, or ``None`` when a submit is
        already in flight (the duplicate is suppressed).

        Raises:
            WizardStateError: not on the last step, or already submitted
            ValidationError: a visible field fails validation; the
                transport is not called
            TransportError: delivery failed; the wizard moves to
                ``submit_failed`` and a later ``submit()`` retries
        """
        if self._state == WizardState.SUBMITTING:
            logger.warning("Form %s: submit already in progress, ignoring", self._definition.id)
            return None
        if not self.can_submit:
            raise WizardStateError(
                f"Cannot submit from step {self._index + 1} of {self.step_count} "
                f"(state={self._state.value})"
            )

        field_errors = self.validate()
        if field_errors:
            raise ValidationError(
                f"{len(field_errors)} field(s) failed validation",
                field_errors=field_errors,
            )

        self._state = WizardState.SUBMITTING
        snapshot = copy.deepcopy(self._answers)
        try:
            result = await self._transport.submit(self._definition.id, snapshot)
        except TransportError as exc:
            self._state = WizardState.SUBMIT_FAILED
            self._last_error = exc
            logger.warning("Form %s: submit failed: %s", self._definition.id, exc.message)
            raise
        except BaseException:
            # Unexpected failure (or cancellation): leave the wizard retryable
            self._state = WizardState.SUBMIT_FAILED
            raise

        self._state = WizardState.SUBMITTED
        self._result = result
        self._last_error = None
        logger.info(
            "Form %s submitted: submission_id=%s",
            self._definition.id, result.submission_id,
        )
        return result

    def reset(self) -> None:
        """Start over: step 0, no answers, editing."""
        self._index = 0
        self._history = []
        self._answers = {}
        self._state = WizardState.EDITING
        self._result = None
        self._last_error = None

    # ==================================================================
    # Helpers
    # ==================================================================

    def _ensure_editable(self, action: str) -> None:
        if self._state == WizardState.SUBMITTED:
            raise WizardStateError(f"Cannot {action}: form already submitted")
        if self._state == WizardState.SUBMITTING:
            raise WizardStateError(f"Cannot {action}: submission in progress")

    def _reopen_after_failure(self) -> None:
        if self._state == WizardState.SUBMIT_FAILED:
            self._state = WizardState.EDITING
