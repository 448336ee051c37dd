"""Form, step, and theme models: the read-only definition a wizard runs.

A ``FormDefinition`` bundles the ``Form`` header with its ordered ``Step``
list.  It is loaded once per wizard session (from YAML or the database) and
never mutated afterwards.

Integrity checks run at construction time:
  - step ``order`` values are unique within the form
  - field ids are unique across the whole form
  - every condition references an existing field
  - every ``jump_to_step`` target names a step that comes later in the form
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from .field import FormField


class Theme(BaseModel):
    """Visual theme passed explicitly to the rendering layer."""

    primary_color: str = "#3B82F6"
    secondary_color: str = "#1E40AF"
    background_color: str = "#F8FAFC"
    text_color: str = "#1F2937"
    font_family: str = "Inter, sans-serif"
    logo_url: Optional[str] = None


class FormSettings(BaseModel):
    """Per-form behaviour switches."""

    allow_multiple_submissions: bool = False
    show_progress_bar: bool = True
    auto_save: bool = False
    redirect_url: Optional[str] = None


class Form(BaseModel):
    """Form header: title, theme and settings, without the steps."""

    id: str
    title: str
    description: Optional[str] = None
    theme: Theme = Field(default_factory=Theme)
    settings: FormSettings = Field(default_factory=FormSettings)
    owner_id: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Step(BaseModel):
    """One page of the wizard.  ``order`` defines the sequence."""

    id: str
    form_id: Optional[str] = None
    title: str
    order: int
    fields: List[FormField] = []


class FormDefinition(BaseModel):
    """A form together with its steps, sorted by ``order``."""

    form: Form
    steps: List[Step]

    @model_validator(mode="after")
    def _chk_integrity(self):
        if not self.steps:
            raise ValueError(f"form {self.form.id} has no steps")

        orders = [s.order for s in self.steps]
        if len(set(orders)) != len(orders):
            raise ValueError(f"form {self.form.id}: duplicate step order values")
        self.steps = sorted(self.steps, key=lambda s: s.order)

        field_ids: set[str] = set()
        for step in self.steps:
            for f in step.fields:
                if f.id in field_ids:
                    raise ValueError(f"form {self.form.id}: duplicate field id {f.id!r}")
                field_ids.add(f.id)

        step_positions = {s.id: i for i, s in enumerate(self.steps)}
        for i, step in enumerate(self.steps):
            for f in step.fields:
                for cond in f.conditions or []:
                    if cond.field_id not in field_ids:
                        raise ValueError(
                            f"field {f.id!r}: condition references unknown field "
                            f"{cond.field_id!r}"
                        )
                    if cond.action != "jump_to_step":
                        continue
                    target_pos = step_positions.get(cond.target)
                    if target_pos is None:
                        raise ValueError(
                            f"field {f.id!r}: jump target {cond.target!r} is not a step"
                        )
                    # Jumps only move forward; Previous walks the history back
                    if target_pos <= i:
                        raise ValueError(
                            f"field {f.id!r}: jump target {cond.target!r} must come "
                            f"after step {step.id!r}"
                        )
        return self

    @property
    def id(self) -> str:
        return self.form.id

    @property
    def step_count(self) -> int:
        return len(self.steps)

    def step_index(self, step_id: str) -> int:
        """Position of ``step_id`` in the ordered step list."""
        for i, step in enumerate(self.steps):
            if step.id == step_id:
                return i
        raise KeyError(step_id)

    def get_field(self, field_id: str) -> FormField:
        for step in self.steps:
            for f in step.fields:
                if f.id == field_id:
                    return f
        raise KeyError(field_id)

    def field_ids(self) -> list[str]:
        return [f.id for step in self.steps for f in step.fields]
