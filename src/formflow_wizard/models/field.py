"""Field type models for form steps.

Each field type maps to one input widget and one validation handler:

  Free input:
    - text: single-line text
    - email: single-line text that must look like an e-mail address
    - number: numeric input (answer may arrive as a number or a string)
    - textarea: multi-line text
    - date: ISO-8601 calendar date (``YYYY-MM-DD``)

  Option based (``options`` is mandatory):
    - select: pick one option from a dropdown
    - radio: pick one option from a radio group
    - checkbox: pick zero or more options (answer is a list)

  Attachments:
    - file: the answer is the public URL of an uploaded file

The discriminated ``FormField`` union uses ``type`` as its discriminator.
The ``field_mapper`` dict maps type strings to their Pydantic classes.
"""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator

from .condition import Condition


class Validation(BaseModel):
    """Per-field validation rules.

    ``min``/``max`` bound the numeric value for number fields, the text
    length for text-like fields, and the number of picks for checkbox
    fields.  For file fields ``max`` is the size limit in MB and
    ``pattern`` is the accept list (e.g. ``image/*,application/pdf``).
    ``custom`` is an opaque hint for the renderer and is not enforced.
    """

    min: Optional[float] = None
    max: Optional[float] = None
    pattern: Optional[str] = None
    custom: Optional[str] = None


# --- Base field type ---

class BaseFormField(BaseModel):
    """Attributes shared by all field types."""

    id: str
    step_id: Optional[str] = None
    label: str
    placeholder: Optional[str] = None
    required: bool = False
    validation: Optional[Validation] = None
    conditions: Optional[List[Condition]] = None


class OptionFieldMixin(BaseModel):
    """Option list for select/radio/checkbox fields."""

    options: List[str]

    @model_validator(mode="after")
    def _chk_options(self):
        if not self.options:
            raise ValueError("option fields need at least one option")
        return self


# --- Free input ---

class TextField(BaseFormField):
    type: Literal["text"] = "text"


class EmailField(BaseFormField):
    type: Literal["email"] = "email"


class NumberField(BaseFormField):
    type: Literal["number"] = "number"


class TextareaField(BaseFormField):
    type: Literal["textarea"] = "textarea"


class DateField(BaseFormField):
    type: Literal["date"] = "date"


# --- Option based ---

class SelectField(OptionFieldMixin, BaseFormField):
    type: Literal["select"] = "select"


class RadioField(OptionFieldMixin, BaseFormField):
    type: Literal["radio"] = "radio"


class CheckboxField(OptionFieldMixin, BaseFormField):
    """Multiple choice; the answer is the list of picked options."""

    type: Literal["checkbox"] = "checkbox"


# --- Attachments ---

class FileField(BaseFormField):
    """File attachment; the answer is the uploaded file's public URL."""

    type: Literal["file"] = "file"


# --- Discriminated union of all field types ---

FormField = Annotated[
    Union[
        TextField,
        EmailField,
        NumberField,
        TextareaField,
        SelectField,
        RadioField,
        CheckboxField,
        FileField,
        DateField,
    ],
    Field(discriminator="type"),
]

# Maps type string -> Pydantic class for dynamic deserialization.
field_mapper = {
    "text": TextField,
    "email": EmailField,
    "number": NumberField,
    "textarea": TextareaField,
    "select": SelectField,
    "radio": RadioField,
    "checkbox": CheckboxField,
    "file": FileField,
    "date": DateField,
}
