"""Public model re-exports for formflow_wizard.

Consumers should import from ``formflow_wizard.models`` rather than
reaching into sub-modules directly.
"""

# --- Conditions ---
from formflow_wizard.models.condition import (
    Condition,
    ConditionAction,
)

# --- Fields ---
from formflow_wizard.models.field import (
    BaseFormField,
    CheckboxField,
    DateField,
    EmailField,
    FileField,
    FormField,
    NumberField,
    RadioField,
    SelectField,
    TextareaField,
    TextField,
    Validation,
    field_mapper,
)

# --- Forms ---
from formflow_wizard.models.form import (
    Form,
    FormDefinition,
    FormSettings,
    Step,
    Theme,
)

# --- Submissions ---
from formflow_wizard.models.submission import (
    ClientInfo,
    FormStats,
    FormSubmittedMessage,
    FormSummary,
    SubmissionInfo,
    SubmissionMetadata,
    SubmissionResult,
    SubmitRequest,
)

__all__ = [
    # Conditions
    "Condition",
    "ConditionAction",
    # Fields
    "BaseFormField",
    "CheckboxField",
    "DateField",
    "EmailField",
    "FileField",
    "FormField",
    "NumberField",
    "RadioField",
    "SelectField",
    "TextareaField",
    "TextField",
    "Validation",
    "field_mapper",
    # Forms
    "Form",
    "FormDefinition",
    "FormSettings",
    "Step",
    "Theme",
    # Submissions
    "ClientInfo",
    "FormStats",
    "FormSubmittedMessage",
    "FormSummary",
    "SubmissionInfo",
    "SubmissionMetadata",
    "SubmissionResult",
    "SubmitRequest",
]
