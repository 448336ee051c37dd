"""ORM models for formflow_db."""

from formflow_db.models.base import Base
from formflow_db.models.form import FormRecord, FormStepRecord
from formflow_db.models.submission import SubmissionRecord

__all__ = ["Base", "FormRecord", "FormStepRecord", "SubmissionRecord"]
