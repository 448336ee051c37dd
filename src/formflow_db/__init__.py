"""formflow_db: PostgreSQL persistence layer for forms and submissions.

This package provides the ORM models, async engine factory, and
repositories for storing form definitions and collecting submissions.  It
is consumed by the SDK services and the FastAPI server.
"""

from formflow_db.engine import dispose_engine, get_engine, get_session_factory
from formflow_db.models.form import FormRecord, FormStepRecord
from formflow_db.models.submission import SubmissionRecord
from formflow_db.repository import (
    FormRepository,
    SubmissionRepository,
    lookup_form_title,
)

__all__ = [
    "FormRecord",
    "FormStepRecord",
    "SubmissionRecord",
    "dispose_engine",
    "get_engine",
    "get_session_factory",
    "FormRepository",
    "SubmissionRepository",
    "lookup_form_title",
]
