"""Submission models: the contract between the wizard, the transport, and
the collection endpoint.

They are intentionally decoupled from the ORM models in ``formflow_db`` so
that API consumers never see database internals.

  - SubmitRequest: body of ``POST /api/submit`` (camelCase on the wire)
  - SubmissionResult: success body returned by the endpoint
  - SubmissionMetadata: server-derived request metadata
  - SubmissionInfo: public view of a stored submission (dashboard)
  - ClientInfo: network identity of the caller, read from request headers
  - FormSubmittedMessage: ``postMessage`` payload sent to an embedding page
"""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from formflow_wizard.constants import SUBMIT_SUCCESS_MESSAGE


class SubmitRequest(BaseModel):
    """Body for POST /api/submit.

    Both keys are optional at the schema level so that a missing key is
    reported by the collector as a 400 ``ValidationError`` rather than a
    framework-level schema error.  Unknown keys (including any
    client-supplied ``metadata``) are ignored.
    """

    model_config = ConfigDict(populate_by_name=True)

    form_id: Optional[str] = Field(default=None, alias="formId")
    answers: Optional[dict[str, Any]] = None


class SubmissionResult(BaseModel):
    """Success body of POST /api/submit."""

    model_config = ConfigDict(populate_by_name=True)

    success: Literal[True] = True
    submission_id: str = Field(alias="submissionId")
    message: str = SUBMIT_SUCCESS_MESSAGE


class SubmissionMetadata(BaseModel):
    """Request metadata stamped by the server; never taken from the client."""

    user_agent: str
    ip_address: str
    timestamp: str


class ClientInfo(BaseModel):
    """Caller identity as seen by the collection endpoint."""

    ip_address: str = "unknown"
    user_agent: str = "unknown"


class SubmissionInfo(BaseModel):
    """Public view of a stored submission."""

    id: str
    form_id: str
    answers: dict[str, Any]
    metadata: SubmissionMetadata
    created_at: datetime


class FormSummary(BaseModel):
    """Dashboard row for one form."""

    id: str
    title: str
    description: str | None = None
    owner_id: str | None = None
    submission_count: int = 0
    created_at: datetime
    updated_at: datetime


class FormStats(BaseModel):
    """Submission counters shown on the dashboard."""

    form_id: str
    total_submissions: int
    recent_submissions: int


class FormSubmittedMessage(BaseModel):
    """``postMessage`` payload dispatched to the page hosting an embed."""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["FORM_SUBMITTED"] = "FORM_SUBMITTED"
    form_id: str = Field(alias="formId")
    submission_id: str = Field(alias="submissionId")
    data: dict[str, Any]
