"""Collection endpoint: persists one finished wizard run.

The body is ``{"formId": ..., "answers": {...}}``.  Request metadata (user
agent, client address, timestamp) is derived server-side; anything the
client sends besides the two keys is ignored.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from formflow_wizard.collector import SubmissionCollector
from formflow_wizard.models.submission import (
    ClientInfo,
    SubmissionResult,
    SubmitRequest,
)

from formflow_server.dependencies import get_client_info, get_collector, get_db

router = APIRouter(tags=["submissions"])


@router.post(
    "/submit",
    response_model=SubmissionResult,
    response_model_by_alias=True,
)
async def submit_form(
    body: SubmitRequest,
    db: AsyncSession = Depends(get_db),
    collector: SubmissionCollector = Depends(get_collector),
    client: ClientInfo = Depends(get_client_info),
) -> SubmissionResult:
    """Store the answers and return ``{success, submissionId, message}``.

    Returns 400 ``{"error": ...}`` when ``formId`` or ``answers`` is missing
    and 500 when the submission could not be stored.
    """
    return await collector.collect(
        db, form_id=body.form_id, answers=body.answers, client=client,
    )
