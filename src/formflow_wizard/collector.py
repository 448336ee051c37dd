"""SubmissionCollector: server side of ``POST /api/submit``.

Stateless service pattern: each call validates the payload, stamps metadata
derived from the request, writes one submission row, and returns the result.
The caller (a FastAPI endpoint) owns the ``AsyncSession`` and therefore the
transaction boundary.

After the row is flushed the collector schedules a best-effort diagnostic
lookup of the form title for the log line.  The request transaction commits
later, in the caller, so the line reports the submission as accepted rather
than stored.  The lookup runs as a detached task with its own database
session; any failure is logged and dropped and never reaches the caller.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Mapping

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from formflow_db.repository import SubmissionRepository

from formflow_wizard.constants import (
    MISSING_FIELDS_MESSAGE,
    STORAGE_FAILURE_MESSAGE,
    SUBMIT_SUCCESS_MESSAGE,
    UNKNOWN,
)
from formflow_wizard.errors import StorageError, ValidationError
from formflow_wizard.models.submission import (
    ClientInfo,
    SubmissionMetadata,
    SubmissionResult,
)

logger = logging.getLogger(__name__)

# Resolves a form id to its title; None when the form is unknown.
FormTitleLookup = Callable[[str], Awaitable[str | None]]


def client_info_from_headers(headers: Mapping[str, str]) -> ClientInfo:
    """Derive the caller's address and user agent from request headers.

    The address comes from ``X-Forwarded-For`` (first hop), then
    ``X-Real-IP``; both fall back to ``"unknown"``.  ``headers`` must be a
    case-insensitive mapping (Starlette ``Headers``) or use lowercase keys.
    """
    ip = UNKNOWN
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            ip = first_hop
    if ip == UNKNOWN:
        ip = (headers.get("x-real-ip") or "").strip() or UNKNOWN

    user_agent = (headers.get("user-agent") or "").strip() or UNKNOWN
    return ClientInfo(ip_address=ip, user_agent=user_agent)


class SubmissionCollector:
    """Validates and persists incoming submissions.

    Args:
        form_lookup: optional coroutine function used for the diagnostic
            form-title log line.  It must manage its own DB session since
            it outlives the request.
    """

    def __init__(self, form_lookup: FormTitleLookup | None = None) -> None:
        self._repo = SubmissionRepository()
        self._form_lookup = form_lookup
        # Strong references so detached tasks are not garbage-collected
        self._background: set[asyncio.Task] = set()

    async def collect(
        self,
        db: AsyncSession,
        *,
        form_id: Any,
        answers: Any,
        client: ClientInfo,
    ) -> SubmissionResult:
        """Persist one submission and return its id.

        Raises:
            ValidationError: ``form_id`` or ``answers`` missing or malformed;
                nothing is written
            StorageError: the insert failed; nothing is written
        """
        if not isinstance(form_id, str) or not form_id.strip():
            raise ValidationError(MISSING_FIELDS_MESSAGE)
        if not isinstance(answers, dict):
            raise ValidationError(MISSING_FIELDS_MESSAGE)

        metadata = SubmissionMetadata(
            user_agent=client.user_agent,
            ip_address=client.ip_address,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

        try:
            row = await self._repo.create_submission(
                db,
                form_id=form_id,
                answers=answers,
                metadata=metadata.model_dump(),
            )
        except SQLAlchemyError as exc:
            logger.error("Storing submission for form %s failed: %s", form_id, exc)
            raise StorageError(STORAGE_FAILURE_MESSAGE) from exc

        submission_id = str(row.id)
        self._schedule_diagnostics(form_id, submission_id)
        return SubmissionResult(submission_id=submission_id, message=SUBMIT_SUCCESS_MESSAGE)

    async def drain(self) -> None:
        """Wait for pending diagnostic tasks (used at shutdown and in tests)."""
        if self._background:
            await asyncio.gather(*self._background, return_exceptions=True)

    # ------------------------------------------------------------------
    # Best-effort diagnostics
    # ------------------------------------------------------------------

    def _schedule_diagnostics(self, form_id: str, submission_id: str) -> None:
        if self._form_lookup is None:
            logger.info("Submission accepted: form_id=%s submission_id=%s", form_id, submission_id)
            return
        task = asyncio.get_running_loop().create_task(
            self._log_submission(form_id, submission_id)
        )
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _log_submission(self, form_id: str, submission_id: str) -> None:
        title: str | None = None
        try:
            title = await self._form_lookup(form_id)
        except Exception as exc:
            logger.debug("Form title lookup for %s failed: %s", form_id, exc)
        logger.info(
            "Submission accepted: form_id=%s submission_id=%s form_title=%s",
            form_id, submission_id, title,
        )
