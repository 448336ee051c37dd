"""Async repositories for forms and submissions.

All public methods accept an ``AsyncSession`` so the caller controls
transaction boundaries: methods ``flush()`` but never ``commit()``.

The repositories deliberately avoid business-logic validation; that belongs
in the SDK layer (``formflow_wizard``).
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from formflow_db.engine import get_session_factory
from formflow_db.models.form import FormRecord, FormStepRecord
from formflow_db.models.submission import SubmissionRecord

logger = logging.getLogger(__name__)


class FormRepository:
    """Read/write operations on ``forms`` and ``form_steps``."""

    async def get_form(self, db: AsyncSession, form_id: str) -> FormRecord | None:
        """Fetch a form with its steps (eager-loaded, ordered)."""
        return await db.get(FormRecord, form_id)

    async def list_forms(
        self,
        db: AsyncSession,
        *,
        owner_id: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[tuple[FormRecord, int]]:
        """List forms newest first, each paired with its submission count."""
        counts = (
            select(SubmissionRecord.form_id, func.count().label("n"))
            .group_by(SubmissionRecord.form_id)
            .subquery()
        )
        stmt = (
            select(FormRecord, func.coalesce(counts.c.n, 0))
            .outerjoin(counts, counts.c.form_id == FormRecord.id)
            .order_by(FormRecord.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        if owner_id is not None:
            stmt = stmt.where(FormRecord.owner_id == owner_id)
        result = await db.execute(stmt)
        return [(row[0], int(row[1])) for row in result.all()]

    async def save_form(
        self,
        db: AsyncSession,
        *,
        form: dict[str, Any],
        steps: list[dict[str, Any]],
    ) -> FormRecord:
        """Insert or replace a form and all of its steps.

        ``form`` carries the header columns (id, title, description, theme,
        settings, owner_id); each entry of ``steps`` carries id, title,
        step_order and fields.  Existing steps are replaced wholesale.
        """
        record = await db.get(FormRecord, form["id"])
        if record is None:
            record = FormRecord(id=form["id"])
            db.add(record)
        record.title = form["title"]
        record.description = form.get("description")
        record.theme = form.get("theme") or {}
        record.settings = form.get("settings") or {}
        record.owner_id = form.get("owner_id")
        record.updated_at = datetime.now(timezone.utc)
        await db.flush()

        await db.execute(delete(FormStepRecord).where(FormStepRecord.form_id == record.id))
        for step in steps:
            db.add(
                FormStepRecord(
                    id=step["id"],
                    form_id=record.id,
                    title=step["title"],
                    step_order=step["step_order"],
                    fields=step["fields"],
                )
            )
        await db.flush()
        await db.refresh(record, attribute_names=["steps"])
        return record


class SubmissionRepository:
    """Insert and query operations on the ``submissions`` table."""

    async def create_submission(
        self,
        db: AsyncSession,
        *,
        form_id: str,
        answers: dict[str, Any],
        metadata: dict[str, Any],
    ) -> SubmissionRecord:
        """Insert one submission row and return it.

        The caller must ``await db.commit()`` to persist.
        """
        row = SubmissionRecord(form_id=form_id, answers=answers, metadata_=metadata)
        db.add(row)
        await db.flush()  # Populate id and created_at; surfaces FK violations
        return row

    async def list_by_form(
        self,
        db: AsyncSession,
        form_id: str,
        *,
        limit: int | None = 20,
        offset: int = 0,
    ) -> list[SubmissionRecord]:
        """List a form's submissions, most recent first.  ``limit=None`` = all."""
        stmt = (
            select(SubmissionRecord)
            .where(SubmissionRecord.form_id == form_id)
            .order_by(SubmissionRecord.created_at.desc())
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await db.execute(stmt)
        return list(result.scalars().all())

    async def count_by_form(
        self,
        db: AsyncSession,
        form_id: str,
        *,
        within_days: int | None = None,
    ) -> int:
        """Count a form's submissions, optionally only the last ``within_days``."""
        stmt = select(func.count()).select_from(SubmissionRecord).where(
            SubmissionRecord.form_id == form_id
        )
        if within_days is not None:
            cutoff = datetime.now(timezone.utc) - timedelta(days=within_days)
            stmt = stmt.where(SubmissionRecord.created_at > cutoff)
        result = await db.execute(stmt)
        return int(result.scalar_one())


async def lookup_form_title(form_id: str) -> str | None:
    """Return a form's title using a short-lived session of its own.

    Used for diagnostics outside any request transaction.
    """
    factory = get_session_factory()
    async with factory() as db:
        result = await db.execute(select(FormRecord.title).where(FormRecord.id == form_id))
        return result.scalar_one_or_none()
