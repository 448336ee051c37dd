"""FormDashboard: read side of stored forms and submissions.

Stateless service: every method takes the caller's ``AsyncSession`` and
converts ORM rows into the public pydantic models, so HTTP handlers never
touch ``formflow_db`` types directly.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from formflow_db.models.form import FormRecord
from formflow_db.models.submission import SubmissionRecord
from formflow_db.repository import FormRepository, SubmissionRepository

from formflow_wizard.constants import RECENT_SUBMISSION_DAYS
from formflow_wizard.export import submissions_to_csv
from formflow_wizard.models.form import FormDefinition
from formflow_wizard.models.submission import (
    FormStats,
    FormSummary,
    SubmissionInfo,
    SubmissionMetadata,
)

logger = logging.getLogger(__name__)


def definition_from_record(record: FormRecord) -> FormDefinition:
    """Rebuild the typed definition from a form row and its step rows."""
    return FormDefinition.model_validate({
        "form": {
            "id": record.id,
            "title": record.title,
            "description": record.description,
            "theme": record.theme or {},
            "settings": record.settings or {},
            "owner_id": record.owner_id,
            "created_at": record.created_at,
            "updated_at": record.updated_at,
        },
        "steps": [
            {
                "id": step.id,
                "form_id": record.id,
                "title": step.title,
                "order": step.step_order,
                "fields": step.fields or [],
            }
            for step in record.steps
        ],
    })


def submission_from_record(row: SubmissionRecord) -> SubmissionInfo:
    return SubmissionInfo(
        id=str(row.id),
        form_id=row.form_id,
        answers=row.answers,
        metadata=SubmissionMetadata.model_validate(row.metadata_),
        created_at=row.created_at,
    )


class FormDashboard:
    """Form listing, submission browsing, counters and CSV export."""

    def __init__(self, recent_days: int = RECENT_SUBMISSION_DAYS) -> None:
        self._forms = FormRepository()
        self._submissions = SubmissionRepository()
        self._recent_days = recent_days

    async def list_forms(
        self,
        db: AsyncSession,
        *,
        owner_id: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[FormSummary]:
        rows = await self._forms.list_forms(db, owner_id=owner_id, limit=limit, offset=offset)
        return [
            FormSummary(
                id=record.id,
                title=record.title,
                description=record.description,
                owner_id=record.owner_id,
                submission_count=count,
                created_at=record.created_at,
                updated_at=record.updated_at,
            )
            for record, count in rows
        ]

    async def get_definition(self, db: AsyncSession, form_id: str) -> FormDefinition:
        """Raises ``ValueError`` when the form does not exist."""
        record = await self._forms.get_form(db, form_id)
        if record is None:
            raise ValueError(f"Form not found: {form_id}")
        return definition_from_record(record)

    async def list_submissions(
        self,
        db: AsyncSession,
        form_id: str,
        *,
        limit: int | None = 20,
        offset: int = 0,
    ) -> list[SubmissionInfo]:
        await self._require_form(db, form_id)
        rows = await self._submissions.list_by_form(db, form_id, limit=limit, offset=offset)
        return [submission_from_record(row) for row in rows]

    async def stats(self, db: AsyncSession, form_id: str) -> FormStats:
        await self._require_form(db, form_id)
        total = await self._submissions.count_by_form(db, form_id)
        recent = await self._submissions.count_by_form(
            db, form_id, within_days=self._recent_days,
        )
        return FormStats(form_id=form_id, total_submissions=total, recent_submissions=recent)

    async def export_csv(self, db: AsyncSession, form_id: str) -> str:
        """All submissions of ``form_id`` as CSV text, newest first."""
        submissions = await self.list_submissions(db, form_id, limit=None)
        logger.info("Exporting %d submissions for form %s", len(submissions), form_id)
        return submissions_to_csv(submissions)

    async def import_definition(
        self, db: AsyncSession, definition: FormDefinition
    ) -> FormDefinition:
        """Insert or replace a form and its steps.  Caller commits."""
        form = definition.form.model_dump(
            mode="json", include={"id", "title", "description", "theme", "settings", "owner_id"},
        )
        steps = [
            {
                "id": step.id,
                "title": step.title,
                "step_order": step.order,
                "fields": [f.model_dump(mode="json", exclude_none=True) for f in step.fields],
            }
            for step in definition.steps
        ]
        record = await self._forms.save_form(db, form=form, steps=steps)
        logger.info("Imported form %s (%d steps)", record.id, len(steps))
        return definition_from_record(record)

    async def _require_form(self, db: AsyncSession, form_id: str) -> None:
        if await self._forms.get_form(db, form_id) is None:
            raise ValueError(f"Form not found: {form_id}")
