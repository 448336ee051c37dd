"""SubmissionRecord ORM model: one row per completed wizard run.

Answers and request metadata are written together in a single INSERT, so a
submission is either fully stored or not stored at all.  Rows are never
updated afterwards.
"""

import uuid
from datetime import datetime

from sqlalchemy import ForeignKey, Index, Text
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID
from sqlalchemy.orm import Mapped, mapped_column

from formflow_db.models.base import Base, utcnow


class SubmissionRecord(Base):
    """Stored answers of one wizard run plus server-derived metadata."""

    __tablename__ = "submissions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    form_id: Mapped[str] = mapped_column(
        Text, ForeignKey("forms.id", ondelete="CASCADE"), nullable=False,
    )

    # Answer set keyed by field id, exactly as submitted
    answers: Mapped[dict] = mapped_column(JSONB, nullable=False)
    # {"user_agent": ..., "ip_address": ..., "timestamp": ISO8601}
    metadata_: Mapped[dict] = mapped_column("metadata", JSONB, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), nullable=False, default=utcnow,
    )

    __table_args__ = (
        # Dashboard lists a form's submissions newest first
        Index("ix_submissions_form_created", "form_id", "created_at"),
        Index("ix_submissions_answers_gin", "answers", postgresql_using="gin"),
    )

    def __repr__(self) -> str:
        return f"<SubmissionRecord(id={self.id!s}, form={self.form_id!r})>"
