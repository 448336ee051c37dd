"""Form and step ORM models.

A form row holds the header (title, theme, settings); its steps live in
``form_steps``, one row per step, with the step's field list stored as a
JSONB array so a whole step is read without further joins.
"""

import uuid
from datetime import datetime

from sqlalchemy import ForeignKey, Integer, Text, UniqueConstraint, text
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column, relationship

from formflow_db.models.base import Base, utcnow


class FormRecord(Base):
    """One row per form definition."""

    __tablename__ = "forms"

    # Text rather than UUID so hand-written ids like "demo-form" are valid
    id: Mapped[str] = mapped_column(
        Text, primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Theme / FormSettings pydantic dumps
    theme: Mapped[dict] = mapped_column(
        JSONB, nullable=False, server_default=text("'{}'::jsonb"),
    )
    settings: Mapped[dict] = mapped_column(
        JSONB, nullable=False, server_default=text("'{}'::jsonb"),
    )

    # Owning account in the external auth system
    owner_id: Mapped[str | None] = mapped_column(Text, nullable=True, index=True)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow,
    )

    steps: Mapped[list["FormStepRecord"]] = relationship(
        back_populates="form",
        order_by="FormStepRecord.step_order",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<FormRecord(id={self.id!r}, title={self.title!r})>"


class FormStepRecord(Base):
    """One wizard step; ``fields`` is the ordered list of field dicts."""

    __tablename__ = "form_steps"

    id: Mapped[str] = mapped_column(
        Text, primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    form_id: Mapped[str] = mapped_column(
        Text, ForeignKey("forms.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    step_order: Mapped[int] = mapped_column(Integer, nullable=False)
    fields: Mapped[list] = mapped_column(
        JSONB, nullable=False, server_default=text("'[]'::jsonb"),
    )

    form: Mapped[FormRecord] = relationship(back_populates="steps")

    __table_args__ = (
        # Steps are totally ordered within a form
        UniqueConstraint("form_id", "step_order", name="uq_form_step_order"),
    )

    def __repr__(self) -> str:
        return (
            f"<FormStepRecord(id={self.id!r}, form={self.form_id!r}, "
            f"order={self.step_order})>"
        )
