"""Declarative base and shared column helpers for the FormFlow tables."""

from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


def utcnow() -> datetime:
    """Timezone-aware "now" used for every timestamp column."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for the ``forms``, ``form_steps`` and ``submissions`` tables."""
