"""FastAPI dependency injection: DB sessions, SDK services and caller info.

Each request that touches the database gets a fresh ``AsyncSession`` via
``get_db()``.  The session is committed on success and rolled back on error;
repositories only ever ``flush()``.
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from formflow_db.engine import get_session_factory
from formflow_wizard.collector import SubmissionCollector, client_info_from_headers
from formflow_wizard.dashboard import FormDashboard
from formflow_wizard.embed import EmbedRenderer
from formflow_wizard.interfaces import BlobStorage
from formflow_wizard.models.submission import ClientInfo


# ------------------------------------------------------------------
# Database session: transaction boundary lives here
# ------------------------------------------------------------------

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async DB session; commit on success, rollback on error."""
    factory = get_session_factory()
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# ------------------------------------------------------------------
# Services: stashed on app.state during lifespan
# ------------------------------------------------------------------

def get_collector(request: Request) -> SubmissionCollector:
    return request.app.state.collector


def get_dashboard(request: Request) -> FormDashboard:
    return request.app.state.dashboard


def get_embed(request: Request) -> EmbedRenderer:
    return request.app.state.embed


def get_storage(request: Request) -> BlobStorage:
    return request.app.state.storage


# ------------------------------------------------------------------
# Caller identity
# ------------------------------------------------------------------

def get_client_info(request: Request) -> ClientInfo:
    """Address and user agent of the caller, read from proxy headers."""
    return client_info_from_headers(request.headers)
