"""Application factory and CLI entry point.

``create_app()`` builds the FastAPI application with:
  - Lifespan handler that builds the SDK services once
  - CORS middleware (embeds are loaded from arbitrary sites)
  - Global exception handlers rendering ``{"error": ...}`` bodies
  - The JSON API under ``/api`` and embed pages under ``/embed``
  - Uploaded files served under ``FORMFLOW_UPLOAD_URL``
  - A ``/health`` endpoint for readiness probes

The ``cli()`` function is the ``formflow-server`` console-script entry point.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from formflow_db.engine import dispose_engine, get_engine
from formflow_db.repository import lookup_form_title
from formflow_wizard.collector import SubmissionCollector
from formflow_wizard.dashboard import FormDashboard
from formflow_wizard.embed import EmbedRenderer
from formflow_wizard.errors import FormflowError
from formflow_wizard.uploads import LocalBlobStorage

from formflow_server.config import ServerSettings, load_settings
from formflow_server.errors import (
    formflow_error_handler,
    generic_error_handler,
    http_error_handler,
    request_validation_handler,
    value_error_handler,
)
from formflow_server.routes import register_routes

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Lifespan: runs once at startup/shutdown
# ------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Build shared services at startup; drain tasks and dispose on shutdown."""
    settings: ServerSettings = app.state.settings

    collector = SubmissionCollector(form_lookup=lookup_form_title)
    app.state.collector = collector
    app.state.dashboard = FormDashboard()
    app.state.embed = EmbedRenderer(settings.public_url)
    upload_base = settings.upload_url
    if upload_base.startswith("/"):
        upload_base = f"{settings.public_url}{upload_base}"
    app.state.storage = LocalBlobStorage(settings.upload_dir, upload_base)
    logger.info("FormFlow services ready (public_url=%s)", settings.public_url)

    yield

    # --- Shutdown ---
    await collector.drain()
    await dispose_engine()
    logger.info("Database engine disposed")


# ------------------------------------------------------------------
# Factory
# ------------------------------------------------------------------

def create_app(settings: ServerSettings | None = None) -> FastAPI:
    """Build and return the configured FastAPI application."""
    if settings is None:
        settings = load_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title="FormFlow API Server",
        description="Multi-step form wizard backend: submissions, dashboard and embeds",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Exception handlers ---
    app.add_exception_handler(FormflowError, formflow_error_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    @app.get("/health")
    async def health() -> dict:
        """Readiness probe: verifies DB connectivity."""
        try:
            async with get_engine().connect() as conn:
                await conn.execute(text("SELECT 1"))
            return {"status": "ok"}
        except Exception as exc:
            logger.error("Health check failed: %s", exc)
            return {"status": "error", "detail": str(exc)}

    register_routes(app)

    # Relative upload URLs are served by this app; absolute ones by a CDN
    if settings.upload_url.startswith("/"):
        app.mount(
            settings.upload_url,
            StaticFiles(directory=settings.upload_dir, check_dir=False),
            name="uploads",
        )

    return app


# ------------------------------------------------------------------
# Module-level ASGI export (for uvicorn formflow_server.app:app)
# ------------------------------------------------------------------
app = create_app()


def cli() -> None:
    """Console-script entry point: ``formflow-server``."""
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        "formflow_server.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )
