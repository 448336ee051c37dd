"""Route registration: JSON API under ``/api``, embed pages at the root."""

from fastapi import FastAPI

from formflow_server.routes.embed import router as embed_router
from formflow_server.routes.forms import router as forms_router
from formflow_server.routes.submit import router as submit_router
from formflow_server.routes.uploads import router as uploads_router

API_PREFIX = "/api"


def register_routes(app: FastAPI) -> None:
    """Include all sub-routers; ``/embed/{form_id}`` stays unprefixed."""
    app.include_router(submit_router, prefix=API_PREFIX)
    app.include_router(forms_router, prefix=API_PREFIX)
    app.include_router(uploads_router, prefix=API_PREFIX)
    app.include_router(embed_router)
