"""Embed host page served inside the iframe at ``/embed/{form_id}``."""

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from formflow_wizard.dashboard import FormDashboard
from formflow_wizard.embed import EmbedRenderer

from formflow_server.dependencies import get_dashboard, get_db, get_embed

router = APIRouter(tags=["embed"])


@router.get("/embed/{form_id}", response_class=HTMLResponse)
async def embed_page(
    form_id: str,
    db: AsyncSession = Depends(get_db),
    dashboard: FormDashboard = Depends(get_dashboard),
    embed: EmbedRenderer = Depends(get_embed),
) -> HTMLResponse:
    definition = await dashboard.get_definition(db, form_id)
    return HTMLResponse(embed.render_page(definition))
