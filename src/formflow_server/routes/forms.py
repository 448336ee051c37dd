"""Dashboard endpoints: forms, their submissions, counters and CSV export."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from formflow_wizard.dashboard import FormDashboard
from formflow_wizard.embed import EmbedRenderer
from formflow_wizard.export import export_filename
from formflow_wizard.models.form import FormDefinition
from formflow_wizard.models.submission import FormStats, FormSummary, SubmissionInfo

from formflow_server.config import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from formflow_server.dependencies import get_dashboard, get_db, get_embed

router = APIRouter(tags=["forms"])


@router.get("/forms")
async def list_forms(
    owner_id: str | None = Query(None, description="Only forms of this owner"),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
    dashboard: FormDashboard = Depends(get_dashboard),
) -> list[FormSummary]:
    """Forms newest first, each with its submission count."""
    return await dashboard.list_forms(db, owner_id=owner_id, limit=limit, offset=offset)


@router.get("/forms/{form_id}")
async def get_form(
    form_id: str,
    db: AsyncSession = Depends(get_db),
    dashboard: FormDashboard = Depends(get_dashboard),
) -> FormDefinition:
    """The full definition: form header plus ordered steps and fields."""
    return await dashboard.get_definition(db, form_id)


@router.get("/forms/{form_id}/submissions")
async def list_submissions(
    form_id: str,
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
    dashboard: FormDashboard = Depends(get_dashboard),
) -> list[SubmissionInfo]:
    return await dashboard.list_submissions(db, form_id, limit=limit, offset=offset)


@router.get("/forms/{form_id}/stats")
async def get_stats(
    form_id: str,
    db: AsyncSession = Depends(get_db),
    dashboard: FormDashboard = Depends(get_dashboard),
) -> FormStats:
    """Total submissions and those received in the recent window."""
    return await dashboard.stats(db, form_id)


@router.get("/forms/{form_id}/export.csv")
async def export_submissions(
    form_id: str,
    db: AsyncSession = Depends(get_db),
    dashboard: FormDashboard = Depends(get_dashboard),
) -> Response:
    """Download every submission of the form as CSV."""
    body = await dashboard.export_csv(db, form_id)
    return Response(
        content=body,
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{export_filename(form_id)}"',
        },
    )


@router.get("/forms/{form_id}/embed")
async def get_embed_code(
    form_id: str,
    height: str = Query("600px"),
    width: str = Query("100%"),
    db: AsyncSession = Depends(get_db),
    dashboard: FormDashboard = Depends(get_dashboard),
    embed: EmbedRenderer = Depends(get_embed),
) -> dict[str, str]:
    """Embed URL and the HTML snippet a site owner pastes into a page."""
    definition = await dashboard.get_definition(db, form_id)
    return {
        "url": embed.url(definition.id),
        "snippet": embed.render_snippet(definition.id, height=height, width=width),
    }
