"""File upload endpoint for ``file`` fields.

When ``form_id`` and ``field_id`` are given, the field's own limits apply
(``validation.max`` in MB, ``validation.pattern`` as accept list);
otherwise the server-wide defaults do.
"""

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from formflow_wizard.dashboard import FormDashboard
from formflow_wizard.interfaces import BlobStorage
from formflow_wizard.models.field import FileField
from formflow_wizard.uploads import check_upload, store_upload, upload_rules, upload_size

from formflow_server.dependencies import get_dashboard, get_db, get_storage

router = APIRouter(tags=["uploads"])


@router.post("/uploads")
async def upload_file(
    file: UploadFile = File(...),
    form_id: str | None = Form(None),
    field_id: str | None = Form(None),
    db: AsyncSession = Depends(get_db),
    dashboard: FormDashboard = Depends(get_dashboard),
    storage: BlobStorage = Depends(get_storage),
) -> dict[str, str]:
    """Store one file and return ``{"url": ...}`` for use as the field answer."""
    field: FileField | None = None
    if form_id and field_id:
        definition = await dashboard.get_definition(db, form_id)
        try:
            candidate = definition.get_field(field_id)
        except KeyError:
            raise ValueError(f"Field not found: {form_id}/{field_id}") from None
        if not isinstance(candidate, FileField):
            raise ValueError(f"Field {field_id} is not a file field")
        field = candidate

    accept, max_size_mb = upload_rules(field)
    # Rejected files are never read into memory
    check_upload(
        size=upload_size(file.file),
        content_type=file.content_type or "",
        accept=accept,
        max_size_mb=max_size_mb,
    )
    data = await file.read()
    url = await store_upload(
        storage,
        filename=file.filename or "upload",
        data=data,
        content_type=file.content_type or "",
        accept=accept,
        max_size_mb=max_size_mb,
    )
    return {"url": url}
