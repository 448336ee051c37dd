"""File attachments for ``file`` fields.

Uploads are checked before any storage call:

  - size: at most ``max_size_mb`` megabytes (a file field's
    ``validation.max`` overrides the default)
  - type: the MIME type must match the accept list, a comma-separated mix
    of exact types (``application/pdf``) and prefixes (``image/*``);
    ``*/*`` accepts everything (a file field's ``validation.pattern`` is
    its accept list)

Accepted files get a collision-resistant object name
(``{epoch_ms}-{random}.{ext}``) and are written to a :class:`BlobStorage`.
The public URL becomes the field's answer.
"""

from __future__ import annotations

import asyncio
import logging
import re
import secrets
import time
from pathlib import Path
from typing import BinaryIO

from formflow_wizard.constants import (
    ACCEPT_ANY,
    DEFAULT_MAX_UPLOAD_MB,
    UPLOAD_FAILURE_MESSAGE,
)
from formflow_wizard.errors import UploadError
from formflow_wizard.interfaces import BlobStorage
from formflow_wizard.models.field import FileField

logger = logging.getLogger(__name__)


def upload_rules(field: FileField | None) -> tuple[str, float]:
    """Return the ``(accept, max_size_mb)`` pair that applies to ``field``."""
    accept = ACCEPT_ANY
    max_size_mb = DEFAULT_MAX_UPLOAD_MB
    if field is not None and field.validation is not None:
        if field.validation.pattern:
            accept = field.validation.pattern
        if field.validation.max:
            max_size_mb = field.validation.max
    return accept, max_size_mb


def is_type_accepted(content_type: str, accept: str = ACCEPT_ANY) -> bool:
    """True if ``content_type`` matches one entry of the ``accept`` list."""
    if accept.strip() == ACCEPT_ANY:
        return True
    for entry in (t.strip() for t in accept.split(",")):
        if not entry:
            continue
        if entry.endswith("/*"):
            if content_type.startswith(entry[:-1]):
                return True
        elif content_type == entry:
            return True
    return False


def check_upload(
    *,
    size: int,
    content_type: str,
    accept: str = ACCEPT_ANY,
    max_size_mb: float = DEFAULT_MAX_UPLOAD_MB,
) -> None:
    """Raise :class:`UploadError` if the file is too large or of a disallowed type."""
    if size > max_size_mb * 1024 * 1024:
        raise UploadError(f"File is too large. Maximum size is {max_size_mb:g}MB.")
    if not is_type_accepted(content_type or "", accept):
        raise UploadError(f"File type not supported. Allowed types: {accept}")


def upload_size(stream: BinaryIO) -> int:
    """Size in bytes of a spooled upload, measured without reading it."""
    stream.seek(0, 2)
    size = stream.tell()
    stream.seek(0)
    return size


def generate_object_name(filename: str) -> str:
    """Unique storage name that keeps the original extension (lower-cased)."""
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    ext = re.sub(r"[^a-z0-9]", "", ext)[:16] or "bin"
    return f"{int(time.time() * 1000)}-{secrets.token_hex(6)}.{ext}"


class LocalBlobStorage(BlobStorage):
    """Blob store backed by a local directory served under ``base_url``.

    Args:
        root: directory the files are written to (created on demand)
        base_url: URL prefix the directory is served from
    """

    def __init__(self, root: str | Path, base_url: str) -> None:
        self._root = Path(root)
        self._base_url = base_url.rstrip("/")

    async def put(self, name: str, data: bytes, content_type: str) -> None:
        await asyncio.to_thread(self._write, name, data)

    def _write(self, name: str, data: bytes) -> None:
        self._root.mkdir(parents=True, exist_ok=True)
        # "xb" refuses to overwrite an existing object
        with (self._root / name).open("xb") as f:
            f.write(data)

    def public_url(self, name: str) -> str:
        return f"{self._base_url}/{name}"


async def store_upload(
    storage: BlobStorage,
    *,
    filename: str,
    data: bytes,
    content_type: str,
    accept: str = ACCEPT_ANY,
    max_size_mb: float = DEFAULT_MAX_UPLOAD_MB,
) -> str:
    """Check, store and return the public URL of one uploaded file.

    Raises:
        UploadError: the file was rejected, or storage failed (generic message)
    """
    check_upload(
        size=len(data), content_type=content_type, accept=accept, max_size_mb=max_size_mb,
    )
    name = generate_object_name(filename)
    try:
        await storage.put(name, data, content_type)
    except OSError as exc:
        logger.error("Upload of %s failed: %s", name, exc)
        raise UploadError(UPLOAD_FAILURE_MESSAGE) from exc
    logger.info("Stored upload %s (%d bytes, %s)", name, len(data), content_type)
    return storage.public_url(name)
