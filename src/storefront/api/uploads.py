"""Stores uploaded files under the configured upload directory."""

import re
from pathlib import Path
from uuid import uuid4

from fastapi import UploadFile

from storefront import config

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]")


async def store_upload(upload: UploadFile, subdir: str | None = None) -> str:
    """Write ``upload`` to disk and return its public reference (``/uploads/...``)."""
    original = Path(upload.filename or "upload").name
    filename = f"{uuid4().hex[:12]}_{_UNSAFE.sub('_', original)}"

    target_dir = Path(config.UPLOAD_DIR)
    if subdir:
        target_dir = target_dir / subdir
    target_dir.mkdir(parents=True, exist_ok=True)

    (target_dir / filename).write_bytes(await upload.read())

    return f"/uploads/{subdir}/{filename}" if subdir else f"/uploads/{filename}"
