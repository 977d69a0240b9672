"""Image uploads for products.

Files land in ``UPLOAD_DIR`` (default ``public/uploads``) as
``<epoch-millis>-<original name>`` with whitespace replaced by ``_``, and
are served back under ``/uploads``. Only ``.png``, ``.jpg``, ``.jpeg`` and
``.gif`` up to 5 MiB are stored; other file types are skipped.
"""

import os
import re
import time
from pathlib import Path

from protean.exceptions import ValidationError
from starlette.datastructures import UploadFile

from storefront.utils.logging import get_logger

logger = get_logger(__name__)

ALLOWED_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg", ".gif"})
MAX_UPLOAD_BYTES = 5 * 1024 * 1024
PUBLIC_PREFIX = "/uploads"


def upload_dir() -> Path:
    return Path(os.getenv("UPLOAD_DIR", "public/uploads"))


def stored_name(filename: str, now_ms: int | None = None) -> str:
    """Name under which ``filename`` is written. Directory parts are discarded."""
    base = Path(filename.replace("\\", "/")).name
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    cleaned = re.sub(r"\s+", "_", base)
    return f"{stamp}-{cleaned}"


async def read_image(upload: UploadFile) -> bytes | None:
    """Read and check ``upload`` without writing it. ``None`` means the file type is not accepted."""
    filename = upload.filename or ""
    extension = Path(filename).suffix.lower()
    if extension not in ALLOWED_EXTENSIONS:
        logger.warning("upload_skipped", filename=filename, reason="unsupported_extension")
        return None

    data = await upload.read(MAX_UPLOAD_BYTES + 1)
    if len(data) > MAX_UPLOAD_BYTES:
        raise ValidationError({"image": ["Image must not exceed 5 MB"]})
    return data


def store_image(filename: str, data: bytes) -> str:
    """Write image bytes to the upload directory and return their public URL."""
    directory = upload_dir()
    directory.mkdir(parents=True, exist_ok=True)
    name = stored_name(filename)
    (directory / name).write_bytes(data)

    logger.info("upload_stored", filename=name, size=len(data))
    return f"{PUBLIC_PREFIX}/{name}"
