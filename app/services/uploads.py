import logging
import os
import uuid

from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool

from app.config import settings
from app.core.errors import UploadError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def _write_file(path: str, content: bytes) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as out:
        out.write(content)


async def save_photo(upload: UploadFile) -> str:
    """
    Writes an uploaded image under UPLOAD_DIR and returns the public URL
    it is served from.
    """
    content_type = upload.content_type or ""
    if not content_type.startswith("image/"):
        raise UploadError("Only image uploads are allowed")

    limit = settings.MAX_UPLOAD_BYTES
    content = bytearray()
    while len(content) <= limit:
        chunk = await upload.read(min(CHUNK_SIZE, limit + 1 - len(content)))
        if not chunk:
            break
        content.extend(chunk)
    if len(content) > limit:
        raise UploadError("File too large")
    if not content:
        raise UploadError("No file uploaded")

    ext = os.path.splitext(upload.filename or "")[1].lower()
    filename = f"{uuid.uuid4()}{ext}"
    await run_in_threadpool(_write_file, os.path.join(settings.UPLOAD_DIR, filename), bytes(content))

    logger.info("Stored upload %s (%d bytes)", filename, len(content))
    return f"{settings.UPLOAD_URL_PREFIX.rstrip('/')}/{filename}"
