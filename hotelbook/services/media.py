import base64
import logging
import os
import time
import uuid

from fastapi import UploadFile

from ..errors import ValidationError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024

_CONTENT_TYPES = {
    "jpg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "bmp": "image/bmp",
}


def _sniff_image_type(data: bytes) -> str | None:
    """Return a lowercase extension if bytes look like a common image, else None."""
    if not data or len(data) < 12:
        return None
    if data.startswith(b"\xFF\xD8\xFF"):
        return "jpg"
    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "png"
    if data[:6] in (b"GIF87a", b"GIF89a"):
        return "gif"
    if data.startswith(b"RIFF") and data[8:12] == b"WEBP":
        return "webp"
    if data.startswith(b"BM"):
        return "bmp"
    return None


def encode_image(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _temp_path(upload: UploadFile, upload_dir: str, field_name: str) -> str:
    os.makedirs(upload_dir, exist_ok=True)
    _, ext = os.path.splitext(upload.filename or "")
    return os.path.join(upload_dir, f"{field_name}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}{ext}")


def _spool_to_disk(upload: UploadFile, fpath: str, limit: int) -> None:
    # Stops once more than `limit` bytes have been written
    upload.file.seek(0)
    written = 0
    with open(fpath, "wb") as f:
        while written <= limit:
            chunk = upload.file.read(min(CHUNK_SIZE, limit + 1 - written))
            if not chunk:
                break
            f.write(chunk)
            written += len(chunk)


def read_image(upload: UploadFile, upload_dir: str, max_bytes: int, field_name: str = "myImage") -> tuple[bytes, str]:
    """Ingest an uploaded image through a temporary file.

    Returns the raw bytes and the declared content type. The temporary copy is
    removed whether or not ingestion succeeds. Raises ``ValidationError`` for
    oversize or unrecognised images.
    """
    fpath = _temp_path(upload, upload_dir, field_name)
    try:
        _spool_to_disk(upload, fpath, max_bytes)
        with open(fpath, "rb") as f:
            data = f.read(max_bytes + 1)
    finally:
        try:
            os.remove(fpath)
        except FileNotFoundError:
            pass
        except OSError:
            logger.warning("Could not remove temporary upload %s", fpath)

    if len(data) > max_bytes:
        raise ValidationError(f"Image exceeds the {max_bytes // (1024 * 1024)} MB limit")
    kind = _sniff_image_type(data)
    if not kind:
        raise ValidationError("Uploaded file is not a supported image")
    content_type = upload.content_type
    if not content_type or not content_type.startswith("image/"):
        content_type = _CONTENT_TYPES[kind]
    return data, content_type
