# backend/utils/blob_store.py
import logging
import uuid
from pathlib import Path
from typing import Union

from services.errors import DependencyFailure

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {"image/jpeg": "jpg", "image/png": "png", "image/webp": "webp"}


class LocalBlobStore:
    """Stores uploaded blobs on local disk and returns the URL they are served under."""

    def __init__(self, directory: Union[str, Path], url_prefix: str = "/uploads"):
        self.directory = Path(directory)
        self.url_prefix = url_prefix.rstrip("/")

    def put(self, data: bytes, extension: str = "bin") -> str:
        ext = extension.lstrip(".").lower() or "bin"
        unique_filename = f"{uuid.uuid4()}.{ext}"
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            (self.directory / unique_filename).write_bytes(data)
        except OSError as e:
            logger.exception("Blob write failed for %s", unique_filename)
            raise DependencyFailure(f"File save error: {e}") from e
        return f"{self.url_prefix}/{unique_filename}"

    def delete(self, url: str) -> bool:
        """Remove a blob previously returned by put(); False if it is not ours or already gone."""
        prefix = f"{self.url_prefix}/"
        if not url or not url.startswith(prefix):
            return False
        name = url[len(prefix):]
        if not name or "/" in name or name in (".", ".."):
            return False
        path = self.directory / name
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError:
            logger.exception("Blob delete failed for %s", name)
            return False
        return True
