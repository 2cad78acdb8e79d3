import logging
import uuid
from pathlib import Path

from fastapi import UploadFile

from places_api.core.config import settings
from places_api.core.errors import ValidationError
from places_api.core.logger import logs

MIME_TYPE_MAP = {
    "image/png": "png",
    "image/jpeg": "jpeg",
    "image/jpg": "jpg",
}


class ImageStorage:
    """Keeps uploaded place images on the local disk."""

    def __init__(self, base_dir: str | Path, max_bytes: int):
        self.base_dir = Path(base_dir)
        self.max_bytes = max_bytes

    async def save(self, upload: UploadFile) -> str:
        """Validates and writes an upload, returning the stored file path."""
        extension = MIME_TYPE_MAP.get(upload.content_type or "")
        if extension is None:
            raise ValidationError("Invalid mime type!")

        content = await upload.read(self.max_bytes + 1)
        if len(content) > self.max_bytes:
            raise ValidationError(f"File too large, the limit is {self.max_bytes} bytes.")

        self.base_dir.mkdir(parents=True, exist_ok=True)
        path = self.base_dir / f"{uuid.uuid4()}.{extension}"
        with open(path, "wb") as f:
            f.write(content)

        logs.log(logging.INFO, f"Stored image {path}")
        return path.as_posix()

    def remove(self, path: str) -> bool:
        """Best-effort delete. Failures are logged and reported as False."""
        try:
            Path(path).unlink()
            return True
        except OSError as e:
            logs.log(logging.ERROR, f"Failed to remove image {path}: {str(e)}")
            return False


def get_image_storage() -> ImageStorage:
    return ImageStorage(settings.UPLOAD_DIR, settings.MAX_UPLOAD_BYTES)
