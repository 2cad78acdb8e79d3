from pathlib import Path

import pytest

from places_api.core.errors import ValidationError
from places_api.services.image_storage import ImageStorage

from conftest import PNG_BYTES, make_upload


async def test_save_writes_file_with_mime_extension(tmp_path):
    storage = ImageStorage(tmp_path / "images", 500000)

    path = await storage.save(make_upload(PNG_BYTES, "image/jpeg", "photo.jpg"))

    assert path.endswith(".jpeg")
    assert Path(path).read_bytes() == PNG_BYTES


async def test_save_rejects_oversized_upload(tmp_path):
    storage = ImageStorage(tmp_path / "images", 10)

    with pytest.raises(ValidationError):
        await storage.save(make_upload(b"x" * 11))


def test_remove_missing_file_reports_false(tmp_path):
    storage = ImageStorage(tmp_path, 500000)

    assert storage.remove(str(tmp_path / "missing.png")) is False


async def test_save_reads_no_more_than_limit_plus_one(tmp_path):
    storage = ImageStorage(tmp_path / "images", 10)
    upload = make_upload(b"x" * 1000)

    with pytest.raises(ValidationError):
        await storage.save(upload)

    assert upload.file.tell() == 11
