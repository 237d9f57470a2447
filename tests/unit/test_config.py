"""Unit tests for Settings and StorageDriver parsing."""

import pytest
from pydantic import ValidationError

from storefront_media.core.config import Settings
from storefront_media.domain.media import StorageDriver


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("disk", StorageDriver.DISK),
        ("DISK", StorageDriver.DISK),
        ("local", StorageDriver.DISK),
        (None, StorageDriver.DISK),
        ("s3", StorageDriver.S3),
        ("gcs", StorageDriver.GCS),
        ("cloud", StorageDriver.GCS),
        ("cloud-storage", StorageDriver.GCS),
        ("google", StorageDriver.GCS),
    ],
)
def test_driver_parse(value: str | None, expected: StorageDriver) -> None:
    assert StorageDriver.parse(value) is expected


def test_unknown_driver_rejected() -> None:
    with pytest.raises(ValidationError, match="Unknown storage driver"):
        Settings(_env_file=None, media_storage_driver="ftp")


def test_defaults() -> None:
    s = Settings(_env_file=None)
    assert s.storage_driver is StorageDriver.DISK
    assert s.media_public_prefix == "/uploads"
    assert s.allowed_mime_types == ["image/*"]


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MEDIA_STORAGE_DRIVER", "s3")
    monkeypatch.setenv("S3_BUCKET", "media")
    monkeypatch.setenv("MEDIA_ALLOWED_MIME_TYPES", "image/png, video/mp4")
    s = Settings(_env_file=None)
    assert s.storage_driver is StorageDriver.S3
    assert s.s3_bucket == "media"
    assert s.allowed_mime_types == ["image/png", "video/mp4"]


def test_non_positive_upload_limit_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, max_upload_size=0)
