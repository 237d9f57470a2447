"""Pytest configuration and fixtures for storefront_media.

Cloud adapters are exercised against in-memory fakes of the boto3 client
and the GCS bucket handle; disk tests use tmp_path.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from storefront_media.core.config import Settings
from storefront_media.domain.media import UploadTarget
from storefront_media.infrastructure.external.storage.gcs_storage import GCSStorageService
from storefront_media.infrastructure.external.storage.local_storage import LocalStorageService
from storefront_media.infrastructure.external.storage.s3_storage import S3StorageService
from storefront_media.main import create_app
from tests.fakes import FakeGCSBucket, FakeS3Client


@pytest.fixture
def upload_root(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def settings(upload_root: Path) -> Settings:
    """Disk settings rooted in tmp_path; .env is ignored."""
    return Settings(
        _env_file=None,
        media_storage_driver="disk",
        media_upload_dir=str(upload_root),
        media_public_prefix="/uploads",
    )


@pytest.fixture
def disk_adapter(upload_root: Path) -> LocalStorageService:
    return LocalStorageService(upload_root=upload_root, public_prefix="/uploads")


@pytest.fixture
def fake_s3() -> FakeS3Client:
    return FakeS3Client()


@pytest.fixture
def s3_adapter(fake_s3: FakeS3Client) -> S3StorageService:
    return S3StorageService(bucket="media", region="sa-east-1", client=fake_s3)


@pytest.fixture
def fake_bucket() -> FakeGCSBucket:
    return FakeGCSBucket()


@pytest.fixture
def gcs_adapter(fake_bucket: FakeGCSBucket) -> GCSStorageService:
    return GCSStorageService(bucket_name="media", bucket=fake_bucket)


@pytest.fixture
def make_target() -> Callable[..., UploadTarget]:
    """Build an in-memory UploadTarget."""

    def _make(name: str = "photo.png", data: bytes = b"\x89PNG", mime: str = "image/png") -> UploadTarget:
        return UploadTarget(original_name=name, mime_type=mime, size_bytes=len(data), payload=data)

    return _make


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """FastAPI app built from the disk settings."""
    return create_app(settings)


@pytest.fixture
async def client(app: FastAPI) -> AsyncClient:
    """Async HTTP client against the app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
