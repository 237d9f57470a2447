"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Missing cloud bucket settings are not validation errors:
adapter selection falls back to local disk instead (see StorageFactory).
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from storefront_media.domain.media import StorageDriver


class Settings(BaseSettings):
    """Application settings loaded from environment and .env."""

    # App
    app_name: str = "storefront-media"
    app_version: str = "1.0.0"
    debug: bool = False

    # Media storage: "disk", "s3" or "gcs" (aliases: local, cloud, cloud-storage, google)
    media_storage_driver: str = "disk"
    media_upload_dir: str = "uploads"
    media_public_prefix: str = "/uploads"
    media_public_base_url: str = ""
    media_allowed_mime_types: str = "image/*"
    max_upload_size: int = 10 * 1024 * 1024  # per file, 10MB

    # S3-compatible object store (AWS S3, MinIO, Spaces)
    s3_bucket: str | None = None
    s3_region: str = "us-east-1"
    s3_endpoint_url: str | None = None
    s3_force_path_style: bool = False
    s3_access_key: str | None = None
    s3_secret_key: SecretStr | None = None
    s3_public_base_url: str | None = None

    # Google Cloud Storage
    gcs_bucket: str | None = None
    gcs_project: str | None = None
    gcs_credentials_path: str | None = None  # service account JSON; default credentials if unset
    gcs_public_base_url: str | None = None
    gcs_public_objects: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def storage_driver(self) -> StorageDriver:
        """Configured driver as a closed enum."""
        return StorageDriver.parse(self.media_storage_driver)

    @property
    def allowed_mime_types(self) -> list[str]:
        """Comma-separated allow-list split into patterns."""
        return [m.strip() for m in self.media_allowed_mime_types.split(",") if m.strip()]

    @model_validator(mode="after")
    def validate_storage(self) -> "Settings":
        """Reject unknown driver names and non-positive upload limits."""
        StorageDriver.parse(self.media_storage_driver)
        if self.max_upload_size <= 0:
            raise ValueError("max_upload_size must be a positive number of bytes")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    In tests, call get_settings.cache_clear() before overriding env vars so
    the next get_settings() uses the new values.
    """
    return Settings()
