"""Storage adapter factory: selects disk, S3 or GCS once per process.

A cloud driver whose SDK is not installed or whose bucket is not configured
falls back to the disk adapter for the lifetime of the process. The
decision is made here, explicitly, and logged at WARNING.
"""

from __future__ import annotations

import importlib.util
import logging
from typing import TYPE_CHECKING

from storefront_media.domain.media import StorageDriver
from storefront_media.infrastructure.external.storage.local_storage import LocalStorageService
from storefront_media.infrastructure.external.storage.protocol import StorageProtocol

if TYPE_CHECKING:
    from storefront_media.core.config import Settings

logger = logging.getLogger(__name__)

_SDK_MODULES: dict[StorageDriver, tuple[str, str]] = {
    StorageDriver.S3: ("boto3", "boto3"),
    StorageDriver.GCS: ("google.cloud.storage", "google-cloud-storage"),
}


def sdk_available(module_name: str) -> bool:
    """True when module_name can be imported (parents included)."""
    try:
        return importlib.util.find_spec(module_name) is not None
    except ModuleNotFoundError:
        return False


class StorageFactory:
    """Factory for storage adapters based on configuration."""

    @staticmethod
    def create_disk_adapter(settings: "Settings") -> LocalStorageService:
        return LocalStorageService(
            upload_root=settings.media_upload_dir,
            public_prefix=settings.media_public_prefix,
            public_base_url=settings.media_public_base_url or None,
        )

    @staticmethod
    def create_adapter(settings: "Settings | None" = None) -> StorageProtocol:
        """Create the process-wide storage adapter from settings.

        Args:
            settings: Application settings; if None, uses get_settings().

        Returns:
            LocalStorageService, S3StorageService or GCSStorageService.
        """
        from storefront_media.core.config import get_settings

        s = settings or get_settings()
        driver = s.storage_driver
        disk = StorageFactory.create_disk_adapter(s)

        if driver is StorageDriver.DISK:
            logger.info("Media storage: disk (%s)", disk.upload_root)
            return disk

        module_name, package = _SDK_MODULES[driver]
        if not sdk_available(module_name):
            logger.warning(
                "Media storage %s requested but %s is not installed; falling back to disk (%s)",
                driver.value,
                package,
                disk.upload_root,
            )
            return disk

        if driver is StorageDriver.S3:
            if not s.s3_bucket:
                logger.warning(
                    "Media storage s3 requested but S3_BUCKET is not set; falling back to disk (%s)",
                    disk.upload_root,
                )
                return disk
            from storefront_media.infrastructure.external.storage.s3_storage import (
                S3StorageService,
            )

            logger.info("Media storage: s3 (bucket=%s, region=%s)", s.s3_bucket, s.s3_region)
            return S3StorageService(
                bucket=s.s3_bucket,
                region=s.s3_region,
                public_base_url=s.s3_public_base_url or s.media_public_base_url or None,
                endpoint_url=s.s3_endpoint_url,
                access_key=s.s3_access_key,
                secret_key=s.s3_secret_key.get_secret_value() if s.s3_secret_key else None,
                force_path_style=s.s3_force_path_style,
            )

        if not s.gcs_bucket:
            logger.warning(
                "Media storage gcs requested but GCS_BUCKET is not set; falling back to disk (%s)",
                disk.upload_root,
            )
            return disk
        from storefront_media.infrastructure.external.storage.gcs_storage import (
            GCSStorageService,
        )

        logger.info("Media storage: gcs (bucket=%s)", s.gcs_bucket)
        return GCSStorageService(
            bucket_name=s.gcs_bucket,
            public_base_url=s.gcs_public_base_url or s.media_public_base_url or None,
            project=s.gcs_project,
            credentials_path=s.gcs_credentials_path,
            public_objects=s.gcs_public_objects,
        )
