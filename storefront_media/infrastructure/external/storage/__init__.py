"""Storage: local disk, S3-compatible and Google Cloud Storage backends.

StorageFactory picks one adapter per process. Cloud implementations are
imported lazily inside StorageFactory.create_adapter() so that:
- Default (disk) only requires aiofiles (main dependency).
- S3 only loads boto3 when used; install with the "s3" extra.
- GCS only loads google-cloud-storage when used; install with the "gcs" extra.

Adapters implement StorageProtocol (storage, to_public_path, resolve_key,
resolve_targets, persist, remove).
"""

from storefront_media.infrastructure.external.storage.factory import StorageFactory
from storefront_media.infrastructure.external.storage.local_storage import LocalStorageService
from storefront_media.infrastructure.external.storage.protocol import StorageProtocol

__all__ = [
    "LocalStorageService",
    "StorageFactory",
    "StorageProtocol",
]
