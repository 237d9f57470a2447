"""Google Cloud Storage adapter."""

from __future__ import annotations

import asyncio
from typing import Any

from google.cloud import storage
from google.cloud.exceptions import NotFound

from storefront_media.domain.media import StagingMode, StorageDriver, UploadStaging, UploadTarget
from storefront_media.infrastructure.exceptions import StorageDeleteError, StorageUploadError
from storefront_media.infrastructure.external.storage.base import BaseStorageAdapter, read_payload
from storefront_media.infrastructure.external.storage.keys import build_object_key
from storefront_media.infrastructure.external.storage.paths import ObjectStorePathResolver


def default_gcs_base_url(bucket: str) -> str:
    return f"https://storage.googleapis.com/{bucket}/"


class GCSStorageService(BaseStorageAdapter):
    """GCS adapter. The google-cloud-storage client is sync, so calls run in a thread.

    The client is created on first use so that building the adapter never
    needs network access or credentials.
    """

    driver = StorageDriver.GCS

    def __init__(
        self,
        bucket_name: str,
        public_base_url: str | None = None,
        project: str | None = None,
        credentials_path: str | None = None,
        public_objects: bool = True,
        bucket: Any | None = None,
    ) -> None:
        """Initialize GCS adapter.

        Args:
            bucket_name: Name of the GCS bucket.
            public_base_url: Override for public URLs (default storage.googleapis.com).
            project: Google Cloud project ID; default from environment.
            credentials_path: Service account JSON; application default credentials if None.
            public_objects: Upload with the publicRead ACL.
            bucket: Prebuilt bucket handle (tests).
        """
        base_url = public_base_url or default_gcs_base_url(bucket_name)
        super().__init__(ObjectStorePathResolver(base_url, "gs", bucket_name))
        self.bucket_name = bucket_name
        self.project = project
        self.credentials_path = credentials_path
        self.public_objects = public_objects
        self._bucket = bucket

    @property
    def storage(self) -> UploadStaging:
        return UploadStaging(mode=StagingMode.MEMORY)

    def _get_bucket(self) -> Any:
        if self._bucket is None:
            if self.credentials_path:
                client = storage.Client.from_service_account_json(
                    self.credentials_path, project=self.project
                )
            else:
                client = storage.Client(project=self.project)
            self._bucket = client.bucket(self.bucket_name)
        return self._bucket

    async def _store(self, target: UploadTarget, folder: str) -> str:
        key = build_object_key(target.original_name, folder)
        try:
            data = await read_payload(target)
            blob = await asyncio.to_thread(lambda: self._get_bucket().blob(key))
            await asyncio.to_thread(
                blob.upload_from_string,
                data,
                content_type=target.mime_type,
                predefined_acl="publicRead" if self.public_objects else None,
            )
        except Exception as e:
            raise StorageUploadError(key, str(e)) from e
        return key

    async def _delete(self, key: str) -> bool:
        try:
            blob = await asyncio.to_thread(lambda: self._get_bucket().blob(key))
            await asyncio.to_thread(blob.delete)
        except NotFound:
            return False
        except Exception as e:
            raise StorageDeleteError(key, str(e)) from e
        return True
