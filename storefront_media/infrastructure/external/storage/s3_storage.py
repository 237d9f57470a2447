"""S3-compatible object storage (AWS S3, MinIO, DigitalOcean Spaces)."""

from __future__ import annotations

import asyncio
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from storefront_media.domain.media import StagingMode, StorageDriver, UploadStaging, UploadTarget
from storefront_media.infrastructure.exceptions import StorageDeleteError, StorageUploadError
from storefront_media.infrastructure.external.storage.base import BaseStorageAdapter, read_payload
from storefront_media.infrastructure.external.storage.keys import build_object_key
from storefront_media.infrastructure.external.storage.paths import ObjectStorePathResolver

_NOT_FOUND_CODES = frozenset({"NoSuchKey", "404", "NotFound"})


def _is_not_found(error: ClientError) -> bool:
    code = str(error.response.get("Error", {}).get("Code", ""))
    status = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
    return code in _NOT_FOUND_CODES or status == 404


def default_s3_base_url(bucket: str, region: str, endpoint_url: str | None = None) -> str:
    """Public base URL when no override is configured: endpoint+bucket, else AWS virtual host."""
    if endpoint_url:
        return f"{endpoint_url.rstrip('/')}/{bucket}/"
    return f"https://{bucket}.s3.{region}.amazonaws.com/"


class S3StorageService(BaseStorageAdapter):
    """S3-compatible adapter. Uses boto3 (sync) via asyncio.to_thread.

    Uploads are buffered in memory by the receiver and shipped with
    put_object; keys are {folder}/{ms timestamp}-{cuid}{ext}.
    """

    driver = StorageDriver.S3

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        public_base_url: str | None = None,
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        force_path_style: bool = False,
        client: Any | None = None,
    ) -> None:
        """Initialize S3 client.

        Args:
            bucket: Bucket name.
            region: AWS region.
            public_base_url: Override for public URLs; default derives from endpoint or region.
            endpoint_url: Custom endpoint (MinIO/Spaces).
            access_key: Optional; uses env/IAM if not set.
            secret_key: Optional.
            force_path_style: Address buckets as {endpoint}/{bucket} (MinIO).
            client: Prebuilt boto3 S3 client (tests).
        """
        base_url = public_base_url or default_s3_base_url(bucket, region, endpoint_url)
        super().__init__(ObjectStorePathResolver(base_url, "s3", bucket))
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url
        if client is None:
            extra: dict[str, Any] = {} if endpoint_url is None else {"endpoint_url": endpoint_url}
            if force_path_style:
                extra["config"] = Config(s3={"addressing_style": "path"})
            client = boto3.client(
                "s3",
                region_name=region,
                aws_access_key_id=access_key,
                aws_secret_access_key=secret_key,
                **extra,
            )
        self._client = client

    @property
    def storage(self) -> UploadStaging:
        return UploadStaging(mode=StagingMode.MEMORY)

    async def _store(self, target: UploadTarget, folder: str) -> str:
        key = build_object_key(target.original_name, folder)
        try:
            body = await read_payload(target)
            await asyncio.to_thread(
                self._client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=body,
                ContentType=target.mime_type,
            )
        except Exception as e:
            raise StorageUploadError(key, str(e)) from e
        return key

    async def _delete(self, key: str) -> bool:
        try:
            await asyncio.to_thread(self._client.delete_object, Bucket=self.bucket, Key=key)
        except ClientError as e:
            if _is_not_found(e):
                return False
            raise StorageDeleteError(key, str(e)) from e
        except Exception as e:
            raise StorageDeleteError(key, str(e)) from e
        return True
