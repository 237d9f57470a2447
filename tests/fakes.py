"""In-memory stand-ins for the boto3 S3 client and the GCS bucket handle."""

from __future__ import annotations

from botocore.exceptions import ClientError
from google.api_core.exceptions import NotFound


class FakeS3Client:
    """Dict-backed stand-in for a boto3 S3 client.

    fail_put_on: 1-based put_object call number that raises.
    fail_delete: delete_object raises AccessDenied for every key.
    """

    def __init__(self, fail_put_on: int | None = None, fail_delete: bool = False) -> None:
        self.objects: dict[str, bytes] = {}
        self.content_types: dict[str, str] = {}
        self.put_calls = 0
        self.fail_put_on = fail_put_on
        self.fail_delete = fail_delete

    def put_object(self, *, Bucket: str, Key: str, Body: bytes, ContentType: str) -> dict:
        self.put_calls += 1
        if self.fail_put_on is not None and self.put_calls == self.fail_put_on:
            raise ClientError(
                {"Error": {"Code": "InternalError", "Message": "boom"}}, "PutObject"
            )
        self.objects[Key] = Body
        self.content_types[Key] = ContentType
        return {}

    def delete_object(self, *, Bucket: str, Key: str) -> dict:
        if self.fail_delete:
            raise ClientError(
                {
                    "Error": {"Code": "AccessDenied", "Message": "denied"},
                    "ResponseMetadata": {"HTTPStatusCode": 403},
                },
                "DeleteObject",
            )
        if Key not in self.objects:
            raise ClientError(
                {
                    "Error": {"Code": "NoSuchKey", "Message": "missing"},
                    "ResponseMetadata": {"HTTPStatusCode": 404},
                },
                "DeleteObject",
            )
        del self.objects[Key]
        return {}


class FakeBlob:
    def __init__(self, bucket: "FakeGCSBucket", name: str) -> None:
        self.bucket = bucket
        self.name = name

    def upload_from_string(self, data: bytes, content_type: str | None = None, predefined_acl: str | None = None) -> None:
        self.bucket.upload_calls += 1
        if self.bucket.fail_upload_on == self.bucket.upload_calls:
            raise RuntimeError("gcs upload failed")
        self.bucket.objects[self.name] = data
        self.bucket.acls[self.name] = predefined_acl

    def delete(self) -> None:
        if self.bucket.fail_delete:
            raise PermissionError("forbidden")
        if self.name not in self.bucket.objects:
            raise NotFound(f"No such object: {self.name}")
        del self.bucket.objects[self.name]


class FakeGCSBucket:
    """Stand-in for google.cloud.storage.Bucket."""

    def __init__(self, fail_upload_on: int | None = None, fail_delete: bool = False) -> None:
        self.objects: dict[str, bytes] = {}
        self.acls: dict[str, str | None] = {}
        self.upload_calls = 0
        self.fail_upload_on = fail_upload_on
        self.fail_delete = fail_delete

    def blob(self, name: str) -> FakeBlob:
        return FakeBlob(self, name)

