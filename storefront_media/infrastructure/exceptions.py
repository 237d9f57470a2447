"""Infrastructure exceptions for storage operations.

Storage errors extend MediaStoreException so presentation can map them
to HTTP responses consistently.
"""

from storefront_media.domain.exceptions import MediaStoreException


class StorageException(MediaStoreException):
    """Base exception for storage operations."""


class StorageUploadError(StorageException):
    """Object upload failed."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(
            f"Failed to upload file: {key}",
            "STORAGE_UPLOAD_ERROR",
            {"key": key, "reason": reason},
        )


class StorageDeleteError(StorageException):
    """Object deletion failed (anything other than not-found)."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(
            f"Failed to delete file: {key}",
            "STORAGE_DELETE_ERROR",
            {"key": key, "reason": reason},
        )


class StoragePermissionError(StorageException):
    """Key resolves outside the storage root."""

    def __init__(self, key: str, operation: str) -> None:
        super().__init__(
            f"Permission denied for {operation} on {key}",
            "STORAGE_PERMISSION_ERROR",
            {"key": key, "operation": operation},
        )
