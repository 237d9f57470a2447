"""Domain exceptions for the media storage service.

Define errors that represent rejected input at the upload boundary.
Presentation layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class MediaStoreException(Exception):
    """Base exception for all media storage errors.

    Presentation layer maps these to HTTP responses using message,
    error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. filename, mime_type).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for a JSON error body."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(MediaStoreException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class UnsupportedMediaTypeException(MediaStoreException):
    """Raised when an uploaded file's declared MIME type is not allowed."""

    def __init__(self, filename: str | None, mime_type: str | None) -> None:
        """Initialize with the rejected file name and MIME type.

        Args:
            filename: Client-supplied file name (may be missing).
            mime_type: Declared content type (may be missing).
        """
        super().__init__(
            f"File type not allowed: {mime_type or 'unknown'}",
            "UNSUPPORTED_MEDIA_TYPE",
            {"filename": filename, "mime_type": mime_type},
        )


class UploadTooLargeException(MediaStoreException):
    """Raised when a single uploaded file exceeds the configured size limit."""

    def __init__(self, filename: str | None, max_bytes: int) -> None:
        super().__init__(
            f"File must be at most {max_bytes} bytes",
            "UPLOAD_TOO_LARGE",
            {"filename": filename, "max_bytes": max_bytes},
        )
