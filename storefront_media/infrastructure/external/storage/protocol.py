"""Storage adapter protocol (DIP). Implementations: LocalStorageService, S3StorageService, GCSStorageService."""

from collections.abc import Iterable, Sequence
from typing import Protocol

from storefront_media.domain.media import (
    MediaDescriptor,
    PathOrDescriptor,
    StorageDriver,
    UploadStaging,
    UploadTarget,
)


class StorageProtocol(Protocol):
    """Protocol for media storage backends (disk, S3-compatible, GCS)."""

    driver: StorageDriver

    @property
    def storage(self) -> UploadStaging:
        """Staging configuration for the upload receiver."""
        ...

    def to_public_path(self, key: str) -> str:
        """Map a backend key to its public path. Pure, no I/O."""
        ...

    def resolve_key(self, path: str) -> str:
        """Inverse of to_public_path; '' when the path cannot be mapped."""
        ...

    def resolve_targets(
        self, inputs: PathOrDescriptor | Iterable[PathOrDescriptor | None] | None
    ) -> list[MediaDescriptor]:
        """Normalize stored paths and descriptors to full descriptors."""
        ...

    async def persist(
        self, files: Sequence[UploadTarget], folder: str | None = None
    ) -> list[MediaDescriptor]:
        """Store every file or none of them. Descriptors in input order."""
        ...

    async def remove(self, targets: Iterable[MediaDescriptor]) -> None:
        """Delete by key. Not-found is success; other errors propagate."""
        ...
