"""Media persistence entry point used by product, news and drone workflows.

Typical caller flow::

    targets = await receiver.receive(request_files)
    descriptors = await media_store.persist_media(targets, folder="products")
    try:
        ...insert rows referencing d.path...
    except Exception:
        media_store.enqueue_orphan_cleanup(descriptors)
        raise
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from storefront_media.application.services.cleanup_queue import OrphanCleanupQueue
from storefront_media.domain.media import (
    MediaDescriptor,
    PathOrDescriptor,
    StorageDriver,
    UploadStaging,
    UploadTarget,
)
from storefront_media.infrastructure.external.storage.factory import StorageFactory
from storefront_media.infrastructure.external.storage.protocol import StorageProtocol
from storefront_media.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from storefront_media.core.config import Settings

logger = get_logger(__name__)

Targets = PathOrDescriptor | Iterable[PathOrDescriptor | None] | None


class MediaStore:
    """Owns the selected storage adapter and its orphan cleanup queue.

    Build one per process (MediaStore.from_settings) and inject it; tests
    can construct one around any adapter.
    """

    def __init__(
        self,
        adapter: StorageProtocol,
        cleanup_queue: OrphanCleanupQueue | None = None,
    ) -> None:
        self.adapter = adapter
        self.cleanup_queue = cleanup_queue or OrphanCleanupQueue(self.remove_media)

    @classmethod
    def from_settings(cls, settings: "Settings | None" = None) -> "MediaStore":
        return cls(StorageFactory.create_adapter(settings))

    @property
    def storage_type(self) -> StorageDriver:
        return self.adapter.driver

    @property
    def storage(self) -> UploadStaging:
        return self.adapter.storage

    def to_public_path(self, key: str) -> str:
        return self.adapter.to_public_path(key)

    def resolve_targets(self, targets: Targets) -> list[MediaDescriptor]:
        return self.adapter.resolve_targets(targets)

    async def persist_media(
        self, files: Sequence[UploadTarget], folder: str | None = None
    ) -> list[MediaDescriptor]:
        """Store all files or none.

        On failure the adapter has already deleted whatever it wrote in this
        call. Files staged on disk but never persisted are not touched; pass
        raw_upload_targets(files) to enqueue_orphan_cleanup for those.

        Args:
            files: Received uploads.
            folder: Optional folder segment (e.g. 'products'); sanitized.

        Returns:
            One descriptor per file, in input order.
        """
        if not files:
            return []
        return await self.adapter.persist(list(files), folder=folder)

    async def remove_media(self, targets: Targets) -> None:
        """Delete stored media now. Not-found is success; other errors are logged and re-raised."""
        normalized = self.resolve_targets(targets)
        if not normalized:
            return
        try:
            await self.adapter.remove(normalized)
        except Exception:
            logger.exception("Failed to remove media: %s", [t.key for t in normalized])
            raise

    def enqueue_orphan_cleanup(self, targets: Targets) -> asyncio.Future[None]:
        """Schedule best-effort deletion without blocking the caller.

        Must be called from a running event loop. The returned future
        completes once every target was attempted; it never carries an error.
        """
        normalized = self.resolve_targets(targets)
        if not normalized:
            done: asyncio.Future[None] = asyncio.get_running_loop().create_future()
            done.set_result(None)
            return done
        return self.cleanup_queue.enqueue(normalized)

    def raw_upload_targets(self, files: Iterable[UploadTarget]) -> list[MediaDescriptor]:
        """Descriptors for disk-staged uploads that were never persisted.

        Only disk staging leaves files behind; memory-staged uploads yield nothing.
        """
        staging = self.storage
        if staging.directory is None:
            return []
        root = staging.directory.resolve()
        descriptors = []
        for target in files:
            staged = target.staged_path
            if staged is None or not staged.resolve().is_relative_to(root):
                continue
            key = staged.resolve().relative_to(root).as_posix()
            descriptors.append(MediaDescriptor(path=self.to_public_path(key), key=key))
        return descriptors

    async def aclose(self) -> None:
        """Wait for queued cleanup jobs (application shutdown)."""
        await self.cleanup_queue.join()
