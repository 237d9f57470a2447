"""Shared adapter behavior: all-or-nothing batch persist and tolerant remove.

Backends only implement _store (one object) and _delete (one object,
False when it was already gone).
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence

import aiofiles

from storefront_media.domain.media import (
    MediaDescriptor,
    PathOrDescriptor,
    StorageDriver,
    UploadStaging,
    UploadTarget,
)
from storefront_media.infrastructure.external.storage.keys import sanitize_segment
from storefront_media.infrastructure.external.storage.paths import (
    PublicPathResolver,
    resolve_targets,
)

logger = logging.getLogger(__name__)


async def read_payload(target: UploadTarget) -> bytes:
    """Bytes of an upload, reading disk-staged payloads with aiofiles."""
    if isinstance(target.payload, bytes):
        return target.payload
    async with aiofiles.open(target.payload, "rb") as f:
        return await f.read()


class BaseStorageAdapter(ABC):
    """Template for storage adapters.

    persist uploads sequentially; if one object fails, every object already
    written by the same call is deleted before the original error is re-raised.
    """

    driver: StorageDriver

    def __init__(self, resolver: PublicPathResolver) -> None:
        self._resolver = resolver

    @property
    @abstractmethod
    def storage(self) -> UploadStaging:
        """Staging configuration for the upload receiver."""

    @abstractmethod
    async def _store(self, target: UploadTarget, folder: str) -> str:
        """Write one object under folder and return its key."""

    @abstractmethod
    async def _delete(self, key: str) -> bool:
        """Delete one object. False if it did not exist."""

    def to_public_path(self, key: str) -> str:
        return self._resolver.to_public_path(key)

    def resolve_key(self, path: str) -> str:
        return self._resolver.resolve_key(path)

    def resolve_targets(
        self, inputs: PathOrDescriptor | Iterable[PathOrDescriptor | None] | None
    ) -> list[MediaDescriptor]:
        return resolve_targets(inputs, self._resolver)

    async def persist(
        self, files: Sequence[UploadTarget], folder: str | None = None
    ) -> list[MediaDescriptor]:
        safe_folder = sanitize_segment(folder)
        uploaded: list[MediaDescriptor] = []
        try:
            for target in files:
                key = await self._store(target, safe_folder)
                uploaded.append(MediaDescriptor(path=self.to_public_path(key), key=key))
        except Exception:
            if uploaded:
                await self._rollback(uploaded)
            raise
        logger.debug(
            "Persisted %d file(s) to %s (folder=%r)", len(uploaded), self.driver.value, safe_folder
        )
        return uploaded

    async def _rollback(self, uploaded: list[MediaDescriptor]) -> None:
        """Best-effort delete of a partial batch. Failures are logged, never raised."""
        logger.warning(
            "Rolling back %d object(s) from failed %s batch", len(uploaded), self.driver.value
        )
        for item in uploaded:
            try:
                await self._delete(item.key)
            except Exception:
                logger.exception("Failed to roll back partial upload %s", item.key)

    async def remove(self, targets: Iterable[MediaDescriptor]) -> None:
        for target in targets:
            if not target.key:
                continue
            if not await self._delete(target.key):
                logger.debug("Media already absent: %s", target.key)
