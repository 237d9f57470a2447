"""Multipart upload ingestion with a MIME allow-list.

Every file's declared type is checked before a single byte is written.
Accepted files are then staged the way the active adapter wants them:
directly in the disk upload root, or buffered in memory for cloud stores.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Protocol

import aiofiles
import aiofiles.os

from storefront_media.domain.exceptions import (
    UnsupportedMediaTypeException,
    UploadTooLargeException,
)
from storefront_media.domain.media import StagingMode, UploadStaging, UploadTarget
from storefront_media.infrastructure.external.storage.keys import build_filename
from storefront_media.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class IncomingFile(Protocol):
    """What the receiver needs from a multipart file (Starlette UploadFile fits)."""

    filename: str | None
    content_type: str | None

    async def read(self, size: int = -1) -> bytes: ...


class MimeTypeFilter:
    """Allow-list of MIME patterns: exact ('image/png'), family ('image/*') or any ('*/*')."""

    def __init__(self, patterns: Iterable[str]) -> None:
        self.patterns = [p.strip().lower() for p in patterns if p and p.strip()]

    @classmethod
    def from_setting(cls, value: str) -> "MimeTypeFilter":
        """Build from a comma-separated setting such as 'image/*,video/mp4'."""
        return cls(value.split(","))

    def is_allowed(self, mime_type: str | None) -> bool:
        if not mime_type:
            return False
        mime = mime_type.split(";", 1)[0].strip().lower()
        for pattern in self.patterns:
            if pattern in ("*", "*/*") or pattern == mime:
                return True
            if pattern.endswith("/*") and mime.startswith(pattern[:-1]):
                return True
        return False

    def check(self, filename: str | None, mime_type: str | None) -> None:
        """Raise UnsupportedMediaTypeException unless mime_type is allowed."""
        if not self.is_allowed(mime_type):
            raise UnsupportedMediaTypeException(filename, mime_type)


class UploadReceiver:
    """Turns incoming multipart files into UploadTargets.

    All-or-nothing per request: if any file fails to stage, files already
    staged by the same call are discarded before the error propagates.
    """

    CHUNK_SIZE = 64 * 1024  # 64KB

    def __init__(
        self,
        staging: UploadStaging,
        mime_filter: MimeTypeFilter,
        max_file_size: int | None = None,
    ) -> None:
        self.staging = staging
        self.mime_filter = mime_filter
        self.max_file_size = max_file_size

    async def receive(self, uploads: Sequence[IncomingFile]) -> list[UploadTarget]:
        for upload in uploads:
            self.mime_filter.check(upload.filename, upload.content_type)

        staged: list[UploadTarget] = []
        try:
            for upload in uploads:
                staged.append(await self._stage(upload))
        except Exception:
            await self.discard(staged)
            raise
        return staged

    def _check_size(self, upload: IncomingFile, size: int) -> None:
        if self.max_file_size is not None and size > self.max_file_size:
            raise UploadTooLargeException(upload.filename, self.max_file_size)

    async def _stage(self, upload: IncomingFile) -> UploadTarget:
        if self.staging.mode is StagingMode.DISK:
            return await self._stage_on_disk(upload)
        buffer = bytearray()
        while chunk := await upload.read(self.CHUNK_SIZE):
            buffer.extend(chunk)
            self._check_size(upload, len(buffer))
        return UploadTarget(
            original_name=upload.filename or "",
            mime_type=upload.content_type or "",
            size_bytes=len(buffer),
            payload=bytes(buffer),
        )

    async def _stage_on_disk(self, upload: IncomingFile) -> UploadTarget:
        directory = self.staging.ensure_directory()
        path = directory / build_filename(upload.filename)
        size = 0
        try:
            async with aiofiles.open(path, "wb") as f:
                while chunk := await upload.read(self.CHUNK_SIZE):
                    size += len(chunk)
                    self._check_size(upload, size)
                    await f.write(chunk)
        except BaseException:
            await self._unlink(path)
            raise
        return UploadTarget(
            original_name=upload.filename or "",
            mime_type=upload.content_type or "",
            size_bytes=size,
            payload=path,
        )

    async def discard(self, targets: Iterable[UploadTarget]) -> None:
        """Delete disk-staged payloads; memory payloads need nothing."""
        for target in targets:
            if target.staged_path is not None:
                await self._unlink(target.staged_path)

    @staticmethod
    async def _unlink(path: Path) -> None:
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            logger.debug("Staged upload already gone: %s", path)
