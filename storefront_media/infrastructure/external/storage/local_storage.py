"""Local filesystem storage writing straight into the public upload directory."""

from __future__ import annotations

from pathlib import Path

import aiofiles
import aiofiles.os

from storefront_media.domain.media import StagingMode, StorageDriver, UploadStaging, UploadTarget
from storefront_media.infrastructure.exceptions import (
    StorageDeleteError,
    StoragePermissionError,
    StorageUploadError,
)
from storefront_media.infrastructure.external.storage.base import BaseStorageAdapter, read_payload
from storefront_media.infrastructure.external.storage.keys import build_filename
from storefront_media.infrastructure.external.storage.paths import PrefixPathResolver


class LocalStorageService(BaseStorageAdapter):
    """Disk adapter. Keys are paths relative to upload_root.

    The upload receiver stages files directly in upload_root under their
    final generated name; persist only moves them into the requested
    folder. Directory creation is synchronous and idempotent.
    """

    driver = StorageDriver.DISK

    def __init__(
        self,
        upload_root: str | Path,
        public_prefix: str = "/uploads",
        public_base_url: str | None = None,
    ) -> None:
        """Initialize local storage.

        Args:
            upload_root: Directory served at public_prefix; created on first write.
            public_prefix: URL path prefix for stored files (e.g. /uploads).
            public_base_url: Optional host prefix tolerated when resolving stored paths.
        """
        super().__init__(PrefixPathResolver(public_prefix, public_base_url))
        self.upload_root = Path(upload_root).resolve()

    @property
    def storage(self) -> UploadStaging:
        return UploadStaging(mode=StagingMode.DISK, directory=self.upload_root)

    def _get_full_path(self, key: str) -> Path:
        """Resolve and validate path under upload_root. Raises StoragePermissionError if traversal."""
        full_path = (self.upload_root / key).resolve()
        try:
            relative = full_path.relative_to(self.upload_root)
        except ValueError as e:
            raise StoragePermissionError(key, "path_validation") from e
        if not relative.parts:
            raise StoragePermissionError(key, "path_validation")
        return full_path

    def _is_staged_here(self, path: Path) -> bool:
        return path.resolve().is_relative_to(self.upload_root)

    @staticmethod
    def _ensure_directory(directory: Path) -> None:
        directory.mkdir(parents=True, exist_ok=True)

    async def _store(self, target: UploadTarget, folder: str) -> str:
        staged = target.staged_path
        in_place = staged is not None and self._is_staged_here(staged)
        filename = staged.name if in_place else build_filename(target.original_name)
        key = f"{folder}/{filename}" if folder else filename
        dest = self._get_full_path(key)
        try:
            self._ensure_directory(dest.parent)
            if in_place:
                if staged.resolve() != dest:
                    await aiofiles.os.replace(staged, dest)
            else:
                data = await read_payload(target)
                async with aiofiles.open(dest, "wb") as f:
                    await f.write(data)
        except Exception as e:
            raise StorageUploadError(key, str(e)) from e
        return key

    async def _delete(self, key: str) -> bool:
        file_path = self._get_full_path(key)
        try:
            await aiofiles.os.remove(file_path)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageDeleteError(key, str(e)) from e
        return True
