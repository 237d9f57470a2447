"""Media value objects: descriptors, upload targets, driver and staging.

Value objects are immutable. A MediaDescriptor is the only type handed
back to callers; they persist its path and later pass it back for deletion.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TypeAlias


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class StorageDriver(_ValuesMixin, str, Enum):
    """Storage backend selected once per process."""

    DISK = "disk"
    S3 = "s3"
    GCS = "gcs"

    @classmethod
    def parse(cls, value: str | None) -> "StorageDriver":
        """Map a configuration value (case-insensitive, with aliases) to a driver.

        Raises:
            ValueError: Unknown driver name.
        """
        normalized = (value or cls.DISK.value).strip().lower()
        normalized = _DRIVER_ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(
                f"Unknown storage driver: {value!r}. Supported: {', '.join(cls.values())}"
            ) from None


_DRIVER_ALIASES: dict[str, str] = {
    "local": "disk",
    "cloud": "gcs",
    "cloud-storage": "gcs",
    "google": "gcs",
}


class StagingMode(_ValuesMixin, str, Enum):
    """Where the upload receiver keeps incoming bytes before persist."""

    DISK = "disk"
    MEMORY = "memory"


@dataclass(frozen=True)
class UploadStaging:
    """Staging configuration exposed by an adapter to the upload receiver.

    Disk adapters stage straight into the final public directory; cloud
    adapters buffer in memory since objects are shipped over the network.
    """

    mode: StagingMode
    directory: Path | None = None

    def ensure_directory(self) -> Path:
        """Create the staging directory if missing (sync, idempotent) and return it."""
        if self.directory is None:
            raise ValueError("Memory staging has no directory")
        self.directory.mkdir(parents=True, exist_ok=True)
        return self.directory


@dataclass(frozen=True)
class MediaDescriptor:
    """One stored media object.

    path is the externally servable locator (URL or static path).
    key is the backend-internal locator (relative file path or object key).
    """

    path: str
    key: str = ""


@dataclass(frozen=True)
class UploadTarget:
    """A received file waiting to be persisted.

    payload is a Path for disk-staged uploads and bytes for memory staging.
    """

    original_name: str
    mime_type: str
    size_bytes: int
    payload: Path | bytes

    @property
    def staged_path(self) -> Path | None:
        """Filesystem location of a disk-staged payload, else None."""
        return self.payload if isinstance(self.payload, Path) else None


PathOrDescriptor: TypeAlias = str | MediaDescriptor
