"""Unit tests for MediaStore (persist, remove, orphan cleanup wiring)."""

import asyncio
from collections.abc import Callable
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from storefront_media.application.services import MediaStore
from storefront_media.domain.media import MediaDescriptor, StorageDriver, UploadTarget
from storefront_media.infrastructure.exceptions import StorageDeleteError, StorageUploadError
from storefront_media.infrastructure.external.storage.local_storage import LocalStorageService
from storefront_media.infrastructure.external.storage.s3_storage import S3StorageService
from tests.fakes import FakeS3Client


@pytest.fixture
def store(disk_adapter: LocalStorageService) -> MediaStore:
    return MediaStore(disk_adapter)


async def test_persist_then_remove_leaves_folder_empty(
    store: MediaStore, upload_root: Path, make_target: Callable[..., UploadTarget]
) -> None:
    descriptors = await store.persist_media(
        [make_target("a.png"), make_target("b.png")], folder="products"
    )
    assert len(descriptors) == 2
    assert len(list((upload_root / "products").iterdir())) == 2

    await store.remove_media(descriptors)

    assert list((upload_root / "products").iterdir()) == []


async def test_persist_empty_skips_adapter() -> None:
    adapter = AsyncMock()
    store = MediaStore(adapter)

    assert await store.persist_media([]) == []
    adapter.persist.assert_not_called()


async def test_descriptors_round_trip(store: MediaStore, make_target: Callable[..., UploadTarget]) -> None:
    descriptors = await store.persist_media([make_target(), make_target()], folder="news")
    for d in descriptors:
        assert store.to_public_path(d.key) == d.path
        assert store.resolve_targets([d.path])[0].key == d.key


async def test_failed_batch_leaves_nothing_behind(make_target: Callable[..., UploadTarget]) -> None:
    fake = FakeS3Client(fail_put_on=3)
    store = MediaStore(S3StorageService(bucket="media", client=fake))

    with pytest.raises(StorageUploadError):
        await store.persist_media([make_target(), make_target(), make_target()], folder="products")

    assert fake.objects == {}


async def test_remove_media_accepts_stored_paths(
    store: MediaStore, upload_root: Path, make_target: Callable[..., UploadTarget]
) -> None:
    [d] = await store.persist_media([make_target()], folder="products")

    await store.remove_media(d.path)

    assert not (upload_root / d.key).exists()


async def test_remove_media_reraises_backend_errors() -> None:
    store = MediaStore(S3StorageService(bucket="media", client=FakeS3Client(fail_delete=True)))

    with pytest.raises(StorageDeleteError):
        await store.remove_media(["s3://media/products/a.png"])


async def test_remove_media_ignores_unresolvable() -> None:
    adapter = S3StorageService(bucket="media", client=FakeS3Client())
    store = MediaStore(adapter)
    await store.remove_media([None, "", "s3://elsewhere/a.png"])


async def test_enqueue_orphan_cleanup_deletes_asynchronously(
    store: MediaStore, upload_root: Path, make_target: Callable[..., UploadTarget]
) -> None:
    descriptors = await store.persist_media([make_target(), make_target()], folder="products")

    done = store.enqueue_orphan_cleanup([d.path for d in descriptors])
    assert all((upload_root / d.key).exists() for d in descriptors)

    await done
    assert not any((upload_root / d.key).exists() for d in descriptors)


async def test_enqueue_empty_is_already_done(store: MediaStore) -> None:
    done = store.enqueue_orphan_cleanup([])
    assert done.done()
    assert store.cleanup_queue.pending == 0


async def test_cleanup_failure_never_raises() -> None:
    store = MediaStore(S3StorageService(bucket="media", client=FakeS3Client(fail_delete=True)))

    await asyncio.wait_for(store.enqueue_orphan_cleanup(["s3://media/a.png"]), timeout=1)


async def test_raw_upload_targets_for_disk_staged_files(store: MediaStore, upload_root: Path) -> None:
    upload_root.mkdir(parents=True)
    staged = upload_root / "1-abc.png"
    staged.write_bytes(b"x")
    files = [
        UploadTarget("a.png", "image/png", 1, staged),
        UploadTarget("b.png", "image/png", 1, b"x"),
    ]

    assert store.raw_upload_targets(files) == [MediaDescriptor(path="/uploads/1-abc.png", key="1-abc.png")]

    await store.enqueue_orphan_cleanup(store.raw_upload_targets(files))
    assert not staged.exists()


def test_raw_upload_targets_empty_for_memory_staging() -> None:
    store = MediaStore(S3StorageService(bucket="media", client=FakeS3Client()))
    assert store.raw_upload_targets([UploadTarget("a.png", "image/png", 1, b"x")]) == []


def test_storage_type(store: MediaStore) -> None:
    assert store.storage_type is StorageDriver.DISK


async def test_aclose_waits_for_queue(
    store: MediaStore, upload_root: Path, make_target: Callable[..., UploadTarget]
) -> None:
    [d] = await store.persist_media([make_target()])
    store.enqueue_orphan_cleanup([d])

    await store.aclose()

    assert not (upload_root / d.key).exists()
