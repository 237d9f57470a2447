"""In-process FIFO queue for best-effort deletion of orphaned media.

One drain pass runs at a time, guarded by a boolean flag; that is enough
on a single asyncio event loop. Threaded callers would need a real lock.
"""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from storefront_media.domain.media import MediaDescriptor
from storefront_media.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

RemoveFn = Callable[[list[MediaDescriptor]], Awaitable[None]]


@dataclass
class CleanupJob:
    """Targets to delete and the future resolved once all were attempted."""

    targets: list[MediaDescriptor]
    completion: asyncio.Future[None]


class OrphanCleanupQueue:
    """Single-worker FIFO of CleanupJobs.

    Failures are logged and swallowed so cleanup never reaches a request's
    response path. Each target is removed on its own: one failing key does
    not skip the rest of the job.
    """

    def __init__(self, remove: RemoveFn) -> None:
        self._remove = remove
        self._jobs: deque[CleanupJob] = deque()
        self._processing = False
        self._drain_task: asyncio.Task[None] | None = None

    @property
    def pending(self) -> int:
        return len(self._jobs)

    @property
    def processing(self) -> bool:
        return self._processing

    def enqueue(self, targets: list[MediaDescriptor]) -> asyncio.Future[None]:
        """Queue targets and schedule a drain on the next loop iteration.

        Returns a future that completes after every target was attempted.
        """
        loop = asyncio.get_running_loop()
        completion: asyncio.Future[None] = loop.create_future()
        self._jobs.append(CleanupJob(targets=list(targets), completion=completion))
        loop.call_soon(self._schedule_drain)
        return completion

    def _schedule_drain(self) -> None:
        if self._processing or not self._jobs:
            return
        if self._drain_task is not None and not self._drain_task.done():
            return
        self._drain_task = asyncio.get_running_loop().create_task(self._drain())

    async def _drain(self) -> None:
        if self._processing:
            return
        self._processing = True
        try:
            while self._jobs:
                job = self._jobs.popleft()
                try:
                    for target in job.targets:
                        try:
                            await self._remove([target])
                        except Exception:
                            logger.exception("Orphan cleanup failed for %s", target.key)
                finally:
                    if not job.completion.done():
                        job.completion.set_result(None)
        finally:
            self._processing = False

    async def join(self) -> None:
        """Wait until every job submitted so far has been attempted."""
        waiting = [job.completion for job in self._jobs]
        if self._drain_task is not None and not self._drain_task.done():
            waiting.append(self._drain_task)
        if waiting:
            await asyncio.gather(*waiting, return_exceptions=True)
