"""Application lifespan: startup and shutdown.

The MediaStore itself is built in create_app (adapter selection happens
once, before routes are mounted); here we only let queued orphan cleanup
finish on shutdown.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log the active storage on startup; drain the cleanup queue on exit."""
    media_store = app.state.media_store
    logger.info("Media storage ready: %s", media_store.storage_type.value)

    yield

    pending = media_store.cleanup_queue.pending
    await media_store.aclose()
    logger.info("Orphan cleanup queue drained (%d job(s) pending at shutdown)", pending)
