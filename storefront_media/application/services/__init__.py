"""Application services: MediaStore, OrphanCleanupQueue, UploadReceiver."""

from storefront_media.application.services.cleanup_queue import CleanupJob, OrphanCleanupQueue
from storefront_media.application.services.media_service import MediaStore
from storefront_media.application.services.upload_receiver import MimeTypeFilter, UploadReceiver

__all__ = [
    "CleanupJob",
    "MediaStore",
    "MimeTypeFilter",
    "OrphanCleanupQueue",
    "UploadReceiver",
]
