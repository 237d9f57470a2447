"""Media dependencies for route modules (composition root).

Routes that accept images declare::

    targets: Annotated[list[UploadTarget], Depends(receive_image_uploads)]
    media_store: Annotated[MediaStore, Depends(get_media_store)]
"""

from typing import Annotated

from fastapi import Depends, File, Request, UploadFile

from storefront_media.application.services import MediaStore, UploadReceiver
from storefront_media.domain.media import UploadTarget


def get_media_store(request: Request) -> MediaStore:
    """Process-wide MediaStore built in create_app."""
    return request.app.state.media_store


def get_upload_receiver(request: Request) -> UploadReceiver:
    """UploadReceiver wired to the active adapter's staging."""
    return request.app.state.upload_receiver


async def receive_image_uploads(
    receiver: Annotated[UploadReceiver, Depends(get_upload_receiver)],
    images: list[UploadFile] | None = File(None),
) -> list[UploadTarget]:
    """Validate and stage files from the multipart 'images' field.

    Disallowed MIME types raise UnsupportedMediaTypeException (415) before
    anything is written.
    """
    return await receiver.receive(images or [])
