"""Health check endpoint. Used for liveness probes; reports the active storage driver."""

from typing import Annotated

from fastapi import APIRouter, Depends

from storefront_media.api.v1.dependencies import get_media_store
from storefront_media.application.services import MediaStore
from storefront_media.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(
    media_store: Annotated[MediaStore, Depends(get_media_store)],
) -> HealthResponse:
    """Return ok plus the storage backend chosen at startup."""
    return HealthResponse(storage=media_store.storage_type.value)
