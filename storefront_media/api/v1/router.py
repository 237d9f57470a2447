"""API v1 router aggregation."""

from fastapi import APIRouter

from storefront_media.api.v1.endpoints import health

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
