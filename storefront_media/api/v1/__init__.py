"""API v1: health endpoint and media dependencies for route modules."""

from storefront_media.api.v1.router import api_router

__all__ = ["api_router"]
