"""FastAPI application entry point.

Wiring only: media store, lifespan, exception handlers, static uploads, routers.
Settings are loaded inside create_app() so that tests can pass their own
Settings or set env before calling it.
"""

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from storefront_media.api.v1 import api_router
from storefront_media.application.services import MediaStore, MimeTypeFilter, UploadReceiver
from storefront_media.core.config import Settings, get_settings
from storefront_media.core.exception_handlers import register_exception_handlers
from storefront_media.core.lifespan import create_lifespan
from storefront_media.shared.telemetry import setup_logging


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build and return the FastAPI application. The storage adapter is selected here, once."""
    settings = settings or get_settings()
    setup_logging(settings)
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    media_store = MediaStore.from_settings(settings)
    app.state.media_store = media_store
    app.state.upload_receiver = UploadReceiver(
        staging=media_store.storage,
        mime_filter=MimeTypeFilter(settings.allowed_mime_types),
        max_file_size=settings.max_upload_size,
    )

    register_exception_handlers(app)

    staging = media_store.storage
    mount_path = settings.media_public_prefix.rstrip("/")
    if staging.directory is not None and mount_path:
        app.mount(
            mount_path,
            StaticFiles(directory=staging.directory, check_dir=False),
            name="uploads",
        )

    app.include_router(api_router, prefix="/api/v1")

    return app
