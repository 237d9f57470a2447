"""Telemetry: logging configuration."""

from storefront_media.shared.telemetry.logging import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
