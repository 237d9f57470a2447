"""Filename and object key generation.

Names look like {prefix-}{ms timestamp}-{cuid}{ext}. Caller-supplied
segments (prefix, folder) are sanitized so they cannot climb out of the
upload root or forge a different object prefix.
"""

import os
import re

from cuid2 import cuid_wrapper

from storefront_media.shared.utils.datetime import utc_now_ms

_cuid = cuid_wrapper()

_WHITESPACE_RE = re.compile(r"\s+")
_EXTENSION_RE = re.compile(r"^\.[A-Za-z0-9]+$")


def sanitize_segment(value: str | None) -> str:
    """Normalize a path-like segment.

    Backslashes become slashes; empty, '.' and '..' parts are dropped,
    which also removes leading and trailing slashes.
    """
    if not value:
        return ""
    parts = value.replace("\\", "/").split("/")
    return "/".join(p for p in parts if p and p not in (".", ".."))


def _extension(original_name: str) -> str:
    """Extension of the original filename, or '' when absent or unsafe."""
    base = os.path.basename(original_name.replace("\\", "/"))
    ext = os.path.splitext(base)[1]
    return ext if _EXTENSION_RE.match(ext) else ""


def generate_unique_id() -> str:
    """Collision-resistant random id (CUID2)."""
    result = _cuid()
    if not isinstance(result, str):
        raise TypeError(f"Expected str from cuid generator, got {type(result).__name__}")
    return result


def build_filename(original_name: str | None, prefix: str | None = None) -> str:
    """Generate a unique filename keeping the original extension.

    Args:
        original_name: Client-supplied filename (only the extension is kept).
        prefix: Optional label; separators inside it become hyphens.

    Returns:
        Filename with all whitespace stripped.
    """
    safe_prefix = sanitize_segment(prefix).replace("/", "-")
    head = f"{safe_prefix}-" if safe_prefix else ""
    name = f"{head}{utc_now_ms()}-{generate_unique_id()}{_extension(original_name or '')}"
    return _WHITESPACE_RE.sub("", name)


def build_object_key(original_name: str | None, folder: str | None = None) -> str:
    """Key under an optional sanitized folder: {folder}/{filename}."""
    filename = build_filename(original_name)
    safe_folder = sanitize_segment(folder)
    return f"{safe_folder}/{filename}" if safe_folder else filename
