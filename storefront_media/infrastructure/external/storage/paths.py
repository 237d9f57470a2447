"""Bidirectional mapping between backend keys and client-facing paths.

Callers usually store only the public path, so resolve_key must invert
to_public_path for every key an adapter produces.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import Protocol
from urllib.parse import quote, unquote, urlsplit

from storefront_media.domain.media import MediaDescriptor, PathOrDescriptor
from storefront_media.infrastructure.external.storage.keys import sanitize_segment

logger = logging.getLogger(__name__)

_ABSOLUTE_URL_RE = re.compile(r"^https?://", re.IGNORECASE)


def is_absolute_url(value: str) -> bool:
    """True for http(s) URLs."""
    return bool(_ABSOLUTE_URL_RE.match(value))


def with_trailing_slash(url: str) -> str:
    return url if url.endswith("/") else f"{url}/"


class PublicPathResolver(Protocol):
    """Pure key <-> public path mapping; no I/O."""

    def to_public_path(self, key: str) -> str: ...

    def resolve_key(self, path: str) -> str: ...


class PrefixPathResolver:
    """Disk mapping: key 'products/a.png' <-> '/uploads/products/a.png'.

    resolve_key tolerates a configured base URL in front of the path and
    absolute URLs pointing at any host.
    """

    def __init__(self, public_prefix: str, public_base_url: str | None = None) -> None:
        self.public_prefix = (public_prefix or "").rstrip("/")
        self.public_base_url = (public_base_url or "").rstrip("/")

    def to_public_path(self, key: str) -> str:
        return f"{self.public_prefix}/{sanitize_segment(key)}"

    def resolve_key(self, path: str) -> str:
        if not path:
            return ""
        value = path
        if self.public_base_url and value.startswith(self.public_base_url):
            value = value[len(self.public_base_url):]
        if is_absolute_url(value):
            value = urlsplit(value).path
        if self.public_prefix:
            if value.startswith(f"{self.public_prefix}/"):
                value = value[len(self.public_prefix) + 1:]
            elif value == self.public_prefix:
                value = ""
        return sanitize_segment(value)


class ObjectStorePathResolver:
    """Object store mapping: key <-> '{base_url}{key}'.

    Also accepts '{scheme}://{bucket}/{key}' locators (s3://, gs://) and
    bare relative keys. Locators for another bucket or host resolve to ''
    so they are never deleted from this bucket.
    """

    def __init__(self, base_url: str, scheme: str, bucket: str) -> None:
        self.base_url = with_trailing_slash(base_url)
        self.scheme = scheme
        self.bucket = bucket

    def to_public_path(self, key: str) -> str:
        if not key:
            return key
        if is_absolute_url(key):
            return key
        return f"{self.base_url}{quote(sanitize_segment(key), safe='/')}"

    def resolve_key(self, path: str) -> str:
        if not path:
            return ""
        scheme_prefix = f"{self.scheme}://"
        if path.startswith(scheme_prefix):
            bucket_prefix = f"{scheme_prefix}{self.bucket}/"
            if not path.startswith(bucket_prefix):
                logger.debug("Ignoring locator outside bucket %s: %s", self.bucket, path)
                return ""
            return sanitize_segment(path[len(bucket_prefix):])
        if path.startswith(self.base_url):
            return unquote(path[len(self.base_url):])
        if is_absolute_url(path):
            logger.debug("Ignoring URL outside %s: %s", self.base_url, path)
            return ""
        return sanitize_segment(path)


def to_descriptor(
    item: PathOrDescriptor | None, resolver: PublicPathResolver
) -> MediaDescriptor | None:
    """Convert a stored path or a descriptor into a full descriptor.

    Returns None for empty input or when no key can be inferred.
    """
    if not item:
        return None
    if isinstance(item, str):
        path, key = item, ""
    elif isinstance(item, MediaDescriptor):
        path, key = item.path, item.key
    else:
        raise TypeError(f"Expected str or MediaDescriptor, got {type(item).__name__}")
    if not path and not key:
        return None
    key = key or resolver.resolve_key(path)
    if not key:
        return None
    return MediaDescriptor(path=path or resolver.to_public_path(key), key=key)


def resolve_targets(
    inputs: PathOrDescriptor | Iterable[PathOrDescriptor | None] | None,
    resolver: PublicPathResolver,
) -> list[MediaDescriptor]:
    """Normalize one or many paths/descriptors, dropping unresolvable entries."""
    if inputs is None:
        return []
    items = [inputs] if isinstance(inputs, (str, MediaDescriptor)) else list(inputs)
    resolved = []
    for item in items:
        descriptor = to_descriptor(item, resolver)
        if descriptor is not None:
            resolved.append(descriptor)
    return resolved
