from __future__ import annotations


class CacheError(Exception):
    """Base class for cache-side failures. Never raised past the accessor."""


class CodecError(CacheError):
    """A value could not be encoded, or a cached payload could not be decoded."""


class CacheUnavailableError(CacheError):
    """The cache service could not be reached or rejected the command."""
