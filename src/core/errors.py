# src/core/errors.py - v1
"""Exception hierarchy shared by every threadbook component.

Cache and rendering failures always propagate to the orchestrating caller.
Only per-image URL resolution failures are caught (by the image inliner).
"""

from __future__ import annotations


class ThreadbookError(Exception):
    """Base class for all threadbook errors."""


class CacheError(ThreadbookError):
    """Base class for persistent cache failures."""


class CacheIOError(CacheError):
    """Cache storage exists but cannot be read, created or written."""


class CacheSerializationError(CacheError):
    """Value could not be encoded for storage."""


class CacheDeserializationError(CacheError):
    """Stored bytes do not match the expected value shape."""


class UrlResolutionError(ThreadbookError):
    """Base or reference URL could not be parsed or joined."""


class RenderServiceError(ThreadbookError):
    """Rendering service returned a non-success response or timed out."""

    def __init__(self, status: int | None, body: str) -> None:
        self.status = status
        self.body = body
        label = "timeout" if status is None else str(status)
        super().__init__(f"Rendering service returned error: {label}\n{body}")


class ContentSourceError(ThreadbookError):
    """Content API request failed or returned an unusable payload."""


class SummarizationError(ThreadbookError):
    """Chat-completion call failed or returned no choices."""
