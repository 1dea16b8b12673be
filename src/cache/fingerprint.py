# src/cache/fingerprint.py - v1
"""Content-hash keys for cache entries whose natural key is unsafe as a file name."""

from __future__ import annotations

import hashlib


def content_hash(text: str) -> str:
    """SHA-256 hex digest of a UTF-8 string."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def content_hash_key(*parts: str, length: int = 8) -> str:
    """Build a filesystem-safe key from a leading id and a hashed tail.

    ``content_hash_key("post1", "https://x/a.png")`` gives ``post1-<8 hex>``.
    The first part is kept verbatim, the remaining parts are joined and hashed.

    Args:
        *parts: Owner id followed by the content to hash.
        length: Number of hex characters of the digest to keep.

    Returns:
        Stable key for identical inputs.
    """
    if not parts:
        raise ValueError("content_hash_key needs at least one part")
    owner, *rest = parts
    if not rest:
        return content_hash(owner)[:length]
    digest = content_hash("\n".join(rest))[:length]
    return f"{owner}-{digest}"
