# src/images/resolver.py - v1
"""Image URL resolution and text-fallback formatting (no I/O)."""

from __future__ import annotations

import html
from urllib.parse import urljoin, urlsplit

from threadbook.core.errors import UrlResolutionError


def resolve_image_url(image_url: str, base_url: str) -> str:
    """Resolve an image reference against the article URL.

    References with a scheme are returned unchanged; anything else is
    joined onto the base URL with standard URL-joining semantics.

    Raises:
        UrlResolutionError: If the base URL is not absolute or a URL is malformed.
    """
    try:
        if urlsplit(image_url).scheme:
            return image_url
        base = urlsplit(base_url)
        if not base.scheme or not base.netloc:
            raise UrlResolutionError(
                f"Failed to parse post URL as base URL: {base_url!r}"
            )
        return urljoin(base_url, image_url)
    except ValueError as e:
        raise UrlResolutionError(
            f"Failed to join base URL {base_url!r} with image URL {image_url!r}"
        ) from e


def is_vector_image(absolute_url: str) -> bool:
    """Whether the URL's extension marks an SVG (unsupported by e-readers)."""
    extension = absolute_url.rsplit(".", 1)[-1].lower()
    return "svg" in extension


def text_fallback_html(absolute_url: str, image_url: str, image_alt: str | None) -> str:
    """Build the ``<a>`` link shown instead of an image."""
    anchor_text = image_alt or image_url
    prefix = "Unsupported SVG image: " if is_vector_image(absolute_url) else "Image: "
    return (
        f'<a href="{html.escape(absolute_url, quote=True)}">'
        f"{prefix}{html.escape(anchor_text, quote=False)}</a>"
    )
