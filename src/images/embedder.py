# src/images/embedder.py - v1
"""Decide how each image is represented and fetch embedded image bytes.

Resolution is cheap and synchronous; fetching is network-bound and cached
under the ``images`` tag, keyed by the embedding id. Re-running on the same
post never re-renders an image that is already cached.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from threadbook.cache.fingerprint import content_hash_key
from threadbook.core.models import Post
from threadbook.images.models import (
    EmbeddingResult,
    ImageEmbed,
    ImageEmbedding,
    TextFallback,
)
from threadbook.images.render_client import build_render_html
from threadbook.images.resolver import resolve_image_url, text_fallback_html

if TYPE_CHECKING:
    from threadbook.cache.base_cache_store import BaseCacheStore
    from threadbook.images.render_client import BaseRenderClient

logger = logging.getLogger(__name__)

IMAGE_CACHE_TAG = "images"


class ImageEmbedder:
    """Resolve image references and materialize embedded images."""

    def __init__(
        self,
        cache: BaseCacheStore[bytes],
        render_client: BaseRenderClient | None = None,
    ) -> None:
        self._cache = cache
        self._render_client = render_client

    @property
    def supports_inlining_images(self) -> bool:
        """True when rendering credentials were configured."""
        return self._render_client is not None

    def embed_image(
        self,
        post: Post,
        image_url: str,
        image_alt: str | None,
    ) -> EmbeddingResult:
        """Resolve one image reference to a text fallback or an embed.

        The embed id is ``{post.id}-{sha256(absolute_url)[:8]}``: stable
        across runs, identical for repeats within a post, distinct across
        posts.

        Raises:
            UrlResolutionError: If the image URL cannot be resolved.
        """
        absolute_url = resolve_image_url(image_url, post.page_url)

        if not self.supports_inlining_images:
            return TextFallback(html=text_fallback_html(absolute_url, image_url, image_alt))

        embedding_id = content_hash_key(post.id, absolute_url)
        return ImageEmbed(
            embedding=ImageEmbedding(id=embedding_id, resolved_url=absolute_url)
        )

    async def download_image(self, embedding: ImageEmbedding) -> None:
        """Fill embedding.image_bytes from the cache or the rendering service.

        Raises:
            RenderServiceError: If the rendering service fails.
            CacheError: If the image cache cannot be read or written.
        """
        cached = await self._cache.get(embedding.id)
        if cached is not None:
            embedding.image_bytes = cached
            return

        if self._render_client is None:
            raise RuntimeError(
                "download_image called without a rendering client configured"
            )

        logger.info("Rendering image %s from %s", embedding.id, embedding.resolved_url)
        image_bytes = await self._render_client.render_to_image(
            build_render_html(embedding.resolved_url)
        )
        await self._cache.set(embedding.id, image_bytes)
        embedding.image_bytes = image_bytes
