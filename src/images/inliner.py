# src/images/inliner.py - v1
"""Rewrite the ``<img>`` tags of a post's HTML and fetch embedded images.

All references are rewritten first, in document order. Fetches happen
afterwards, concurrently, once per unique embedding id.
"""

from __future__ import annotations

import asyncio
import logging

from bs4 import BeautifulSoup

from threadbook.core.errors import UrlResolutionError
from threadbook.core.models import Post
from threadbook.images.embedder import ImageEmbedder
from threadbook.images.models import (
    EmbeddingResult,
    ImageEmbed,
    ImageEmbedding,
    ImageReference,
    TextFallback,
)

logger = logging.getLogger(__name__)


def _replacement_markup(result: EmbeddingResult) -> str:
    if isinstance(result, TextFallback):
        return result.html
    if isinstance(result, ImageEmbed):
        return f'<img src="{result.embedding.resource_name}"/>'
    raise TypeError(f"Unknown embedding result: {result!r}")


def rewrite_images(
    html: str,
    post: Post,
    embedder: ImageEmbedder,
) -> tuple[str, list[EmbeddingResult]]:
    """Replace every ``img[src]`` with its fallback link or embed reference.

    An image whose URL cannot be resolved is logged and left unchanged;
    it does not affect sibling images.
    """
    soup = BeautifulSoup(html, "html.parser")
    results: list[EmbeddingResult] = []

    for img in soup.find_all("img", src=True):
        ref = ImageReference(
            source_url=img["src"].strip(),
            alt_text=(img.get("alt") or "").strip() or None,
        )
        try:
            result = embedder.embed_image(post, ref.source_url, ref.alt_text)
        except UrlResolutionError as e:
            logger.warning("Skipping image %r in post %s: %s", ref.source_url, post.id, e)
            continue

        fragment = BeautifulSoup(_replacement_markup(result), "html.parser")
        img.replace_with(fragment.contents[0])
        results.append(result)

    return str(soup), results


async def fetch_embeddings(
    results: list[EmbeddingResult],
    embedder: ImageEmbedder,
) -> list[ImageEmbedding]:
    """Download each unique embedding once and share bytes with duplicates.

    When one download fails, the remaining ones are cancelled and awaited
    before the error propagates, so nothing renders after the abort.

    Returns:
        One embedding per unique id, in first-seen order, with bytes filled.
    """
    groups: dict[str, list[ImageEmbedding]] = {}
    for result in results:
        if isinstance(result, ImageEmbed):
            groups.setdefault(result.embedding.id, []).append(result.embedding)

    unique = [group[0] for group in groups.values()]
    tasks = [asyncio.ensure_future(embedder.download_image(e)) for e in unique]
    try:
        await asyncio.gather(*tasks)
    except BaseException:
        # First failure aborts the document; stop sibling renders before re-raising.
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    for group in groups.values():
        for duplicate in group[1:]:
            duplicate.image_bytes = group[0].image_bytes
    return unique


async def inline_images(
    html: str,
    post: Post,
    embedder: ImageEmbedder,
) -> tuple[str, list[EmbeddingResult]]:
    """Rewrite images in html and fetch the bytes of every embed.

    Raises:
        RenderServiceError: If any embedded image fails to render.
    """
    output, results = rewrite_images(html, post, embedder)
    fetched = await fetch_embeddings(results, embedder)
    if fetched:
        logger.info("Embedded %d image(s) in post %s", len(fetched), post.id)
    return output, results
