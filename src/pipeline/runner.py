# src/pipeline/runner.py - v1
"""Book pipeline: fetch, rank and summarize, embed images, assemble.

Every stage is cache-first, so re-running after a failure only repeats
the work that did not complete. A failed run raises and produces no book.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

from threadbook.cache.json_store import JsonCacheStore
from threadbook.core.models import AnnotatedPost, Comment, Post, PostWithComments
from threadbook.epub.assembler import DEFAULT_TITLE, EpubAssembler
from threadbook.images.embedder import IMAGE_CACHE_TAG, ImageEmbedder
from threadbook.images.render_client import CloudflareRenderClient
from threadbook.llm.adapters.openai_adapter import OpenAIAdapter
from threadbook.logging.context import clear_context, set_post_context, set_stage
from threadbook.pipeline.sequences import SEQUENCES_OUTPUT_NAME, SEQUENCES_POST_IDS
from threadbook.sources.lesswrong import (
    COMMENTS_TAG,
    POST_TAG,
    LessWrongClient,
    LessWrongSource,
)
from threadbook.summarize.summarizer import (
    COMMENTS_SUMMARY_TAG,
    POST_SUMMARY_TAG,
    Summarizer,
)

if TYPE_CHECKING:
    from threadbook.config.settings import Settings
    from threadbook.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)

CACHE_TAGS: tuple[str, ...] = (
    POST_TAG,
    COMMENTS_TAG,
    POST_SUMMARY_TAG,
    COMMENTS_SUMMARY_TAG,
    IMAGE_CACHE_TAG,
)


@dataclass
class BookResult:
    """Packaged book plus what the CLI needs to name and report it."""

    epub_bytes: bytes
    default_filename: str
    title: str
    post_count: int
    duration_ms: int = 0


class BookPipeline:
    """Drive the stages for a list of post ids."""

    def __init__(
        self,
        source: LessWrongSource,
        summarizer: Summarizer,
        assembler: EpubAssembler,
    ) -> None:
        self._source = source
        self._summarizer = summarizer
        self._assembler = assembler

    async def run(self, post_ids: Sequence[str] | None = None) -> BookResult:
        """Build the book. No post ids means the Sequences Highlights."""
        t0 = time.monotonic()
        is_sequences = not post_ids
        ids = list(SEQUENCES_POST_IDS) if is_sequences else list(post_ids or [])

        try:
            posts: list[PostWithComments] = []
            for post_id in ids:
                set_post_context(post_id, "fetch")
                posts.append(await self._source.get_post_and_comments(post_id))

            annotated: list[AnnotatedPost] = []
            for post in posts:
                set_post_context(post.post.id, "summarize")
                post_summary = await self._summarizer.summarize_post(post.post)
                comments_summary = await self._summarizer.summarize_comments(post)
                annotated.append(AnnotatedPost.from_post(post, post_summary, comments_summary))

            first = annotated[0].post
            if is_sequences:
                title, author, filename = None, None, SEQUENCES_OUTPUT_NAME
            else:
                title, author, filename = first.title, first.author, f"{first.slug or first.id}.epub"
            self._assembler.set_metadata(title, author, use_cover_image=is_sequences)

            for post in annotated:
                set_post_context(post.post.id, "assemble")
                await self._assembler.add_post(post)

            set_stage("package")
            epub_bytes = self._assembler.generate()
        finally:
            clear_context()

        return BookResult(
            epub_bytes=epub_bytes,
            default_filename=filename,
            title=title or DEFAULT_TITLE,
            post_count=len(annotated),
            duration_ms=int((time.monotonic() - t0) * 1000),
        )


def create_llm_client(settings: Settings) -> BaseLLMClient:
    """Chat-completion client from settings.

    Raises:
        ConfigurationError: If OPENAI_MODEL is not set.
    """
    return OpenAIAdapter(
        model=settings.require_model(),
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url or None,
    )


def create_pipeline(
    settings: Settings,
    http_client: httpx.AsyncClient,
    llm: BaseLLMClient | None = None,
) -> BookPipeline:
    """Wire every component from settings and a shared HTTP client."""
    llm = llm or create_llm_client(settings)
    root = settings.cache_root

    source = LessWrongSource(
        LessWrongClient(http_client, settings.lesswrong_graphql_url),
        post_cache=JsonCacheStore(root, POST_TAG, Post),
        comments_cache=JsonCacheStore(root, COMMENTS_TAG, dict[str, Comment]),
        max_comments=settings.max_comments_fetched,
    )
    summarizer = Summarizer(
        llm,
        post_cache=JsonCacheStore(root, POST_SUMMARY_TAG, str),
        comments_cache=JsonCacheStore(root, COMMENTS_SUMMARY_TAG, str),
        max_comments=settings.max_comments_summarized,
        max_tokens=settings.llm_max_tokens,
        temperature=settings.llm_temperature,
    )

    credentials = settings.rendering_credentials
    render_client = None
    if credentials is not None:
        render_client = CloudflareRenderClient(
            credentials,
            http_client,
            timeout_s=settings.render_timeout_s,
            viewport_width=settings.render_viewport_width,
        )
    else:
        logger.info("No rendering credentials configured; images become text links")
    embedder = ImageEmbedder(JsonCacheStore(root, IMAGE_CACHE_TAG, bytes), render_client)

    assembler = EpubAssembler(embedder, cover_image_path=settings.cover_image_path)
    return BookPipeline(source, summarizer, assembler)


async def build_book(
    post_ids: Sequence[str] | None,
    settings: Settings,
    llm: BaseLLMClient | None = None,
) -> BookResult:
    """Build a book end-to-end with a fresh HTTP client.

    Raises:
        ConfigurationError: If required configuration is missing.
        ThreadbookError: If any stage fails.
    """
    if llm is None:
        llm = create_llm_client(settings)
    async with httpx.AsyncClient(timeout=settings.http_timeout_s) as http_client:
        pipeline = create_pipeline(settings, http_client, llm=llm)
        return await pipeline.run(post_ids)


async def clear_cache(settings: Settings, tags: Sequence[str] | None = None) -> list[str]:
    """Remove cached entries for the given tags (all tags by default)."""
    cleared: list[str] = []
    for tag in tags or CACHE_TAGS:
        await JsonCacheStore(settings.cache_root, tag, object).clear()
        cleared.append(tag)
    return cleared
