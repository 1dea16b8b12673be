# src/summarize/summarizer.py - v1
"""AI summaries of posts and their discussions, cached per post id.

Summaries are cached under the ``ai-posts`` and ``ai-comments`` tags, so a
re-run only calls the chat-completion API for posts it has not seen.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from threadbook.comments.ranker import format_comments_for_prompt, rank_comments
from threadbook.core.models import Post, PostWithComments
from threadbook.llm.models import Message
from threadbook.summarize.prompts import (
    COMMENTS_SUMMARY_PROMPT,
    POST_SUMMARY_PROMPT,
    comments_user_message,
)

if TYPE_CHECKING:
    from threadbook.cache.base_cache_store import BaseCacheStore
    from threadbook.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)

POST_SUMMARY_TAG = "ai-posts"
COMMENTS_SUMMARY_TAG = "ai-comments"

# Matches <think>, <thinking>, <think foo="bar"> ... </think...>, across lines.
_REASONING_RE = re.compile(r"<think[^>]*?>.*?</think[^>]*?>", re.IGNORECASE | re.DOTALL)


def strip_reasoning_tags(text: str) -> str:
    """Remove reasoning blocks from a model response and trim whitespace."""
    return _REASONING_RE.sub("", text).strip()


class Summarizer:
    """Post and comment summarizer backed by a chat-completion client."""

    def __init__(
        self,
        llm: BaseLLMClient,
        post_cache: BaseCacheStore[str],
        comments_cache: BaseCacheStore[str],
        max_comments: int = 100,
        max_tokens: int = 4096,
        temperature: float = 0.2,
    ) -> None:
        self._llm = llm
        self._post_cache = post_cache
        self._comments_cache = comments_cache
        self._max_comments = max_comments
        self._max_tokens = max_tokens
        self._temperature = temperature

    async def summarize(self, text: str, role_prompt: str) -> str:
        """Run one completion and return the cleaned response text."""
        response = await self._llm.complete(
            [Message(role="user", content=text)],
            system=role_prompt,
            max_tokens=self._max_tokens,
            temperature=self._temperature,
        )
        logger.debug(
            "Completion: %d in / %d out tokens, %d ms",
            response.input_tokens, response.output_tokens, response.latency_ms,
        )
        return strip_reasoning_tags(response.content)

    async def summarize_post(self, post: Post) -> str:
        cached = await self._post_cache.get(post.id)
        if cached is not None:
            return cached

        logger.info("Creating post summary for %s", post.title or post.id)
        summary = await self.summarize(post.content_markdown, POST_SUMMARY_PROMPT)
        await self._post_cache.set(post.id, summary)
        return summary

    async def summarize_comments(self, post: PostWithComments) -> str:
        post_id = post.post.id
        cached = await self._comments_cache.get(post_id)
        if cached is not None:
            return cached

        ranked = rank_comments(post.comments, self._max_comments)
        logger.info(
            "Creating comments summary for %s (%d of %d comments)",
            post.post.title or post_id, len(ranked), len(post.comments),
        )
        text = comments_user_message(
            post.post.content_markdown, format_comments_for_prompt(ranked)
        )
        summary = await self.summarize(text, COMMENTS_SUMMARY_PROMPT)
        await self._comments_cache.set(post_id, summary)
        return summary
