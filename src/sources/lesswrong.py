# src/sources/lesswrong.py - v1
"""LessWrong GraphQL content source with cached posts and comments.

Posts are cached under the ``posts`` tag and comment forests under the
``comments`` tag, both keyed by post id.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any

import httpx

from threadbook.core.errors import ContentSourceError
from threadbook.core.models import Comment, Post, PostWithComments

if TYPE_CHECKING:
    from threadbook.cache.base_cache_store import BaseCacheStore

logger = logging.getLogger(__name__)

POST_TAG = "posts"
COMMENTS_TAG = "comments"

_POST_QUERY = """
query GetPost($id: String) {
  post(input: {selector: {_id: $id}}) {
    result {
      _id
      title
      slug
      pageUrl
      postedAt
      wordCount
      user { displayName }
      contents { markdown }
    }
  }
}
"""

_COMMENTS_QUERY = """
query GetComments($postId: String, $limit: Int) {
  comments(input: {terms: {view: "postCommentsTop", postId: $postId, limit: $limit}}) {
    results {
      _id
      parentCommentId
      baseScore
      contents { markdown }
    }
  }
}
"""


def _markdown(node: dict[str, Any]) -> str:
    contents = node.get("contents") or {}
    return contents.get("markdown") or ""


def _parse_post(node: dict[str, Any]) -> Post:
    posted_at = node.get("postedAt")
    return Post(
        id=node["_id"],
        title=node.get("title") or "",
        slug=node.get("slug") or node["_id"],
        page_url=node.get("pageUrl") or "",
        author=(node.get("user") or {}).get("displayName") or "",
        posted_at=datetime.fromisoformat(posted_at.replace("Z", "+00:00")) if posted_at else None,
        word_count=node.get("wordCount") or 0,
        content_markdown=_markdown(node),
    )


def _parse_comment(node: dict[str, Any]) -> Comment:
    return Comment(
        id=node["_id"],
        parent_comment_id=node.get("parentCommentId"),
        base_score=node.get("baseScore") or 0.0,
        content_markdown=_markdown(node),
    )


class LessWrongClient:
    """Thin GraphQL client for posts and comments."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        graphql_url: str = "https://www.lesswrong.com/graphql",
    ) -> None:
        self._client = client
        self._url = graphql_url

    async def _query(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        try:
            response = await self._client.post(
                self._url, json={"query": query, "variables": variables},
            )
        except httpx.HTTPError as e:
            raise ContentSourceError(f"Request to {self._url} failed: {e}") from e

        if not response.is_success:
            raise ContentSourceError(
                f"Content API returned error: {response.status_code}\n{response.text}"
            )
        try:
            payload = response.json()
        except ValueError as e:
            raise ContentSourceError("Content API returned invalid JSON") from e

        if payload.get("errors"):
            messages = "; ".join(err.get("message", "?") for err in payload["errors"])
            raise ContentSourceError(f"Content API query failed: {messages}")
        return payload.get("data") or {}

    async def fetch_post(self, post_id: str) -> Post:
        data = await self._query(_POST_QUERY, {"id": post_id})
        node = (data.get("post") or {}).get("result")
        if not node:
            raise ContentSourceError(f"Post not found: {post_id}")
        return _parse_post(node)

    async def fetch_comments(self, post_id: str, limit: int) -> dict[str, Comment]:
        data = await self._query(_COMMENTS_QUERY, {"postId": post_id, "limit": limit})
        nodes = (data.get("comments") or {}).get("results") or []
        comments = [_parse_comment(node) for node in nodes]
        return {c.id: c for c in comments}


class LessWrongSource:
    """Cache-first access to posts and their comment forests."""

    def __init__(
        self,
        client: LessWrongClient,
        post_cache: BaseCacheStore[Post],
        comments_cache: BaseCacheStore[dict[str, Comment]],
        max_comments: int = 9999,
    ) -> None:
        self._client = client
        self._post_cache = post_cache
        self._comments_cache = comments_cache
        self._max_comments = max_comments

    async def get_post_and_comments(self, post_id: str) -> PostWithComments:
        post = await self._post_cache.get(post_id)
        if post is None:
            post = await self._client.fetch_post(post_id)
            await self._post_cache.set(post_id, post)

        comments = await self._comments_cache.get(post_id)
        if comments is None:
            comments = await self._client.fetch_comments(post_id, self._max_comments)
            await self._comments_cache.set(post_id, comments)

        logger.info("Retrieved post %r with %d comments", post.title, len(comments))
        return PostWithComments(post=post, comments=comments)
