# src/core/models.py - v1
"""Shared Pydantic domain models used across modules.

No module redefines these types; all imports come from core.models.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


# === CONTENT SOURCE ===


class Post(BaseModel):
    """A single article fetched from the content source."""

    id: str
    title: str = ""
    slug: str = ""
    page_url: str = ""
    author: str = ""
    posted_at: datetime | None = None
    word_count: int = 0
    content_markdown: str = ""


class Comment(BaseModel):
    """A comment in a post's discussion forest (linked by parent id)."""

    id: str
    parent_comment_id: str | None = None
    base_score: float = 0.0
    content_markdown: str = ""


class PostWithComments(BaseModel):
    """Post plus its comment forest, keyed by comment id."""

    post: Post
    comments: dict[str, Comment] = Field(default_factory=dict)


# === SUMMARIZATION ===


class AnnotatedPost(BaseModel):
    """Post, comments and the two AI-written summaries for one chapter."""

    post: Post
    comments: dict[str, Comment] = Field(default_factory=dict)
    post_summary: str = ""
    comments_summary: str = ""

    @classmethod
    def from_post(
        cls,
        post: PostWithComments,
        post_summary: str,
        comments_summary: str,
    ) -> AnnotatedPost:
        """Attach summaries to a fetched post."""
        return cls(
            post=post.post,
            comments=post.comments,
            post_summary=post_summary,
            comments_summary=comments_summary,
        )
