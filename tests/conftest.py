# tests/conftest.py - v1
"""Shared test fixtures for unit tests.

Provides sample posts, a small comment forest, mock LLM clients and temp
directories. No external services; all network I/O is mocked.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from threadbook.core.models import Comment, Post, PostWithComments
from threadbook.llm.models import LLMResponse


# === FIXTURES: Sample data ===


@pytest.fixture
def sample_post() -> Post:
    """Minimal post with a page URL for image resolution."""
    return Post(
        id="test-epub",
        title="The Map Is Not the Territory",
        slug="the-map-is-not-the-territory",
        page_url="https://example.com/test-post",
        author="Test Author",
        posted_at=datetime(2026, 2, 7, 14, 0, 0, tzinfo=timezone.utc),
        word_count=260,
        content_markdown="Some **markdown** body.",
    )


def make_comment(
    comment_id: str, score: float, parent: str | None = None, body: str = ""
) -> Comment:
    return Comment(
        id=comment_id,
        parent_comment_id=parent,
        base_score=score,
        content_markdown=body or f"comment {comment_id}",
    )


@pytest.fixture
def sample_comments() -> dict[str, Comment]:
    """Roots b(2) and a(1); a has aa(100), ab(101); b has ba(10), bb(11)."""
    comments = [
        make_comment("a", 1.0),
        make_comment("b", 2.0),
        make_comment("aa", 100.0, parent="a"),
        make_comment("ab", 101.0, parent="a"),
        make_comment("ba", 10.0, parent="b"),
        make_comment("bb", 11.0, parent="b"),
    ]
    return {c.id: c for c in comments}


@pytest.fixture
def sample_post_with_comments(
    sample_post: Post, sample_comments: dict[str, Comment]
) -> PostWithComments:
    return PostWithComments(post=sample_post, comments=sample_comments)


# === FIXTURES: Mock LLM ===


@pytest.fixture
def mock_llm_response() -> LLMResponse:
    """Standard mock LLM response (with a reasoning block to strip)."""
    return LLMResponse(
        content="<think>let me think</think>\n  A concise summary.  ",
        input_tokens=100,
        output_tokens=50,
        model="test-model",
        provider="mock",
        latency_ms=500,
    )


@pytest.fixture
def mock_llm_client(mock_llm_response: LLMResponse) -> AsyncMock:
    """Mock BaseLLMClient with default response."""
    client = AsyncMock()
    client.complete = AsyncMock(return_value=mock_llm_response)
    client.provider_name = "mock"
    return client


# === FIXTURES: Temp dirs ===


@pytest.fixture
def tmp_cache_dir(tmp_path: Path) -> Path:
    """Temporary cache root."""
    cache = tmp_path / "cache"
    cache.mkdir()
    return cache
