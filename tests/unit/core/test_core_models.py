# tests/unit/core/test_core_models.py - v1
"""Tests for core/models.py, core/errors.py and version.py."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import TypeAdapter

from threadbook.core.errors import (
    CacheError,
    CacheIOError,
    RenderServiceError,
    ThreadbookError,
    UrlResolutionError,
)
from threadbook.core.models import AnnotatedPost, Post, PostWithComments
from threadbook.images.models import EmbeddingResult, ImageEmbed, ImageEmbedding, TextFallback


class TestPost:
    def test_defaults(self):
        post = Post(id="p1")
        assert post.title == ""
        assert post.posted_at is None
        assert post.word_count == 0

    def test_json_round_trip_keeps_timezone(self, sample_post):
        restored = Post.model_validate_json(sample_post.model_dump_json())
        assert restored == sample_post
        assert restored.posted_at.tzinfo is not None


class TestAnnotatedPost:
    def test_from_post(self, sample_post_with_comments: PostWithComments):
        annotated = AnnotatedPost.from_post(sample_post_with_comments, "ps", "cs")
        assert annotated.post == sample_post_with_comments.post
        assert annotated.comments == sample_post_with_comments.comments
        assert annotated.post_summary == "ps"
        assert annotated.comments_summary == "cs"


class TestEmbeddingResult:
    def test_discriminated_by_kind(self):
        adapter = TypeAdapter(EmbeddingResult)
        text = adapter.validate_python({"kind": "text", "html": "<a/>"})
        embed = adapter.validate_python(
            {"kind": "image", "embedding": {"id": "p-1", "resolved_url": "https://e/a"}}
        )
        assert isinstance(text, TextFallback)
        assert isinstance(embed, ImageEmbed)
        assert embed.embedding.image_bytes == b""

    def test_resource_name(self):
        assert ImageEmbedding(id="p-1234", resolved_url="u").resource_name == "p-1234.png"


class TestErrors:
    def test_hierarchy(self):
        assert issubclass(CacheIOError, CacheError)
        assert issubclass(CacheError, ThreadbookError)
        assert issubclass(UrlResolutionError, ThreadbookError)

    def test_render_error_message(self):
        err = RenderServiceError(500, "Internal")
        assert err.status == 500
        assert str(err) == "Rendering service returned error: 500\nInternal"

    def test_render_timeout_message(self):
        assert "timeout" in str(RenderServiceError(None, "slow"))


def test_version():
    from threadbook.version import __version__

    assert __version__ == "0.1.0"


@pytest.mark.parametrize("dt", [datetime(2020, 1, 1, tzinfo=timezone.utc), None])
def test_posted_at_optional(dt):
    assert Post(id="x", posted_at=dt).posted_at == dt
