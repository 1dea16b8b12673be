# tests/unit/cache/test_json_store.py - v1
"""Tests for cache/json_store.py - tag-namespaced JSON file cache."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from threadbook.cache.json_store import JsonCacheStore
from threadbook.core.errors import (
    CacheDeserializationError,
    CacheIOError,
    CacheSerializationError,
)
from threadbook.core.models import Comment, Post


class TestRoundTrip:
    @pytest.mark.asyncio
    async def test_model_roundtrip_and_overwrite(self, tmp_cache_dir: Path):
        store = JsonCacheStore(tmp_cache_dir, "posts", Post)
        alice = Post(id="alice", title="Alice", word_count=30)
        await store.set("alice", alice)
        assert await store.get("alice") == alice

        updated = Post(id="alice", title="Alice Smith", word_count=31)
        await store.set("alice", updated)
        assert await store.get("alice") == updated

    @pytest.mark.asyncio
    async def test_str_roundtrip(self, tmp_cache_dir: Path):
        store = JsonCacheStore(tmp_cache_dir, "ai-posts", str)
        await store.set("p1", "A summary with \"quotes\" and\nnewlines")
        assert await store.get("p1") == "A summary with \"quotes\" and\nnewlines"

    @pytest.mark.asyncio
    async def test_bytes_roundtrip(self, tmp_cache_dir: Path):
        store = JsonCacheStore(tmp_cache_dir, "images", bytes)
        payload = bytes(range(256)) * 4
        await store.set("post-abcd1234", payload)
        assert await store.get("post-abcd1234") == payload

    @pytest.mark.asyncio
    async def test_comment_mapping_roundtrip(self, tmp_cache_dir: Path):
        store = JsonCacheStore(tmp_cache_dir, "comments", dict[str, Comment])
        comments = {
            "c1": Comment(id="c1", base_score=3.5, content_markdown="hi"),
            "c2": Comment(id="c2", parent_comment_id="c1", base_score=-1.0),
        }
        await store.set("post1", comments)
        assert await store.get("post1") == comments


class TestMiss:
    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, tmp_cache_dir: Path):
        store = JsonCacheStore(tmp_cache_dir, "posts", Post)
        assert await store.get("nonexistent") is None

    @pytest.mark.asyncio
    async def test_get_missing_tag_dir_returns_none(self, tmp_path: Path):
        store = JsonCacheStore(tmp_path / "never-created", "posts", Post)
        assert await store.get("x") is None


class TestLayout:
    @pytest.mark.asyncio
    async def test_tag_directory_created_lazily(self, tmp_cache_dir: Path):
        store = JsonCacheStore(tmp_cache_dir, "ai-comments", str)
        assert not (tmp_cache_dir / "ai-comments").exists()
        await store.set("p1", "summary")
        assert (tmp_cache_dir / "ai-comments" / "p1.json").is_file()

    @pytest.mark.asyncio
    async def test_no_temporary_files_left(self, tmp_cache_dir: Path):
        store = JsonCacheStore(tmp_cache_dir, "ai-posts", str)
        await store.set("p1", "one")
        await store.set("p1", "two")
        files = sorted(p.name for p in (tmp_cache_dir / "ai-posts").iterdir())
        assert files == ["p1.json"]

    @pytest.mark.asyncio
    async def test_tags_are_isolated(self, tmp_cache_dir: Path):
        posts = JsonCacheStore(tmp_cache_dir, "ai-posts", str)
        comments = JsonCacheStore(tmp_cache_dir, "ai-comments", str)
        await posts.set("p1", "post summary")
        assert await comments.get("p1") is None
        assert posts.tag == "ai-posts"


class TestErrors:
    @pytest.mark.asyncio
    async def test_corrupt_file_raises_deserialization_error(self, tmp_cache_dir: Path):
        (tmp_cache_dir / "posts").mkdir()
        (tmp_cache_dir / "posts" / "bad.json").write_text("{not json", encoding="utf-8")
        store = JsonCacheStore(tmp_cache_dir, "posts", Post)
        with pytest.raises(CacheDeserializationError):
            await store.get("bad")

    @pytest.mark.asyncio
    async def test_shape_mismatch_raises_deserialization_error(self, tmp_cache_dir: Path):
        strings = JsonCacheStore(tmp_cache_dir, "shared", str)
        await strings.set("k", "just a string")
        posts = JsonCacheStore(tmp_cache_dir, "shared", Post)
        with pytest.raises(CacheDeserializationError):
            await posts.get("k")

    @pytest.mark.asyncio
    async def test_unserializable_value_raises(self, tmp_cache_dir: Path):
        store = JsonCacheStore(tmp_cache_dir, "misc", dict[str, Any])
        with pytest.raises(CacheSerializationError):
            await store.set("k", {"value": object()})
        assert not (tmp_cache_dir / "misc" / "k.json").exists()

    @pytest.mark.asyncio
    async def test_unreadable_entry_raises_io_error(self, tmp_cache_dir: Path):
        # A directory where the entry file should be cannot be read as a file.
        (tmp_cache_dir / "posts" / "dir.json").mkdir(parents=True)
        store = JsonCacheStore(tmp_cache_dir, "posts", Post)
        with pytest.raises(CacheIOError):
            await store.get("dir")

    @pytest.mark.asyncio
    async def test_uncreatable_namespace_raises_io_error(self, tmp_cache_dir: Path):
        (tmp_cache_dir / "blocked").write_text("a file, not a directory")
        store = JsonCacheStore(tmp_cache_dir, "blocked", str)
        with pytest.raises(CacheIOError):
            await store.set("k", "v")


class TestDeleteAndClear:
    @pytest.mark.asyncio
    async def test_delete(self, tmp_cache_dir: Path):
        store = JsonCacheStore(tmp_cache_dir, "ai-posts", str)
        await store.set("k", "v")
        await store.delete("k")
        assert await store.get("k") is None

    @pytest.mark.asyncio
    async def test_delete_missing_is_noop(self, tmp_cache_dir: Path):
        store = JsonCacheStore(tmp_cache_dir, "ai-posts", str)
        await store.delete("never-written")

    @pytest.mark.asyncio
    async def test_clear_removes_tag_only(self, tmp_cache_dir: Path):
        a = JsonCacheStore(tmp_cache_dir, "a", str)
        b = JsonCacheStore(tmp_cache_dir, "b", str)
        await a.set("k", "1")
        await b.set("k", "2")
        await a.clear()
        assert await a.get("k") is None
        assert await b.get("k") == "2"
