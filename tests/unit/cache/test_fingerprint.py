# tests/unit/cache/test_fingerprint.py - v1
"""Tests for cache/fingerprint.py - content-hash keys."""

from __future__ import annotations

import hashlib

import pytest

from threadbook.cache.fingerprint import content_hash, content_hash_key


class TestContentHash:
    def test_sha256_hex(self):
        assert content_hash("abc") == hashlib.sha256(b"abc").hexdigest()


class TestContentHashKey:
    def test_owner_prefix_and_short_digest(self):
        url = "https://example.com/a.png"
        key = content_hash_key("post1", url)
        assert key == f"post1-{hashlib.sha256(url.encode()).hexdigest()[:8]}"

    def test_stable(self):
        assert content_hash_key("p", "u") == content_hash_key("p", "u")

    def test_owner_changes_key(self):
        assert content_hash_key("p1", "u") != content_hash_key("p2", "u")

    def test_single_part_is_hashed(self):
        key = content_hash_key("https://example.com/x?y=1")
        assert len(key) == 8
        assert "/" not in key

    def test_no_parts_rejected(self):
        with pytest.raises(ValueError):
            content_hash_key()
