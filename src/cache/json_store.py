# src/cache/json_store.py - v1
"""JSON file-based cache store.

Layout: one directory per tag under the cache root, one ``<key>.json`` file
per entry. Keys are used as file names verbatim, so callers hash keys that
are URLs or arbitrary strings (see cache.fingerprint).

Writes go to a temporary sibling and are renamed over the target, so a
reader sees either the old entry or the new one, never a partial file.
There is no locking, no TTL and no eviction.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from threadbook.cache.base_cache_store import BaseCacheStore
from threadbook.core.errors import (
    CacheDeserializationError,
    CacheIOError,
    CacheSerializationError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_ENTRY_SUFFIX = ".json"

# Raw bytes (rendered images) are stored base64-encoded inside the JSON file.
_ADAPTER_CONFIG = ConfigDict(ser_json_bytes="base64", val_json_bytes="base64")


def _make_adapter(value_type: Any) -> TypeAdapter[Any]:
    # TypeAdapter rejects a config for BaseModel types; models carry their own.
    if isinstance(value_type, type) and issubclass(value_type, BaseModel):
        return TypeAdapter(value_type)
    return TypeAdapter(value_type, config=_ADAPTER_CONFIG)


class JsonCacheStore(BaseCacheStore[T]):
    """File-based cache store for one tag, using JSON files."""

    def __init__(self, cache_root: Path | str, tag: str, value_type: Any) -> None:
        self._root = Path(cache_root).expanduser()
        self._tag = tag
        self._dir = self._root / tag
        self._adapter = _make_adapter(value_type)

    @property
    def tag(self) -> str:
        return self._tag

    @property
    def directory(self) -> Path:
        return self._dir

    async def get(self, key: str) -> T | None:
        """Retrieve the value for key.

        Raises:
            CacheIOError: If the entry exists but cannot be read.
            CacheDeserializationError: If the stored JSON does not match the value type.
        """
        path = self._entry_path(key)
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise CacheIOError(f"Failed to read cache file {path}") from e

        try:
            return self._adapter.validate_json(raw)
        except ValidationError as e:
            raise CacheDeserializationError(
                f"Failed to deserialize cache file {path}"
            ) from e

    async def set(self, key: str, value: T) -> None:
        """Store value under key, creating the tag directory on first write.

        Raises:
            CacheSerializationError: If the value cannot be encoded.
            CacheIOError: If the directory or file cannot be written.
        """
        try:
            payload = self._adapter.dump_json(value, indent=2, warnings="error")
        except (PydanticSerializationError, TypeError, ValueError) as e:
            raise CacheSerializationError(
                f"Failed to serialize cache value for {self._tag}/{key}"
            ) from e

        try:
            self._dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CacheIOError(f"Failed to create cache directory {self._dir}") from e

        path = self._entry_path(key)
        tmp_name: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                dir=self._dir, prefix=f".{key}.", suffix=".tmp", delete=False
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise CacheIOError(f"Failed to write cache file {path}") from e

        logger.debug("Cached %s/%s (%d bytes)", self._tag, key, len(payload))

    async def delete(self, key: str) -> None:
        """Remove a cache entry."""
        path = self._entry_path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise CacheIOError(f"Failed to delete cache file {path}") from e

    async def clear(self) -> None:
        """Remove the whole tag directory."""
        if not self._dir.exists():
            return
        try:
            shutil.rmtree(self._dir)
        except OSError as e:
            raise CacheIOError(f"Failed to clear cache directory {self._dir}") from e
        logger.info("Cleared cache tag %s", self._tag)

    def _entry_path(self, key: str) -> Path:
        """Return file path for a cache key."""
        return self._dir / f"{key}{_ENTRY_SUFFIX}"
