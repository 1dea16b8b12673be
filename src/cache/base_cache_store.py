# src/cache/base_cache_store.py - v1
"""Abstract keyed cache store interface.

A store is bound to one tag (namespace). Values are typed per store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")


class BaseCacheStore(ABC, Generic[T]):
    """Unified interface for tag-namespaced cache backends."""

    @property
    @abstractmethod
    def tag(self) -> str:
        """Namespace this store reads and writes."""

    @abstractmethod
    async def get(self, key: str) -> T | None:
        """Return the current value for key, or None when absent."""

    @abstractmethod
    async def set(self, key: str, value: T) -> None:
        """Replace the value stored under key."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove a single entry (no-op if absent)."""

    @abstractmethod
    async def clear(self) -> None:
        """Remove every entry in this tag."""
