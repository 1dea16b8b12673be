# src/logging/context.py - v1
"""Contextual logging support: attach post_id and stage to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per-post execution.
_post_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "post_id", default=None
)
_stage: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "stage", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    post_id: str | None = None
    stage: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(post_id=_post_id.get(), stage=_stage.get())


def set_post_context(post_id: str, stage: str | None = None) -> None:
    """Set post-level context (called once per post and stage)."""
    _post_id.set(post_id)
    _stage.set(stage)


def set_stage(stage: str | None) -> None:
    """Set the pipeline stage (fetch, summarize, embed, assemble)."""
    _stage.set(stage)


def clear_context() -> None:
    """Reset all context variables."""
    _post_id.set(None)
    _stage.set(None)
