# src/comments/ranker.py - v1
"""Depth-first, per-level score-descending comment ranking.

Turns an unordered comment forest into the reading order fed to the
comment summarizer: the highest-scored root first, then its whole reply
subtree (again highest-scored first), then the next root.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping

from threadbook.core.models import Comment


def _sort_key(comment: Comment) -> tuple[float, str]:
    # Score descending; ties by id so the order never depends on input order.
    return (-comment.base_score, comment.id)


def rank_comments(
    comments: Mapping[str, Comment] | Iterable[Comment],
    max_comments: int,
) -> list[Comment]:
    """Linearize a comment forest, capped at max_comments.

    Children are grouped by parent id and visited in pre-order. The output
    stops as soon as it holds ``min(max_comments, len(comments))`` items, so
    lower-priority siblings and subtrees past the cap are never reached.

    Comments whose parent id points at a missing comment are unreachable and
    never emitted. Traversal only follows parent-to-child links from the
    roots, so a cycle of parent ids is unreachable as well.

    Args:
        comments: Comments keyed by id, or any iterable of comments.
        max_comments: Maximum number of comments to return.

    Returns:
        Ranked comments.
    """
    pool = list(comments.values()) if isinstance(comments, Mapping) else list(comments)
    limit = min(max_comments, len(pool))
    if limit <= 0:
        return []

    children: defaultdict[str | None, list[Comment]] = defaultdict(list)
    for comment in pool:
        children[comment.parent_comment_id].append(comment)
    for group in children.values():
        group.sort(key=_sort_key)

    results: list[Comment] = []
    # Stack holds siblings in reverse so pop() yields the highest score first.
    stack: list[Comment] = list(reversed(children.get(None, [])))
    while stack and len(results) < limit:
        comment = stack.pop()
        results.append(comment)
        stack.extend(reversed(children.get(comment.id, [])))
    return results


def _format_score(score: float) -> str:
    return str(int(score)) if float(score).is_integer() else str(score)


def format_comments_for_prompt(comments: Iterable[Comment]) -> str:
    """Render ranked comments as score-annotated lines for the summarizer."""
    return "\n".join(
        f"<comment><score>{_format_score(c.base_score)}</score>: {c.content_markdown}</comment>"
        for c in comments
    )
