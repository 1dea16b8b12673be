# src/summarize/prompts.py - v1
"""System prompts for post and discussion summaries."""

from __future__ import annotations

_STYLE = (
    "You are an expert at distilling complex rationalist topics into a concise "
    "summary. Write in an intellectual but approachable tone and avoid lists "
    "unless they genuinely organize a complex idea. Use concrete examples, "
    "analogies and thought experiments where they help. Keep the language "
    "precise and accessible, skip framing and setup, and optimize for quick "
    "reading with depth. Use bold, italics and quotation blocks for key "
    "definitions and terms so the reader stays oriented."
)

POST_SUMMARY_PROMPT = (
    f"{_STYLE} With this in mind, summarize the main points of the following "
    "LessWrong article in under about 200 words. DO NOT BE REPETITIVE."
)

COMMENTS_SUMMARY_PROMPT = (
    f"{_STYLE} With this in mind, summarize THE DISCUSSION IN THE COMMENTS "
    "presented here in under about 200 words. Each comment carries a score: "
    "give more weight to higher scores BUT DO NOT MENTION THE SCORES. Comments "
    "may reply to earlier comments and are listed depth-first. DO NOT BE "
    "REPETITIVE. DO NOT SUMMARIZE THE POST ITSELF, IT IS ONLY CONTEXT."
)


def comments_user_message(post_markdown: str, formatted_comments: str) -> str:
    """User message carrying the post as context and the ranked comments."""
    return f"<post>{post_markdown}</post><comments>{formatted_comments}</comments>"
