# src/epub/assembler.py - v1
"""EPUB assembly: markdown to HTML, image inlining, chapter templating.

Requires the 'ebooklib', 'markdown' and 'jinja2' packages.
"""

from __future__ import annotations

import io
import logging
import uuid
from datetime import datetime
from pathlib import Path

import markdown
from ebooklib import epub
from jinja2 import Environment, FileSystemLoader, select_autoescape

from threadbook.core.models import AnnotatedPost
from threadbook.images.embedder import ImageEmbedder
from threadbook.images.inliner import inline_images
from threadbook.images.models import ImageEmbed
from threadbook.logging.context import get_context, set_stage

logger = logging.getLogger(__name__)

_RESOURCES = Path(__file__).parent / "resources"

DEFAULT_TITLE = "LessWrong Sequences Highlights"
DEFAULT_AUTHOR = "Eliezer Yudkowsky"

# Reading speed used for the chapter read-time estimate.
WORDS_PER_MINUTE = 130


def format_date(date: datetime | None) -> str:
    """Format a post date as YYYY-MM-DD (empty when unknown)."""
    return date.strftime("%Y-%m-%d") if date else ""


def words_to_read_time(words: int) -> str:
    """Estimated read time, rounded up to whole minutes."""
    minutes = (words + WORDS_PER_MINUTE - 1) // WORDS_PER_MINUTE
    return f"{minutes}min"


def markdown_to_html(text: str) -> str:
    """Render markdown to an HTML fragment."""
    return markdown.markdown(text, extensions=["tables", "fenced_code"], output_format="xhtml")


class EpubAssembler:
    """Collects chapters and image resources, then packages the EPUB."""

    def __init__(
        self,
        image_embedder: ImageEmbedder,
        cover_image_path: Path | None = None,
    ) -> None:
        self._book = epub.EpubBook()
        self._image_embedder = image_embedder
        self._cover_image_path = cover_image_path
        self._chapters: list[epub.EpubHtml] = []
        self._resource_names: set[str] = set()
        self._stylesheet = epub.EpubItem(
            uid="style_default",
            file_name="style/stylesheet.css",
            media_type="text/css",
            content=(_RESOURCES / "stylesheet.css").read_bytes(),
        )
        self._book.add_item(self._stylesheet)
        self._env = Environment(
            loader=FileSystemLoader(str(_RESOURCES)),
            autoescape=select_autoescape(["html", "j2"]),
        )

    @property
    def chapter_count(self) -> int:
        return len(self._chapters)

    def set_metadata(
        self,
        title: str | None = None,
        author: str | None = None,
        use_cover_image: bool = False,
    ) -> EpubAssembler:
        """Set book title and author, and optionally attach the cover image."""
        title = title or DEFAULT_TITLE
        author = author or DEFAULT_AUTHOR

        self._book.set_identifier(str(uuid.uuid4()))
        self._book.set_title(title)
        self._book.set_language("en")
        self._book.add_author(author)

        if use_cover_image:
            if self._cover_image_path is None:
                logger.warning("Cover image requested but COVER_IMAGE_PATH is not set")
            else:
                self._book.set_cover("cover.jpg", Path(self._cover_image_path).read_bytes())
        return self

    def render_chapter(self, post: AnnotatedPost, body_html: str) -> str:
        """Render the chapter template for one post."""
        template = self._env.get_template("post.html.j2")
        return template.render(
            title=post.post.title,
            author=post.post.author,
            date=format_date(post.post.posted_at),
            read_time=words_to_read_time(post.post.word_count),
            post_summary=markdown_to_html(post.post_summary),
            comments_summary=markdown_to_html(post.comments_summary),
            body=body_html,
        )

    async def add_post(self, post: AnnotatedPost) -> EpubAssembler:
        """Add one annotated post as a chapter, with its embedded images.

        Raises:
            RenderServiceError: If an embedded image fails to render.
        """
        body_html = markdown_to_html(post.post.content_markdown)
        previous_stage = get_context().stage
        set_stage("embed")
        try:
            body_html, results = await inline_images(
                body_html, post.post, self._image_embedder,
            )
        finally:
            set_stage(previous_stage)

        chapter = epub.EpubHtml(
            title=post.post.title,
            file_name=f"{post.post.slug or post.post.id}.xhtml",
            lang="en",
        )
        chapter.content = self.render_chapter(post, body_html)
        chapter.add_item(self._stylesheet)
        self._book.add_item(chapter)
        self._chapters.append(chapter)

        for result in results:
            if not isinstance(result, ImageEmbed):
                continue
            embedding = result.embedding
            if embedding.resource_name in self._resource_names:
                continue
            self._book.add_item(
                epub.EpubItem(
                    uid=f"img_{embedding.id}",
                    file_name=embedding.resource_name,
                    media_type="image/png",
                    content=embedding.image_bytes,
                )
            )
            self._resource_names.add(embedding.resource_name)
        return self

    def generate(self) -> bytes:
        """Package everything added so far into EPUB bytes."""
        self._book.toc = list(self._chapters)
        self._book.spine = ["nav", *self._chapters]
        self._book.add_item(epub.EpubNcx())
        self._book.add_item(epub.EpubNav())

        output = io.BytesIO()
        epub.write_epub(output, self._book)
        return output.getvalue()
