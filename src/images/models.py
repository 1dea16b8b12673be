# src/images/models.py - v1
"""Image embedding types.

EmbeddingResult is a tagged variant: a text fallback (an ``<a>`` link used
in place of the image) or an image embed whose bytes are fetched later.
Consumers must handle both kinds.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class ImageReference(BaseModel):
    """An ``<img>`` found in rendered article markup."""

    source_url: str
    alt_text: str | None = None


class ImageEmbedding(BaseModel):
    """Image to be embedded as a binary resource."""

    id: str
    resolved_url: str
    image_bytes: bytes = b""

    @property
    def resource_name(self) -> str:
        """File name inside the e-book (the rendering service returns PNG)."""
        return f"{self.id}.png"


class TextFallback(BaseModel):
    """HTML to use instead of the image."""

    kind: Literal["text"] = "text"
    html: str


class ImageEmbed(BaseModel):
    """Reference rewritten to point at an embedded image resource."""

    kind: Literal["image"] = "image"
    embedding: ImageEmbedding


EmbeddingResult = Annotated[Union[TextFallback, ImageEmbed], Field(discriminator="kind")]
