"""threadbook: EPUB books from posts, discussions and AI summaries."""

from threadbook.version import __version__

__all__ = ["__version__"]
