"""mdbook-private: an mdBook preprocessor for private content.

Removes or highlights ``<!--private ... -->`` sections and drops chapters
whose file name starts with a configured prefix.
"""

from .domain import Book, Chapter, PrivateConfig
from .services import PrivatePreprocessor, filter_chapters, transform

__all__ = [
    "Book",
    "Chapter",
    "PrivateConfig",
    "PrivatePreprocessor",
    "filter_chapters",
    "transform",
]
