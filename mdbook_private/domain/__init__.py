"""Domain layer for book and private-section representation."""

from .book import Book, BookItem, Chapter, PartTitle, Separator
from .config import PrivateConfig
from .section import PrivateBlock, is_heading

__all__ = [
    "Book",
    "BookItem",
    "Chapter",
    "PartTitle",
    "Separator",
    "PrivateConfig",
    "PrivateBlock",
    "is_heading",
]
