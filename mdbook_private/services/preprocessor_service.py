"""Preprocessor service implementation.

Runs one build: reads the configuration from the preprocessor context,
prunes private chapters and rewrites private sections in every chapter
that remains.
"""

import logging
from typing import Any

from ..domain import Book, PrivateConfig
from ..domain.config import PREPROCESSOR_NAME
from .filter_service import FilterService
from .section_service import SectionService

logger = logging.getLogger(__name__)


class PrivatePreprocessor:
    """The ``private`` mdBook preprocessor."""

    name = PREPROCESSOR_NAME

    def run(self, context: dict[str, Any], book: Book) -> Book:
        """Process a book for one build.

        Args:
            context: The preprocessor context mdBook sends with the book.
            book: The book to process.

        Returns:
            The same book, with private chapters pruned and private
            sections rewritten.
        """
        logger.info("Running mdbook-private preprocessor")
        config = PrivateConfig.from_context(context)
        logger.debug("Using %s", config)

        return self.process(book, config)

    def process(self, book: Book, config: PrivateConfig) -> Book:
        """Process a book with an explicit configuration."""
        filter_service = FilterService(config)
        result = filter_service.filter(book.items)
        book.items = result.items

        section_service = SectionService(config)
        for chapter in book.iter_chapters():
            logger.info("Processing chapter '%s'", chapter.name)
            chapter.content = section_service.transform(chapter.content)

        # Links inside removed private sections are gone by now
        if result.removed_paths:
            filter_service.find_dangling_links(book.items, result.removed_paths)

        return book

    def supports_renderer(self, renderer: str) -> bool:
        """Check whether the preprocessor can run for a renderer."""
        return renderer != "not-supported"
