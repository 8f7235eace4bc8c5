"""Chapter filter service implementation.

Drops private chapters, identified by a file-name prefix, from the book
tree. Removal cascades to the whole subtree of a matching chapter.
Links pointing at removed chapters are reported but never rewritten.
"""

import logging
import posixpath
import re
from dataclasses import dataclass, field

from ..domain import BookItem, Chapter, PrivateConfig

logger = logging.getLogger(__name__)


@dataclass
class DanglingLink:
    """A link in a retained chapter that targets a removed chapter."""

    chapter_path: str
    target: str
    line_number: int


@dataclass
class FilterResult:
    """Outcome of filtering a book tree."""

    items: list[BookItem] = field(default_factory=list)
    removed_paths: list[str] = field(default_factory=list)


class FilterService:
    """Service for pruning private chapters from the book tree."""

    # Pattern for inline markdown links: [text](target)
    LINK_PATTERN = re.compile(r"\[[^\]]*\]\(\s*<?([^)\s>]+)>?[^)]*\)")

    def __init__(self, config: PrivateConfig) -> None:
        """Initialize the service.

        Args:
            config: Options for this build.
        """
        self._config = config

    def is_private(self, chapter: Chapter) -> bool:
        """Check if a chapter's file name marks it as private.

        Draft chapters have no file name and are never private. An empty
        prefix matches every chapter that has a path.
        """
        file_name = chapter.file_name
        if file_name is None:
            return False
        return file_name.startswith(self._config.chapter_prefix)

    def filter(self, items: list[BookItem]) -> FilterResult:
        """Remove private chapters and their sub-chapters.

        Returns the items unchanged (as a new list) when removal is off.

        Args:
            items: Top-level book items.

        Returns:
            FilterResult with the retained items and the removed paths.
        """
        result = FilterResult()
        if not self._config.remove:
            result.items = list(items)
            return result

        result.items = self._filter_items(items, result.removed_paths)
        return result

    def _filter_items(
        self, items: list[BookItem], removed: list[str]
    ) -> list[BookItem]:
        kept: list[BookItem] = []
        for item in items:
            if not isinstance(item, Chapter):
                kept.append(item)
                continue

            if self.is_private(item):
                logger.info("Removing private chapter '%s'", item.name)
                removed.extend(self._subtree_paths(item))
                continue

            item.sub_items = self._filter_items(item.sub_items, removed)
            kept.append(item)
        return kept

    def _subtree_paths(self, chapter: Chapter) -> list[str]:
        paths = [chapter.path] if chapter.path else []
        for sub in chapter.sub_items:
            if isinstance(sub, Chapter):
                paths.extend(self._subtree_paths(sub))
        return paths

    def find_dangling_links(
        self, items: list[BookItem], removed_paths: list[str]
    ) -> list[DanglingLink]:
        """Find links in retained chapters that point at removed chapters.

        Each finding is logged as a warning. Targets are resolved relative
        to the linking chapter's directory; anchors are ignored.

        Args:
            items: Retained book items (after filtering).
            removed_paths: Paths of removed chapters.

        Returns:
            List of DanglingLink objects in document order.
        """
        removed = {_normalize(path) for path in removed_paths}
        if not removed:
            return []

        dangling: list[DanglingLink] = []
        for chapter in _walk_chapters(items):
            if not chapter.path:
                continue
            base = posixpath.dirname(_normalize(chapter.path))
            for line_num, line in enumerate(chapter.content.split("\n"), start=1):
                for match in self.LINK_PATTERN.finditer(line):
                    target = match.group(1)
                    if "://" in target or target.startswith(("#", "mailto:")):
                        continue
                    resolved = _normalize(posixpath.join(base, target.split("#")[0]))
                    if resolved.endswith(".html"):
                        resolved = resolved[: -len(".html")] + ".md"
                    if resolved in removed:
                        logger.warning(
                            "Chapter '%s' links to removed chapter '%s' (line %d)",
                            chapter.path,
                            target,
                            line_num,
                        )
                        dangling.append(
                            DanglingLink(
                                chapter_path=chapter.path,
                                target=target,
                                line_number=line_num,
                            )
                        )
        return dangling


def _normalize(path: str) -> str:
    return posixpath.normpath(path.replace("\\", "/"))


def _walk_chapters(items: list[BookItem]):
    for item in items:
        if isinstance(item, Chapter):
            yield item
            yield from _walk_chapters(item.sub_items)


def filter_chapters(items: list[BookItem], config: PrivateConfig) -> list[BookItem]:
    """Prune private chapters from a list of book items."""
    return FilterService(config).filter(items).items
