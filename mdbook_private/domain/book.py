"""Domain models for the mdBook book tree.

Mirrors the JSON mdBook hands to preprocessors: a list of book items where
each item is a chapter, a separator or a part title. Unknown keys are kept
so a book can be written back exactly as it was received.
"""

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any, Iterator, Optional, Union


@dataclass
class Chapter:
    """A chapter in the book's navigational tree.

    A chapter without a path is a draft chapter: it has a name in
    SUMMARY.md but no backing document.
    """

    name: str
    content: str
    path: Optional[str] = None
    source_path: Optional[str] = None
    number: Optional[list[int]] = None
    parent_names: list[str] = field(default_factory=list)
    sub_items: list["BookItem"] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def file_name(self) -> Optional[str]:
        """Final path component, ignoring directory segments."""
        if not self.path:
            return None
        return PurePosixPath(self.path.replace("\\", "/")).name

    @property
    def is_draft(self) -> bool:
        """Check if the chapter has no backing document."""
        return self.path is None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Chapter":
        """Create a Chapter from mdBook's chapter JSON object.

        Args:
            data: The value of a ``{"Chapter": {...}}`` item.

        Returns:
            The parsed Chapter with its sub-items.

        Raises:
            ValueError: If required fields are missing.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Chapter must be an object, got {type(data).__name__}")
        for key in ("name", "content"):
            if key not in data:
                raise ValueError(f"Chapter missing required field '{key}'")

        known = {
            "name",
            "content",
            "path",
            "source_path",
            "number",
            "parent_names",
            "sub_items",
        }
        return cls(
            name=data["name"],
            content=data["content"],
            path=data.get("path"),
            source_path=data.get("source_path"),
            number=data.get("number"),
            parent_names=list(data.get("parent_names") or []),
            sub_items=[item_from_dict(sub) for sub in data.get("sub_items") or []],
            extra={k: v for k, v in data.items() if k not in known},
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert back to mdBook's chapter JSON object."""
        return {
            "name": self.name,
            "content": self.content,
            "number": self.number,
            "sub_items": [item_to_dict(sub) for sub in self.sub_items],
            "path": self.path,
            "source_path": self.source_path,
            "parent_names": list(self.parent_names),
            **self.extra,
        }


@dataclass
class Separator:
    """A structural separator line in the summary."""


@dataclass
class PartTitle:
    """A part heading (``# Part I``) in the summary."""

    title: str


BookItem = Union[Chapter, Separator, PartTitle]


def item_from_dict(data: Any) -> BookItem:
    """Parse one externally tagged mdBook book item.

    Raises:
        ValueError: If the item is not a chapter, separator or part title.
    """
    if data == "Separator":
        return Separator()
    if isinstance(data, dict) and len(data) == 1:
        if "Chapter" in data:
            return Chapter.from_dict(data["Chapter"])
        if "PartTitle" in data:
            return PartTitle(title=data["PartTitle"])
        if "Separator" in data:
            return Separator()
    raise ValueError(f"Unrecognized book item: {data!r}")


def item_to_dict(item: BookItem) -> Any:
    """Convert one book item back to mdBook's JSON form."""
    if isinstance(item, Chapter):
        return {"Chapter": item.to_dict()}
    if isinstance(item, PartTitle):
        return {"PartTitle": item.title}
    return "Separator"


@dataclass
class Book:
    """The book handed to a preprocessor.

    mdBook 0.4 stores the top-level items under ``sections``; newer
    releases use ``items``. The key seen on input is used on output.
    """

    items: list[BookItem] = field(default_factory=list)
    items_key: str = "sections"
    extra: dict[str, Any] = field(default_factory=lambda: {"__non_exhaustive": None})

    def iter_chapters(self) -> Iterator[Chapter]:
        """Yield every chapter in pre-order, including nested ones."""

        def walk(items: list[BookItem]) -> Iterator[Chapter]:
            for item in items:
                if isinstance(item, Chapter):
                    yield item
                    yield from walk(item.sub_items)

        yield from walk(self.items)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Book":
        """Create a Book from mdBook's book JSON object.

        Raises:
            ValueError: If the object holds neither ``sections`` nor ``items``.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Book must be an object, got {type(data).__name__}")

        for key in ("sections", "items"):
            if key in data:
                items_key = key
                break
        else:
            raise ValueError("Book has neither 'sections' nor 'items'")

        return cls(
            items=[item_from_dict(item) for item in data[items_key] or []],
            items_key=items_key,
            extra={k: v for k, v in data.items() if k != items_key},
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert back to mdBook's book JSON object."""
        return {
            self.items_key: [item_to_dict(item) for item in self.items],
            **self.extra,
        }
