"""Domain model for private blocks found in chapter text."""

import re
from dataclasses import dataclass, field
from typing import Optional

# ATX heading: up to three spaces, 1-6 hashes, whitespace, some text
HEADING_PATTERN = re.compile(r"^ {0,3}(#{1,6})[ \t]+(\S.*?)\s*$")


@dataclass
class PrivateBlock:
    """A ``<!--private ... -->`` span within a document.

    ``start`` and ``end`` are the (inclusive) line indexes of the markers.
    ``lines`` holds the inner content, including text written on the
    marker lines themselves.
    """

    start: int
    end: int
    lines: list[str] = field(default_factory=list)
    title_index: Optional[int] = None

    @property
    def title(self) -> Optional[str]:
        """The heading line that titles the block, if any."""
        if self.title_index is None:
            return None
        return self.lines[self.title_index]

    @property
    def title_level(self) -> Optional[int]:
        """Number of ``#`` characters in the title heading."""
        if self.title is None:
            return None
        match = HEADING_PATTERN.match(self.title)
        return len(match.group(1)) if match else None

    @property
    def body(self) -> list[str]:
        """Inner lines after the title (all inner lines when untitled)."""
        if self.title_index is None:
            return list(self.lines)
        return self.lines[self.title_index + 1 :]


def is_heading(line: str) -> bool:
    """Check if a line is a markdown ATX heading."""
    return HEADING_PATTERN.match(line) is not None
