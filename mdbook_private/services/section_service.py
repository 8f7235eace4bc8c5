"""Private section service implementation.

Finds ``<!--private ... -->`` blocks in chapter text and rewrites them,
either dropping them or wrapping them in a styled, labelled container.
Malformed markers are left as literal text.
"""

import html
import logging
import re
from enum import Enum
from typing import Iterator, Union

from ..domain import PrivateBlock, PrivateConfig, is_heading

logger = logging.getLogger(__name__)

STYLE_CONTENT = "position: relative; padding: 20px 20px;"
STYLE_NOTICE = "position: absolute; top: 0; right: 5px; font-size: 80%; opacity: 0.4;"

CONTAINER_CLASS = "mdbook-private"
NOTICE_CLASS = "mdbook-private-notice"

END_MARKER = "-->"


class ScanState(Enum):
    """States of the marker scanner."""

    OUTSIDE = "outside"
    SEEKING_TITLE = "seeking_title"
    BODY = "body"


# A scanned segment is either pass-through text or a closed block
Segment = Union[str, PrivateBlock]


def _split_newline(line: str) -> tuple[str, str]:
    """Split a line into its content and its line ending."""
    content = line.rstrip("\r\n")
    return content, line[len(content) :]


class SectionService:
    """Service for transforming private sections of a single document.

    Implements the block scanner as an explicit state machine over the
    document's lines. Instances hold only the read-only configuration.
    """

    START_PATTERN = re.compile(r"<!--\s*private\b")

    # Split after each "\n" only; other Unicode line breaks stay inline
    LINE_PATTERN = re.compile(r"(?<=\n)")

    def __init__(self, config: PrivateConfig) -> None:
        """Initialize the service.

        Args:
            config: Options for this build.
        """
        self._config = config

    def find_blocks(self, text: str) -> list[PrivateBlock]:
        """Find all terminated private blocks in the text.

        Args:
            text: Raw document text.

        Returns:
            Blocks in document order.
        """
        return [seg for seg in self._scan(text) if isinstance(seg, PrivateBlock)]

    def transform(self, text: str) -> str:
        """Rewrite every private block in the text.

        Args:
            text: Raw document text.

        Returns:
            The rewritten text. Text outside private blocks is unchanged.
        """
        segments = list(self._scan(text))
        out: list[str] = []
        for index, segment in enumerate(segments):
            if isinstance(segment, str):
                if segment:
                    out.append(segment)
                continue

            replacement = self._emit(segment)
            if replacement:
                # Replacement lines start on a line of their own
                if out and not out[-1].endswith("\n"):
                    out.append(_split_newline(replacement[0])[1] or "\n")
                out.extend(replacement)
                continue

            following = segments[index + 1 : index + 2]
            if _separates_text(out, following):
                out.append(_split_newline(out[-1])[1])

        return "".join(out)

    def _scan(self, text: str) -> Iterator[Segment]:
        """Split text into pass-through pieces and private blocks.

        Pieces are whole lines, except around blocks that share a line
        with ordinary text.
        """
        lines = [line for line in self.LINE_PATTERN.split(text) if line]

        state = ScanState.OUTSIDE
        block: PrivateBlock | None = None
        consumed: list[str] = []
        newline = "\n"
        inline = False

        def add_inner(line: str) -> None:
            nonlocal state
            block.lines.append(line)
            if state is ScanState.SEEKING_TITLE and line.strip():
                if is_heading(line):
                    block.title_index = len(block.lines) - 1
                state = ScanState.BODY

        for index, line in enumerate(lines):
            content, ending = _split_newline(line)
            rest = content
            line_start = True
            opened_here = False

            while True:
                if state is ScanState.OUTSIDE:
                    match = self.START_PATTERN.search(rest)
                    if match is None:
                        yield line if line_start else rest + ending
                        break

                    leading = rest[: match.start()]
                    inline = not line_start or bool(leading.strip())
                    if inline:
                        yield leading
                        consumed = [rest[match.start() :] + ending]
                    else:
                        consumed = [rest + ending]

                    block = PrivateBlock(start=index, end=index)
                    newline = ending or "\n"
                    state = ScanState.SEEKING_TITLE
                    rest = rest[match.end() :]
                    opened_here = True

                if END_MARKER not in rest:
                    if not opened_here:
                        consumed.append(line)
                        add_inner(line)
                    elif rest.strip():
                        add_inner(rest.strip() + newline)
                    break

                inner, after = rest.split(END_MARKER, 1)
                if not opened_here:
                    consumed.append(line)
                if inner.strip():
                    add_inner((inner.strip() if opened_here else inner.rstrip()) + newline)
                block.end = index
                logger.debug("Private block at lines %d-%d", block.start + 1, index + 1)
                yield block
                state = ScanState.OUTSIDE

                # A block alone on its lines takes the line ending with it
                if not inline and not after.strip():
                    break
                rest = after
                line_start = False
                opened_here = False

        if state is not ScanState.OUTSIDE:
            logger.warning(
                "Unterminated private block at line %d left unchanged",
                block.start + 1,
            )
            yield from consumed

    def _emit(self, block: PrivateBlock) -> list[str]:
        """Produce the replacement lines for a block."""
        if self._config.remove:
            # Only the title heading survives removal
            return [block.title] if block.title is not None else []
        if not self._config.style:
            return list(block.lines)
        return self._emit_styled(block)

    def _emit_styled(self, block: PrivateBlock) -> list[str]:
        """Wrap the block's lines in a labelled blockquote container.

        The container is followed by a blank line, which ends the HTML
        block so the text after it is rendered as markdown again.
        """
        newline = "\n"
        if block.lines:
            newline = _split_newline(block.lines[0])[1] or newline

        opening = f'<div class="{CONTAINER_CLASS}" style="{STYLE_CONTENT}">'
        notice = self._config.notice
        if notice:
            opening += (
                f'<span class="{NOTICE_CLASS}" style="{STYLE_NOTICE}">'
                f"{html.escape(str(notice))}</span>"
            )

        out = [opening + newline, newline]
        for line in block.lines:
            content, ending = _split_newline(line)
            ending = ending or newline
            out.append(f"> {content}{ending}" if content.strip() else f">{ending}")
        out.extend([newline, "</div>" + newline, newline])
        return out


def _separates_text(out: list[str], following: list[Segment]) -> bool:
    """Check if a vanished block sat between two non-blank lines."""
    if not out or not following or not isinstance(following[0], str):
        return False
    previous = out[-1]
    return (
        previous.endswith("\n")
        and bool(previous.strip())
        and bool(following[0].strip())
    )


def transform(text: str, config: PrivateConfig) -> str:
    """Rewrite the private blocks of one document."""
    return SectionService(config).transform(text)
