from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from .models import HEADING_MARKER, LINE_TERMINATOR, Section


def _heading_lines(text: str) -> Iterator[Tuple[int, int, str]]:
    """
    Yield (line_start, content_start, title) for every heading line.

    A heading line begins at the start of the text or right after a line
    terminator with the marker "## ". The title is the rest of the line,
    kept as-is.
    """
    pos = 0
    length = len(text)
    while pos < length:
        newline = text.find(LINE_TERMINATOR, pos)
        line_end = length if newline == -1 else newline
        next_line = length if newline == -1 else newline + 1
        if text.startswith(HEADING_MARKER, pos, line_end):
            yield pos, next_line, text[pos + len(HEADING_MARKER) : line_end]
        pos = next_line


def split(text: str) -> List[Section]:
    """
    Split notebook text into its pages, in file order.

    Anything before the first heading line (the preamble) is not part of
    any section. A document without heading lines yields an empty list.
    """
    headings = list(_heading_lines(text))
    sections: List[Section] = []
    for idx, (start, content_start, title) in enumerate(headings):
        end = headings[idx + 1][0] if idx + 1 < len(headings) else len(text)
        sections.append(
            Section(
                title=title,
                content=text[content_start:end],
                start=start,
                content_start=content_start,
                end=end,
            )
        )
    return sections


def titles(text: str) -> List[str]:
    return [section.title for section in split(text)]


def find_section(text: str, title: str) -> Optional[Section]:
    """First section whose title equals `title` exactly."""
    for section in split(text):
        if section.title == title:
            return section
    return None


def heading_line(title: str) -> str:
    return HEADING_MARKER + title
