from __future__ import annotations

from dataclasses import dataclass

HEADING_MARKER = "## "
LINE_TERMINATOR = "\n"
NOTEBOOK_FILENAME = "notebook.md"
# Undecodable bytes survive a read/write round trip as lone surrogates.
ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"
DEFAULT_PREAMBLE = "# Notebook\n\n"
NEW_PAGE_PLACEHOLDER = "<p><em>New page.</em></p>"


@dataclass(frozen=True)
class Section:
    """
    A view over one page of the notebook text it was parsed from.

    `start` is the offset of the heading line, `content_start` the offset
    right after the heading line terminator and `end` the offset of the
    next heading line (or the text length). Offsets are only valid for
    that exact text.
    """

    title: str
    content: str
    start: int
    content_start: int
    end: int
