from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import List, Optional, Union

from .errors import ETagMismatch, NoSections, NotFound, SectionNotFound
from .models import DEFAULT_PREAMBLE, ENCODING, ENCODING_ERRORS, LINE_TERMINATOR, NEW_PAGE_PLACEHOLDER
from .parser import find_section, heading_line, split, titles
from .storage import LocalNotebookStorage, NotebookStorage, StoragePaths

logger = logging.getLogger(__name__)


def compute_etag_for(text: str) -> str:
    return hashlib.sha256(text.encode(ENCODING, ENCODING_ERRORS)).hexdigest()


class SectionStore:
    """
    Page-level operations over one notebook document.

    Every operation reads the whole document, works on the freshly read
    text and writes a complete new document back. Nothing is cached
    between calls, so the file on disk is the only state. Conflicting
    writers are detected (not prevented) through ETags.
    """

    def __init__(self, storage: NotebookStorage):
        self.storage = storage

    @classmethod
    def at(cls, directory: Union[str, Path]) -> "SectionStore":
        return cls(LocalNotebookStorage(StoragePaths(Path(directory))))

    def read(self) -> str:
        return self.storage.read_text()

    def write(self, text: str) -> None:
        self.storage.write_text(text)

    def list_pages(self) -> List[str]:
        return titles(self.read())

    def load_page(self, title: str) -> str:
        section = find_section(self.read(), title)
        if section is None:
            raise NotFound(title)
        return section.content

    def save_page(self, old_title: str, new_title: str, html: str) -> None:
        """
        Replace the heading and content of the first page titled
        `old_title` with a fresh block for `new_title`. Text outside that
        page is written back untouched.
        """
        md = self.read()
        sections = split(md)
        if not sections:
            raise NoSections()
        target = next((s for s in sections if s.title == old_title), None)
        if target is None:
            raise SectionNotFound(old_title)

        block = heading_line(new_title) + LINE_TERMINATOR * 2 + html + LINE_TERMINATOR
        new_md = md[: target.start] + block + md[target.end :]
        self.write(new_md)
        logger.info("Saved page %r as %r (%d bytes)", old_title, new_title, len(new_md))

    def compute_etag(self) -> str:
        return compute_etag_for(self.read())

    def save_page_if_match(
        self,
        old_title: str,
        new_title: str,
        html: str,
        expected_etag: Optional[str],
    ) -> None:
        """
        Save only if the notebook still has `expected_etag`. An empty value
        skips the check. The check and the save read the file separately,
        so a writer slipping in between the two is not detected.
        """
        if expected_etag:
            current = self.compute_etag()
            if current != expected_etag:
                logger.warning("Rejected save of %r: etag %s != %s", old_title, expected_etag, current)
                raise ETagMismatch(expected_etag, current)
        self.save_page(old_title, new_title, html)

    def insert_new_section(self, title: str) -> None:
        md = self.read()
        stub = (
            LINE_TERMINATOR * 2
            + heading_line(title)
            + LINE_TERMINATOR * 2
            + NEW_PAGE_PLACEHOLDER
            + LINE_TERMINATOR
        )
        if not md:
            md = DEFAULT_PREAMBLE
        new_md = md + stub
        self.write(new_md)
        logger.info("Inserted page %r (%d bytes)", title, len(new_md))

    def rename_section(self, old_title: str, new_title: str) -> None:
        """
        Rewrite only the heading line of the first page titled `old_title`.
        The line terminator and the page content are kept byte for byte.
        """
        md = self.read()
        section = find_section(md, old_title)
        if section is None:
            raise SectionNotFound(old_title)

        line_end = md.find(LINE_TERMINATOR, section.start)
        if line_end == -1:
            line_end = len(md)
        new_md = md[: section.start] + heading_line(new_title) + md[line_end:]
        self.write(new_md)
        logger.info("Renamed page %r to %r", old_title, new_title)
