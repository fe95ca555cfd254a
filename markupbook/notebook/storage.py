from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .models import ENCODING, ENCODING_ERRORS, NOTEBOOK_FILENAME

logger = logging.getLogger(__name__)

DIR_MODE = 0o755
FILE_MODE = 0o644


class NotebookStorage(Protocol):
    def read_text(self) -> str:
        ...

    def write_text(self, text: str) -> object:
        ...


@dataclass
class StoragePaths:
    root: Path

    def notebook_path(self) -> Path:
        return self.root / NOTEBOOK_FILENAME

    def temp_path(self) -> Path:
        return self.root / f".{NOTEBOOK_FILENAME}.{os.getpid()}.tmp"

    def git_dir(self) -> Path:
        return self.root / ".git"


class LocalNotebookStorage:
    """
    Manages the filesystem layout of a notebook directory and whole-file
    reads and writes of the notebook document.
    """

    def __init__(self, storage_paths: StoragePaths):
        self.paths = storage_paths

    def ensure_base_dir(self) -> None:
        self.paths.root.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)

    def read_text(self) -> str:
        """
        Return the notebook text, or an empty string when nothing has been
        written yet.
        """
        self.ensure_base_dir()
        path = self.paths.notebook_path()
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            return ""
        return data.decode(ENCODING, ENCODING_ERRORS)

    def write_text(self, text: str) -> Path:
        """
        Replace the notebook with `text`. The data goes to a temporary file
        in the same directory first and is then moved over the notebook.
        """
        self.ensure_base_dir()
        target = self.paths.notebook_path()
        tmp = self.paths.temp_path()
        data = text.encode(ENCODING, ENCODING_ERRORS)
        try:
            with open(tmp, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp, FILE_MODE)
            os.replace(tmp, target)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise
        logger.debug("Wrote %d bytes to %s", len(data), target)
        return target


class InMemoryNotebookStorage:
    """
    Keeps the notebook text in memory. Useful for local runs and tests
    where no directory should be touched.
    """

    def __init__(self, text: str = ""):
        self.text = text
        self.writes = 0

    def read_text(self) -> str:
        return self.text

    def write_text(self, text: str) -> None:
        self.text = text
        self.writes += 1
