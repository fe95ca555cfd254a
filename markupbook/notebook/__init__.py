"""
Notebook subsystem exports.
"""

from .errors import ETagMismatch, IOFailure, NoSections, NotebookError, NotFound, SectionNotFound, SnapshotError
from .job_queue import RQSnapshotQueue, SnapshotConfig, run_snapshot_job
from .models import Section
from .parser import find_section, split, titles
from .storage import InMemoryNotebookStorage, LocalNotebookStorage, NotebookStorage, StoragePaths
from .store import SectionStore, compute_etag_for
from .versioning import commit_notebook, ensure_repo

__all__ = [
    "ETagMismatch",
    "IOFailure",
    "InMemoryNotebookStorage",
    "LocalNotebookStorage",
    "NoSections",
    "NotFound",
    "NotebookError",
    "NotebookStorage",
    "RQSnapshotQueue",
    "Section",
    "SectionNotFound",
    "SectionStore",
    "SnapshotConfig",
    "SnapshotError",
    "StoragePaths",
    "commit_notebook",
    "compute_etag_for",
    "ensure_repo",
    "find_section",
    "run_snapshot_job",
    "split",
    "titles",
]
