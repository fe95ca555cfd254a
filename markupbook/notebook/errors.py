from __future__ import annotations

# Storage failures are plain OSErrors and are never wrapped.
IOFailure = OSError


class NotebookError(Exception):
    """Base class for notebook store errors."""


class NotFound(NotebookError, KeyError):
    def __init__(self, title: str):
        super().__init__(f"Page not found: {title!r}")
        self.title = title

    def __str__(self) -> str:
        return self.args[0]


class NoSections(NotebookError):
    def __init__(self):
        super().__init__("Notebook has no sections")


class SectionNotFound(NotebookError, KeyError):
    def __init__(self, title: str):
        super().__init__(f"Section not found: {title!r}")
        self.title = title

    def __str__(self) -> str:
        return self.args[0]


class ETagMismatch(NotebookError):
    def __init__(self, expected: str, actual: str):
        super().__init__(f"ETag mismatch: expected {expected}, current {actual}")
        self.expected = expected
        self.actual = actual


class SnapshotError(NotebookError):
    """Raised when the git snapshot of the notebook fails."""
