from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import List, Union

from .errors import SnapshotError
from .models import NOTEBOOK_FILENAME
from .storage import StoragePaths

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = "main"
AUTHOR_NAME = "Markupbook"
AUTHOR_EMAIL = "markupbook@local"


def _run_git(repo_dir: Path, args: List[str]) -> str:
    exe = shutil.which("git")
    if not exe:
        raise SnapshotError("git executable not found on PATH")
    cmd = [
        exe,
        "-c", f"user.name={AUTHOR_NAME}",
        "-c", f"user.email={AUTHOR_EMAIL}",
        "-c", "commit.gpgsign=false",
        *args,
    ]
    proc = subprocess.run(cmd, cwd=repo_dir, capture_output=True, text=True)
    if proc.returncode != 0:
        raise SnapshotError(f"git {' '.join(args)} failed: {proc.stderr.strip() or proc.stdout.strip()}")
    return proc.stdout.strip()


def ensure_repo(directory: Union[str, Path]) -> Path:
    """
    Open the repository rooted at `directory`, or initialise one there with
    `main` as its default branch.
    """
    paths = StoragePaths(Path(directory))
    paths.root.mkdir(parents=True, exist_ok=True)
    if paths.git_dir().exists():
        return paths.root
    _run_git(paths.root, ["init", "--quiet"])
    _run_git(paths.root, ["symbolic-ref", "HEAD", f"refs/heads/{DEFAULT_BRANCH}"])
    logger.info("Initialised notebook repository in %s", paths.root)
    return paths.root


def commit_notebook(directory: Union[str, Path], message: str) -> str:
    """
    Stage the notebook file and commit it under the fixed Markupbook
    identity. Returns the new HEAD commit id.
    """
    repo_dir = ensure_repo(directory)
    _run_git(repo_dir, ["add", "--", NOTEBOOK_FILENAME])
    _run_git(
        repo_dir,
        ["commit", "--quiet", "--allow-empty", f"--author={AUTHOR_NAME} <{AUTHOR_EMAIL}>", "-m", message],
    )
    head = _run_git(repo_dir, ["rev-parse", "HEAD"])
    logger.info("Committed notebook snapshot %s: %s", head[:12], message)
    return head
