"""
Command line access to a notebook directory.

Usage:
    markupbook --dir ./markups list
    markupbook show "Page title"
    markupbook new "Page title"
    markupbook rename "Old" "New"
    markupbook save "Old" "New" --html-file page.html --if-match <etag>
    markupbook etag
    markupbook commit "Snapshot message"
    markupbook worker
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from markupbook.notebook import (
    NotebookError,
    RQSnapshotQueue,
    SectionStore,
    commit_notebook,
)


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler()],
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="markupbook", description="Edit a sectioned Markdown notebook.")
    parser.add_argument(
        "--dir",
        type=Path,
        default=Path(os.getenv("MARKUPBOOK_DIR", "./markups")),
        help="Notebook directory (default: $MARKUPBOOK_DIR or ./markups)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List page titles")

    show = sub.add_parser("show", help="Print the content of a page")
    show.add_argument("title")

    new = sub.add_parser("new", help="Append a new page")
    new.add_argument("title")

    rename = sub.add_parser("rename", help="Rename a page, keeping its content")
    rename.add_argument("old_title")
    rename.add_argument("new_title")

    save = sub.add_parser("save", help="Replace a page's heading and content")
    save.add_argument("old_title")
    save.add_argument("new_title")
    save.add_argument("--html-file", type=Path, required=True, help="File holding the new page content")
    save.add_argument("--if-match", default=None, help="Only save if the notebook still has this ETag")

    sub.add_parser("etag", help="Print the current notebook ETag")

    commit = sub.add_parser("commit", help="Snapshot the notebook into its git repository")
    commit.add_argument("message")

    worker = sub.add_parser("worker", help="Run an RQ worker for queued snapshots")
    worker.add_argument("--redis-url", default=os.getenv("REDIS_URL", "redis://localhost:6379/0"))
    worker.add_argument("--queue", default=os.getenv("SNAPSHOT_QUEUE", "snapshots"))
    return parser


def run(args: argparse.Namespace) -> None:
    store = SectionStore.at(args.dir)

    if args.command == "list":
        for title in store.list_pages():
            print(title)
    elif args.command == "show":
        sys.stdout.write(store.load_page(args.title))
    elif args.command == "new":
        store.insert_new_section(args.title)
    elif args.command == "rename":
        store.rename_section(args.old_title, args.new_title)
    elif args.command == "save":
        html = args.html_file.read_text(encoding="utf-8")
        store.save_page_if_match(args.old_title, args.new_title, html, args.if_match)
        print(store.compute_etag())
    elif args.command == "etag":
        print(store.compute_etag())
    elif args.command == "commit":
        print(commit_notebook(args.dir, args.message))
    elif args.command == "worker":
        RQSnapshotQueue(args.redis_url, queue_name=args.queue).work()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    # Titles read from a non-UTF-8 notebook carry surrogate escapes; write
    # them back out as the original bytes.
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(errors="surrogateescape")
    setup_logging(args.verbose)
    try:
        run(args)
    except (NotebookError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
