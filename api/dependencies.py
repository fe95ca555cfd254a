from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from markupbook.notebook import RQSnapshotQueue, SectionStore


def notebook_dir() -> Path:
    return Path(os.getenv("MARKUPBOOK_DIR", "./markups"))


@lru_cache(maxsize=1)
def get_store() -> SectionStore:
    return SectionStore.at(notebook_dir())


@lru_cache(maxsize=1)
def get_snapshot_queue() -> Optional[RQSnapshotQueue]:
    redis_url = os.getenv("REDIS_URL")
    if not redis_url:
        return None
    return RQSnapshotQueue(redis_url, queue_name=os.getenv("SNAPSHOT_QUEUE", "snapshots"))


def parse_if_match(header: Optional[str]) -> Optional[str]:
    """
    Strip the weak prefix and quotes from an If-Match header value. A
    missing header or `*` (any current version) means no check.
    """
    if not header:
        return None
    value = header.strip()
    if value == "*":
        return None
    if value.startswith("W/"):
        value = value[2:]
    return value.strip('"') or None


def quote_etag(etag: str) -> str:
    return f'"{etag}"'


def cors_origins() -> List[str]:
    raw = os.getenv("MARKUPBOOK_CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
