from __future__ import annotations

from dataclasses import dataclass

from redis import Redis
from rq import Queue, Worker

from .versioning import commit_notebook


@dataclass
class SnapshotConfig:
    notebook_dir: str
    message: str


def run_snapshot_job(config: SnapshotConfig) -> str:
    """
    RQ task entrypoint. Commits the current notebook file and returns the
    commit id.
    """
    return commit_notebook(config.notebook_dir, config.message)


class RQSnapshotQueue:
    """
    Redis-backed snapshot queue using RQ. Snapshots are pushed to Redis and
    committed by a worker started with `work()` in a dedicated process.
    """

    def __init__(self, redis_url: str = "redis://localhost:6379/0", queue_name: str = "snapshots"):
        self.redis = Redis.from_url(redis_url)
        self.queue = Queue(queue_name, connection=self.redis)

    def enqueue_snapshot(self, config: SnapshotConfig):
        return self.queue.enqueue(run_snapshot_job, config, retry=None)

    def work(self):
        worker = Worker([self.queue], connection=self.redis)
        worker.work(with_scheduler=True)
