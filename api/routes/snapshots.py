from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, HTTPException
from pydantic import BaseModel

from markupbook.notebook import SnapshotConfig, run_snapshot_job

from api.dependencies import get_snapshot_queue, notebook_dir

router = APIRouter(prefix="/snapshots", tags=["snapshots"])


class SnapshotRequest(BaseModel):
    message: str


@router.post("", status_code=202)
def create_snapshot(payload: SnapshotRequest, background_tasks: BackgroundTasks):
    if not payload.message.strip():
        raise HTTPException(status_code=400, detail="Commit message must not be empty")
    config = SnapshotConfig(notebook_dir=str(notebook_dir()), message=payload.message)

    queue = get_snapshot_queue()
    if queue is not None:
        job = queue.enqueue_snapshot(config)
        return {"status": "queued", "job_id": job.id}

    background_tasks.add_task(run_snapshot_job, config)
    return {"status": "scheduled", "job_id": None}
