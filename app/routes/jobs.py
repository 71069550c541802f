"""Job routes."""

import uuid
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends

from app.dependencies import get_runner, get_store
from app.errors import NotFoundError
from app.schemas.job import JobCreate, JobRead
from app.services import content
from app.services.job_runner import JobRunner
from app.services.store import ContentStore

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.post("", response_model=JobRead, status_code=201)
def create_job(
    data: JobCreate,
    store: ContentStore = Depends(get_store),
):
    """Enqueue a generate or publish job."""
    job = content.enqueue_job(store, data.root)
    return JobRead.model_validate(job)


@router.get("", response_model=List[JobRead])
def list_jobs(
    status: Optional[Literal["queued", "running", "done", "failed"]] = None,
    store: ContentStore = Depends(get_store),
):
    """List jobs, newest first, optionally filtered by status."""
    return [JobRead.model_validate(j) for j in store.list_jobs(status=status)]


@router.get("/{job_id}", response_model=JobRead)
def get_job(
    job_id: uuid.UUID,
    store: ContentStore = Depends(get_store),
):
    """Get a single job."""
    job = store.get_job(job_id)
    if job is None:
        raise NotFoundError("job not found")
    return JobRead.model_validate(job)


@router.post("/{job_id}/run", response_model=JobRead)
def run_job(
    job_id: uuid.UUID,
    runner: JobRunner = Depends(get_runner),
):
    """Run a queued job now. Failures return 400 with the failed job attached."""
    return JobRead.model_validate(runner.run(job_id))
