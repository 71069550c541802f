"""Job runner: executes a queued job through the transition engine."""

import logging
import uuid
from typing import Callable, Dict, Optional

from app.errors import (
    ContentError,
    JobConflictError,
    JobExecutionError,
    NotFoundError,
    UnsupportedJobTypeError,
)
from app.models.job import JOB_DONE, JOB_FAILED, Job
from app.schemas.job import parse_document_payload
from app.services.store import ContentStore
from app.services.transitions import TransitionEngine, TransitionResult

logger = logging.getLogger(__name__)


class JobRunner:
    """Runs one job at a time: queued -> running -> done | failed."""

    def __init__(self, store: ContentStore, engine: Optional[TransitionEngine] = None):
        self.store = store
        self.engine = engine or TransitionEngine(store)

        # Job type registry
        self.transitions: Dict[str, Callable[[uuid.UUID], TransitionResult]] = {
            "generate": self.engine.generate,
            "publish": self.engine.publish,
        }

    def run(self, job_id: uuid.UUID) -> Job:
        """
        Execute a queued job to completion.

        The job is claimed (queued -> running) and persisted before any
        transition runs. Any failure after the claim marks the job failed;
        document and run writes already made are not rolled back.

        Args:
            job_id: Job to execute

        Returns:
            The job in status 'done'

        Raises:
            NotFoundError: If the job does not exist
            JobConflictError: If the job is not queued
            JobExecutionError: If the job failed; carries the failed job
        """
        job = self.store.get_job(job_id)
        if job is None:
            raise NotFoundError("job not found")

        claimed = self.store.claim_job(job_id)
        if claimed is None:
            current = self.store.get_job(job_id)
            status = current.status if current is not None else "missing"
            logger.warning(f"Job {job_id} not claimed (status: {status})")
            raise JobConflictError(f"job is not queued (status: {status})")

        logger.info(f"Processing job {job_id} (type: {claimed.job_type})")

        try:
            self._dispatch(claimed)
        except Exception as e:
            if isinstance(e, ContentError):
                message = e.message
                logger.error(f"Job {job_id} failed: {message}")
            else:
                message = str(e) or type(e).__name__
                logger.error(f"Job {job_id} failed: {message}", exc_info=True)

            failed = self.store.update_job(job_id, status=JOB_FAILED)
            raise JobExecutionError(message, job=failed) from e

        done = self.store.update_job(job_id, status=JOB_DONE)
        logger.info(f"Job {job_id} completed successfully")
        return done

    def _dispatch(self, job: Job) -> TransitionResult:
        payload = parse_document_payload(job.payload_json)

        transition = self.transitions.get(job.job_type)
        if transition is None:
            raise UnsupportedJobTypeError(f"unsupported job_type: {job.job_type}")

        return transition(payload.document_id)
