"""Background worker for processing queued jobs."""

import logging
import time
from typing import Optional

import sqlalchemy
from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from app.database import SessionLocal
from app.errors import JobConflictError, JobExecutionError
from app.models.job import Job
from app.services.job_runner import JobRunner
from app.services.store import SqlContentStore

logger = logging.getLogger(__name__)


class Worker:
    """Polls the jobs table and runs queued jobs one at a time."""

    def __init__(self, session_factory=SessionLocal, poll_interval: Optional[int] = None):
        """Initialize worker."""
        self.session_factory = session_factory
        self.poll_interval = (
            settings.WORKER_POLL_INTERVAL if poll_interval is None else poll_interval
        )

    def wait_for_database(self, max_wait: int = 60) -> bool:
        """Block until the jobs table exists or max_wait seconds pass."""
        waited = 0
        while waited < max_wait:
            db = self.session_factory()
            try:
                if sqlalchemy.inspect(db.get_bind()).has_table("jobs"):
                    logger.info("Database is ready, starting worker loop")
                    return True
                logger.info(f"Waiting for migrations to complete... ({waited}s)")
            except SQLAlchemyError as e:
                logger.error(f"Database error: {e}")
            finally:
                db.close()

            time.sleep(2)
            waited += 2

        logger.error(f"Database not ready after {max_wait} seconds, starting anyway...")
        return False

    def run_once(self) -> Optional[Job]:
        """
        Run the oldest queued job, if any.

        Returns:
            The job after execution (done or failed), or None if the queue is empty
        """
        db = self.session_factory()
        try:
            store = SqlContentStore(db)
            job = store.next_queued_job()
            if job is None:
                return None

            try:
                return JobRunner(store).run(job.id)
            except JobExecutionError as e:
                logger.warning(f"Job {job.id} ended failed: {e.message}")
                return e.job
            except JobConflictError:
                logger.info(f"Job {job.id} was claimed by another runner")
                return store.get_job(job.id)
        finally:
            db.close()

    def _pause(self, stop_event=None):
        if stop_event:
            stop_event.wait(self.poll_interval)
        else:
            time.sleep(self.poll_interval)

    def run(self, stop_event=None):
        """Main worker loop.

        Args:
            stop_event: Optional threading.Event to signal worker to stop
        """
        logger.info("Worker started - waiting for database to be ready...")
        self.wait_for_database()

        while True:
            if stop_event and stop_event.is_set():
                logger.info("Worker stop signal received")
                break

            try:
                job = self.run_once()
                if job is None:
                    self._pause(stop_event)

            except KeyboardInterrupt:
                logger.info("Worker shutting down")
                break
            except Exception as e:
                logger.error(f"Worker error: {e}", exc_info=True)
                self._pause(stop_event)


def worker_loop(stop_event=None):
    """Run worker loop (for use as background thread).

    Args:
        stop_event: Optional threading.Event to signal worker to stop
    """
    worker = Worker()
    worker.run(stop_event=stop_event)


def main():
    """Entry point for standalone worker."""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    worker = Worker()
    worker.run()


if __name__ == "__main__":
    main()
