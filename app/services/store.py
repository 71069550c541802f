"""Content store: persistence contract used by the transition engine and job runner."""

import abc
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from app.errors import NotFoundError
from app.models.document import DOCUMENT_DRAFT, Document
from app.models.job import JOB_QUEUED, JOB_RUNNING, Job
from app.models.run import Run
from app.models.source import Source


class ContentStore(abc.ABC):
    """Storage operations for sources, documents, runs and jobs.

    Every write is visible to subsequent reads as soon as the call returns.
    Writes are not grouped into transactions across calls.
    """

    # Sources

    @abc.abstractmethod
    def get_source(self, source_id: uuid.UUID) -> Optional[Source]:
        ...

    @abc.abstractmethod
    def create_source(self, title: str, source_type: str, content: str) -> Source:
        ...

    @abc.abstractmethod
    def list_sources(self) -> List[Source]:
        ...

    # Documents

    @abc.abstractmethod
    def get_document(self, document_id: uuid.UUID) -> Optional[Document]:
        ...

    @abc.abstractmethod
    def create_document(self, title: str, source_id: Optional[uuid.UUID] = None) -> Document:
        ...

    @abc.abstractmethod
    def update_document(
        self, document_id: uuid.UUID, *, status: str, body: Optional[str] = None
    ) -> Document:
        """Set status (and body when given). Raises NotFoundError if missing."""

    @abc.abstractmethod
    def list_documents(self) -> List[Document]:
        ...

    @abc.abstractmethod
    def count_documents(self, status: Optional[str] = None) -> int:
        ...

    # Runs

    @abc.abstractmethod
    def create_run(self, run_type: str, status: str, document_id: uuid.UUID, message: str) -> Run:
        ...

    @abc.abstractmethod
    def list_runs(self, document_id: Optional[uuid.UUID] = None) -> List[Run]:
        ...

    @abc.abstractmethod
    def count_runs_since(self, since: datetime) -> int:
        ...

    # Jobs

    @abc.abstractmethod
    def get_job(self, job_id: uuid.UUID) -> Optional[Job]:
        ...

    @abc.abstractmethod
    def create_job(self, job_type: str, payload_json: Dict[str, Any]) -> Job:
        ...

    @abc.abstractmethod
    def update_job(self, job_id: uuid.UUID, *, status: str) -> Job:
        """Set job status. Raises NotFoundError if missing."""

    @abc.abstractmethod
    def claim_job(self, job_id: uuid.UUID) -> Optional[Job]:
        """
        Atomically move a job from queued to running.

        Returns:
            The running job, or None if the job was not queued
        """

    @abc.abstractmethod
    def next_queued_job(self) -> Optional[Job]:
        ...

    @abc.abstractmethod
    def list_jobs(self, status: Optional[str] = None) -> List[Job]:
        ...


class SqlContentStore(ContentStore):
    """ContentStore backed by a SQLAlchemy session. Commits after every write."""

    def __init__(self, db: Session):
        self.db = db

    def _commit(self):
        # Leave the session usable for the next write if this one fails
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def get_source(self, source_id):
        return self.db.get(Source, source_id)

    def create_source(self, title, source_type, content):
        source = Source(title=title, source_type=source_type, content=content)
        self.db.add(source)
        self._commit()
        return source

    def list_sources(self):
        return list(self.db.scalars(select(Source).order_by(Source.created_at.desc())))

    def get_document(self, document_id):
        return self.db.get(Document, document_id)

    def create_document(self, title, source_id=None):
        document = Document(title=title, source_id=source_id, status=DOCUMENT_DRAFT, body="")
        self.db.add(document)
        self._commit()
        return document

    def update_document(self, document_id, *, status, body=None):
        document = self.db.get(Document, document_id)
        if document is None:
            raise NotFoundError("document not found")

        if body is not None:
            document.body = body
        document.status = status
        self._commit()
        return document

    def list_documents(self):
        return list(self.db.scalars(select(Document).order_by(Document.created_at.desc())))

    def count_documents(self, status=None):
        query = select(func.count(Document.id))
        if status is not None:
            query = query.where(Document.status == status)
        return self.db.scalar(query)

    def create_run(self, run_type, status, document_id, message):
        run = Run(run_type=run_type, status=status, document_id=document_id, message=message)
        self.db.add(run)
        self._commit()
        return run

    def list_runs(self, document_id=None):
        query = select(Run).order_by(Run.created_at.desc())
        if document_id is not None:
            query = query.where(Run.document_id == document_id)
        return list(self.db.scalars(query))

    def count_runs_since(self, since):
        return self.db.scalar(select(func.count(Run.id)).where(Run.created_at >= since))

    def get_job(self, job_id):
        # Job status is written by other sessions; never serve it from the identity map
        return self.db.get(Job, job_id, populate_existing=True)

    def create_job(self, job_type, payload_json):
        job = Job(job_type=job_type, payload_json=payload_json, status=JOB_QUEUED)
        self.db.add(job)
        self._commit()
        return job

    def update_job(self, job_id, *, status):
        job = self.db.get(Job, job_id)
        if job is None:
            raise NotFoundError("job not found")

        job.status = status
        self._commit()
        return job

    def claim_job(self, job_id):
        result = self.db.execute(
            update(Job)
            .where(Job.id == job_id, Job.status == JOB_QUEUED)
            .values(status=JOB_RUNNING)
            .execution_options(synchronize_session=False)
        )
        self._commit()

        if result.rowcount != 1:
            return None
        return self.db.get(Job, job_id, populate_existing=True)

    def next_queued_job(self):
        return self.db.scalars(
            select(Job).where(Job.status == JOB_QUEUED).order_by(Job.created_at).limit(1)
        ).first()

    def list_jobs(self, status=None):
        query = select(Job).order_by(Job.created_at.desc())
        if status is not None:
            query = query.where(Job.status == status)
        return list(self.db.scalars(query))


def _newest_first(records):
    # Reverse insertion order first so ties on created_at stay newest-first
    return sorted(reversed(records), key=lambda r: r.created_at, reverse=True)


class InMemoryContentStore(ContentStore):
    """Dict-backed ContentStore for tests and scripting. Not thread-safe."""

    def __init__(self):
        self.sources: Dict[uuid.UUID, Source] = {}
        self.documents: Dict[uuid.UUID, Document] = {}
        self.runs: List[Run] = []
        self.jobs: Dict[uuid.UUID, Job] = {}

    def get_source(self, source_id):
        return self.sources.get(source_id)

    def create_source(self, title, source_type, content):
        source = Source(
            id=uuid.uuid4(),
            title=title,
            source_type=source_type,
            content=content,
            created_at=datetime.utcnow(),
        )
        self.sources[source.id] = source
        return source

    def list_sources(self):
        return _newest_first(list(self.sources.values()))

    def get_document(self, document_id):
        return self.documents.get(document_id)

    def create_document(self, title, source_id=None):
        document = Document(
            id=uuid.uuid4(),
            title=title,
            source_id=source_id,
            status=DOCUMENT_DRAFT,
            body="",
            created_at=datetime.utcnow(),
        )
        self.documents[document.id] = document
        return document

    def update_document(self, document_id, *, status, body=None):
        document = self.documents.get(document_id)
        if document is None:
            raise NotFoundError("document not found")

        if body is not None:
            document.body = body
        document.status = status
        return document

    def list_documents(self):
        return _newest_first(list(self.documents.values()))

    def count_documents(self, status=None):
        return sum(1 for d in self.documents.values() if status is None or d.status == status)

    def create_run(self, run_type, status, document_id, message):
        run = Run(
            id=uuid.uuid4(),
            run_type=run_type,
            status=status,
            document_id=document_id,
            message=message,
            created_at=datetime.utcnow(),
        )
        self.runs.append(run)
        return run

    def list_runs(self, document_id=None):
        runs = [r for r in self.runs if document_id is None or r.document_id == document_id]
        return _newest_first(runs)

    def count_runs_since(self, since):
        return sum(1 for r in self.runs if r.created_at >= since)

    def get_job(self, job_id):
        return self.jobs.get(job_id)

    def create_job(self, job_type, payload_json):
        job = Job(
            id=uuid.uuid4(),
            job_type=job_type,
            payload_json=dict(payload_json),
            status=JOB_QUEUED,
            created_at=datetime.utcnow(),
        )
        self.jobs[job.id] = job
        return job

    def update_job(self, job_id, *, status):
        job = self.jobs.get(job_id)
        if job is None:
            raise NotFoundError("job not found")

        job.status = status
        return job

    def claim_job(self, job_id):
        job = self.jobs.get(job_id)
        if job is None or job.status != JOB_QUEUED:
            return None

        job.status = JOB_RUNNING
        return job

    def next_queued_job(self):
        queued = [j for j in self.jobs.values() if j.status == JOB_QUEUED]
        # dicts keep insertion order, so min() breaks ties on the oldest
        return min(queued, key=lambda j: j.created_at) if queued else None

    def list_jobs(self, status=None):
        jobs = [j for j in self.jobs.values() if status is None or j.status == status]
        return _newest_first(jobs)
