"""Tests for the job runner."""

import uuid

import pytest

from app.errors import JobConflictError, JobExecutionError, NotFoundError
from app.services.job_runner import JobRunner
from app.services.store import SqlContentStore


class RecordingStore:
    """Wraps a store and records every job status write in order."""

    def __init__(self, store):
        self._store = store
        self.job_statuses = []

    def __getattr__(self, name):
        return getattr(self._store, name)

    def create_job(self, job_type, payload_json):
        job = self._store.create_job(job_type, payload_json)
        self.job_statuses.append(job.status)
        return job

    def claim_job(self, job_id):
        job = self._store.claim_job(job_id)
        if job is not None:
            self.job_statuses.append(job.status)
        return job

    def update_job(self, job_id, *, status):
        job = self._store.update_job(job_id, status=status)
        self.job_statuses.append(job.status)
        return job


def test_generate_job_completes(store):
    """Test a generate job transitions the document and finishes done."""
    source = store.create_source("A", "article", "Hello world")
    document = store.create_document("D", source_id=source.id)
    job = store.create_job("generate", {"document_id": str(document.id)})

    finished = JobRunner(store).run(job.id)

    assert finished.status == "done"
    assert store.get_document(document.id).status == "generated"
    assert "Hello world" in store.get_document(document.id).body
    assert len(store.list_runs(document_id=document.id)) == 1


def test_publish_job_scenario(store):
    """Test enqueue + run of a publish job on a sourceless document."""
    document = store.create_document("D")
    job = store.create_job("publish", {"document_id": str(document.id)})

    finished = JobRunner(store).run(job.id)

    assert finished.status == "done"
    assert store.get_job(job.id).status == "done"
    assert store.get_document(document.id).status == "published"


def test_status_sequence_on_success(store):
    """Test the observed status order is queued, running, done."""
    recording = RecordingStore(store)
    document = recording.create_document("D")
    job = recording.create_job("publish", {"document_id": str(document.id)})

    JobRunner(recording).run(job.id)

    assert recording.job_statuses == ["queued", "running", "done"]


def test_missing_document_id_fails_job(store):
    """Test a payload without document_id ends failed and touches nothing."""
    recording = RecordingStore(store)
    document = recording.create_document("D")
    job = recording.create_job("generate", {})

    with pytest.raises(JobExecutionError) as exc_info:
        JobRunner(recording).run(job.id)

    assert "document_id" in exc_info.value.message
    assert exc_info.value.job.status == "failed"
    assert recording.job_statuses == ["queued", "running", "failed"]
    assert store.get_document(document.id).status == "draft"
    assert store.list_runs() == []


def test_malformed_document_id_fails_job(store):
    """Test a non-UUID document_id is rejected."""
    job = store.create_job("publish", {"document_id": "not-a-uuid"})

    with pytest.raises(JobExecutionError) as exc_info:
        JobRunner(store).run(job.id)

    assert "document_id" in exc_info.value.message
    assert store.get_job(job.id).status == "failed"


def test_unsupported_job_type_fails_job(store):
    """Test an unknown job type ends failed."""
    document = store.create_document("D")
    job = store.create_job("archive", {"document_id": str(document.id)})

    with pytest.raises(JobExecutionError) as exc_info:
        JobRunner(store).run(job.id)

    assert "unsupported job_type" in exc_info.value.message
    assert store.get_job(job.id).status == "failed"
    assert store.get_document(document.id).status == "draft"


def test_missing_document_fails_job(store):
    """Test a job pointing at an unknown document ends failed."""
    job = store.create_job("generate", {"document_id": str(uuid.uuid4())})

    with pytest.raises(JobExecutionError) as exc_info:
        JobRunner(store).run(job.id)

    assert exc_info.value.message == "document not found"
    assert isinstance(exc_info.value.__cause__, NotFoundError)
    assert store.get_job(job.id).status == "failed"


def test_unexpected_error_fails_job(store):
    """Test errors outside the taxonomy still mark the job failed."""
    document = store.create_document("D")
    job = store.create_job("generate", {"document_id": str(document.id)})
    runner = JobRunner(store)

    def explode(document_id):
        raise RuntimeError("disk full")

    runner.transitions["generate"] = explode

    with pytest.raises(JobExecutionError) as exc_info:
        runner.run(job.id)

    assert exc_info.value.message == "disk full"
    assert store.get_job(job.id).status == "failed"


def test_missing_job_raises_not_found(store):
    """Test running an unknown job."""
    with pytest.raises(NotFoundError):
        JobRunner(store).run(uuid.uuid4())


def test_done_job_cannot_rerun(store):
    """Test a finished job is rejected instead of re-executed."""
    document = store.create_document("D")
    job = store.create_job("publish", {"document_id": str(document.id)})
    runner = JobRunner(store)
    runner.run(job.id)

    with pytest.raises(JobConflictError):
        runner.run(job.id)

    assert store.get_job(job.id).status == "done"
    assert len(store.list_runs()) == 1


def test_failed_job_is_terminal(store):
    """Test a failed job stays failed and must be re-enqueued."""
    job = store.create_job("generate", {})
    runner = JobRunner(store)
    with pytest.raises(JobExecutionError):
        runner.run(job.id)

    with pytest.raises(JobConflictError):
        runner.run(job.id)

    assert store.get_job(job.id).status == "failed"


def test_running_job_rejects_second_runner(store):
    """Test a job already claimed cannot be executed twice."""
    document = store.create_document("D")
    job = store.create_job("generate", {"document_id": str(document.id)})
    store.claim_job(job.id)

    with pytest.raises(JobConflictError) as exc_info:
        JobRunner(store).run(job.id)

    assert "running" in exc_info.value.message
    assert store.list_runs() == []


@pytest.mark.parametrize("job_type", ["generate", "publish"])
def test_failed_document_write_fails_job_without_run(store, failing_document_writes, job_type):
    """Test a document write error ends the job failed with no audit run."""
    document = store.create_document("D")
    job = store.create_job(job_type, {"document_id": str(document.id)})
    failing = failing_document_writes

    with pytest.raises(JobExecutionError) as exc_info:
        JobRunner(failing).run(job.id)

    assert exc_info.value.message == "document write failed"
    assert exc_info.value.job.status == "failed"
    assert failing.run_writes == 0
    assert store.list_runs() == []
    assert store.get_job(job.id).status == "failed"


def test_conflict_reports_status_written_by_another_session(session_factory):
    """Test a losing runner sees the job status committed elsewhere."""
    first_db = session_factory()
    second_db = session_factory()
    first = SqlContentStore(first_db)
    second = SqlContentStore(second_db)

    document = first.create_document("D")
    job = first.create_job("publish", {"document_id": str(document.id)})
    assert first.get_job(job.id).status == "queued"

    JobRunner(second).run(job.id)

    with pytest.raises(JobConflictError) as exc_info:
        JobRunner(first).run(job.id)

    assert exc_info.value.message == "job is not queued (status: done)"
    assert first.get_job(job.id).status == "done"
    assert len(first.list_runs()) == 1

    first_db.close()
    second_db.close()
