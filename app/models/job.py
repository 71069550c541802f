"""Job model for deferred transitions."""

import uuid
from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, Index, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB

from app.database import Base

JOB_QUEUED = "queued"
JOB_RUNNING = "running"
JOB_DONE = "done"
JOB_FAILED = "failed"


class Job(Base):
    """Job represents a queued transition for the runner."""

    __tablename__ = "jobs"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    job_type = Column(Text, nullable=False)  # 'generate', 'publish'
    payload_json = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False, default=dict)
    status = Column(Text, nullable=False, default=JOB_QUEUED)  # 'queued', 'running', 'done', 'failed'
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (Index("idx_jobs_status", "status"),)
