"""Run model."""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Index, Text, Uuid

from app.database import Base

RUN_GENERATE = "generate"
RUN_PUBLISH = "publish"

RUN_SUCCESS = "success"


class Run(Base):
    """Append-only audit record of one document transition."""

    __tablename__ = "runs"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    run_type = Column(Text, nullable=False)  # 'generate', 'publish'
    status = Column(Text, nullable=False)  # 'success', 'failure'
    document_id = Column(Uuid(as_uuid=True), nullable=False)
    message = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("idx_runs_document_id", "document_id"),
        Index("idx_runs_created_at", "created_at"),
    )
