"""Document model."""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Index, Text, Uuid

from app.database import Base

DOCUMENT_DRAFT = "draft"
DOCUMENT_GENERATED = "generated"
DOCUMENT_PUBLISHED = "published"


class Document(Base):
    """Artifact moving through draft -> generated -> published."""

    __tablename__ = "documents"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(Text, nullable=False)
    # Weak reference, no foreign key: sources are looked up, never owned
    source_id = Column(Uuid(as_uuid=True), nullable=True)
    status = Column(Text, nullable=False, default=DOCUMENT_DRAFT)
    body = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (Index("idx_documents_status", "status"),)
