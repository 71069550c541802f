"""Source model."""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Text, Uuid

from app.database import Base


class Source(Base):
    """Immutable input content that a document body is derived from."""

    __tablename__ = "sources"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(Text, nullable=False)
    source_type = Column(Text, nullable=False)  # 'article', 'note', 'transcript', ...
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
