"""Document-related Pydantic schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.run import RunRead


class DocumentCreate(BaseModel):
    """Schema for creating a document."""

    title: str = Field(min_length=1)
    source_id: Optional[UUID] = None


class DocumentRead(BaseModel):
    """Document as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    source_id: Optional[UUID]
    status: str
    body: str
    created_at: datetime


class TransitionResponse(BaseModel):
    """Response after a generate or publish transition."""

    document: DocumentRead
    run: RunRead
