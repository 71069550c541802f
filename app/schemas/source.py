"""Source-related Pydantic schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SourceCreate(BaseModel):
    """Schema for creating a source."""

    title: str = Field(min_length=1)
    source_type: str = Field(min_length=1)
    content: str = Field(min_length=1)


class SourceRead(BaseModel):
    """Source as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    source_type: str
    content: str
    created_at: datetime
