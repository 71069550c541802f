"""Run-related Pydantic schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class RunRead(BaseModel):
    """Audit run as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    run_type: str
    status: str
    document_id: UUID
    message: str
    created_at: datetime
