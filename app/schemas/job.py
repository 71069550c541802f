"""Job-related Pydantic schemas.

Each job type is a tagged variant with its own typed payload, so a job
with an unknown type or a malformed payload is rejected when it is
enqueued rather than when it runs.
"""

from datetime import datetime
from typing import Annotated, Any, Dict, Literal, Union
from uuid import UUID

import pydantic
from pydantic import BaseModel, ConfigDict, Field, RootModel

from app.errors import ValidationError


class DocumentJobPayload(BaseModel):
    """Payload for jobs that transition a single document."""

    document_id: UUID


class GenerateJobSpec(BaseModel):
    """Regenerate a document body from its source."""

    job_type: Literal["generate"]
    payload_json: DocumentJobPayload


class PublishJobSpec(BaseModel):
    """Mark a document as published."""

    job_type: Literal["publish"]
    payload_json: DocumentJobPayload


JobSpec = Annotated[Union[GenerateJobSpec, PublishJobSpec], Field(discriminator="job_type")]


class JobCreate(RootModel[JobSpec]):
    """Request body for enqueueing a job."""


class JobRead(BaseModel):
    """Job as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    job_type: str
    payload_json: Dict[str, Any]
    status: str
    created_at: datetime


def parse_document_payload(payload_json: Any) -> DocumentJobPayload:
    """
    Validate a stored job payload.

    Args:
        payload_json: Raw payload from the jobs table

    Returns:
        Typed payload

    Raises:
        ValidationError: If document_id is missing or not a UUID
    """
    try:
        return DocumentJobPayload.model_validate(payload_json or {})
    except pydantic.ValidationError as e:
        raise ValidationError("payload_json.document_id is required") from e
