"""Creation of sources, documents and jobs."""

import logging
import uuid
from typing import Optional, Union

from app.errors import ValidationError
from app.models.document import Document
from app.models.job import Job
from app.models.source import Source
from app.schemas.job import GenerateJobSpec, PublishJobSpec
from app.services.store import ContentStore

logger = logging.getLogger(__name__)


def create_source(store: ContentStore, title: str, source_type: str, content: str) -> Source:
    """Create an immutable source."""
    source = store.create_source(title=title, source_type=source_type, content=content)
    logger.info(f"Created source {source.id} ({source.source_type})")
    return source


def create_document(
    store: ContentStore, title: str, source_id: Optional[uuid.UUID] = None
) -> Document:
    """
    Create a draft document, optionally linked to a source.

    The link is checked only here; a source that disappears later is
    tolerated by the generate transition.

    Raises:
        ValidationError: If source_id does not reference an existing source
    """
    if source_id is not None and store.get_source(source_id) is None:
        raise ValidationError(f"source_id {source_id} does not reference an existing source")

    document = store.create_document(title=title, source_id=source_id)
    logger.info(f"Created document {document.id}")
    return document


def enqueue_job(store: ContentStore, spec: Union[GenerateJobSpec, PublishJobSpec]) -> Job:
    """
    Create a queued job from a validated job variant.

    Args:
        spec: GenerateJobSpec or PublishJobSpec
    """
    if not isinstance(spec, (GenerateJobSpec, PublishJobSpec)):
        raise ValidationError(f"unsupported job spec: {type(spec).__name__}")

    job = store.create_job(spec.job_type, spec.payload_json.model_dump(mode="json"))
    logger.info(f"Enqueued job {job.id} ({job.job_type})")
    return job
