"""Document routes."""

import uuid
from typing import List

from fastapi import APIRouter, Depends

from app.dependencies import get_engine, get_store
from app.errors import NotFoundError
from app.schemas.document import DocumentCreate, DocumentRead, TransitionResponse
from app.schemas.run import RunRead
from app.services import content
from app.services.store import ContentStore
from app.services.transitions import TransitionEngine, TransitionResult

router = APIRouter(prefix="/documents", tags=["documents"])


def _transition_response(result: TransitionResult) -> TransitionResponse:
    return TransitionResponse(
        document=DocumentRead.model_validate(result.document),
        run=RunRead.model_validate(result.run),
    )


@router.post("", response_model=DocumentRead, status_code=201)
def create_document(
    data: DocumentCreate,
    store: ContentStore = Depends(get_store),
):
    """Create a draft document, optionally linked to a source."""
    document = content.create_document(store, data.title, data.source_id)
    return DocumentRead.model_validate(document)


@router.get("", response_model=List[DocumentRead])
def list_documents(store: ContentStore = Depends(get_store)):
    """List documents, newest first."""
    return [DocumentRead.model_validate(d) for d in store.list_documents()]


@router.get("/{document_id}", response_model=DocumentRead)
def get_document(
    document_id: uuid.UUID,
    store: ContentStore = Depends(get_store),
):
    """Get a single document."""
    document = store.get_document(document_id)
    if document is None:
        raise NotFoundError("document not found")
    return DocumentRead.model_validate(document)


@router.get("/{document_id}/runs", response_model=List[RunRead])
def list_document_runs(
    document_id: uuid.UUID,
    store: ContentStore = Depends(get_store),
):
    """Audit trail for a document, newest first."""
    if store.get_document(document_id) is None:
        raise NotFoundError("document not found")
    return [RunRead.model_validate(r) for r in store.list_runs(document_id=document_id)]


@router.post("/{document_id}/generate", response_model=TransitionResponse)
def generate_document(
    document_id: uuid.UUID,
    engine: TransitionEngine = Depends(get_engine),
):
    """Regenerate the document body from its source."""
    return _transition_response(engine.generate(document_id))


@router.post("/{document_id}/publish", response_model=TransitionResponse)
def publish_document(
    document_id: uuid.UUID,
    engine: TransitionEngine = Depends(get_engine),
):
    """Publish the document (simulated)."""
    return _transition_response(engine.publish(document_id))
