"""Document state transitions: generate and publish."""

import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from app.errors import NotFoundError
from app.models.document import DOCUMENT_GENERATED, DOCUMENT_PUBLISHED, Document
from app.models.run import RUN_GENERATE, RUN_PUBLISH, RUN_SUCCESS, Run
from app.services.generator import generate_document_body
from app.services.store import ContentStore

logger = logging.getLogger(__name__)

GENERATE_MESSAGE = "Generated content from source"
PUBLISH_MESSAGE = "Published (simulated)"


@dataclass
class TransitionResult:
    """Updated document and the audit run recorded for it."""

    document: Document
    run: Run
    prompt_head: Optional[str] = None


class TransitionEngine:
    """
    Applies generate/publish to documents and records a run for each.

    Current status is never checked: publishing a draft or regenerating a
    published document both succeed. The document write always completes
    before the run is recorded.
    """

    def __init__(self, store: ContentStore):
        self.store = store

    def _load_document(self, document_id: uuid.UUID) -> Document:
        document = self.store.get_document(document_id)
        if document is None:
            raise NotFoundError("document not found")
        return document

    def generate(self, document_id: uuid.UUID) -> TransitionResult:
        """
        Rebuild the document body from its source and mark it generated.

        Args:
            document_id: Document to generate

        Returns:
            TransitionResult with the updated document and its run

        Raises:
            NotFoundError: If the document does not exist
        """
        document = self._load_document(document_id)

        source = None
        if document.source_id is not None:
            source = self.store.get_source(document.source_id)
            if source is None:
                logger.warning(
                    f"Source {document.source_id} for document {document_id} not found, "
                    "generating without source"
                )

        generated = generate_document_body(source)
        logger.info(f"Generating document {document_id}: {generated.prompt_head}")

        updated = self.store.update_document(
            document_id, status=DOCUMENT_GENERATED, body=generated.body
        )
        run = self.store.create_run(RUN_GENERATE, RUN_SUCCESS, document_id, GENERATE_MESSAGE)

        logger.info(f"Document {document_id} generated (run {run.id})")
        return TransitionResult(document=updated, run=run, prompt_head=generated.prompt_head)

    def publish(self, document_id: uuid.UUID) -> TransitionResult:
        """Mark the document published without touching its body."""
        self._load_document(document_id)

        updated = self.store.update_document(document_id, status=DOCUMENT_PUBLISHED)
        run = self.store.create_run(RUN_PUBLISH, RUN_SUCCESS, document_id, PUBLISH_MESSAGE)

        logger.info(f"Document {document_id} published (run {run.id})")
        return TransitionResult(document=updated, run=run)
