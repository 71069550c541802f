"""Source routes."""

from typing import List

from fastapi import APIRouter, Depends

from app.dependencies import get_store
from app.schemas.source import SourceCreate, SourceRead
from app.services import content
from app.services.store import ContentStore

router = APIRouter(prefix="/sources", tags=["sources"])


@router.post("", response_model=SourceRead, status_code=201)
def create_source(
    data: SourceCreate,
    store: ContentStore = Depends(get_store),
):
    """Create a source."""
    source = content.create_source(store, data.title, data.source_type, data.content)
    return SourceRead.model_validate(source)


@router.get("", response_model=List[SourceRead])
def list_sources(store: ContentStore = Depends(get_store)):
    """List sources, newest first."""
    return [SourceRead.model_validate(s) for s in store.list_sources()]
