"""Dashboard route."""

from fastapi import APIRouter, Depends

from app.dependencies import get_store
from app.schemas.dashboard import DashboardSummary
from app.services.dashboard import dashboard_summary
from app.services.store import ContentStore

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardSummary)
def dashboard(store: ContentStore = Depends(get_store)):
    """Document and run counts."""
    return dashboard_summary(store)
