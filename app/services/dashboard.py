"""Read-only dashboard rollup."""

from datetime import datetime, timezone
from typing import Optional

from app.models.document import DOCUMENT_PUBLISHED
from app.schemas.dashboard import DashboardSummary
from app.services.store import ContentStore


def start_of_local_day(now: Optional[datetime] = None) -> datetime:
    """
    Local midnight of the current day as naive UTC, matching stored timestamps.

    Args:
        now: Aware or naive-local current time; defaults to the server clock
    """
    local_now = (now or datetime.now()).astimezone()
    midnight = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight.astimezone(timezone.utc).replace(tzinfo=None)


def dashboard_summary(store: ContentStore, now: Optional[datetime] = None) -> DashboardSummary:
    """Count documents, published documents and runs created today."""
    return DashboardSummary(
        total_documents=store.count_documents(),
        published_documents=store.count_documents(status=DOCUMENT_PUBLISHED),
        today_runs=store.count_runs_since(start_of_local_day(now)),
    )
