"""Dashboard schema."""

from pydantic import BaseModel


class DashboardSummary(BaseModel):
    """Document and run counts for the dashboard."""

    total_documents: int
    published_documents: int
    today_runs: int
