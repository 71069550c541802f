"""SQLAlchemy ORM models."""

from app.models.document import Document
from app.models.job import Job
from app.models.run import Run
from app.models.source import Source

__all__ = [
    "Source",
    "Document",
    "Run",
    "Job",
]
