"""FastAPI dependencies wiring the core services to a request session."""

from fastapi import Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.services.job_runner import JobRunner
from app.services.store import ContentStore, SqlContentStore
from app.services.transitions import TransitionEngine


def get_store(db: Session = Depends(get_db)) -> ContentStore:
    return SqlContentStore(db)


def get_engine(store: ContentStore = Depends(get_store)) -> TransitionEngine:
    return TransitionEngine(store)


def get_runner(store: ContentStore = Depends(get_store)) -> JobRunner:
    return JobRunner(store)
