"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.database import Base, get_db
from app.services.store import InMemoryContentStore, SqlContentStore


@pytest.fixture(scope="function")
def session_factory():
    """Session factory bound to a fresh in-memory SQLite database."""
    # StaticPool shares one connection so every session sees the same database
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    yield sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)

    engine.dispose()


@pytest.fixture(scope="function")
def test_db(session_factory):
    """Create a test database session for each test."""
    db = session_factory()

    yield db

    db.close()


@pytest.fixture(params=["sql", "memory"])
def store(request, test_db):
    """Content store, once backed by SQLite and once in memory."""
    if request.param == "sql":
        return SqlContentStore(test_db)
    return InMemoryContentStore()


@pytest.fixture
def client(session_factory):
    """API client whose requests use the test database."""
    from app.main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    # Not entered as a context manager: startup migrations and the worker stay off
    yield TestClient(app)
    app.dependency_overrides.clear()


class FailingDocumentWrites:
    """Wraps a store so document writes fail and run writes are counted."""

    def __init__(self, store):
        self._store = store
        self.run_writes = 0

    def __getattr__(self, name):
        return getattr(self._store, name)

    def update_document(self, document_id, *, status, body=None):
        raise RuntimeError("document write failed")

    def create_run(self, *args, **kwargs):
        self.run_writes += 1
        return self._store.create_run(*args, **kwargs)


@pytest.fixture
def failing_document_writes(store):
    """The store fixture with failing document writes."""
    return FailingDocumentWrites(store)
