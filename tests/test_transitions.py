"""Tests for the generate/publish transition engine."""

import uuid

import pytest

from app.errors import NotFoundError
from app.services.generator import NO_SOURCE_BODY
from app.services.transitions import GENERATE_MESSAGE, PUBLISH_MESSAGE, TransitionEngine


def test_generate_without_source(store):
    """Test generation of a document with no linked source."""
    document = store.create_document("D")

    result = TransitionEngine(store).generate(document.id)

    assert result.document.status == "generated"
    assert result.document.body == NO_SOURCE_BODY
    assert result.run.run_type == "generate"
    assert result.run.status == "success"
    assert result.run.message == GENERATE_MESSAGE
    assert result.run.document_id == document.id


def test_generate_from_source(store):
    """Test body is derived from the linked source."""
    source = store.create_source("A", "article", "  Hello world  ")
    document = store.create_document("D", source_id=source.id)

    result = TransitionEngine(store).generate(document.id)

    assert "Hello world" in result.document.body
    assert "A" in result.document.body
    assert result.prompt_head == "mock-generate: A | article | Hello world"
    assert store.get_document(document.id).body == result.document.body


def test_generate_with_vanished_source_falls_back(store):
    """Test a dangling source_id generates like no source."""
    document = store.create_document("D", source_id=uuid.uuid4())

    result = TransitionEngine(store).generate(document.id)

    assert result.document.body == NO_SOURCE_BODY
    assert result.document.status == "generated"


def test_publish_keeps_body(store):
    """Test publish only changes status."""
    source = store.create_source("A", "article", "Hello world")
    document = store.create_document("D", source_id=source.id)
    engine = TransitionEngine(store)
    body = engine.generate(document.id).document.body

    result = engine.publish(document.id)

    assert result.document.status == "published"
    assert result.document.body == body
    assert result.run.run_type == "publish"
    assert result.run.message == PUBLISH_MESSAGE


def test_publish_draft_is_allowed(store):
    """Test no status precondition is enforced on publish."""
    document = store.create_document("D")

    result = TransitionEngine(store).publish(document.id)

    assert result.document.status == "published"
    assert result.document.body == ""


def test_generate_after_publish_downgrades_status(store):
    """Test regenerating a published document returns it to generated."""
    document = store.create_document("D")
    engine = TransitionEngine(store)
    engine.publish(document.id)

    result = engine.generate(document.id)

    assert result.document.status == "generated"


def test_each_transition_adds_one_run(store):
    """Test repeated transitions append a fresh run every time."""
    document = store.create_document("D")
    engine = TransitionEngine(store)

    for expected in range(1, 5):
        if expected % 2:
            engine.generate(document.id)
        else:
            engine.publish(document.id)
        assert len(store.list_runs(document_id=document.id)) == expected


@pytest.mark.parametrize("transition", ["generate", "publish"])
def test_missing_document_raises_not_found(store, transition):
    """Test transitions on unknown documents."""
    engine = TransitionEngine(store)

    with pytest.raises(NotFoundError):
        getattr(engine, transition)(uuid.uuid4())

    assert store.list_runs() == []


def test_generate_then_publish_scenario(store):
    """Test the source -> generate -> publish flow."""
    source = store.create_source("A", "article", "Hello world")
    document = store.create_document("D", source_id=source.id)
    engine = TransitionEngine(store)

    generated = engine.generate(document.id)

    assert "Hello world" in generated.document.body
    assert "A" in generated.document.body
    assert generated.document.status == "generated"
    assert len(store.list_runs(document_id=document.id)) == 1

    published = engine.publish(document.id)
    runs = store.list_runs(document_id=document.id)

    assert published.document.status == "published"
    assert len(runs) == 2
    assert published.run.run_type == "publish"


@pytest.mark.parametrize("transition", ["generate", "publish"])
def test_failed_document_write_records_no_run(store, failing_document_writes, transition):
    """Test the run is only written after the document write succeeds."""
    document = store.create_document("D")
    failing = failing_document_writes

    with pytest.raises(RuntimeError, match="document write failed"):
        getattr(TransitionEngine(failing), transition)(document.id)

    assert failing.run_writes == 0
    assert store.list_runs() == []
    assert store.get_document(document.id).status == "draft"
