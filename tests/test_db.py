import pytest
from unittest.mock import patch
from sqlalchemy.exc import OperationalError

from config import SentimentConfig
from moviesense.errors import PersistenceError


def test_create_assigns_increasing_ids(store):
    first = store.create("A great film.", "Positive", "Praise.")
    second = store.create("A dull film.", "Negative", "Criticism.")

    assert first.id is not None
    assert second.id > first.id
    assert first.created_at is not None


def test_get_returns_stored_record(store):
    created = store.create("Runs two hours.", "Neutral", "Purely factual.")

    loaded = store.get(created.id)

    assert loaded.id == created.id
    assert loaded.text == "Runs two hours."
    assert loaded.sentiment == "Neutral"
    assert loaded.explanation == "Purely factual."


def test_get_missing_returns_none(store):
    assert store.get(9999) is None


def test_commit_failure_wrapped(store, row_count):
    with patch.object(store, "SessionLocal") as session_factory:
        session = session_factory.return_value
        session.commit.side_effect = OperationalError("INSERT", {}, Exception("database is locked"))

        with pytest.raises(PersistenceError):
            store.create("A great film.", "Positive", "Praise.")

        session.rollback.assert_called_once()
        session.close.assert_called_once()

    assert row_count() == 0


def test_read_failure_has_load_message(store):
    with patch.object(store, "SessionLocal") as session_factory:
        session_factory.return_value.get.side_effect = OperationalError("SELECT", {}, Exception("no such table"))

        with pytest.raises(PersistenceError) as exc_info:
            store.get(1)

    assert exc_info.value.message == SentimentConfig.MSG_LOAD_FAILED
