"""Shared fixtures: a temporary seeded store and two signed-up users."""

import pytest

from resumekit.contexts.accounts import sign_up
from resumekit.contexts.catalog import load_seed_templates
from resumekit.contexts.store import ResumeStore
from resumekit.utils import event_logging


@pytest.fixture(autouse=True)
def no_event_file(monkeypatch):
    """Keep lifecycle events out of the working directory unless a test opts in."""
    monkeypatch.setattr(event_logging, "EVENTS_FILE", None)


@pytest.fixture
def events_file(tmp_path, monkeypatch):
    path = tmp_path / "events.log"
    monkeypatch.setattr(event_logging, "EVENTS_FILE", path)
    return path


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "resumekit.db"


@pytest.fixture
def store(db_path):
    store = ResumeStore.create(db_path, template_seeds=load_seed_templates())
    yield store
    store.close()


@pytest.fixture
def alice(store):
    return sign_up(store, "alice@example.com", "correct-horse", display_name="Alice")


@pytest.fixture
def bob(store):
    return sign_up(store, "bob@example.com", "battery-staple", display_name="Bob")
