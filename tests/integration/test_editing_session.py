"""Integration tests for the editing session state machine."""

import pytest

from resumekit.contexts.client import EditingSession, Notifier, SessionState, SessionStateError, routes
from resumekit.contexts.resumes import create_resume, delete_resume, load_resume, set_resume_visibility
from resumekit.contexts.store import ResumeContent
from resumekit.utils import event_logging


@pytest.fixture
def resume(store, alice):
    return create_resume(store, alice, title="Draft")


@pytest.fixture
def session(store, alice, resume):
    session = EditingSession(store, alice, resume.id)
    assert session.load()
    return session


@pytest.mark.integration
def test_load_brings_session_to_ready(session, resume):
    assert session.state is SessionState.READY
    assert session.title == "Draft"
    assert session.content.is_empty
    assert not session.is_dirty
    assert not session.is_loading


@pytest.mark.integration
def test_edits_are_local_until_save(store, alice, session, resume):
    session.set_title("Engineer CV")
    session.update_personal_info("fullName", "Alice Example")
    session.add_skill("Python")

    assert session.is_dirty
    assert load_resume(store, alice, resume.id).content.is_empty

    assert session.save()
    assert not session.is_dirty
    stored = load_resume(store, alice, resume.id)
    assert stored.title == "Engineer CV"
    assert stored.content.personal_info.full_name == "Alice Example"
    assert stored.content.skills == ["Python"]


@pytest.mark.integration
def test_save_notifies_and_returns_to_ready(session):
    assert session.save()

    assert session.state is SessionState.READY
    assert session.notifier.last.title == "Resume saved"
    assert session.notifier.last.description == "Your changes have been saved successfully."
    assert not session.notifier.last.is_error


@pytest.mark.integration
def test_experience_entries(session):
    entry_id = session.add_experience(company="Acme", position="Engineer")
    session.update_experience(entry_id, "startDate", "2021-02")
    session.update_experience(entry_id, "end_date", "2023-01")

    entry = session.content.experience[0]
    assert (entry.company, entry.position, entry.start_date, entry.end_date) == (
        "Acme", "Engineer", "2021-02", "2023-01",
    )


@pytest.mark.integration
def test_add_then_remove_restores_content(session):
    session.add_education(school="MIT")
    before = session.content.copy()

    entry_id = session.add_education()
    session.remove_education(entry_id)
    experience_id = session.add_experience()
    session.remove_experience(experience_id)
    index = session.add_skill("Go")
    session.remove_skill(index)

    assert session.content == before


@pytest.mark.integration
def test_entry_ids_are_unique(session):
    ids = {session.add_experience() for _ in range(5)}
    assert len(ids) == 5


@pytest.mark.integration
def test_skills_by_position(session):
    session.add_skill("Python")
    session.add_skill("")
    session.update_skill(1, "SQL")
    assert session.content.skills == ["Python", "SQL"]

    session.remove_skill(0)
    assert session.content.skills == ["SQL"]


@pytest.mark.integration
def test_invalid_edits(session):
    with pytest.raises(KeyError):
        session.update_experience("missing", "company", "Acme")
    with pytest.raises(KeyError):
        session.remove_education("missing")
    with pytest.raises(IndexError):
        session.update_skill(0, "Go")
    with pytest.raises(IndexError):
        session.remove_skill(-1)
    with pytest.raises(ValueError):
        session.update_personal_info("salary", "1")
    with pytest.raises(TypeError):
        session.set_title(None)
    with pytest.raises(TypeError):
        session.add_skill(3)

    assert session.content.is_empty


@pytest.mark.integration
def test_edit_before_load_is_rejected(store, alice, resume):
    session = EditingSession(store, alice, resume.id)
    with pytest.raises(SessionStateError):
        session.set_title("Too early")
    with pytest.raises(SessionStateError):
        session.save()


@pytest.mark.integration
def test_load_failure_navigates_to_dashboard(store, bob, resume):
    notifier = Notifier()
    session = EditingSession(store, bob, resume.id, notifier)

    assert not session.load()
    assert session.state is SessionState.NAVIGATING_AWAY
    assert session.redirect == routes.DASHBOARD
    assert notifier.last.description == "Failed to load resume"
    assert notifier.last.is_error
    with pytest.raises(SessionStateError):
        session.add_skill("Go")


@pytest.mark.integration
def test_save_failure_keeps_local_content(store, alice, session, resume):
    session.add_skill("Python")
    delete_resume(store, alice, resume.id)

    assert not session.save()
    assert session.state is SessionState.READY
    assert session.content.skills == ["Python"]
    assert session.is_dirty
    assert session.notifier.last.description == "Failed to save resume"


@pytest.mark.integration
def test_non_owner_can_open_public_resume_but_not_save(store, alice, bob, resume):
    set_resume_visibility(store, alice, resume.id, True)
    session = EditingSession(store, bob, resume.id)

    assert session.load()
    session.set_title("Hijacked")
    assert not session.save()
    assert load_resume(store, alice, resume.id).title == "Draft"


@pytest.mark.integration
def test_last_save_wins(store, alice, resume):
    first = EditingSession(store, alice, resume.id)
    second = EditingSession(store, alice, resume.id)
    first.load()
    second.load()

    first.set_title("From first tab")
    second.set_title("From second tab")
    first.save()
    second.save()

    assert load_resume(store, alice, resume.id).title == "From second tab"


@pytest.mark.integration
def test_leave_and_preview_navigate(session, resume):
    assert session.preview() == routes.preview_route(resume.id)
    assert session.state is SessionState.NAVIGATING_AWAY

    other = EditingSession(session.store, session.identity, resume.id)
    other.load()
    assert other.leave() == routes.DASHBOARD
    assert other.redirect == "/dashboard"


@pytest.mark.integration
def test_saved_content_is_not_aliased(store, alice, session, resume):
    session.add_skill("Python")
    session.save()
    session.update_skill(0, "Rust")

    assert session.record.content == ResumeContent(skills=["Python"])
    assert load_resume(store, alice, resume.id).content.skills == ["Python"]


@pytest.mark.integration
def test_save_succeeds_when_event_log_is_unwritable(store, alice, session, resume, tmp_path, monkeypatch):
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("", encoding="utf-8")
    monkeypatch.setattr(event_logging, "EVENTS_FILE", blocker / "events.log")

    session.set_title("Saved title")

    assert session.save()
    assert not session.is_dirty
    assert session.notifier.last.title == "Resume saved"
    assert load_resume(store, alice, resume.id).title == "Saved title"
