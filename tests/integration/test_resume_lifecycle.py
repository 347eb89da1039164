"""Integration tests for the resume record lifecycle."""

import json

import pytest

from resumekit.contexts.resumes import (
    create_resume,
    delete_resume,
    list_resumes,
    load_resume,
    save_resume,
    set_resume_visibility,
)
from resumekit.contexts.store import (
    AccessDeniedError,
    ExperienceEntry,
    InvalidContentError,
    PersonalInfo,
    RecordNotFoundError,
    ResumeContent,
)
from resumekit.utils.event_logging import get_recent_events, log_resume_event


@pytest.fixture
def filled_content():
    return ResumeContent(
        personal_info=PersonalInfo(full_name="Alice Example", email="alice@example.com"),
        experience=[ExperienceEntry(company="Acme", position="Engineer", start_date="2021-02")],
        skills=["Python", "SQL"],
    )


@pytest.mark.integration
def test_create_then_load_is_empty(store, alice):
    created = create_resume(store, alice, "creative-edge")
    loaded = load_resume(store, alice, created.id)

    assert loaded.title == "Untitled Resume"
    assert loaded.template_id == "creative-edge"
    assert loaded.content.is_empty
    assert loaded.is_public is False
    assert loaded.is_owned_by(alice)


@pytest.mark.integration
def test_create_with_title(store, alice):
    assert create_resume(store, alice, title="Backend CV").title == "Backend CV"


@pytest.mark.integration
def test_create_with_unknown_template_fails(store, alice):
    with pytest.raises(RecordNotFoundError):
        create_resume(store, alice, "does-not-exist")
    assert list_resumes(store, alice) == []


@pytest.mark.integration
def test_anonymous_cannot_create(store):
    with pytest.raises(AccessDeniedError):
        create_resume(store, None)


@pytest.mark.integration
def test_save_round_trip(store, alice, filled_content):
    created = create_resume(store, alice)
    saved = save_resume(store, alice, created.id, "Engineer CV", filled_content)
    loaded = load_resume(store, alice, created.id)

    assert loaded.title == "Engineer CV"
    assert loaded.content == filled_content
    assert loaded.updated_at == saved.updated_at
    assert saved.updated_at > created.updated_at
    assert loaded.created_at == created.created_at


@pytest.mark.integration
def test_save_is_idempotent_but_refreshes_updated_at(store, alice, filled_content):
    created = create_resume(store, alice)
    first = save_resume(store, alice, created.id, "CV", filled_content)
    second = save_resume(store, alice, created.id, "CV", filled_content)

    assert first.content == second.content
    assert first.title == second.title
    assert second.updated_at > first.updated_at


@pytest.mark.integration
def test_save_rejects_malformed_content(store, alice):
    created = create_resume(store, alice)
    with pytest.raises(InvalidContentError):
        save_resume(store, alice, created.id, "CV", {"personalInfo": {"fullName": 5}})
    assert load_resume(store, alice, created.id).content.is_empty


@pytest.mark.integration
def test_save_accepts_stored_document(store, alice):
    created = create_resume(store, alice)
    saved = save_resume(store, alice, created.id, "CV", {"skills": ["Rust"]})
    assert saved.content == ResumeContent(skills=["Rust"])


@pytest.mark.integration
def test_other_user_cannot_save_or_delete(store, alice, bob, filled_content):
    created = create_resume(store, alice)

    with pytest.raises(AccessDeniedError):
        save_resume(store, bob, created.id, "Mine now", filled_content)
    with pytest.raises(AccessDeniedError):
        delete_resume(store, bob, created.id)

    assert load_resume(store, alice, created.id).title == "Untitled Resume"


@pytest.mark.integration
def test_delete_then_load_is_not_found_for_everyone(store, alice, bob):
    created = create_resume(store, alice)
    set_resume_visibility(store, alice, created.id, True)
    delete_resume(store, alice, created.id)

    for caller in (alice, bob, None):
        with pytest.raises(RecordNotFoundError):
            load_resume(store, caller, created.id)


@pytest.mark.integration
def test_delete_twice_is_not_found(store, alice):
    created = create_resume(store, alice)
    delete_resume(store, alice, created.id)
    with pytest.raises(RecordNotFoundError):
        delete_resume(store, alice, created.id)


@pytest.mark.integration
def test_list_is_ordered_by_most_recent_update(store, alice, filled_content):
    first = create_resume(store, alice, title="First")
    second = create_resume(store, alice, title="Second")
    save_resume(store, alice, first.id, "First", filled_content)

    assert [record.id for record in list_resumes(store, alice)] == [first.id, second.id]


@pytest.mark.integration
def test_private_resumes_are_invisible_to_others(store, alice, bob):
    private = create_resume(store, alice)

    assert list_resumes(store, bob) == []
    assert list_resumes(store, None) == []
    for caller in (bob, None):
        with pytest.raises(RecordNotFoundError):
            load_resume(store, caller, private.id)


@pytest.mark.integration
def test_public_resumes_are_readable_by_anyone(store, alice, bob):
    created = create_resume(store, alice)
    shared = set_resume_visibility(store, alice, created.id, True)

    assert shared.is_public
    assert load_resume(store, bob, created.id).id == created.id
    assert load_resume(store, None, created.id).id == created.id
    assert [record.id for record in list_resumes(store, bob)] == [created.id]
    assert list_resumes(store, bob, owned_only=True) == []
    assert list_resumes(store, None, owned_only=True) == []
    assert not load_resume(store, bob, created.id).is_owned_by(bob)


@pytest.mark.integration
def test_unsharing_hides_the_resume_again(store, alice, bob):
    created = create_resume(store, alice)
    set_resume_visibility(store, alice, created.id, True)
    set_resume_visibility(store, alice, created.id, False)

    with pytest.raises(RecordNotFoundError):
        load_resume(store, bob, created.id)


@pytest.mark.integration
def test_only_owner_can_change_visibility(store, alice, bob):
    created = create_resume(store, alice)
    set_resume_visibility(store, alice, created.id, True)
    with pytest.raises(AccessDeniedError):
        set_resume_visibility(store, bob, created.id, False)


@pytest.mark.integration
def test_lifecycle_events_are_recorded(store, alice, filled_content, events_file):
    created = create_resume(store, alice)
    save_resume(store, alice, created.id, "CV", filled_content)
    set_resume_visibility(store, alice, created.id, True)
    delete_resume(store, alice, created.id)

    events = get_recent_events(resume_id=created.id)
    assert [event["event_type"] for event in events] == [
        "created",
        "saved",
        "visibility_changed",
        "deleted",
    ]
    assert all(event["user_id"] == alice.user_id for event in events)
    assert events[0]["template_id"] == "modern-minimal"
    assert events[2]["is_public"] is True

    lines = events_file.read_text(encoding="utf-8").splitlines()
    assert json.loads(lines[1])["title"] == "CV"


@pytest.mark.integration
def test_recent_events_filters_and_limits(events_file):
    for index in range(5):
        log_resume_event("saved", f"r{index % 2}", "u1")
    log_resume_event("deleted", "r0", "u1")

    assert len(get_recent_events(n=3)) == 3
    assert len(get_recent_events(resume_id="r0")) == 4
    assert [e["resume_id"] for e in get_recent_events(event_type="deleted")] == ["r0"]


@pytest.mark.integration
def test_unknown_event_type_is_rejected():
    with pytest.raises(ValueError):
        log_resume_event("renamed", "r1", "u1")


@pytest.mark.integration
def test_no_events_without_events_file(store, alice):
    create_resume(store, alice)
    assert get_recent_events() == []
