"""Integration tests for the dashboard, template gallery and preview screens."""

import pytest

from resumekit.contexts.accounts import SubscriptionTier, sign_up, update_profile
from resumekit.contexts.client import Dashboard, Notifier, PreviewScreen, TemplateGallery, routes
from resumekit.contexts.resumes import create_resume, save_resume, set_resume_visibility
from resumekit.contexts.store import Identity, PersonalInfo, ResumeContent


# ----------------------------------------------------------------------
# Dashboard
# ----------------------------------------------------------------------


@pytest.mark.integration
def test_dashboard_lists_only_own_resumes(store, alice, bob):
    mine = create_resume(store, alice, "tech-innovator", title="Mine")
    theirs = create_resume(store, bob, title="Theirs")
    set_resume_visibility(store, bob, theirs.id, True)

    dashboard = Dashboard(store, alice)
    assert dashboard.load()

    assert [record.id for record in dashboard.resumes] == [mine.id]
    summary = dashboard.resume_summaries()[0]
    assert summary["title"] == "Mine"
    assert summary["template"] == "tech innovator"
    assert summary["updated"].startswith("Updated ")


@pytest.mark.integration
def test_dashboard_greeting_and_tier(store, alice):
    dashboard = Dashboard(store, alice)
    dashboard.load()
    assert dashboard.greeting == "Welcome back, Alice!"
    assert not dashboard.is_premium

    update_profile(store, alice, subscription_tier=SubscriptionTier.PREMIUM)
    dashboard.load()
    assert dashboard.is_premium


@pytest.mark.integration
def test_dashboard_falls_back_to_generic_name(store):
    identity = sign_up(store, "nameless@example.com", "secret-pw")
    dashboard = Dashboard(store, identity)
    dashboard.load()
    assert dashboard.greeting == "Welcome back, User!"


@pytest.mark.integration
def test_dashboard_without_session_redirects_to_auth(store):
    dashboard = Dashboard(store, None)
    assert not dashboard.load()
    assert dashboard.redirect == routes.AUTH


@pytest.mark.integration
def test_dashboard_without_profile_redirects_to_auth(store):
    user = store.create_user("ghost@example.com", "unused")
    notifier = Notifier()
    dashboard = Dashboard(store, Identity(user_id=user["id"]), notifier)

    assert not dashboard.load()
    assert dashboard.redirect == routes.AUTH
    assert notifier.last.description == "Failed to load your profile"


@pytest.mark.integration
def test_dashboard_create_and_delete(store, alice):
    dashboard = Dashboard(store, alice)
    dashboard.load()

    route = dashboard.create_new_resume()
    created = dashboard.resumes[0]
    assert route == f"/builder/{created.id}"
    assert created.title == "New Resume"
    assert created.template_id == "modern-minimal"
    assert dashboard.notifier.last.title == "Resume created!"

    assert dashboard.delete_resume(created.id)
    assert dashboard.resumes == []
    assert dashboard.notifier.last.title == "Resume deleted"


@pytest.mark.integration
def test_dashboard_delete_failure_keeps_list(store, alice, bob):
    theirs = create_resume(store, bob)
    mine = create_resume(store, alice)
    dashboard = Dashboard(store, alice)
    dashboard.load()

    assert not dashboard.delete_resume(theirs.id)
    assert [record.id for record in dashboard.resumes] == [mine.id]
    assert dashboard.notifier.last.description == "Failed to delete resume"
    assert dashboard.notifier.last.is_error


@pytest.mark.integration
def test_dashboard_sign_out(store, alice):
    dashboard = Dashboard(store, alice)
    dashboard.load()
    assert dashboard.sign_out() == routes.LANDING
    assert dashboard.identity is None
    assert dashboard.resumes == []


# ----------------------------------------------------------------------
# Template gallery
# ----------------------------------------------------------------------


@pytest.mark.integration
def test_gallery_orders_by_downloads(store):
    gallery = TemplateGallery(store)
    assert gallery.load()

    downloads = [template.downloads for template in gallery.templates]
    assert downloads == sorted(downloads, reverse=True)
    assert gallery.templates[0].id == "professional-plus"
    assert gallery.categories[0] == "all"


@pytest.mark.integration
def test_gallery_filters(store):
    gallery = TemplateGallery(store)
    gallery.load()

    gallery.selected_category = "creative"
    assert [t.name for t in gallery.filtered] == ["Creative Edge", "Designer's Choice"]

    gallery.selected_category = "all"
    gallery.search_term = "minimal"
    assert [t.id for t in gallery.filtered] == ["modern-minimal"]


@pytest.mark.integration
def test_gallery_anonymous_use_goes_to_auth(store):
    gallery = TemplateGallery(store)
    gallery.load()
    assert gallery.use_template("creative-edge") == routes.AUTH
    assert gallery.notifier.notifications == []


@pytest.mark.integration
def test_gallery_use_template(store, alice):
    gallery = TemplateGallery(store, alice)
    gallery.load()

    route = gallery.use_template("creative-edge")
    resume_id = route.rsplit("/", 1)[-1]

    assert route == routes.editor_route(resume_id)
    assert gallery.notifier.last.title == "Template selected!"
    dashboard = Dashboard(store, alice)
    dashboard.load()
    assert dashboard.resumes[0].template_id == "creative-edge"
    assert dashboard.resumes[0].title == "New Resume"


@pytest.mark.integration
def test_gallery_use_unknown_template(store, alice):
    gallery = TemplateGallery(store, alice)
    assert gallery.use_template("missing") is None
    assert gallery.notifier.last.description == "Failed to create resume with template"


# ----------------------------------------------------------------------
# Preview
# ----------------------------------------------------------------------


@pytest.fixture
def saved_resume(store, alice):
    created = create_resume(store, alice, "modern-minimal", title="Alice CV")
    content = ResumeContent(
        personal_info=PersonalInfo(full_name="Alice Example", email="alice@example.com"),
        skills=["Python"],
    )
    return save_resume(store, alice, created.id, "Alice CV", content)


@pytest.mark.integration
def test_owner_preview_can_edit(store, alice, saved_resume):
    screen = PreviewScreen(store, alice, saved_resume.id)
    assert screen.load()

    assert "Alice Example" in screen.markdown
    assert "Skills: Python" in screen.markdown
    assert screen.can_edit
    assert screen.edit() == routes.editor_route(saved_resume.id)


@pytest.mark.integration
def test_public_preview_is_read_only(store, alice, bob, saved_resume):
    set_resume_visibility(store, alice, saved_resume.id, True)

    for caller in (bob, None):
        screen = PreviewScreen(store, caller, saved_resume.id)
        assert screen.load()
        assert "Alice Example" in screen.markdown
        assert not screen.can_edit
        assert screen.edit() is None


@pytest.mark.integration
def test_private_preview_redirects_others(store, bob, saved_resume):
    notifier = Notifier()
    screen = PreviewScreen(store, bob, saved_resume.id, notifier)

    assert not screen.load()
    assert screen.redirect == routes.DASHBOARD
    assert notifier.last.description == "Failed to load resume"


@pytest.mark.integration
def test_preview_with_withdrawn_template_renders_unstyled(store, alice, saved_resume):
    store.conn.execute("DELETE FROM resume_templates WHERE id = 'modern-minimal'")
    store.conn.commit()

    screen = PreviewScreen(store, alice, saved_resume.id)
    assert screen.load()
    assert "# Alice Example" in screen.markdown


@pytest.mark.integration
def test_preview_template_failure_redirects_to_dashboard(store, alice, saved_resume):
    store.conn.execute("DROP TABLE resume_templates")
    notifier = Notifier()
    screen = PreviewScreen(store, alice, saved_resume.id, notifier)

    assert not screen.load()
    assert screen.redirect == routes.DASHBOARD
    assert notifier.last.is_error
    assert notifier.last.description == "Failed to load resume"
