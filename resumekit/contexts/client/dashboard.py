"""
Dashboard screen: the caller's profile and resumes.
"""

from typing import Dict, List, Optional

from resumekit.contexts.accounts import Profile, get_profile
from resumekit.contexts.client import routes
from resumekit.contexts.client.logger import log_store_failure
from resumekit.contexts.client.notifications import Notifier
from resumekit.contexts.resumes import ResumeRecord, create_resume, delete_resume, list_resumes
from resumekit.contexts.store import DEFAULT_TEMPLATE_ID, Identity, ResumeStore, StoreError
from resumekit.utils.timestamp import format_timestamp

NEW_RESUME_TITLE = "New Resume"
FALLBACK_DISPLAY_NAME = "User"


class Dashboard:
    """
    Lists the caller's resumes and offers create/delete.

    Attributes:
        resumes: Caller's resumes, most recently updated first
        profile: Caller's profile (None until loaded)
        redirect: Route to navigate to, when the dashboard cannot be shown
    """

    def __init__(self, store: ResumeStore, identity: Optional[Identity], notifier: Notifier = None):
        self.store = store
        self.identity = identity
        self.notifier = notifier or Notifier()
        self.resumes: List[ResumeRecord] = []
        self.profile: Optional[Profile] = None
        self.is_loading = True
        self.redirect: Optional[str] = None

    def load(self) -> bool:
        """
        Fetch resumes and profile.

        A missing session or a failed profile fetch redirects to the auth
        screen. A failed resume fetch is reported and leaves the list empty.

        Returns:
            True if the dashboard can be shown
        """
        if self.identity is None:
            self.redirect = routes.AUTH
            return False

        try:
            self.resumes = list_resumes(self.store, self.identity, owned_only=True)
        except StoreError as e:
            log_store_failure("Fetching resumes", e)
            self.notifier.error("Failed to fetch resumes")
        finally:
            self.is_loading = False

        try:
            self.profile = get_profile(self.store, self.identity)
        except StoreError as e:
            log_store_failure("Fetching profile", e)
            self.notifier.error("Failed to load your profile")
            self.redirect = routes.AUTH
            return False

        return True

    @property
    def display_name(self) -> str:
        if self.profile and self.profile.display_name:
            return self.profile.display_name
        return FALLBACK_DISPLAY_NAME

    @property
    def greeting(self) -> str:
        return f"Welcome back, {self.display_name}!"

    @property
    def is_premium(self) -> bool:
        return self.profile is not None and self.profile.is_premium

    def resume_summaries(self) -> List[Dict[str, str]]:
        """Card data for each resume: id, title, template label, last-updated date."""
        return [
            {
                "id": record.id,
                "title": record.title,
                "template": record.template_id.replace("-", " "),
                "updated": f"Updated {format_timestamp(record.updated_at.isoformat())}",
            }
            for record in self.resumes
        ]

    def create_new_resume(self) -> Optional[str]:
        """
        Create an empty resume with the default template.

        Returns:
            Editor route for the new resume, or None if creation failed
        """
        try:
            record = create_resume(
                self.store, self.identity, DEFAULT_TEMPLATE_ID, title=NEW_RESUME_TITLE
            )
        except StoreError as e:
            log_store_failure("Creating resume", e)
            self.notifier.error("Failed to create resume")
            return None

        self.resumes.insert(0, record)
        self.notifier.success("Resume created!", "Your new resume is ready to edit.")
        return routes.editor_route(record.id)

    def delete_resume(self, resume_id: str) -> bool:
        """Permanently delete a resume and drop it from the list."""
        try:
            delete_resume(self.store, self.identity, resume_id)
        except StoreError as e:
            log_store_failure(f"Deleting resume {resume_id}", e)
            self.notifier.error("Failed to delete resume")
            return False

        self.resumes = [record for record in self.resumes if record.id != resume_id]
        self.notifier.success("Resume deleted", "Your resume has been permanently deleted.")
        return True

    def sign_out(self) -> str:
        self.identity = None
        self.profile = None
        self.resumes = []
        self.redirect = routes.LANDING
        return routes.LANDING
