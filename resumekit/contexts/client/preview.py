"""
Preview screen: read-only Markdown rendering of a saved resume.

Owners and, for public resumes, anyone else may open it.
"""

from typing import Optional

from resumekit.contexts.catalog import get_template
from resumekit.contexts.client import routes
from resumekit.contexts.client.logger import log_store_failure
from resumekit.contexts.client.notifications import Notifier
from resumekit.contexts.rendering import render_preview
from resumekit.contexts.resumes import ResumeRecord, load_resume
from resumekit.contexts.store import Identity, RecordNotFoundError, ResumeStore, StoreError


class PreviewScreen:
    def __init__(
        self,
        store: ResumeStore,
        identity: Optional[Identity],
        resume_id: str,
        notifier: Notifier = None,
    ):
        self.store = store
        self.identity = identity
        self.resume_id = resume_id
        self.notifier = notifier or Notifier()
        self.record: Optional[ResumeRecord] = None
        self.markdown = ""
        self.redirect: Optional[str] = None

    def load(self) -> bool:
        try:
            self.record = load_resume(self.store, self.identity, self.resume_id)
        except StoreError as e:
            log_store_failure(f"Loading preview of {self.resume_id}", e)
            self.notifier.error("Failed to load resume")
            self.redirect = routes.DASHBOARD
            return False

        try:
            template = get_template(self.store, self.record.template_id, self.identity)
        except RecordNotFoundError:
            # Template withdrawn from the catalog; render unstyled
            template = None
        except StoreError as e:
            log_store_failure(f"Loading template {self.record.template_id}", e)
            self.notifier.error("Failed to load resume")
            self.redirect = routes.DASHBOARD
            return False

        self.markdown = render_preview(self.record, template)
        return True

    @property
    def can_edit(self) -> bool:
        return self.record is not None and self.record.is_owned_by(self.identity)

    def edit(self) -> Optional[str]:
        """Editor route for owners, None for read-only viewers."""
        return routes.editor_route(self.resume_id) if self.can_edit else None
