"""
Template gallery screen.
"""

from typing import List, Optional

from resumekit.contexts.catalog import (
    ALL_CATEGORIES,
    Template,
    filter_templates,
    list_templates,
    template_categories,
)
from resumekit.contexts.client import routes
from resumekit.contexts.client.dashboard import NEW_RESUME_TITLE
from resumekit.contexts.client.logger import log_store_failure
from resumekit.contexts.client.notifications import Notifier
from resumekit.contexts.resumes import create_resume
from resumekit.contexts.store import Identity, ResumeStore, StoreError


class TemplateGallery:
    """
    Browses the catalog and starts a resume from a template.

    Anonymous callers may browse; choosing a template requires a session.
    """

    def __init__(self, store: ResumeStore, identity: Optional[Identity] = None, notifier: Notifier = None):
        self.store = store
        self.identity = identity
        self.notifier = notifier or Notifier()
        self.templates: List[Template] = []
        self.search_term = ""
        self.selected_category = ALL_CATEGORIES
        self.is_loading = True

    def load(self) -> bool:
        try:
            self.templates = list_templates(self.store, self.identity)
        except StoreError as e:
            log_store_failure("Fetching templates", e)
            self.notifier.error("Failed to fetch templates")
            return False
        finally:
            self.is_loading = False
        return True

    @property
    def categories(self) -> List[str]:
        return template_categories(self.templates)

    @property
    def filtered(self) -> List[Template]:
        return filter_templates(self.templates, self.selected_category, self.search_term)

    def use_template(self, template_id: str) -> Optional[str]:
        """
        Create a resume styled with the template.

        Returns:
            Editor route for the new resume, the auth route for anonymous
            callers, or None if creation failed
        """
        if self.identity is None:
            return routes.AUTH

        try:
            record = create_resume(self.store, self.identity, template_id, title=NEW_RESUME_TITLE)
        except StoreError as e:
            log_store_failure(f"Creating resume from {template_id}", e)
            self.notifier.error("Failed to create resume with template")
            return None

        self.notifier.success("Template selected!", "Your new resume is ready to edit.")
        return routes.editor_route(record.id)
