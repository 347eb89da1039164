"""
Client Context

Responsibilities:
- Editing session state machine (load, local edits, explicit save)
- Dashboard, template gallery and preview screens
- Transient notifications and navigation targets

Owns: In-memory editing state, what the user is told, where the user goes next
Never: Bypasses the resumes context to reach the store
"""

from resumekit.contexts.client import routes
from resumekit.contexts.client.dashboard import Dashboard
from resumekit.contexts.client.editor import EditingSession, SessionState, SessionStateError
from resumekit.contexts.client.gallery import TemplateGallery
from resumekit.contexts.client.notifications import Notification, Notifier, Variant
from resumekit.contexts.client.preview import PreviewScreen

__all__ = [
    "routes",
    "EditingSession",
    "SessionState",
    "SessionStateError",
    "Dashboard",
    "TemplateGallery",
    "PreviewScreen",
    "Notification",
    "Notifier",
    "Variant",
]
