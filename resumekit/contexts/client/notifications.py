"""
Transient user notifications.

Screens push a Notification for every outcome the user should see (saved,
deleted, failed to load, ...). The UI layer drains and displays them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List

from resumekit.contexts.client.logger import _log_debug


class Variant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: Variant = Variant.DEFAULT

    @property
    def is_error(self) -> bool:
        return self.variant is Variant.DESTRUCTIVE


class Notifier:
    """Collects notifications until the UI drains them."""

    def __init__(self):
        self.notifications: List[Notification] = []

    def notify(self, title: str, description: str, variant: Variant = Variant.DEFAULT) -> Notification:
        notification = Notification(title=title, description=description, variant=variant)
        self.notifications.append(notification)
        _log_debug(f"notify [{variant.value}] {title}: {description}")
        return notification

    def success(self, title: str, description: str) -> Notification:
        return self.notify(title, description)

    def error(self, description: str) -> Notification:
        return self.notify("Error", description, Variant.DESTRUCTIVE)

    def drain(self) -> List[Notification]:
        """Return pending notifications and clear them."""
        pending, self.notifications = self.notifications, []
        return pending

    @property
    def last(self) -> Notification:
        return self.notifications[-1] if self.notifications else None
