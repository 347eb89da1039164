"""
Resume editing session.

Holds an in-memory copy of one resume and persists it wholesale on explicit
save. There is no autosave and no conflict detection: the last completed
save wins.

States:
    LOADING --load ok--> READY --save()--> SAVING --> READY
    LOADING --load failed--> NAVIGATING_AWAY (redirect to the dashboard)
    READY --leave()/preview()--> NAVIGATING_AWAY
"""

from enum import Enum
from typing import List, Optional

from resumekit.contexts.client import routes
from resumekit.contexts.client.logger import _log_info, log_store_failure
from resumekit.contexts.client.notifications import Notifier
from resumekit.contexts.resumes import ResumeRecord, load_resume, save_resume
from resumekit.contexts.store import (
    DEFAULT_RESUME_TITLE,
    EducationEntry,
    ExperienceEntry,
    Identity,
    PersonalInfo,
    ResumeContent,
    ResumeStore,
    StoreError,
)


class SessionState(str, Enum):
    LOADING = "loading"
    READY = "ready"
    SAVING = "saving"
    NAVIGATING_AWAY = "navigating_away"


class SessionStateError(RuntimeError):
    """Raised when an operation is attempted in a state that does not allow it."""

    def __init__(self, operation: str, state: SessionState):
        self.operation = operation
        self.state = state
        super().__init__(f"Cannot {operation} while session is {state.value}")


def _require_text(field_name: str, value) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{field_name} must be text, got {type(value).__name__}")
    return value


class EditingSession:
    """
    Editing session for one resume.

    Attributes:
        state: Current SessionState
        title: In-memory title
        content: In-memory ResumeContent (mutated only through session methods)
        record: Last record loaded or saved
        redirect: Route to navigate to once the session is NAVIGATING_AWAY
    """

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

        self.state = SessionState.LOADING
        self.title = DEFAULT_RESUME_TITLE
        self.content = ResumeContent()
        self.record: Optional[ResumeRecord] = None
        self.redirect: Optional[str] = None
        self._saved_title = self.title
        self._saved_content = self.content.copy()

    # ------------------------------------------------------------------
    # Loading, saving, navigation
    # ------------------------------------------------------------------

    def load(self) -> bool:
        """
        Fetch the resume into memory.

        On failure the error is reported and the session navigates back to the
        dashboard; there is no retry.

        Returns:
            True if the session is READY
        """
        self._require(SessionState.LOADING, "load")
        try:
            record = load_resume(self.store, self.identity, self.resume_id)
        except StoreError as e:
            log_store_failure(f"Loading resume {self.resume_id}", e)
            self.notifier.error("Failed to load resume")
            self._navigate(routes.DASHBOARD)
            return False

        self._adopt(record)
        self.state = SessionState.READY
        return True

    def save(self) -> bool:
        """
        Persist title and the full content in one update.

        On failure the in-memory content is left exactly as it was and the
        session returns to READY so the user can try again.

        Returns:
            True if the save succeeded
        """
        self._require(SessionState.READY, "save")
        self.state = SessionState.SAVING
        try:
            record = save_resume(
                self.store, self.identity, self.resume_id, self.title, self.content.copy()
            )
        except StoreError as e:
            log_store_failure(f"Saving resume {self.resume_id}", e)
            self.notifier.error("Failed to save resume")
            return False
        else:
            self.record = record
            self._saved_title = self.title
            self._saved_content = self.content.copy()
            self.notifier.success("Resume saved", "Your changes have been saved successfully.")
            _log_info(f"Saved resume {self.resume_id}")
            return True
        finally:
            self.state = SessionState.READY

    def leave(self) -> str:
        """Navigate back to the dashboard. Unsaved changes are discarded."""
        return self._navigate(routes.DASHBOARD)

    def preview(self) -> str:
        """Navigate to the preview of this resume (shows the last saved state)."""
        return self._navigate(routes.preview_route(self.resume_id))

    @property
    def is_dirty(self) -> bool:
        """Whether the in-memory title or content differ from the last loaded or saved state."""
        return self.title != self._saved_title or self.content != self._saved_content

    @property
    def is_loading(self) -> bool:
        return self.state is SessionState.LOADING

    @property
    def is_saving(self) -> bool:
        return self.state is SessionState.SAVING

    # ------------------------------------------------------------------
    # Field-level edits (READY only, local until save)
    # ------------------------------------------------------------------

    def set_title(self, title: str) -> None:
        self._require(SessionState.READY, "edit title")
        self.title = _require_text("title", title)

    def update_personal_info(self, field_name: str, value: str) -> None:
        self._require(SessionState.READY, "edit personal info")
        attr = PersonalInfo.resolve_field(field_name)
        setattr(self.content.personal_info, attr, _require_text(field_name, value))

    def add_experience(self, **fields) -> str:
        """Append an empty (or pre-filled) experience entry and return its id."""
        return self._add_entry(self.content.experience, ExperienceEntry, fields, "add experience")

    def update_experience(self, entry_id: str, field_name: str, value: str) -> None:
        self._update_entry(self.content.experience, ExperienceEntry, entry_id, field_name, value)

    def remove_experience(self, entry_id: str) -> None:
        self._remove_entry(self.content.experience, entry_id, "remove experience")

    def add_education(self, **fields) -> str:
        """Append an empty (or pre-filled) education entry and return its id."""
        return self._add_entry(self.content.education, EducationEntry, fields, "add education")

    def update_education(self, entry_id: str, field_name: str, value: str) -> None:
        self._update_entry(self.content.education, EducationEntry, entry_id, field_name, value)

    def remove_education(self, entry_id: str) -> None:
        self._remove_entry(self.content.education, entry_id, "remove education")

    def add_skill(self, value: str = "") -> int:
        """Append a skill and return its position."""
        self._require(SessionState.READY, "add skill")
        self.content.skills.append(_require_text("skill", value))
        return len(self.content.skills) - 1

    def update_skill(self, index: int, value: str) -> None:
        self._require(SessionState.READY, "edit skill")
        self._check_skill_index(index)
        self.content.skills[index] = _require_text("skill", value)

    def remove_skill(self, index: int) -> None:
        self._require(SessionState.READY, "remove skill")
        self._check_skill_index(index)
        del self.content.skills[index]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require(self, state: SessionState, operation: str) -> None:
        if self.state is not state:
            raise SessionStateError(operation, self.state)

    def _navigate(self, route: str) -> str:
        self.state = SessionState.NAVIGATING_AWAY
        self.redirect = route
        return route

    def _adopt(self, record: ResumeRecord) -> None:
        self.record = record
        self.title = record.title
        self.content = record.content.copy()
        self._saved_title = self.title
        self._saved_content = self.content.copy()

    def _add_entry(self, entries: List, entry_cls, fields: dict, operation: str) -> str:
        self._require(SessionState.READY, operation)
        values = {
            entry_cls.resolve_field(name): _require_text(name, value)
            for name, value in fields.items()
        }
        entry = entry_cls(**values)
        entries.append(entry)
        return entry.id

    def _find_entry(self, entries: List, entry_id: str):
        for entry in entries:
            if entry.id == entry_id:
                return entry
        raise KeyError(f"No entry with id {entry_id}")

    def _update_entry(self, entries: List, entry_cls, entry_id: str, field_name: str, value: str) -> None:
        self._require(SessionState.READY, f"edit {entry_cls.__name__}")
        attr = entry_cls.resolve_field(field_name)
        entry = self._find_entry(entries, entry_id)
        setattr(entry, attr, _require_text(field_name, value))

    def _remove_entry(self, entries: List, entry_id: str, operation: str) -> None:
        self._require(SessionState.READY, operation)
        entries.remove(self._find_entry(entries, entry_id))

    def _check_skill_index(self, index: int) -> None:
        if not 0 <= index < len(self.content.skills):
            raise IndexError(f"No skill at position {index}")
