"""
Resume record lifecycle.

Create, read, update and delete resumes on behalf of an explicit caller
identity. Authorization is enforced by the store's table policies; these
functions only shape requests and responses.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from resumekit.contexts.catalog import get_template
from resumekit.contexts.store import (
    DEFAULT_TEMPLATE_ID,
    Identity,
    ResumeContent,
    ResumeStore,
)
from resumekit.utils.event_logging import log_resume_event
from resumekit.utils.timestamp import parse_timestamp

TABLE = "resumes"


@dataclass(frozen=True)
class ResumeRecord:
    """
    A stored resume.

    Attributes:
        id: Resume identifier
        user_id: Owning identity (never changes)
        title: Resume title
        template_id: Catalog template the resume is styled with
        content: Normalized resume content
        is_public: Whether non-owners may read the resume
        created_at: Insertion time
        updated_at: Last modification time (maintained by the store)
    """
    id: str
    user_id: str
    title: str
    template_id: str
    content: ResumeContent
    is_public: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "ResumeRecord":
        return cls(
            id=row["id"],
            user_id=row["user_id"],
            title=row["title"],
            template_id=row["template_id"],
            content=row["content"],
            is_public=row["is_public"],
            created_at=parse_timestamp(row["created_at"]),
            updated_at=parse_timestamp(row["updated_at"]),
        )

    def is_owned_by(self, identity: Optional[Identity]) -> bool:
        return identity is not None and identity.user_id == self.user_id


def list_resumes(
    store: ResumeStore, identity: Optional[Identity], owned_only: bool = False
) -> List[ResumeRecord]:
    """
    List resumes visible to the caller, most recently updated first.

    Args:
        store: Resume store
        identity: Caller (None for anonymous)
        owned_only: Only the caller's own resumes, excluding other users' public ones

    Returns:
        Resume records ordered by updated_at descending
    """
    filters = None
    if owned_only:
        if identity is None:
            return []
        filters = {"user_id": identity.user_id}

    rows = store.select(TABLE, identity, filters, order_by="updated_at", descending=True)
    return [ResumeRecord.from_row(row) for row in rows]


def create_resume(
    store: ResumeStore,
    identity: Identity,
    template_id: str = DEFAULT_TEMPLATE_ID,
    title: Optional[str] = None,
) -> ResumeRecord:
    """
    Create a resume with empty content for the caller.

    Args:
        store: Resume store
        identity: Owner of the new resume
        template_id: Catalog template to style the resume with
        title: Initial title (default: "Untitled Resume")

    Returns:
        The new record; its id is what the editor navigates to

    Raises:
        RecordNotFoundError: If template_id is not in the catalog
        AccessDeniedError: If the caller is anonymous
    """
    get_template(store, template_id, identity)

    row = store.insert(
        TABLE,
        identity,
        {
            "user_id": identity.user_id if identity else None,
            "title": title,
            "template_id": template_id,
            "content": ResumeContent(),
        },
    )
    record = ResumeRecord.from_row(row)
    log_resume_event("created", record.id, identity.user_id, template_id=template_id)
    return record


def load_resume(store: ResumeStore, identity: Optional[Identity], resume_id: str) -> ResumeRecord:
    """
    Fetch one resume for editing or preview.

    Raises:
        RecordNotFoundError: If the resume does not exist or is not visible to the caller
    """
    row = store.select_one(TABLE, identity, {"id": resume_id})
    return ResumeRecord.from_row(row)


def save_resume(
    store: ResumeStore,
    identity: Identity,
    resume_id: str,
    title: str,
    content: ResumeContent,
) -> ResumeRecord:
    """
    Overwrite title and content of a resume in one atomic update.

    Saving the same content twice yields the same stored state; updated_at
    is refreshed by the store on every save.

    Raises:
        InvalidContentError: If content does not match the content structure
        AccessDeniedError: If the caller does not own the resume
        RecordNotFoundError: If the resume does not exist
    """
    rows = store.update(TABLE, identity, {"title": title, "content": content}, {"id": resume_id})
    record = ResumeRecord.from_row(rows[0])
    log_resume_event("saved", record.id, identity.user_id, title=title)
    return record


def delete_resume(store: ResumeStore, identity: Identity, resume_id: str) -> None:
    """
    Permanently delete a resume. There is no undo.

    Raises:
        AccessDeniedError: If the caller does not own the resume
        RecordNotFoundError: If the resume does not exist
    """
    store.delete(TABLE, identity, {"id": resume_id})
    log_resume_event("deleted", resume_id, identity.user_id)


def set_resume_visibility(
    store: ResumeStore, identity: Identity, resume_id: str, is_public: bool
) -> ResumeRecord:
    """Share a resume publicly (read-only for others) or make it private again."""
    rows = store.update(TABLE, identity, {"is_public": is_public}, {"id": resume_id})
    record = ResumeRecord.from_row(rows[0])
    log_resume_event("visibility_changed", record.id, identity.user_id, is_public=is_public)
    return record
