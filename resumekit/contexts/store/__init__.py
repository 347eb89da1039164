"""
Store Context

Responsibilities:
- Owns the SQLite schema (users, profiles, resumes, resume_templates)
- Enforces per-table access policies on every generic operation
- Maintains ids and created_at/updated_at timestamps
- Validates resume content against the typed content structure at the boundary

Owns: Persistence, access policies, the resume content schema
Never: Decides what the UI shows or when to save
"""

from resumekit.contexts.store.access_control import Identity
from resumekit.contexts.store.database import ResumeStore
from resumekit.contexts.store.exceptions import (
    AccessDeniedError,
    ImmutableColumnError,
    InvalidContentError,
    RecordNotFoundError,
    StoreError,
    StoreUnavailableError,
)
from resumekit.contexts.store.resume_content import (
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ResumeContent,
)
from resumekit.contexts.store.schema import DEFAULT_RESUME_TITLE, DEFAULT_TEMPLATE_ID

__all__ = [
    # Store and caller identity
    "ResumeStore",
    "Identity",
    # Errors
    "StoreError",
    "AccessDeniedError",
    "RecordNotFoundError",
    "ImmutableColumnError",
    "InvalidContentError",
    "StoreUnavailableError",
    # Content structure
    "ResumeContent",
    "PersonalInfo",
    "ExperienceEntry",
    "EducationEntry",
    # Defaults
    "DEFAULT_RESUME_TITLE",
    "DEFAULT_TEMPLATE_ID",
]
