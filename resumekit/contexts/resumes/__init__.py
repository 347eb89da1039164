"""
Resumes Context

Responsibilities:
- Lists, creates, loads, saves and deletes resumes for an explicit caller
- Toggles public sharing
- Records lifecycle events

Owns: Resume record lifecycle
Never: Holds editing state between calls
"""

from resumekit.contexts.resumes.lifecycle import (
    ResumeRecord,
    create_resume,
    delete_resume,
    list_resumes,
    load_resume,
    save_resume,
    set_resume_visibility,
)

__all__ = [
    "ResumeRecord",
    "list_resumes",
    "create_resume",
    "load_resume",
    "save_resume",
    "delete_resume",
    "set_resume_visibility",
]
