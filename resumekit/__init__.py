"""
RESUMEKIT - Resume builder backend

A resume-building application core: identities own profiles and resumes,
resumes are edited through a client-side session and persisted wholesale,
and a read-only template catalog seeds new resumes.

Architecture:
- Store Context: SQLite persistence with per-table access policies
- Catalog Context: Read-only template catalog
- Resumes Context: Resume record lifecycle scoped to the caller identity
- Accounts Context: Sign-up, sign-in and profile provisioning
- Rendering Context: Markdown preview of a resume
- Client Context: Editing session, dashboard, gallery and preview screens
"""

__version__ = "0.1.0"
