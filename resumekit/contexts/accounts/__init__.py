"""
Accounts Context

Responsibilities:
- Creates and authenticates identities
- Provisions exactly one profile per identity (ensure_profile)
- Reads and updates the caller's profile

Owns: Identities, password hashes, profiles
Never: Touches resumes
"""

from resumekit.contexts.accounts.auth import sign_in, sign_up
from resumekit.contexts.accounts.exceptions import AuthenticationError, DuplicateIdentityError
from resumekit.contexts.accounts.profiles import (
    Profile,
    SubscriptionTier,
    ensure_profile,
    get_profile,
    update_profile,
)

__all__ = [
    "sign_up",
    "sign_in",
    "AuthenticationError",
    "DuplicateIdentityError",
    "Profile",
    "SubscriptionTier",
    "ensure_profile",
    "get_profile",
    "update_profile",
]
