"""
User profiles.

Exactly one profile per user. ensure_profile() is the provisioning step run
right after an identity is created (and again on sign-in); it is idempotent,
so calling it twice never yields a second profile.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from resumekit.contexts.accounts.logger import _log_debug, _log_info
from resumekit.contexts.store import Identity, RecordNotFoundError, ResumeStore, StoreError
from resumekit.utils.timestamp import parse_timestamp


class SubscriptionTier(str, Enum):
    FREE = "free"
    PREMIUM = "premium"


@dataclass(frozen=True)
class Profile:
    id: str
    user_id: str
    display_name: Optional[str]
    avatar_url: Optional[str]
    subscription_tier: SubscriptionTier
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Profile":
        return cls(
            id=row["id"],
            user_id=row["user_id"],
            display_name=row.get("display_name"),
            avatar_url=row.get("avatar_url"),
            subscription_tier=SubscriptionTier(row["subscription_tier"]),
            created_at=parse_timestamp(row["created_at"]),
            updated_at=parse_timestamp(row["updated_at"]),
        )

    @property
    def is_premium(self) -> bool:
        return self.subscription_tier is SubscriptionTier.PREMIUM


def get_profile(store: ResumeStore, identity: Identity) -> Profile:
    """
    Fetch the caller's profile.

    Raises:
        RecordNotFoundError: If the caller has no profile (or is anonymous)
    """
    row = store.select_one("profiles", identity, {"user_id": identity.user_id if identity else None})
    return Profile.from_row(row)


def ensure_profile(store: ResumeStore, identity: Identity, display_name: Optional[str] = None) -> Profile:
    """
    Return the caller's profile, creating it if it does not exist yet.

    Args:
        store: Store to provision in
        identity: Newly created (or signing-in) identity
        display_name: Display name from signup metadata, used only on creation

    Returns:
        The caller's single profile
    """
    try:
        return get_profile(store, identity)
    except RecordNotFoundError:
        pass

    try:
        row = store.insert("profiles", identity, {"display_name": display_name})
    except StoreError as insert_error:
        # Lost a race with another provisioning call; the unique owner column kept one row
        try:
            profile = get_profile(store, identity)
        except RecordNotFoundError:
            raise insert_error
        _log_debug(f"Profile for {identity.user_id} already provisioned")
        return profile

    _log_info(f"Provisioned profile for {identity.user_id}")
    return Profile.from_row(row)


def update_profile(
    store: ResumeStore,
    identity: Identity,
    display_name: Optional[str] = None,
    avatar_url: Optional[str] = None,
    subscription_tier: Optional[SubscriptionTier] = None,
) -> Profile:
    """
    Update the caller's profile. Arguments left as None are not changed.

    Raises:
        ValueError: If subscription_tier is not a known tier
        StoreError: If the update is rejected
    """
    values = {}
    if display_name is not None:
        values["display_name"] = display_name
    if avatar_url is not None:
        values["avatar_url"] = avatar_url
    if subscription_tier is not None:
        values["subscription_tier"] = SubscriptionTier(subscription_tier).value

    rows = store.update("profiles", identity, values, {"user_id": identity.user_id})
    return Profile.from_row(rows[0])
