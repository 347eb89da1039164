"""
Sign-up and sign-in.

Passwords are stored as salted PBKDF2-HMAC-SHA256 hashes in the form
"pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>".

sign_up() creates the identity and then provisions its profile in the same
call, so a user can never exist without a profile after a successful sign-up.
"""

import hashlib
import hmac
import os
from typing import Optional

from resumekit.contexts.accounts.exceptions import AuthenticationError, DuplicateIdentityError
from resumekit.contexts.accounts.logger import _log_info, _log_warning
from resumekit.contexts.accounts.profiles import ensure_profile
from resumekit.contexts.store import Identity, ResumeStore

HASH_ALGORITHM = "pbkdf2_sha256"
HASH_ITERATIONS = 260_000
MIN_PASSWORD_LENGTH = 6


def hash_password(password: str, salt: bytes = None, iterations: int = HASH_ITERATIONS) -> str:
    """Hash a password with a random (or given) salt."""
    salt = salt or os.urandom(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt, iterations)
    return f"{HASH_ALGORITHM}${iterations}${salt.hex()}${digest.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash in constant time."""
    try:
        algorithm, iterations, salt_hex, digest_hex = password_hash.split("$")
    except ValueError:
        return False
    if algorithm != HASH_ALGORITHM:
        return False

    candidate = hashlib.pbkdf2_hmac(
        "sha256", password.encode(), bytes.fromhex(salt_hex), int(iterations)
    )
    return hmac.compare_digest(candidate.hex(), digest_hex)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def sign_up(
    store: ResumeStore,
    email: str,
    password: str,
    display_name: Optional[str] = None,
) -> Identity:
    """
    Create a new identity and provision its profile.

    Args:
        store: Store holding identities
        email: Sign-in email (case-insensitive)
        password: Plain-text password
        display_name: Signup metadata copied to the new profile

    Returns:
        Identity of the new user

    Raises:
        ValueError: If email or password is malformed
        DuplicateIdentityError: If the email is already registered
    """
    email = _normalize_email(email)
    if "@" not in email:
        raise ValueError(f"Invalid email address: {email}")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    if store.get_user_by_email(email) is not None:
        raise DuplicateIdentityError(email)

    user = store.create_user(
        email=email,
        password_hash=hash_password(password),
        metadata={"display_name": display_name} if display_name else {},
    )
    identity = Identity(user_id=user["id"], email=email)

    ensure_profile(store, identity, display_name=display_name)
    _log_info(f"Signed up {email} ({identity.user_id})")
    return identity


def sign_in(store: ResumeStore, email: str, password: str) -> Identity:
    """
    Authenticate an existing identity.

    Also ensures the profile exists, using the display name from signup
    metadata if it has to be created.

    Raises:
        AuthenticationError: If the email is unknown or the password is wrong
    """
    email = _normalize_email(email)
    user = store.get_user_by_email(email)

    if user is None or not verify_password(password, user["password_hash"]):
        _log_warning(f"Failed sign-in for {email}")
        raise AuthenticationError(email)

    identity = Identity(user_id=user["id"], email=email)
    ensure_profile(store, identity, display_name=user["metadata"].get("display_name"))
    _log_info(f"Signed in {email}")
    return identity
