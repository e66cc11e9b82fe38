"""
auth/accounts.py -- Registration and login flows.

Both flows are unauthenticated entry points. They take the repository (and,
for login, the token codec) as explicit arguments so tests can hand in any
UserRepository implementation.

Security:
  [C1] login() runs bcrypt whether or not the email exists. Unknown email and
       wrong password cost the same time and return the same outcome, so the
       endpoint cannot be used to enumerate accounts.

  Registration never checks for an existing email first. The repository's
  UNIQUE constraint is the only authority; a check-then-insert would race.
"""

from __future__ import annotations

import logging
from typing import Any

from auth.models import PublicUser, SessionClaims, User
from auth.passwords import burn_verification, hash_password, verify_password
from auth.results import AuthError, Outcome
from auth.sessions import SessionTokenCodec
from auth.store import DuplicateEmailError, UserRepository

logger = logging.getLogger("userauth.auth")

# Keys that belong to the account itself and can never arrive as profile data.
RESERVED_FIELDS = frozenset({"id", "email", "password", "hashed_password", "created_at", "updated_at"})


def to_public(user: User) -> PublicUser:
    """Strip the credential hash from a stored user."""
    return PublicUser(
        id=user.id or "",
        email=user.email,
        profile=dict(user.profile),
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def clean_profile(fields: dict[str, Any] | None) -> dict[str, Any]:
    """Drop reserved keys from caller-supplied profile fields."""
    if not fields:
        return {}
    return {k: v for k, v in fields.items() if k not in RESERVED_FIELDS}


def register(
    store: UserRepository,
    email: str,
    password: str,
    profile: dict[str, Any] | None = None,
) -> Outcome[PublicUser]:
    """Create an account and return its public view.

    Returns DUPLICATE_EMAIL if the repository reports the address is taken.
    Any other repository error propagates to the caller as an internal fault.
    """
    if not email or not password:
        raise ValueError("email and password are required")

    hashed = hash_password(password)
    try:
        created = store.create_user(User(email=email, hashed_password=hashed, profile=clean_profile(profile)))
    except DuplicateEmailError:
        logger.info("Registration rejected: email already registered")
        return Outcome.failure(AuthError.DUPLICATE_EMAIL)

    logger.info("Registered user %s", created.id)
    return Outcome.success(to_public(created))


def login(
    store: UserRepository,
    codec: SessionTokenCodec,
    email: str,
    password: str,
) -> Outcome[str]:
    """Check an email/password pair and issue a session token on success.

    Unknown email and wrong password both return INVALID_CREDENTIALS [C1].
    """
    user = store.get_by_email(email)
    if user is None:
        # Equalize timing -- do NOT return before running bcrypt [C1]
        burn_verification(password)
        logger.info("Login failed")
        return Outcome.failure(AuthError.INVALID_CREDENTIALS)
    if not verify_password(password, user.hashed_password):
        logger.info("Login failed")
        return Outcome.failure(AuthError.INVALID_CREDENTIALS)

    token = codec.sign(SessionClaims(id=user.id, email=user.email))
    logger.info("Login: %s", user.id)
    return Outcome.success(token)
