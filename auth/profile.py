"""
auth/profile.py -- Read, update and delete the caller's own account.

Every function takes the Identity produced by the authorization gate and acts
on identity.user_id only. There is no parameter through which a request could
name some other user.

Open-question decisions (see DESIGN.md):
  update_self collapses every repository failure -- duplicate email, user
  gone, store error -- into UPDATE_REJECTED. The specific cause is logged.

  delete_self is idempotent: deleting an account that is already gone still
  returns the confirmation message.
"""

from __future__ import annotations

import logging
from typing import Any

from auth.accounts import clean_profile, to_public
from auth.models import Identity, PublicUser
from auth.passwords import hash_password
from auth.results import AuthError, Outcome
from auth.store import StoreError, UserRepository

logger = logging.getLogger("userauth.auth")

DELETED_MESSAGE = "User deleted"


def read_self(store: UserRepository, identity: Identity) -> Outcome[PublicUser]:
    user = store.get_by_id(identity.user_id)
    if user is None:
        return Outcome.failure(AuthError.NOT_FOUND)
    return Outcome.success(to_public(user))


def update_self(store: UserRepository, identity: Identity, changes: dict[str, Any]) -> Outcome[PublicUser]:
    """Apply a partial update to the caller's account.

    changes may carry email, password and arbitrary profile fields. A new
    password is hashed here; the plaintext never reaches the repository.
    """
    email = changes.get("email")
    password = changes.get("password")
    hashed = hash_password(password) if password else None
    profile_changes = clean_profile(changes)

    try:
        updated = store.update_user(
            identity.user_id,
            email=email or None,
            hashed_password=hashed,
            profile_changes=profile_changes,
        )
    except StoreError as exc:
        logger.info("Update rejected for %s: %s", identity.user_id, exc)
        return Outcome.failure(AuthError.UPDATE_REJECTED)
    if updated is None:
        logger.info("Update rejected for %s: no such user", identity.user_id)
        return Outcome.failure(AuthError.UPDATE_REJECTED)

    logger.info("Updated user %s", identity.user_id)
    return Outcome.success(to_public(updated))


def delete_self(store: UserRepository, identity: Identity) -> Outcome[str]:
    deleted = store.delete_user(identity.user_id)
    if deleted:
        logger.info("Deleted user %s", identity.user_id)
    else:
        logger.info("Delete for %s found no record", identity.user_id)
    return Outcome.success(DELETED_MESSAGE)
