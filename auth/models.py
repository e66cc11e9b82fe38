"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Stores and flows do
the work; these classes only own the domain shape.

Layer rule: no imports from api/ or core/.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class User:
    """One account as the repository stores it.

    email is matched exactly -- no case folding, no trimming. Two addresses
    that differ only in case are two different accounts.

    hashed_password is excluded from repr() so a stray log line or traceback
    never prints it. It must never leave the core; flows hand out PublicUser.

    profile holds the free-form fields supplied at registration or update.
    The core treats them as opaque.
    """

    email: str
    hashed_password: str = field(repr=False)
    id: str | None = None  # assigned by the repository on insert
    profile: dict[str, Any] = field(default_factory=dict)
    created_at: str | None = None
    updated_at: str | None = None


@dataclass(frozen=True)
class PublicUser:
    """The only outward representation of a User. Carries no credential."""

    id: str
    email: str
    profile: dict[str, Any] = field(default_factory=dict)
    created_at: str | None = None
    updated_at: str | None = None


@dataclass(frozen=True)
class SessionClaims:
    """Identity data embedded in a signed session token."""

    id: str
    email: str


@dataclass(frozen=True)
class Identity:
    """The caller resolved by the authorization gate.

    Profile operations act on user_id and nothing else. Never build one from
    request body or path data.
    """

    user_id: str
    email: str
