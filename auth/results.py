"""
auth/results.py -- Explicit outcomes for the account flows.

Expected failures (duplicate email, bad password, bad token, missing user,
rejected update) are ordinary results of user input, so the flows return
them as values instead of raising. The routing layer reads Outcome.error and
picks a status code from one table. Only truly unexpected collaborator
failures propagate as exceptions (INTERNAL_FAULT).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class AuthError(str, Enum):
    DUPLICATE_EMAIL = "duplicate_email"
    INVALID_CREDENTIALS = "invalid_credentials"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    UPDATE_REJECTED = "update_rejected"
    INTERNAL_FAULT = "internal_error"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a value or a named AuthError, never both."""

    value: T | None = None
    error: AuthError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: AuthError) -> "Outcome[T]":
        return cls(error=error)
