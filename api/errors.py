"""
api/errors.py -- Map AuthError outcomes to HTTP responses.

The flows in auth/ return named failures; this table is the single place
that decides which status code and message each one gets. Route handlers
call raise_for() and the HTTPException handler in api/main.py renders the
standard error envelope.
"""

from __future__ import annotations

from fastapi import HTTPException

from auth.results import AuthError

ERROR_STATUS: dict[AuthError, tuple[int, str]] = {
    AuthError.DUPLICATE_EMAIL: (409, "Email already exists"),
    AuthError.INVALID_CREDENTIALS: (401, "Invalid credentials"),
    AuthError.UNAUTHORIZED: (401, "Unauthorized"),
    AuthError.NOT_FOUND: (404, "User not found"),
    AuthError.UPDATE_REJECTED: (400, "Could not update user"),
    AuthError.INTERNAL_FAULT: (500, "An unexpected error occurred."),
}


def error_body(error: AuthError) -> dict:
    _status, message = ERROR_STATUS[error]
    return {"code": error.value, "message": message}


def raise_for(error: AuthError | None) -> None:
    """Raise the HTTPException that corresponds to a failed outcome."""
    if error is None:
        return
    status_code, _message = ERROR_STATUS[error]
    raise HTTPException(status_code=status_code, detail=error_body(error))
