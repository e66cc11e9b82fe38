"""
auth/dependencies.py -- Authorization gate and its FastAPI Depends() helper.

authorize() is the gate itself: a pure function from a raw Authorization
header value to either an Identity or UNAUTHORIZED. It holds no state and
never touches the repository -- a correctly signed token for a deleted user
still passes, and the profile flow reports NOT_FOUND afterwards.

require_identity() wraps authorize() for FastAPI and raises HTTP 401 when the
gate says no. Every /users/me route depends on it. Downstream handlers use
the Identity it returns and nothing from the request body or path.

Layer rule: no imports from api/ or core/.
  auth/dependencies.py may import from fastapi (for Request/HTTPException)
  because this module is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

from fastapi import HTTPException, Request

from auth.models import Identity
from auth.results import AuthError, Outcome
from auth.sessions import SessionTokenCodec

BEARER_PREFIX = "Bearer "


def authorize(header: str | None, codec: SessionTokenCodec) -> Outcome[Identity]:
    """Resolve an Authorization header value to an Identity.

    The scheme match is exact ("Bearer " with a capital B and one space),
    the same prefix the login response tells clients to send.
    """
    if not header or not header.startswith(BEARER_PREFIX):
        return Outcome.failure(AuthError.UNAUTHORIZED)
    claims = codec.verify(header[len(BEARER_PREFIX) :])
    if claims is None:
        return Outcome.failure(AuthError.UNAUTHORIZED)
    return Outcome.success(Identity(user_id=claims.id, email=claims.email))


def require_identity(request: Request) -> Identity:
    """Require a valid bearer token. Raises HTTP 401 otherwise.

    Use as a FastAPI dependency:
        @router.get("/users/me")
        def route(identity: Identity = Depends(require_identity)): ...
    """
    codec: SessionTokenCodec = request.app.state.token_codec
    outcome = authorize(request.headers.get("Authorization"), codec)
    if not outcome.ok:
        raise HTTPException(
            status_code=401,
            detail={"code": AuthError.UNAUTHORIZED.value, "message": "Unauthorized"},
        )
    return outcome.value
