"""
api/routes/users.py -- The caller's own account.

Routes:
  GET    /users/me  -- read the account behind the bearer token
  PUT    /users/me  -- partial update (email, password, profile fields)
  DELETE /users/me  -- delete the account; always answers "User deleted"

Every route depends on require_identity(), which answers 401 for a missing,
malformed or badly signed token. The account acted on is identity.user_id.
There is no {id} path parameter, and an "id" key in the PUT body is dropped.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from api.errors import raise_for
from api.models import MessageResponse, UserResponse, UserUpdate
from auth import profile
from auth.dependencies import require_identity
from auth.models import Identity
from auth.store import UserRepository

# Auth policy:
# - GET    /users/me: requires bearer token (require_identity)
# - PUT    /users/me: requires bearer token (require_identity)
# - DELETE /users/me: requires bearer token (require_identity)
router = APIRouter()


@router.get("/users/me", response_model=UserResponse)
def read_me(request: Request, identity: Identity = Depends(require_identity)) -> UserResponse:
    """Return the current account. 404 if it no longer exists."""
    user_store: UserRepository = request.app.state.user_store
    outcome = profile.read_self(user_store, identity)
    raise_for(outcome.error)
    return UserResponse.from_public(outcome.value)


@router.put("/users/me", response_model=UserResponse)
def update_me(
    request: Request,
    body: UserUpdate,
    identity: Identity = Depends(require_identity),
) -> UserResponse:
    """Update the current account. 400 on any rejected change."""
    user_store: UserRepository = request.app.state.user_store
    outcome = profile.update_self(user_store, identity, body.changes())
    raise_for(outcome.error)
    return UserResponse.from_public(outcome.value)


@router.delete("/users/me", response_model=MessageResponse)
def delete_me(request: Request, identity: Identity = Depends(require_identity)) -> MessageResponse:
    """Delete the current account."""
    user_store: UserRepository = request.app.state.user_store
    outcome = profile.delete_self(user_store, identity)
    return MessageResponse(message=outcome.value)
