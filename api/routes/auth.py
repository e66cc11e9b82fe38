"""
api/routes/auth.py -- Registration and login endpoints.

Routes:
  POST /auth/register  -- create an account; returns the public user
  POST /auth/login     -- email/password login; returns {token}

Security:
  [C1] login delegates to auth.accounts.login(), which equalizes timing
       between unknown email and wrong password. Do not inline a lookup +
       verify_password() here.
  [M5] Cache-Control: no-store on login responses, success or failure.
  Both login failures produce the same body ("invalid_credentials") so the
  response never reveals whether the email exists.

Handlers are plain def: the store is blocking SQLAlchemy, so FastAPI runs
them in its thread pool.
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api.errors import ERROR_STATUS, error_body, raise_for
from api.models import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from auth import accounts
from auth.sessions import SessionTokenCodec
from auth.store import UserRepository

# Auth policy:
# - POST /auth/register: public -- account creation
# - POST /auth/login:    public -- login endpoint must be unauthenticated
router = APIRouter()


@router.post("/auth/register", response_model=UserResponse)
def register(request: Request, body: RegisterRequest) -> UserResponse:
    """Register a new account. Returns 409 if the email is already taken."""
    user_store: UserRepository = request.app.state.user_store
    outcome = accounts.register(user_store, body.email, body.password, body.profile_fields())
    raise_for(outcome.error)
    return UserResponse.from_public(outcome.value)


@router.post("/auth/login", response_model=TokenResponse)
def login(request: Request, body: LoginRequest) -> JSONResponse:
    """Exchange email and password for a bearer token."""
    user_store: UserRepository = request.app.state.user_store
    codec: SessionTokenCodec = request.app.state.token_codec
    outcome = accounts.login(user_store, codec, body.email, body.password)
    if not outcome.ok:
        status_code, _message = ERROR_STATUS[outcome.error]
        resp = JSONResponse(status_code=status_code, content={"error": error_body(outcome.error)})
    else:
        resp = JSONResponse(status_code=200, content=TokenResponse(token=outcome.value).model_dump())
    resp.headers["Cache-Control"] = "no-store"  # [M5]
    return resp
