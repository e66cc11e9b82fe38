"""
API request and response models for the account service REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in auth/models.py, which
own the internal domain representation. Route handlers map between the two.

Profile fields are free-form: request models accept extra keys and the user
response flattens the stored profile next to id and email. No response model
declares a password or hash field, and none is built from a User -- only from
PublicUser.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from auth.models import PublicUser
from auth.passwords import MAX_PASSWORD_BYTES


def _check_password_length(value: Optional[str]) -> Optional[str]:
    # bcrypt ignores or rejects anything past 72 bytes; refuse it up front.
    if value is not None and len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    """Body for POST /auth/register. Unknown keys become profile fields."""

    model_config = ConfigDict(extra="allow")

    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)

    @field_validator("password")
    @classmethod
    def check_password_length(cls, value):
        return _check_password_length(value)

    def profile_fields(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class LoginRequest(BaseModel):
    email: str
    password: str


class UserUpdate(BaseModel):
    """Body for PUT /users/me. Every field is optional; unknown keys are profile fields.

    An "id" key in the body is accepted and ignored -- the account to update
    always comes from the bearer token.
    """

    model_config = ConfigDict(extra="allow")

    email: Optional[str] = Field(default=None, min_length=1, max_length=255)
    password: Optional[str] = Field(default=None, min_length=1)

    @field_validator("password")
    @classmethod
    def check_password_length(cls, value):
        return _check_password_length(value)

    def changes(self) -> dict[str, Any]:
        """Return only the keys the caller actually sent."""
        data: dict[str, Any] = {}
        if self.email is not None:
            data["email"] = self.email
        if self.password is not None:
            data["password"] = self.password
        data.update(self.model_extra or {})
        return data


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class UserResponse(BaseModel):
    """Public view of an account. Profile fields appear as top-level keys."""

    model_config = ConfigDict(extra="allow")

    id: str
    email: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_public(cls, user: PublicUser) -> "UserResponse":
        """Factory Method -- the mapping lives with the output model, not in routes."""
        return cls(
            **user.profile,
            id=user.id,
            email=user.email,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class TokenResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    token: str


class MessageResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response for GET /health."""

    model_config = ConfigDict(frozen=True)

    status: str = "healthy"
    version: str
    components: dict[str, str] = Field(default_factory=dict)
