"""
auth/sessions.py -- Stateless session tokens (JWT, HS256).

Security design decisions:
  python-jose with HS256. A token carries the subject's id and email plus
  iat. The server keeps no session table; any correctly signed token is
  accepted. There is no revocation list.

  Expiry is opt-in. With token_expire_seconds=0 (the default) no exp claim is
  written and a token stays valid until the secret changes. A positive value
  adds exp and jose rejects the token once it passes.

  verify() returns None on every failure -- wrong secret, truncated token,
  tampered payload, wrong algorithm, missing claims, expired. The gate turns
  None into 401. Only HS256 is accepted on decode, so a token that declares
  "none" or an asymmetric algorithm never verifies.

  The codec is an instance holding its secret rather than a module global.
  The app builds one at startup from Settings.jwt_secret and keeps it on
  app.state; tests build their own with whatever secret they need.

Layer rule: no imports from api/ or core/.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from auth.models import SessionClaims

logger = logging.getLogger("userauth.auth")

ALGORITHM = "HS256"


class SessionTokenCodec:
    """Signs and verifies session claims with a shared secret.

    Usage:
        codec = SessionTokenCodec(settings.jwt_secret)
        token = codec.sign(SessionClaims(id=user.id, email=user.email))
        claims = codec.verify(token)  # SessionClaims or None
    """

    def __init__(self, secret: str, expire_seconds: int = 0) -> None:
        if not secret:
            raise ValueError("A non-empty signing secret is required.")
        self._secret = secret
        self._expire_seconds = expire_seconds

    def sign(self, claims: SessionClaims) -> str:
        """Encode claims into a signed compact JWT."""
        now = datetime.now(timezone.utc)
        payload: dict = {
            "id": claims.id,
            "email": claims.email,
            "iat": now,
        }
        if self._expire_seconds > 0:
            payload["exp"] = now + timedelta(seconds=self._expire_seconds)
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> SessionClaims | None:
        """Verify the signature and shape of a token. Returns None on any failure."""
        if not token:
            return None
        try:
            payload = jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except JWTError as exc:
            logger.debug("Session token rejected: %s", type(exc).__name__)
            return None
        user_id = payload.get("id")
        email = payload.get("email")
        if not isinstance(user_id, str) or not user_id or not isinstance(email, str):
            return None
        return SessionClaims(id=user_id, email=email)
