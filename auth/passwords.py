"""
auth/passwords.py -- Credential hashing with bcrypt.

Security design decisions:
  bcrypt is a slow, salted, adaptive hash. Every call to hash_password()
  draws a fresh salt, so the same password never hashes to the same string.
  The cost factor comes from Settings.bcrypt_rounds (default 12).

  bcrypt is used directly rather than through passlib. passlib's wrap-bug
  detection feeds bcrypt a password longer than 72 bytes, which bcrypt 4.x+
  rejects. Inputs are capped at 72 UTF-8 bytes at the API layer.

  verify_password() never raises. A malformed or empty stored hash counts as
  a mismatch -- a hashing failure on the login path must not become a 500.

  _DUMMY_HASH enables timing equalization in the login flow so response time
  does not reveal whether an email is registered [C1].

Layer rule: no imports from api/. Import from core/ is allowed.
"""

from __future__ import annotations

import logging

import bcrypt

from core.config import get_settings

logger = logging.getLogger("userauth.auth")

_settings = get_settings()

# bcrypt only looks at the first 72 bytes of its input.
MAX_PASSWORD_BYTES = 72


def hash_password(plain: str) -> str:
    """Return a salted bcrypt hash of the given plaintext password."""
    salt = bcrypt.gensalt(rounds=_settings.bcrypt_rounds)
    return bcrypt.hashpw(plain.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain: str, hashed: str | None) -> bool:
    """Return True if the plaintext password matches the bcrypt hash.

    Returns False for a mismatch, a missing or malformed hash, or any error
    raised by bcrypt itself.
    """
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except Exception:
        logger.debug("bcrypt verification failed on a malformed hash")
        return False


# Computed once at module load so the first unknown-email login is not
# measurably slower than later ones [C1].
_DUMMY_HASH: str = hash_password("userauth_timing_dummy")


def burn_verification(plain: str) -> None:
    """Spend one bcrypt verification's worth of time and discard the result.

    Called on the unknown-email login path so it costs the same as the
    wrong-password path [C1].
    """
    verify_password(plain, _DUMMY_HASH)
