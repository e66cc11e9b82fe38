"""
core/config.py -- Centralized application configuration via pydantic-settings.

All environment variable reads for the service happen here. No module should
call os.getenv() or os.environ.get() directly -- import get_settings() instead.

Design patterns used:
  Singleton via lru_cache: get_settings() instantiates Settings once at first
      call and returns the cached instance on every subsequent call. This is
      the official FastAPI dependency injection pattern for config.

  BaseSettings (pydantic-settings): Reads values from environment variables
      and an optional .env file automatically. Field names map to env var names
      (e.g. jwt_secret -> JWT_SECRET). Type coercion and validation are built in.

  @model_validator(mode="after"): Cross-field validation after all fields are
      resolved. Used for the DEBUG-conditional JWT_SECRET policy.

Security notes:
  [S1] JWT_SECRET has a documented insecure default ("secret"). It is only
       accepted when DEBUG=true, and a warning is logged every startup. In
       production mode (DEBUG unset or false) the default is a hard startup
       failure.

  [S2] Any non-default JWT_SECRET shorter than 32 chars is rejected. HS256
       signing relies on key entropy -- a short key weakens every token.

Layer rule: core/ is the kernel. This module may not import from api/ or auth/.
"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("userauth.config")

# Never use in production. Only honoured when DEBUG=true [S1].
INSECURE_DEFAULT_SECRET = "secret"

_DEFAULT_DB_URL = f"sqlite:///{Path(__file__).resolve().parent.parent / 'auth' / 'userauth.db'}"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    All fields have defaults so Settings() can be instantiated in test
    environments without a real .env file (DEBUG=true is still required to
    accept the default secret).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------

    debug: bool = False
    log_level: str = "INFO"
    database_url: str = _DEFAULT_DB_URL

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    jwt_secret: str = INSECURE_DEFAULT_SECRET
    # 0 means tokens carry no exp claim and stay valid until the secret changes.
    token_expire_seconds: int = Field(default=0, ge=0)
    # bcrypt accepts cost factors 4..31. Tests drop this to 4 for speed.
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @model_validator(mode="after")
    def validate_jwt_secret(self) -> "Settings":
        """Enforce the JWT_SECRET policy [S1][S2].

        Dev mode (DEBUG=true): the insecure default is allowed with a warning
            so the service runs out of the box on a laptop.

        Production mode: refuse to start with the default. Tokens signed with
            a publicly known secret can be forged by anyone.

        Both modes: a configured secret must be at least 32 characters.
        """
        if self.jwt_secret == INSECURE_DEFAULT_SECRET:
            if not self.debug:
                raise ValueError(
                    "JWT_SECRET is required in production mode. "
                    "Set JWT_SECRET in your environment or .env file. "
                    "To run in development mode, set DEBUG=true."
                )
            logger.warning("WARNING: Using the insecure default JWT_SECRET. Never run this in production.")
            return self
        if len(self.jwt_secret) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters.")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return the application Settings singleton.

    In tests: call get_settings.cache_clear() between test cases if you need
    to inject different environment variables.
    """
    return Settings()
