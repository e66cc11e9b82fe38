"""
auth/store.py -- SQLAlchemy Core persistence layer for user accounts.

Pattern: Repository + Data Mapper.
UserRepository is the contract the account flows depend on; UserStore is the
SQL implementation and _row_to_user is the mapper. Flow and route code never
touches SQL directly.

Security:
  All queries use bound parameters. No f-strings in SQL.

  Email uniqueness is a UNIQUE constraint on users.email. The store never
  does check-then-insert; the database reports the conflict and the store
  translates it into DuplicateEmailError. Two concurrent registrations for
  the same address therefore produce exactly one row.

  Every write runs inside engine.begin() so it either commits whole or rolls
  back whole. There are no partial writes.

Error translation:
  IntegrityError  -> DuplicateEmailError (the only UNIQUE column is email)
  SQLAlchemyError -> StoreError

DB path: auth/userauth.db unless DATABASE_URL says otherwise.

Layer rule: no imports from api/ or core/.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Protocol

from sqlalchemy import JSON, Column, MetaData, String, Table, Text, create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from auth.models import User

logger = logging.getLogger("userauth.store")

# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class StoreError(Exception):
    """The repository could not complete an operation."""


class DuplicateEmailError(StoreError):
    """An insert or update collided with the UNIQUE(email) constraint."""


# ---------------------------------------------------------------------------
# Contract
# ---------------------------------------------------------------------------


class UserRepository(Protocol):
    """What the account flows need from persistence. Nothing more."""

    def create_user(self, user: User) -> User: ...

    def get_by_id(self, user_id: str) -> User | None: ...

    def get_by_email(self, email: str) -> User | None: ...

    def update_user(
        self,
        user_id: str,
        *,
        email: str | None = None,
        hashed_password: str | None = None,
        profile_changes: dict[str, Any] | None = None,
    ) -> User | None: ...

    def delete_user(self, user_id: str) -> bool: ...


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

_metadata = MetaData()

_users = Table(
    "users",
    _metadata,
    Column("id", String(32), primary_key=True),  # uuid4 hex, assigned on insert
    Column("email", String(255), nullable=False, unique=True),
    Column("hashed_password", Text, nullable=False),
    Column("profile", JSON, nullable=False, default=dict),
    Column("created_at", String(32), nullable=False),
    Column("updated_at", String(32), nullable=False),
)


# ---------------------------------------------------------------------------
# WAL mode
# ---------------------------------------------------------------------------


def _set_wal_mode(dbapi_conn, connection_record) -> None:
    """Enable WAL journal mode so readers do not block during writes.

    Set per-connection because SQLite PRAGMAs are not inherited by new
    connections from the pool.
    """
    dbapi_conn.execute("PRAGMA journal_mode=WAL")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return uuid.uuid4().hex


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class UserStore:
    """SQL implementation of UserRepository.

    Usage:
        store = UserStore("sqlite:///:memory:")
        created = store.create_user(User(email="a@x.com", hashed_password=hash_password("pw1")))
        user = store.get_by_email("a@x.com")
        store.close()
    """

    def __init__(self, db_url: str) -> None:
        connect_args: dict = {}
        if db_url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        self.engine: Engine = create_engine(db_url, connect_args=connect_args)
        if db_url.startswith("sqlite"):
            event.listen(self.engine, "connect", _set_wal_mode)
        _metadata.create_all(self.engine)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create_user(self, user: User) -> User:
        """Insert a new user and return it with id and timestamps filled in.

        Raises DuplicateEmailError if the email is already taken. Nothing is
        written in that case.
        """
        if not user.hashed_password:
            raise ValueError("Refusing to store a user without a password hash.")
        now = _now_iso()
        values = {
            "id": _new_id(),
            "email": user.email,
            "hashed_password": user.hashed_password,
            "profile": dict(user.profile),
            "created_at": now,
            "updated_at": now,
        }
        try:
            with self.engine.begin() as conn:
                conn.execute(_users.insert().values(**values))
        except IntegrityError as exc:
            raise DuplicateEmailError("email already registered") from exc
        except SQLAlchemyError as exc:
            raise StoreError("could not create user") from exc
        logger.debug("Inserted user %s", values["id"])
        return User(**values)

    def update_user(
        self,
        user_id: str,
        *,
        email: str | None = None,
        hashed_password: str | None = None,
        profile_changes: dict[str, Any] | None = None,
    ) -> User | None:
        """Apply a partial update to one user inside a single transaction.

        profile_changes is merged into the stored profile; a None value
        removes that key. Returns the updated User, or None if user_id does
        not exist. Raises DuplicateEmailError if the new email is taken.
        """
        try:
            with self.engine.begin() as conn:
                row = conn.execute(_users.select().where(_users.c.id == user_id)).fetchone()
                if row is None:
                    return None
                values: dict[str, Any] = {"updated_at": _now_iso()}
                if email is not None:
                    values["email"] = email
                if hashed_password is not None:
                    values["hashed_password"] = hashed_password
                if profile_changes:
                    profile = dict(row.profile or {})
                    for key, value in profile_changes.items():
                        if value is None:
                            profile.pop(key, None)
                        else:
                            profile[key] = value
                    values["profile"] = profile
                conn.execute(_users.update().where(_users.c.id == user_id).values(**values))
                updated = conn.execute(_users.select().where(_users.c.id == user_id)).fetchone()
        except IntegrityError as exc:
            raise DuplicateEmailError("email already registered") from exc
        except SQLAlchemyError as exc:
            raise StoreError("could not update user") from exc
        return _row_to_user(updated)

    def delete_user(self, user_id: str) -> bool:
        """Permanently delete a user record. Returns True if deleted, False if not found."""
        try:
            with self.engine.begin() as conn:
                result = conn.execute(_users.delete().where(_users.c.id == user_id))
        except SQLAlchemyError as exc:
            raise StoreError("could not delete user") from exc
        return result.rowcount > 0

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_by_id(self, user_id: str) -> User | None:
        """Look up a user by primary key. Returns None if not found."""
        with self.engine.connect() as conn:
            row = conn.execute(_users.select().where(_users.c.id == user_id)).fetchone()
        return _row_to_user(row) if row is not None else None

    def get_by_email(self, email: str) -> User | None:
        """Look up a user by exact email (case-sensitive). Returns None if not found."""
        with self.engine.connect() as conn:
            row = conn.execute(_users.select().where(_users.c.email == email)).fetchone()
        return _row_to_user(row) if row is not None else None

    def ping(self) -> bool:
        """Return True if the database answers a trivial query."""
        try:
            with self.engine.connect() as conn:
                conn.execute(_users.select().limit(1))
        except SQLAlchemyError:
            return False
        return True

    def close(self) -> None:
        self.engine.dispose()


# ---------------------------------------------------------------------------
# Row mapper (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_user(row) -> User:
    return User(
        id=row.id,
        email=row.email,
        hashed_password=row.hashed_password,
        profile=dict(row.profile or {}),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
