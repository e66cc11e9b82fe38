"""
tests/conftest.py -- Shared test fixtures for the account service.

This module provides:
  - store: a fresh in-memory UserStore per test (unit tests)
  - codec: a SessionTokenCodec with a fixed test secret
  - make_email: factory for unique addresses so module-scoped DBs never collide
  - api_client: TestClient over the real app with test store + codec wired in

Design: the API fixture uses a named shared-memory SQLite URI (not plain
:memory:) because TestClient runs def route handlers in a thread pool. Plain
:memory: DBs are per-connection and would present a blank schema to each
worker thread. The named URI format (file:name?mode=memory&cache=shared&uri=true)
shares one in-memory instance across all connections in the same process.

DEBUG and BCRYPT_ROUNDS must be set before any auth/core import: get_settings()
is cached on first call, DEBUG=true allows the default JWT secret, and 4
bcrypt rounds keeps the suite fast.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Generator
from contextlib import asynccontextmanager

# CRITICAL: Set env before any auth/core import so get_settings() sees it.
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient

from api.main import app
from auth.sessions import SessionTokenCodec
from auth.store import UserStore

TEST_SECRET = "test-secret-0123456789abcdef-0123456789"


def _unique_email(prefix: str = "user") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:10]}@example.com"


def patch_lifespan(user_store, codec: SessionTokenCodec):
    """Return an async context manager that replaces the real lifespan.

    Wires pre-created test collaborators into app.state so routes use
    isolated test DBs rather than the configured database.
    """

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.user_store = user_store
        app.state.token_codec = codec
        yield

    return test_lifespan


@pytest.fixture
def store() -> Generator[UserStore, None, None]:
    s = UserStore("sqlite:///:memory:")
    yield s
    s.close()


@pytest.fixture
def make_email():
    """Factory for unique addresses so module-scoped DBs never collide."""
    return _unique_email


@pytest.fixture
def codec() -> SessionTokenCodec:
    return SessionTokenCodec(TEST_SECRET)


@pytest.fixture(scope="module")
def api_client() -> Generator[tuple[TestClient, UserStore, SessionTokenCodec], None, None]:
    """Yield (client, store, codec) for API integration tests.

    One TestClient per test module for speed. Tests register their own users
    with make_email() so they do not depend on each other's state.
    """
    db_name = f"test_auth_{uuid.uuid4().hex[:8]}"
    user_store = UserStore(f"sqlite:///file:{db_name}?mode=memory&cache=shared&uri=true")
    codec = SessionTokenCodec(TEST_SECRET)

    app.router.lifespan_context = patch_lifespan(user_store, codec)

    with TestClient(app, raise_server_exceptions=True) as client:
        yield client, user_store, codec

    user_store.close()
