"""Unit tests for auth/store.py -- UserStore repository.

Covers:
- create_user() assigns an opaque id and timestamps
- UNIQUE(email) surfaces as DuplicateEmailError and leaves the first row intact
- Email lookups are exact-match (case-sensitive)
- update_user() merges profile fields, drops keys set to None, returns None for unknown ids
- update_user() to an email another user holds raises DuplicateEmailError and changes nothing
- delete_user() reports whether a row was removed
- Users without a hash are refused
"""

from __future__ import annotations

import pytest

from auth.models import User
from auth.store import DuplicateEmailError, UserStore


def _user(email: str = "a@x.com", **profile) -> User:
    return User(email=email, hashed_password="$2b$04$fakehashfakehashfakehash", profile=profile)


class TestCreate:
    def test_create_assigns_id_and_timestamps(self, store: UserStore) -> None:
        created = store.create_user(_user(name="Ada"))
        assert created.id
        assert created.created_at
        assert created.updated_at == created.created_at
        assert created.profile == {"name": "Ada"}

    def test_ids_are_unique(self, store: UserStore) -> None:
        first = store.create_user(_user("a@x.com"))
        second = store.create_user(_user("b@x.com"))
        assert first.id != second.id

    def test_duplicate_email_raises(self, store: UserStore) -> None:
        original = store.create_user(_user("a@x.com", name="first"))
        with pytest.raises(DuplicateEmailError):
            store.create_user(_user("a@x.com", name="second"))
        fetched = store.get_by_email("a@x.com")
        assert fetched.id == original.id
        assert fetched.profile == {"name": "first"}

    def test_missing_hash_refused(self, store: UserStore) -> None:
        with pytest.raises(ValueError):
            store.create_user(User(email="a@x.com", hashed_password=""))


class TestLookup:
    def test_get_by_id(self, store: UserStore) -> None:
        created = store.create_user(_user())
        assert store.get_by_id(created.id).email == "a@x.com"

    def test_get_by_id_missing(self, store: UserStore) -> None:
        assert store.get_by_id("nope") is None

    def test_email_lookup_is_case_sensitive(self, store: UserStore) -> None:
        store.create_user(_user("a@x.com"))
        assert store.get_by_email("a@x.com") is not None
        assert store.get_by_email("A@X.com") is None

    def test_emails_differing_in_case_are_distinct_accounts(self, store: UserStore) -> None:
        store.create_user(_user("a@x.com"))
        store.create_user(_user("A@x.com"))
        assert store.get_by_email("a@x.com").id != store.get_by_email("A@x.com").id

    def test_repr_hides_hash(self, store: UserStore) -> None:
        created = store.create_user(_user())
        assert "fakehash" not in repr(created)


class TestUpdate:
    def test_profile_merge(self, store: UserStore) -> None:
        created = store.create_user(_user(name="Ada", city="London"))
        updated = store.update_user(created.id, profile_changes={"city": "Paris", "age": 36})
        assert updated.profile == {"name": "Ada", "city": "Paris", "age": 36}

    def test_none_removes_profile_key(self, store: UserStore) -> None:
        created = store.create_user(_user(name="Ada", city="London"))
        updated = store.update_user(created.id, profile_changes={"city": None})
        assert updated.profile == {"name": "Ada"}

    def test_update_email_and_hash(self, store: UserStore) -> None:
        created = store.create_user(_user())
        updated = store.update_user(created.id, email="new@x.com", hashed_password="$2b$04$other")
        assert updated.email == "new@x.com"
        assert updated.hashed_password == "$2b$04$other"
        assert store.get_by_email("a@x.com") is None

    def test_update_unknown_id(self, store: UserStore) -> None:
        assert store.update_user("missing", profile_changes={"x": 1}) is None

    def test_update_to_taken_email(self, store: UserStore) -> None:
        store.create_user(_user("a@x.com"))
        other = store.create_user(_user("b@x.com", name="Bob"))
        with pytest.raises(DuplicateEmailError):
            store.update_user(other.id, email="a@x.com", profile_changes={"name": "Mallory"})
        unchanged = store.get_by_id(other.id)
        assert unchanged.email == "b@x.com"
        assert unchanged.profile == {"name": "Bob"}


class TestDelete:
    def test_delete_existing(self, store: UserStore) -> None:
        created = store.create_user(_user())
        assert store.delete_user(created.id) is True
        assert store.get_by_id(created.id) is None

    def test_delete_missing(self, store: UserStore) -> None:
        assert store.delete_user("missing") is False

    def test_email_reusable_after_delete(self, store: UserStore) -> None:
        created = store.create_user(_user())
        store.delete_user(created.id)
        assert store.create_user(_user()).id != created.id


def test_ping(store: UserStore) -> None:
    assert store.ping() is True
