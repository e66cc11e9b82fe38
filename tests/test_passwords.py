"""Unit tests for auth/passwords.py -- bcrypt hashing and verification.

Covers:
- hash/verify round trip, and mismatch for a different password
- Fresh salt per call: same password never hashes to the same string
- The stored hash is never the plaintext
- verify_password() returns False (never raises) for malformed, empty or None hashes
- burn_verification() runs without raising and returns nothing
"""

from auth.passwords import burn_verification, hash_password, verify_password


class TestHashPassword:
    def test_verify_round_trip(self) -> None:
        hashed = hash_password("pw1")
        assert verify_password("pw1", hashed) is True

    def test_different_password_does_not_verify(self) -> None:
        hashed = hash_password("pw1")
        assert verify_password("pw2", hashed) is False

    def test_hash_is_salted(self) -> None:
        """Two hashes of the same input differ but both verify."""
        first = hash_password("same-password")
        second = hash_password("same-password")
        assert first != second
        assert verify_password("same-password", first)
        assert verify_password("same-password", second)

    def test_hash_never_equals_plaintext(self) -> None:
        assert hash_password("hunter2") != "hunter2"

    def test_hash_is_bcrypt_format(self) -> None:
        assert hash_password("pw").startswith("$2")

    def test_unicode_password(self) -> None:
        hashed = hash_password("pässwörd-密码")
        assert verify_password("pässwörd-密码", hashed)
        assert not verify_password("passwort-密码", hashed)


class TestVerifyPasswordFailureModes:
    """A broken stored hash is a failed login, never a crash."""

    def test_malformed_hash(self) -> None:
        assert verify_password("pw1", "not-a-bcrypt-hash") is False

    def test_empty_hash(self) -> None:
        assert verify_password("pw1", "") is False

    def test_none_hash(self) -> None:
        assert verify_password("pw1", None) is False

    def test_truncated_hash(self) -> None:
        hashed = hash_password("pw1")
        assert verify_password("pw1", hashed[:20]) is False

    def test_plaintext_stored_as_hash_does_not_verify(self) -> None:
        assert verify_password("pw1", "pw1") is False


def test_burn_verification_returns_none() -> None:
    assert burn_verification("anything") is None
