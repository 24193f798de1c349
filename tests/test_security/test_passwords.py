"""Tests for Argon2 password hashing."""

import pytest

from hrm_access.security.passwords import PasswordHasher


def _cheap_hasher() -> PasswordHasher:
    return PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)


def test_hash_and_verify():
    hasher = _cheap_hasher()
    stored = hasher.hash("demo123")
    assert stored.startswith("$argon2id$")
    assert hasher.verify("demo123", stored) is True
    assert hasher.verify("wrong", stored) is False


def test_same_password_gets_different_salts():
    hasher = _cheap_hasher()
    assert hasher.hash("demo123") != hasher.hash("demo123")


def test_verify_uses_parameters_stored_in_hash():
    stored = _cheap_hasher().hash("pw")
    assert PasswordHasher(time_cost=2, memory_cost=16, parallelism=1).verify("pw", stored) is True


@pytest.mark.parametrize(
    "stored",
    [None, "", "plaintext", "md5$1$aa$bb", "pbkdf2_sha256$1000$aa$bb", "$argon2id$v=19$m=8,t=1,p=1$broken"],
)
def test_malformed_hashes_never_verify(stored):
    assert _cheap_hasher().verify("pw", stored) is False
