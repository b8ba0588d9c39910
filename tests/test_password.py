"""Tests for password hashing."""

import pytest

from app.exceptions import InvalidPasswordError
from app.services.password import PasswordHasher


@pytest.fixture(name="hasher")
def hasher_fixture() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.mark.parametrize("password", ["pw1", "correct horse battery staple", "contraseña-ñandú", "x" * 72])
def test_hash_then_verify(hasher: PasswordHasher, password: str):
    password_hash = hasher.hash(password)
    assert password_hash != password
    assert hasher.verify(password, password_hash)
    assert not hasher.verify(password + "!", password_hash)
    assert not hasher.verify(password[:-1], password_hash)


def test_hashes_are_salted(hasher: PasswordHasher):
    assert hasher.hash("same") != hasher.hash("same")


def test_cost_factor_is_configurable(hasher: PasswordHasher):
    assert hasher.hash("pw").startswith("$2b$04$")
    assert hasher.hash("pw", rounds=5).startswith("$2b$05$")


def test_verify_malformed_hash(hasher: PasswordHasher):
    assert not hasher.verify("pw", "not-a-bcrypt-hash")


def test_password_over_72_bytes_rejected(hasher: PasswordHasher):
    # 37 two-byte characters = 74 bytes
    with pytest.raises(InvalidPasswordError):
        hasher.hash("ñ" * 37)
    assert not hasher.verify("x" * 73, hasher.hash("x" * 72))
