# tests/test_security.py
"""Tests for password helpers."""

import bcrypt
import pytest

from ballot_box.core.security import generate_password, hash_password, verify_password


def test_generate_password_length_and_alphabet() -> None:
    password = generate_password()

    assert len(password) == 12
    assert password.isalnum()


def test_generate_password_custom_length() -> None:
    assert len(generate_password(20)) == 20


def test_hash_and_verify() -> None:
    hashed = hash_password("s3cret", 8)

    assert hashed != "s3cret"
    assert verify_password("s3cret", hashed)
    assert not verify_password("wrong", hashed)


def test_hash_password_enforces_cost_floor() -> None:
    hashed = hash_password("s3cret", 4)

    # bcrypt hashes look like $2b$<cost>$...
    assert hashed.split("$")[2] == "08"
    assert bcrypt.checkpw(b"s3cret", hashed.encode())


def test_verify_password_rejects_malformed_hash() -> None:
    with pytest.raises(ValueError):
        verify_password("s3cret", "not-a-bcrypt-hash")
