"""Password hashing and generation utilities built on bcrypt."""
from __future__ import annotations

import secrets
import string

import bcrypt

from ballot_box.core.settings import MIN_SALT_ROUNDS

GENERATED_PASSWORD_LENGTH = 12
_PASSWORD_ALPHABET = string.ascii_letters + string.digits


def generate_password(length: int = GENERATED_PASSWORD_LENGTH) -> str:
    """Return a random alphanumeric password of ``length`` characters."""
    return "".join(secrets.choice(_PASSWORD_ALPHABET) for _ in range(length))


def hash_password(password: str, rounds: int) -> str:
    """Hash ``password`` with bcrypt.

    Args:
        password: Plaintext password.
        rounds: bcrypt cost factor; values below the configured floor are raised to it.

    Returns:
        The bcrypt hash as a UTF-8 string.
    """
    salt = bcrypt.gensalt(rounds=max(rounds, MIN_SALT_ROUNDS))
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Check ``password`` against a bcrypt hash.

    Raises:
        ValueError: If ``hashed`` is not a usable bcrypt hash.
    """
    return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
