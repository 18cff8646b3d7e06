"""Password hashing and one-time password generation."""

import secrets

import bcrypt

from loanflow.core.config import settings


def hash_password(password: str, rounds: int | None = None) -> str:
    """
    Hash a plain text password with bcrypt.

    Args:
        password: Plain text password
        rounds: Work factor override (defaults to settings.bcrypt_rounds)

    Returns:
        The bcrypt hash as a UTF-8 string
    """
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Not a bcrypt hash
        return False


def generate_temporary_password(length: int | None = None) -> str:
    """Random URL-safe password handed to staff created by an admin."""
    size = length or settings.temporary_password_length
    return secrets.token_urlsafe(size)[:size]
