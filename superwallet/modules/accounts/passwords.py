"""Password policy and bcrypt hashing for account credentials."""

from __future__ import annotations

import bcrypt

from superwallet.core.exceptions import InvalidArgument

MIN_PASSWORD_LENGTH = 6
# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


def check_password_policy(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidArgument(f"password must be at least {MIN_PASSWORD_LENGTH} characters", field="password")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise InvalidArgument(f"password must be at most {MAX_PASSWORD_BYTES} bytes", field="password")


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    """False for a wrong password and for unusable hashes alike."""
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, password_hash.encode("ascii"))
    except ValueError:
        return False


__all__ = ["MIN_PASSWORD_LENGTH", "MAX_PASSWORD_BYTES", "check_password_policy", "hash_password", "verify_password"]
