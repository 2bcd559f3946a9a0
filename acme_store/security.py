"""Password hashing helpers backed by :mod:`bcrypt`."""

from __future__ import annotations

import bcrypt

# Fixed work factor; changing it only affects newly created hashes.
BCRYPT_ROUNDS = 10


def hash_password(password: str) -> str:
    """Return a salted bcrypt hash of ``password``."""

    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check ``password`` against a hash produced by :func:`hash_password`."""

    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash, or a password beyond bcrypt's 72 byte limit.
        return False


__all__ = ["BCRYPT_ROUNDS", "hash_password", "verify_password"]
