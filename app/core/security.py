"""Password hashing and verification (bcrypt)."""

import bcrypt

from app.core.config import settings

# Cost factor for new hashes; existing digests carry their own cost.
BCRYPT_ROUNDS = settings.BCRYPT_ROUNDS

# bcrypt only looks at the first 72 bytes of the password.
BCRYPT_MAX_PASSWORD_BYTES = 72


def password_fits_bcrypt(plain_password: str) -> bool:
    """True if bcrypt will see the whole password (at most 72 UTF-8 bytes)."""
    return len(plain_password.encode("utf-8")) <= BCRYPT_MAX_PASSWORD_BYTES


def _password_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


def hash_password(plain_password: str) -> str:
    """
    Hash a plain-text password for storage. Do not store plain passwords.

    The result is a self-describing bcrypt string ($2b$<cost>$<salt><digest>),
    so verification needs nothing but the stored value.
    """
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(plain_password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed: str | None) -> bool:
    """Verify a plain password against a stored hash. Malformed or empty hashes never match."""
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False
