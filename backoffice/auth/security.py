"""Password hashing utilities."""

import bcrypt

from backoffice.config import get_settings

# bcrypt only consumes the first 72 bytes of a password.
_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode()[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password with bcrypt.

    ``rounds`` is the bcrypt cost factor; it defaults to ``BCRYPT_ROUNDS``.
    The salt is random and embedded in the returned digest.
    """
    if rounds is None:
        rounds = get_settings().bcrypt_rounds
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain-text password against a bcrypt hash.

    A malformed digest never raises; it simply does not match.
    """
    try:
        return bcrypt.checkpw(_encode(plain_password), hashed_password.encode())
    except (ValueError, TypeError, AttributeError):
        return False
