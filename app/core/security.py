"""Password hashing, verification tokens and JWT access tokens carrying the user id."""

import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.config import settings

BCRYPT_ROUNDS = 12
# bcrypt ignores input past 72 bytes.
BCRYPT_MAX_BYTES = 72

PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128


def _password_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain_password: str) -> str:
    return bcrypt.hashpw(
        _password_bytes(plain_password), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    ).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """False for a wrong password and for a malformed stored hash."""
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def generate_verification_token() -> str:
    """Opaque token for the email verification link (GET /auth/verify/{token})."""
    return secrets.token_urlsafe(32)


def create_access_token(sub: str | int) -> str:
    """
    Signed token with the user id as `sub`. Roles are not embedded; they are
    read from the database on every request so a role change applies at once.
    """
    now = datetime.now(UTC)
    payload: dict[str, Any] = {
        "sub": str(sub),
        "iat": now,
        "exp": now + timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify signature and expiry and return the claims.
    Raises jwt.PyJWTError on invalid or expired token.
    """
    return jwt.decode(
        token,
        settings.JWT_SECRET.get_secret_value(),
        algorithms=[settings.JWT_ALGORITHM],
    )


def user_id_from_claims(claims: dict[str, Any]) -> int:
    """
    Numeric user id from the `sub` claim.
    Raises jwt.InvalidTokenError when it is missing or not an integer.
    """
    sub = claims.get("sub")
    try:
        return int(sub)
    except (TypeError, ValueError):
        raise jwt.InvalidTokenError("Invalid token subject") from None
