"""Credential hashing and bearer token helpers."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
from jose import jwt

from chat_geo.core.errors import InvalidArgumentError
from chat_geo.core.settings import settings

# bcrypt only looks at the first 72 bytes of a password.
BCRYPT_MAX_PASSWORD_BYTES = 72


def hash_password(password: str, *, rounds: int | None = None) -> str:
    """Return a salted bcrypt hash of ``password``."""
    secret = password.encode("utf-8")
    if len(secret) > BCRYPT_MAX_PASSWORD_BYTES:
        raise InvalidArgumentError(
            f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes long"
        )
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(secret, salt).decode("ascii")


def verify_password(password: str, hashed: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    secret = password.encode("utf-8")
    if len(secret) > BCRYPT_MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(secret, hashed.encode("ascii"))
    except (ValueError, UnicodeEncodeError):
        # Malformed stored hash.
        return False


def create_access_token(
    user_uuid: str,
    *,
    username: str | None = None,
    email: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed JWT whose subject is the user's uuid."""
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    claims: dict[str, Any] = {"sub": user_uuid, "iat": now, "exp": expire}
    if username is not None:
        claims["username"] = username
    if email is not None:
        claims["email"] = email
    return jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    """Decode and verify a JWT, raising ``jose.JWTError`` subclasses on failure."""
    return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
