"""Password hashing and access-token issuance/verification."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from leave_service.config import get_settings
from leave_service.exceptions import UnauthorizedError

BCRYPT_ROUNDS = 10


def hash_password(password: str) -> str:
    """Hash a plaintext password with bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash.
        return False


def create_access_token(user_id: int, role: str, *, now: datetime | None = None) -> str:
    """Issue a signed JWT carrying the user id (``sub``) and role."""
    settings = get_settings()
    issued_at = now or datetime.now(UTC)
    claims: dict[str, Any] = {
        "sub": str(user_id),
        "role": role,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=settings.jwt_expiration_minutes),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    """Verify a JWT and return its claims.

    Raises UnauthorizedError for bad signatures, expired tokens and tokens
    without a numeric subject.
    """
    settings = get_settings()
    try:
        claims: dict[str, Any] = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.PyJWTError:
        raise UnauthorizedError("Invalid or expired token") from None

    if not str(claims["sub"]).isdigit():
        raise UnauthorizedError("Invalid or expired token")
    return claims
