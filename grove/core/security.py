"""Security utilities: password hashing (passlib) and JWT access/refresh tokens."""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import jwt
from passlib.context import CryptContext

from grove.core.config import get_settings

password_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(plain: str) -> str:
    return password_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    return password_context.verify(plain, hashed)


def _encode(user_id: uuid.UUID, secret: str, expires_in: timedelta, token_type: str) -> tuple[str, datetime]:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    expires_at = now + expires_in
    payload = {
        "sub": str(user_id),
        "type": token_type,
        "iat": now,
        "exp": expires_at,
        # Unique per token so two tokens issued in the same second never collide
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(payload, secret, algorithm=settings.jwt_algorithm), expires_at


def create_access_token(user_id: uuid.UUID) -> str:
    settings = get_settings()
    token, _ = _encode(
        user_id,
        settings.jwt_secret,
        timedelta(minutes=settings.access_token_expire_minutes),
        "access",
    )
    return token


def create_refresh_token(user_id: uuid.UUID) -> tuple[str, datetime]:
    """Return (token, expires_at)."""
    settings = get_settings()
    return _encode(
        user_id,
        settings.jwt_refresh_secret,
        timedelta(days=settings.refresh_token_expire_days),
        "refresh",
    )


def decode_claims(token: str, *, refresh: bool = False) -> dict:
    """Verify signature, expiry and token type. Raises jwt.InvalidTokenError."""
    settings = get_settings()
    secret = settings.jwt_refresh_secret if refresh else settings.jwt_secret
    payload = jwt.decode(token, secret, algorithms=[settings.jwt_algorithm])
    expected = "refresh" if refresh else "access"
    if payload.get("type") != expected:
        raise jwt.InvalidTokenError(f"Expected {expected} token")
    return payload


def decode_token(token: str, *, refresh: bool = False) -> uuid.UUID:
    """
    Verify the token and return the user id.
    Raises jwt.InvalidTokenError (or ValueError for a malformed subject).
    """
    return uuid.UUID(decode_claims(token, refresh=refresh)["sub"])


def access_token_expiry(token: str) -> datetime | None:
    """exp of a correctly signed access token, even one already expired. None if unreadable."""
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"verify_exp": False},
        )
    except jwt.InvalidTokenError:
        return None
    exp = payload.get("exp")
    return datetime.fromtimestamp(exp, timezone.utc) if exp is not None else None
