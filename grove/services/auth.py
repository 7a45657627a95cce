"""Registration, login and token lifecycle (refresh list + access-token blacklist)."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from grove.core.errors import BadRequestError, UnauthorizedError
from grove.core.security import (
    access_token_expiry,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)
from grove.models.user import User
from grove.repositories.users import UserRepository
from grove.schemas.user import (
    AccessToken,
    PasswordChange,
    PasswordChanged,
    TokenPair,
    UserLogin,
    UserRead,
    UserRegister,
)
from grove.services.metrics import as_utc

logger = logging.getLogger(__name__)


def is_blacklisted(user: User, token: str) -> bool:
    return any(entry.get("token") == token for entry in user.blacklisted_tokens or [])


def is_revoked(user: User, token: str, issued_at: int | None = None) -> bool:
    """Blacklisted, or issued before the user last changed their password."""
    if is_blacklisted(user, token):
        return True
    if user.password_changed_at is None or issued_at is None:
        return False
    return issued_at < int(as_utc(user.password_changed_at).timestamp())


def _unexpired(entries: list[dict] | None, now: datetime) -> list[dict]:
    """Blacklist entries whose access token could still authenticate."""
    kept = []
    for entry in entries or []:
        if entry.get("expires_at"):
            expires_at = as_utc(datetime.fromisoformat(entry["expires_at"]))
        else:
            expires_at = access_token_expiry(entry.get("token", ""))
        if expires_at is not None and expires_at > now:
            kept.append(entry)
    return kept


def _blacklist_entry(access_token: str, now: datetime) -> dict:
    expires_at = access_token_expiry(access_token)
    return {
        "token": access_token,
        "blacklisted_at": now.isoformat(),
        "expires_at": expires_at.isoformat() if expires_at else None,
    }


class AuthService:
    def __init__(self, db: AsyncSession):
        self.users = UserRepository(db)

    async def _issue(self, user: User) -> TokenPair:
        """New access token plus a refresh token remembered on the user."""
        access = create_access_token(user.id)
        refresh, expires_at = create_refresh_token(user.id)
        now = datetime.now(timezone.utc)
        user.refresh_tokens = [
            *(user.refresh_tokens or []),
            {"token": refresh, "created_at": now.isoformat(), "expires_at": expires_at.isoformat()},
        ]
        user = await self.users.save(user)
        return TokenPair(access_token=access, refresh_token=refresh, user=UserRead.model_validate(user))

    async def register(self, data: UserRegister) -> TokenPair:
        email = data.email.lower()
        if await self.users.get_by_email(email):
            raise BadRequestError("Email already registered")
        if data.username and await self.users.get_by_username(data.username):
            raise BadRequestError("Username already taken")

        fields = data.model_dump(exclude={"email", "password"}, exclude_none=True)
        user = User(**fields, email=email, password_hash=hash_password(data.password))
        user = await self.users.add(user)
        logger.info("Registered user %s", user.id)
        return await self._issue(user)

    async def login(self, data: UserLogin) -> TokenPair:
        user = await self.users.get_by_email(data.email)
        if user is None or not verify_password(data.password, user.password_hash):
            raise BadRequestError("Invalid credentials")
        return await self._issue(user)

    async def refresh(self, refresh_token: str) -> AccessToken:
        try:
            user_id = decode_token(refresh_token, refresh=True)
        except (jwt.InvalidTokenError, ValueError):
            raise UnauthorizedError("Invalid refresh token") from None

        user = await self.users.get(user_id)
        if user is None:
            raise UnauthorizedError("Invalid refresh token")
        now = datetime.now(timezone.utc)
        stored = next(
            (t for t in user.refresh_tokens or [] if t.get("token") == refresh_token), None
        )
        if stored is None or as_utc(datetime.fromisoformat(stored["expires_at"])) <= now:
            raise UnauthorizedError("Invalid refresh token")
        return AccessToken(access_token=create_access_token(user.id))

    async def logout(self, user: User, access_token: str) -> None:
        """Revoke the access token. Entries for tokens that have expired anyway are dropped."""
        if is_blacklisted(user, access_token):
            return
        now = datetime.now(timezone.utc)
        user.blacklisted_tokens = [
            *_unexpired(user.blacklisted_tokens, now),
            _blacklist_entry(access_token, now),
        ]
        await self.users.save(user)

    async def logout_all(self, user: User, access_token: str) -> None:
        """Forget every refresh token and revoke the presented access token."""
        user.refresh_tokens = []
        await self.logout(user, access_token)
        await self.users.save(user)

    async def change_password(
        self, user: User, data: PasswordChange, access_token: str
    ) -> PasswordChanged:
        """
        Replace the password and sign the user out everywhere: refresh tokens are
        forgotten and access tokens issued before now stop authenticating.
        """
        if not verify_password(data.current_password, user.password_hash):
            raise BadRequestError("Current password is incorrect")
        now = datetime.now(timezone.utc)
        user.password_hash = hash_password(data.new_password)
        user.password_changed_at = now
        user.refresh_tokens = []
        # Earlier entries are covered by password_changed_at
        user.blacklisted_tokens = [_blacklist_entry(access_token, now)]
        await self.users.save(user)
        logger.info("Password changed for user %s", user.id)
        return PasswordChanged()
