"""Profile, preferences, username and body weight log."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from grove.core.constants import DEFAULT_WEIGHT_HISTORY_LIMIT
from grove.core.errors import BadRequestError
from grove.models.user import User
from grove.models.weight_log import WeightLog
from grove.repositories.users import UserRepository
from grove.repositories.weight_logs import WeightLogRepository
from grove.schemas.user import PreferencesUpdate, ProfileUpdate, WeightEntryRead, WeightHistory

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = UserRepository(db)
        self.weights = WeightLogRepository(db)

    async def _apply(self, user: User, changes: dict) -> User:
        for key, value in changes.items():
            setattr(user, key, value)
        return await self.users.save(user)

    async def update_profile(self, user: User, data: ProfileUpdate) -> User:
        return await self._apply(user, data.model_dump(exclude_unset=True))

    async def update_preferences(self, user: User, data: PreferencesUpdate) -> User:
        return await self._apply(user, data.model_dump(exclude_unset=True))

    async def change_username(self, user: User, username: str) -> User:
        existing = await self.users.get_by_username(username)
        if existing is not None and existing.id != user.id:
            raise BadRequestError("Username already taken")
        try:
            return await self._apply(user, {"username": username})
        except IntegrityError:
            # Taken concurrently
            await self.db.rollback()
            raise BadRequestError("Username already taken") from None

    async def add_weight(self, user: User, weight: float) -> WeightHistory:
        """Log a reading and make it the current weight."""
        await self.weights.add(
            WeightLog(user_id=user.id, weight_kg=weight, logged_at=datetime.now(timezone.utc))
        )
        await self._apply(user, {"weight": weight})
        logger.info("Weight %.1f kg logged for user %s", weight, user.id)
        return await self.weight_history(user)

    async def weight_history(
        self, user: User, limit: int = DEFAULT_WEIGHT_HISTORY_LIMIT
    ) -> WeightHistory:
        entries = await self.weights.list_recent(user.id, limit)
        return WeightHistory(
            current_weight=user.weight,
            weight_history=[WeightEntryRead.model_validate(e) for e in entries],
        )
