"""WeightLog repository."""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from grove.models.weight_log import WeightLog


class WeightLogRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, entry: WeightLog) -> WeightLog:
        self.db.add(entry)
        await self.db.flush()
        await self.db.refresh(entry)
        return entry

    async def list_recent(self, user_id: uuid.UUID, limit: int) -> list[WeightLog]:
        """Newest first."""
        result = await self.db.execute(
            select(WeightLog)
            .where(WeightLog.user_id == user_id)
            .order_by(WeightLog.logged_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
