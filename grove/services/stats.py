"""Dashboard statistics over a user's completed sessions."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from grove.core.config import get_settings
from grove.core.constants import RECENT_SESSIONS_LIMIT
from grove.repositories.exercises import ExerciseRepository
from grove.repositories.sessions import SessionRepository
from grove.schemas.user import RecentSession, UserStats
from grove.services import metrics


class StatsService:
    def __init__(self, db: AsyncSession, timezone_name: str | None = None):
        self.sessions = SessionRepository(db)
        self.exercises = ExerciseRepository(db)
        self.tz = metrics.get_timezone(timezone_name or get_settings().stats_timezone)

    async def get_stats(self, user_id: uuid.UUID, now: datetime | None = None) -> UserStats:
        now = metrics.as_utc(now) if now else datetime.now(timezone.utc)
        today = metrics.to_local_date(now, self.tz)

        timestamps = await self.sessions.completed_timestamps(user_id)
        days = [metrics.to_local_date(ts, self.tz) for ts in timestamps]
        recent = await self.sessions.recent_completed(user_id, RECENT_SESSIONS_LIMIT)

        return UserStats(
            total_workouts=await self.sessions.count_completed(user_id),
            total_exercises=await self.exercises.count_owned(user_id),
            this_week_workouts=await self.sessions.count_completed(
                user_id, since=metrics.week_start(now, self.tz)
            ),
            current_streak=metrics.current_streak(days, today),
            longest_streak=metrics.longest_streak(days),
            total_volume_kg=await self.sessions.total_volume(user_id),
            recent_sessions=[RecentSession.model_validate(s) for s in recent],
        )
