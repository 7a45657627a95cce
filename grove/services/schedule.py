"""Weekly training schedule and today's planned workout."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from grove.core.config import get_settings
from grove.core.constants import WEEKDAYS
from grove.core.errors import BadRequestError
from grove.models.user import User
from grove.repositories.users import UserRepository
from grove.repositories.workouts import WorkoutRepository
from grove.schemas.schedule import (
    ScheduledWorkout,
    TodayWorkout,
    WeeklySchedule,
    WeeklyScheduleUpdate,
)
from grove.schemas.workout import WorkoutRead
from grove.services import metrics


def _scheduled_ids(user: User) -> dict[str, uuid.UUID]:
    ids = {}
    for day in WEEKDAYS:
        value = (user.weekly_schedule or {}).get(day)
        if value:
            ids[day] = uuid.UUID(str(value))
    return ids


class ScheduleService:
    """Maps each weekday to one of the user's workouts, or to nothing (rest day)."""

    def __init__(self, db: AsyncSession, timezone_name: str | None = None):
        self.users = UserRepository(db)
        self.workouts = WorkoutRepository(db)
        self.tz = metrics.get_timezone(timezone_name or get_settings().stats_timezone)

    async def get(self, user: User) -> WeeklySchedule:
        ids = _scheduled_ids(user)
        workouts = await self.workouts.get_many_owned(ids.values(), user.id)
        return WeeklySchedule(
            **{
                day: ScheduledWorkout.model_validate(workouts[wid])
                for day, wid in ids.items()
                if wid in workouts
            }
        )

    async def update(self, user: User, data: WeeklyScheduleUpdate) -> WeeklySchedule:
        """Every referenced workout must belong to the user. The same one may fill several days."""
        days = data.model_dump()
        requested = {wid for wid in days.values() if wid is not None}
        if requested:
            found = await self.workouts.get_many_owned(requested, user.id)
            if set(found) != requested:
                raise BadRequestError("Some workouts not found or not accessible")
        user.weekly_schedule = {day: str(wid) if wid else None for day, wid in days.items()}
        user = await self.users.save(user)
        return await self.get(user)

    async def today(self, user: User, now: datetime | None = None) -> TodayWorkout:
        now = metrics.as_utc(now) if now else datetime.now(timezone.utc)
        day = WEEKDAYS[metrics.to_local_date(now, self.tz).weekday()]
        workout_id = _scheduled_ids(user).get(day)
        workout = await self.workouts.get_owned(workout_id, user.id) if workout_id else None
        if workout is None:
            return TodayWorkout(today=day, message=f"No workout scheduled for today ({day})")
        return TodayWorkout(today=day, workout=WorkoutRead.model_validate(workout))
