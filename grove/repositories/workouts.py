"""Workout repository."""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from grove.core.enums import WorkoutType
from grove.models.workout import Workout, WorkoutExercise


def _workout_query():
    return select(Workout).options(
        selectinload(Workout.exercises).selectinload(WorkoutExercise.exercise)
    )


class WorkoutRepository:
    """Repository for workouts and their ordered exercise entries."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_owned(
        self,
        user_id: uuid.UUID,
        workout_type: WorkoutType | None = None,
        is_template: bool | None = None,
    ) -> list[Workout]:
        stmt = _workout_query().where(Workout.user_id == user_id)
        if workout_type:
            stmt = stmt.where(Workout.workout_type == workout_type)
        if is_template is not None:
            stmt = stmt.where(Workout.is_template == is_template)
        result = await self.db.execute(stmt.order_by(Workout.created_at.desc()))
        return list(result.scalars().all())

    async def get_owned(self, workout_id: uuid.UUID, user_id: uuid.UUID) -> Workout | None:
        """Workout with entries and their exercises loaded, or None if absent / not owned."""
        result = await self.db.execute(
            _workout_query()
            .where(Workout.id == workout_id, Workout.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_many_owned(
        self, ids: Iterable[uuid.UUID], user_id: uuid.UUID
    ) -> dict[uuid.UUID, Workout]:
        ids = set(ids)
        if not ids:
            return {}
        result = await self.db.execute(
            _workout_query().where(Workout.id.in_(ids), Workout.user_id == user_id)
        )
        return {w.id: w for w in result.scalars().all()}

    async def add(self, workout: Workout) -> Workout:
        self.db.add(workout)
        return await self.save(workout)

    async def save(self, workout: Workout) -> Workout:
        """Flush pending changes and reload with entries and exercises populated."""
        await self.db.flush()
        result = await self.db.execute(
            _workout_query()
            .where(Workout.id == workout.id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def delete(self, workout: Workout) -> None:
        await self.db.delete(workout)
        await self.db.flush()

    async def mark_completed(self, workout_id: uuid.UUID, at: datetime) -> None:
        await self.db.execute(
            update(Workout)
            .where(Workout.id == workout_id)
            .values(times_completed=Workout.times_completed + 1, last_performed=at)
            .execution_options(synchronize_session=False)
        )
