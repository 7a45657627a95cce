"""Exercise repository."""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from datetime import datetime

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from grove.core.enums import ExerciseType
from grove.models.exercise import Exercise


def _visible_to(user_id: uuid.UUID):
    """Owned by the user, or predefined (no owner)."""
    return or_(Exercise.user_id == user_id, Exercise.user_id.is_(None))


class ExerciseRepository:
    """Repository for exercises."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_visible(
        self,
        user_id: uuid.UUID,
        type: ExerciseType | None = None,
        category: str | None = None,
    ) -> list[Exercise]:
        stmt = select(Exercise).where(_visible_to(user_id))
        if type:
            stmt = stmt.where(Exercise.type == type)
        if category:
            stmt = stmt.where(Exercise.category == category)
        result = await self.db.execute(stmt.order_by(Exercise.created_at.desc()))
        return list(result.scalars().all())

    async def get_visible(self, exercise_id: uuid.UUID, user_id: uuid.UUID) -> Exercise | None:
        result = await self.db.execute(
            select(Exercise).where(Exercise.id == exercise_id, _visible_to(user_id))
        )
        return result.scalar_one_or_none()

    async def get_owned(self, exercise_id: uuid.UUID, user_id: uuid.UUID) -> Exercise | None:
        result = await self.db.execute(
            select(Exercise).where(Exercise.id == exercise_id, Exercise.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_many(
        self, ids: Iterable[uuid.UUID], user_id: uuid.UUID
    ) -> dict[uuid.UUID, Exercise]:
        """Exercises by id, limited to those visible to the user."""
        ids = set(ids)
        if not ids:
            return {}
        result = await self.db.execute(
            select(Exercise).where(Exercise.id.in_(ids), _visible_to(user_id))
        )
        return {ex.id: ex for ex in result.scalars().all()}

    async def find_visible_ids(self, user_id: uuid.UUID, ids: Iterable[uuid.UUID]) -> set[uuid.UUID]:
        """Subset of ids that resolve to exercises the user may reference."""
        ids = set(ids)
        if not ids:
            return set()
        result = await self.db.execute(
            select(Exercise.id).where(Exercise.id.in_(ids), _visible_to(user_id))
        )
        return set(result.scalars().all())

    async def find_by_name(self, user_id: uuid.UUID, name: str) -> Exercise | None:
        result = await self.db.execute(
            select(Exercise)
            .where(Exercise.user_id == user_id, Exercise.name == name)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def count_owned(self, user_id: uuid.UUID) -> int:
        result = await self.db.execute(
            select(func.count(Exercise.id)).where(Exercise.user_id == user_id)
        )
        return int(result.scalar() or 0)

    async def top_performed(self, user_id: uuid.UUID, limit: int) -> list[Exercise]:
        result = await self.db.execute(
            select(Exercise)
            .where(Exercise.user_id == user_id)
            .order_by(Exercise.times_performed.desc(), Exercise.name)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def mark_performed(
        self, ids: Iterable[uuid.UUID], user_id: uuid.UUID, at: datetime
    ) -> None:
        """Bump usage counters. Only the user's own rows change; predefined ones are shared."""
        ids = set(ids)
        if not ids:
            return
        await self.db.execute(
            update(Exercise)
            .where(Exercise.id.in_(ids), Exercise.user_id == user_id)
            .values(times_performed=Exercise.times_performed + 1, last_performed=at)
            .execution_options(synchronize_session=False)
        )

    async def add(self, exercise: Exercise) -> Exercise:
        self.db.add(exercise)
        await self.db.flush()
        await self.db.refresh(exercise)
        return exercise

    async def save(self, exercise: Exercise) -> Exercise:
        await self.db.flush()
        await self.db.refresh(exercise)
        return exercise

    async def delete(self, exercise: Exercise) -> None:
        await self.db.delete(exercise)
        await self.db.flush()
