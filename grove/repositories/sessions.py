"""WorkoutSession repository."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from grove.core.constants import PERSONAL_BEST_SCAN_LIMIT
from grove.models.session import WorkoutSession


def _session_query():
    return select(WorkoutSession).options(selectinload(WorkoutSession.workout))


def _active():
    return (WorkoutSession.completed.is_(False)) & (WorkoutSession.abandoned.is_(False))


class SessionRepository:
    """Repository for workout sessions. Reads always load the parent workout."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_owned(
        self,
        user_id: uuid.UUID,
        completed: bool | None = None,
        limit: int = 50,
    ) -> list[WorkoutSession]:
        stmt = _session_query().where(WorkoutSession.user_id == user_id)
        if completed is not None:
            stmt = stmt.where(WorkoutSession.completed.is_(completed))
        stmt = stmt.order_by(WorkoutSession.started_at.desc()).limit(limit)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_owned(
        self,
        session_id: uuid.UUID,
        user_id: uuid.UUID,
        active_only: bool = False,
    ) -> WorkoutSession | None:
        stmt = _session_query().where(
            WorkoutSession.id == session_id, WorkoutSession.user_id == user_id
        )
        if active_only:
            stmt = stmt.where(_active())
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def find_active(self, user_id: uuid.UUID) -> WorkoutSession | None:
        result = await self.db.execute(
            _session_query().where(WorkoutSession.user_id == user_id, _active()).limit(1)
        )
        return result.scalar_one_or_none()

    async def recent_completed(self, user_id: uuid.UUID, limit: int) -> list[WorkoutSession]:
        result = await self.db.execute(
            _session_query()
            .where(WorkoutSession.user_id == user_id, WorkoutSession.completed.is_(True))
            .order_by(WorkoutSession.completed_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def completed_timestamps(self, user_id: uuid.UUID) -> list[datetime]:
        """completed_at of every completed session, newest first."""
        result = await self.db.execute(
            select(WorkoutSession.completed_at)
            .where(
                WorkoutSession.user_id == user_id,
                WorkoutSession.completed.is_(True),
                WorkoutSession.completed_at.isnot(None),
            )
            .order_by(WorkoutSession.completed_at.desc())
        )
        return list(result.scalars().all())

    async def count_completed(self, user_id: uuid.UUID, since: datetime | None = None) -> int:
        stmt = select(func.count(WorkoutSession.id)).where(
            WorkoutSession.user_id == user_id, WorkoutSession.completed.is_(True)
        )
        if since is not None:
            stmt = stmt.where(WorkoutSession.completed_at >= since)
        result = await self.db.execute(stmt)
        return int(result.scalar() or 0)

    async def total_volume(self, user_id: uuid.UUID) -> float:
        result = await self.db.execute(
            select(func.sum(WorkoutSession.total_volume_kg)).where(
                WorkoutSession.user_id == user_id, WorkoutSession.completed.is_(True)
            )
        )
        return float(result.scalar() or 0)

    async def previous_sets(
        self,
        user_id: uuid.UUID,
        exercise_id: uuid.UUID,
        sessions: int,
        scan_limit: int = PERSONAL_BEST_SCAN_LIMIT,
    ) -> list[dict]:
        """
        Recorded sets for an exercise across the user's last `sessions` completed
        sessions that contain it, newest first. Only the newest `scan_limit`
        completed sessions are inspected.
        """
        result = await self.db.execute(
            select(WorkoutSession.exercises_performed)
            .where(WorkoutSession.user_id == user_id, WorkoutSession.completed.is_(True))
            .order_by(WorkoutSession.completed_at.desc())
            .limit(scan_limit)
        )
        key = str(exercise_id)
        found: list[dict] = []
        matched = 0
        for performed in result.scalars():
            entries = [e for e in performed or [] if str(e.get("exercise_id")) == key]
            if not entries:
                continue
            for entry in entries:
                found.extend(entry.get("sets_completed") or [])
            matched += 1
            if matched >= sessions:
                break
        return found

    async def add(self, session: WorkoutSession) -> WorkoutSession:
        self.db.add(session)
        return await self.save(session)

    async def save(self, session: WorkoutSession) -> WorkoutSession:
        """Flush and reload with the workout populated."""
        await self.db.flush()
        result = await self.db.execute(
            _session_query()
            .where(WorkoutSession.id == session.id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()
