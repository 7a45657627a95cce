"""Workout session lifecycle: start, record sets, update, complete, abandon."""

from __future__ import annotations

import copy
import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from grove.core.constants import (
    DEFAULT_ABANDON_REASON,
    DEFAULT_SESSION_LIST_LIMIT,
    DEFAULT_TOTAL_SETS,
    DEFAULT_WEIGHT_USED,
    PERSONAL_BEST_LOOKBACK_SESSIONS,
)
from grove.core.errors import BadRequestError, ConflictError, NotFoundError
from grove.models.session import WorkoutSession
from grove.repositories.exercises import ExerciseRepository
from grove.repositories.sessions import SessionRepository
from grove.repositories.workouts import WorkoutRepository
from grove.schemas.session import (
    AddSetResult,
    ExercisePerformed,
    SessionComplete,
    SessionRead,
    SessionResumeResult,
    SetData,
    SetRecord,
)
from grove.services import metrics

logger = logging.getLogger(__name__)


def _is_personal_best(new_set: dict, history: list[dict]) -> bool:
    """Beats the best reps or the best parsed weight seen in history."""
    if not history:
        return True
    best_reps = max((s.get("reps_completed") or 0 for s in history), default=0)
    best_weight = max(
        (metrics.parse_weight(s.get("weight_used")) or 0 for s in history), default=0
    )
    reps = new_set.get("reps_completed") or 0
    weight = metrics.parse_weight(new_set.get("weight_used")) or 0
    return reps > best_reps or weight > best_weight


class SessionService:
    """
    At most one ACTIVE (not completed, not abandoned) session per user.
    COMPLETED and ABANDONED are terminal: every mutation requires ACTIVE.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.sessions = SessionRepository(db)
        self.workouts = WorkoutRepository(db)
        self.exercises = ExerciseRepository(db)

    async def read(self, session: WorkoutSession) -> SessionRead:
        """Project a session with workout and exercise references populated."""
        ids = {uuid.UUID(str(e["exercise_id"])) for e in session.exercises_performed or []}
        exercises = await self.exercises.get_many(ids, session.user_id)
        return SessionRead.from_session(session, exercises)

    async def _get_active(self, session_id: uuid.UUID, user_id: uuid.UUID) -> WorkoutSession:
        session = await self.sessions.get_owned(session_id, user_id, active_only=True)
        if session is None:
            raise NotFoundError("Active session not found")
        return session

    async def start(self, user_id: uuid.UUID, workout_id: uuid.UUID) -> WorkoutSession:
        workout = await self.workouts.get_owned(workout_id, user_id)
        if workout is None:
            raise NotFoundError("Workout not found")

        active = await self.sessions.find_active(user_id)
        if active is not None:
            raise ConflictError(
                "You already have an active session", active_session_id=str(active.id)
            )

        performed = [
            ExercisePerformed(
                exercise_id=entry.exercise_id,
                total_sets=entry.custom_sets
                or (entry.exercise.default_sets if entry.exercise else None)
                or DEFAULT_TOTAL_SETS,
                completed_sets=0,
            ).model_dump(mode="json")
            for entry in workout.exercises
        ]
        session = WorkoutSession(
            user_id=user_id,
            workout_id=workout.id,
            started_at=datetime.now(timezone.utc),
            exercises_performed=performed,
        )
        try:
            session = await self.sessions.add(session)
        except IntegrityError:
            # Lost a race with a concurrent start
            await self.db.rollback()
            active = await self.sessions.find_active(user_id)
            raise ConflictError(
                "You already have an active session",
                active_session_id=str(active.id) if active else None,
            )
        logger.info("Session %s started for workout %s", session.id, workout.id)
        return session

    async def add_set(
        self,
        session_id: uuid.UUID,
        user_id: uuid.UUID,
        exercise_index: int,
        set_data: SetData,
    ) -> AddSetResult:
        session = await self._get_active(session_id, user_id)
        performed = copy.deepcopy(session.exercises_performed or [])
        if exercise_index >= len(performed):
            raise BadRequestError("Invalid exercise index")

        entry = performed[exercise_index]
        sets = entry.setdefault("sets_completed", [])
        record = SetRecord(
            **set_data.model_dump(exclude_none=True),
            set_number=len(sets) + 1,
            completed=True,
        )
        if not record.weight_used:
            record.weight_used = DEFAULT_WEIGHT_USED
        new_set = record.model_dump(mode="json")

        history = await self.sessions.previous_sets(
            user_id,
            uuid.UUID(str(entry["exercise_id"])),
            PERSONAL_BEST_LOOKBACK_SESSIONS,
        )
        personal_best = _is_personal_best(new_set, history)

        sets.append(new_set)
        entry["completed_sets"] = len(sets)
        if personal_best:
            entry["personal_best"] = True

        self._apply_performed(session, performed)
        session = await self.sessions.save(session)
        return AddSetResult(
            session=await self.read(session), personal_best_achieved=personal_best
        )

    async def update(
        self,
        session_id: uuid.UUID,
        user_id: uuid.UUID,
        exercises_performed: list[ExercisePerformed],
    ) -> WorkoutSession:
        """Replace the performed-exercise list wholesale."""
        session = await self._get_active(session_id, user_id)
        requested = {e.exercise_id for e in exercises_performed}
        if requested and await self.exercises.find_visible_ids(user_id, requested) != requested:
            raise BadRequestError("Some exercises not found or not accessible")
        performed = [e.model_dump(mode="json") for e in exercises_performed]
        session.exercises_performed = performed
        session.completion_percentage = metrics.completion_percentage(performed)
        return await self.sessions.save(session)

    @staticmethod
    def _apply_performed(session: WorkoutSession, performed: list[dict]) -> None:
        """Store the list and refresh completion plus running totals."""
        session.exercises_performed = performed
        session.completion_percentage = metrics.completion_percentage(performed)
        volume, reps = metrics.session_totals(performed)
        session.total_volume_kg = volume
        session.total_reps = reps
        session.total_rest_seconds = metrics.total_rest_seconds(performed)

    @staticmethod
    def _close_pause(session: WorkoutSession, now: datetime) -> int:
        """End an open pause, returning its length in seconds (0 when not paused)."""
        if session.paused_at is None:
            return 0
        elapsed = max(0, round((now - metrics.as_utc(session.paused_at)).total_seconds()))
        session.total_paused_seconds = (session.total_paused_seconds or 0) + elapsed
        session.paused_at = None
        return elapsed

    async def pause(self, session_id: uuid.UUID, user_id: uuid.UUID) -> WorkoutSession:
        session = await self._get_active(session_id, user_id)
        if session.paused_at is not None:
            raise BadRequestError("Session is already paused")
        session.paused_at = datetime.now(timezone.utc)
        return await self.sessions.save(session)

    async def resume(self, session_id: uuid.UUID, user_id: uuid.UUID) -> SessionResumeResult:
        session = await self._get_active(session_id, user_id)
        if session.paused_at is None:
            raise BadRequestError("Session is not paused")
        elapsed = self._close_pause(session, datetime.now(timezone.utc))
        session = await self.sessions.save(session)
        return SessionResumeResult(session=await self.read(session), pause_duration_seconds=elapsed)

    async def complete(
        self, session_id: uuid.UUID, user_id: uuid.UUID, data: SessionComplete
    ) -> WorkoutSession:
        session = await self._get_active(session_id, user_id)
        now = datetime.now(timezone.utc)
        self._close_pause(session, now)

        session.completed = True
        session.abandoned = False
        session.abandon_reason = None
        session.completed_at = now
        session.total_duration_minutes = round(
            (now - metrics.as_utc(session.started_at)).total_seconds() / 60
        )
        performed = session.exercises_performed or []
        volume, reps = metrics.session_totals(performed)
        session.total_volume_kg = volume
        session.total_reps = reps
        session.total_rest_seconds = metrics.total_rest_seconds(performed)
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(session, key, value)

        if session.workout_id is not None:
            await self.workouts.mark_completed(session.workout_id, now)
        await self.exercises.mark_performed(
            (uuid.UUID(str(e["exercise_id"])) for e in performed), user_id, now
        )
        session = await self.sessions.save(session)
        logger.info(
            "Session %s completed in %s min, volume %.1f kg",
            session.id,
            session.total_duration_minutes,
            session.total_volume_kg,
        )
        return session

    async def abandon(
        self, session_id: uuid.UUID, user_id: uuid.UUID, reason: str | None = None
    ) -> WorkoutSession:
        """Terminate without touching volume/rep totals."""
        session = await self._get_active(session_id, user_id)
        now = datetime.now(timezone.utc)
        self._close_pause(session, now)
        session.abandoned = True
        session.abandon_reason = reason or DEFAULT_ABANDON_REASON
        session.completed_at = now
        session.total_duration_minutes = round(
            (now - metrics.as_utc(session.started_at)).total_seconds() / 60
        )
        session = await self.sessions.save(session)
        logger.info("Session %s abandoned: %s", session.id, session.abandon_reason)
        return session

    async def list(
        self,
        user_id: uuid.UUID,
        completed: bool | None = None,
        limit: int = DEFAULT_SESSION_LIST_LIMIT,
    ) -> list[WorkoutSession]:
        return await self.sessions.list_owned(user_id, completed=completed, limit=limit)

    async def get(self, session_id: uuid.UUID, user_id: uuid.UUID) -> WorkoutSession:
        session = await self.sessions.get_owned(session_id, user_id)
        if session is None:
            raise NotFoundError("Session not found")
        return session

    async def get_active(self, user_id: uuid.UUID) -> WorkoutSession:
        session = await self.sessions.find_active(user_id)
        if session is None:
            raise NotFoundError("No active session")
        return session
