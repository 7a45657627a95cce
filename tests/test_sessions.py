"""Tests for the workout session lifecycle."""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from grove.core.enums import ExerciseType
from grove.core.errors import BadRequestError, ConflictError, NotFoundError
from grove.models.exercise import Exercise
from grove.models.session import WorkoutSession
from grove.repositories.sessions import SessionRepository
from grove.repositories.workouts import WorkoutRepository
from grove.schemas.exercise import ExerciseCreate
from grove.schemas.session import ExercisePerformed, SessionComplete, SetData, SetRecord
from grove.services.exercises import ExerciseService
from grove.services.sessions import SessionService
from tests.factories import create_workout

pytestmark = pytest.mark.anyio


async def _active_count(db, user_id) -> int:
    result = await db.execute(
        select(WorkoutSession).where(
            WorkoutSession.user_id == user_id,
            WorkoutSession.completed.is_(False),
            WorkoutSession.abandoned.is_(False),
        )
    )
    return len(result.scalars().all())


class TestStart:
    async def test_seeds_total_sets_from_overrides(self, db, user):
        workout = await create_workout(db, user, sets=(3, 4))
        session = await SessionService(db).start(user.id, workout.id)

        assert [e["total_sets"] for e in session.exercises_performed] == [3, 4]
        assert all(e["completed_sets"] == 0 for e in session.exercises_performed)
        assert session.is_active
        assert session.workout.name == "Push Day"

    async def test_falls_back_to_exercise_default_then_one(self, db, user):
        workout = await create_workout(db, user, sets=(3,))
        entry = workout.exercises[0]
        entry.custom_sets = None
        await WorkoutRepository(db).save(workout)

        session = await SessionService(db).start(user.id, workout.id)
        # Exercise default_sets is 2 in the factory
        assert session.exercises_performed[0]["total_sets"] == 2

        await SessionService(db).abandon(session.id, user.id)
        exercise = await db.get(Exercise, entry.exercise_id)
        exercise.default_sets = None
        await db.flush()
        session = await SessionService(db).start(user.id, workout.id)
        assert session.exercises_performed[0]["total_sets"] == 1

    async def test_second_active_session_conflicts(self, db, user):
        workout = await create_workout(db, user)
        service = SessionService(db)
        first = await service.start(user.id, workout.id)

        with pytest.raises(ConflictError) as exc_info:
            await service.start(user.id, workout.id)
        assert exc_info.value.status_code == 400
        assert exc_info.value.extra["active_session_id"] == str(first.id)
        assert await _active_count(db, user.id) == 1

    async def test_can_start_again_after_completing(self, db, user):
        workout = await create_workout(db, user)
        service = SessionService(db)
        first = await service.start(user.id, workout.id)
        await service.complete(first.id, user.id, SessionComplete())

        second = await service.start(user.id, workout.id)
        assert second.id != first.id
        assert await _active_count(db, user.id) == 1

    async def test_other_users_workout_is_not_found(self, db, user, other_user):
        workout = await create_workout(db, other_user)
        with pytest.raises(NotFoundError):
            await SessionService(db).start(user.id, workout.id)
        assert await _active_count(db, user.id) == 0

    async def test_store_rejects_two_active_sessions(self, db, user):
        """The partial unique index backs the single-active-session rule."""
        now = datetime.now(timezone.utc)
        db.add(WorkoutSession(user_id=user.id, started_at=now, exercises_performed=[]))
        await db.flush()
        db.add(WorkoutSession(user_id=user.id, started_at=now, exercises_performed=[]))
        with pytest.raises(IntegrityError):
            await db.flush()
        await db.rollback()


class TestUpdate:
    async def test_recomputes_completion_percentage(self, db, user):
        workout = await create_workout(db, user, sets=(3, 4))
        service = SessionService(db)
        session = await service.start(user.id, workout.id)
        ids = [uuid.UUID(e["exercise_id"]) for e in session.exercises_performed]

        updated = await service.update(
            session.id,
            user.id,
            [
                ExercisePerformed(exercise_id=ids[0], total_sets=3, completed_sets=3),
                ExercisePerformed(exercise_id=ids[1], total_sets=4, completed_sets=2),
            ],
        )
        assert updated.completion_percentage == 71.43
        assert len(updated.exercises_performed) == 2

    async def test_replaces_list_wholesale(self, db, user):
        workout = await create_workout(db, user, sets=(3, 4))
        service = SessionService(db)
        session = await service.start(user.id, workout.id)
        first_id = uuid.UUID(session.exercises_performed[0]["exercise_id"])

        updated = await service.update(
            session.id,
            user.id,
            [ExercisePerformed(exercise_id=first_id, total_sets=0, completed_sets=0)],
        )
        assert len(updated.exercises_performed) == 1
        assert updated.completion_percentage == 0

    async def test_other_users_session_is_not_found(self, db, user, other_user):
        workout = await create_workout(db, user)
        session = await SessionService(db).start(user.id, workout.id)
        with pytest.raises(NotFoundError):
            await SessionService(db).update(session.id, other_user.id, [])

    async def test_other_users_exercise_is_rejected(self, db, user, other_user):
        workout = await create_workout(db, user, sets=(3,))
        service = SessionService(db)
        session = await service.start(user.id, workout.id)
        theirs = await ExerciseService(db).create(
            other_user.id, ExerciseCreate(name="Private Lift", type=ExerciseType.REPS)
        )
        mine = uuid.UUID(session.exercises_performed[0]["exercise_id"])

        with pytest.raises(BadRequestError) as exc_info:
            await service.update(
                session.id,
                user.id,
                [
                    ExercisePerformed(exercise_id=mine, total_sets=3),
                    ExercisePerformed(exercise_id=theirs.id, total_sets=3, completed_sets=3),
                ],
            )
        assert exc_info.value.detail == "Some exercises not found or not accessible"
        session = await service.get(session.id, user.id)
        assert [e["exercise_id"] for e in session.exercises_performed] == [str(mine)]

    async def test_predefined_exercise_is_accepted(self, db, user):
        workout = await create_workout(db, user, sets=(3,))
        service = SessionService(db)
        session = await service.start(user.id, workout.id)
        predefined = Exercise(name="Push-ups", type=ExerciseType.REPS, is_custom=False)
        db.add(predefined)
        await db.flush()

        updated = await service.update(
            session.id, user.id, [ExercisePerformed(exercise_id=predefined.id, total_sets=2)]
        )
        read = await service.read(updated)
        assert read.exercises_performed[0].exercise.name == "Push-ups"


class TestAddSet:
    async def test_appends_numbered_sets(self, db, user):
        workout = await create_workout(db, user, sets=(3,))
        service = SessionService(db)
        session = await service.start(user.id, workout.id)

        first = await service.add_set(session.id, user.id, 0, SetData(reps_completed=10))
        second = await service.add_set(
            session.id, user.id, 0, SetData(reps_completed=8, weight_used="20kg")
        )

        entry = second.session.exercises_performed[0]
        assert [s.set_number for s in entry.sets_completed] == [1, 2]
        assert entry.sets_completed[0].weight_used == "corporal"
        assert entry.completed_sets == 2
        assert entry.exercise.name == "Exercise 1"
        assert second.session.completion_percentage == 66.67
        assert second.session.total_volume_kg == 160
        # No history for this exercise yet
        assert first.personal_best_achieved is True

    async def test_personal_best_against_previous_sessions(self, db, user):
        workout = await create_workout(db, user, sets=(3,))
        service = SessionService(db)
        session = await service.start(user.id, workout.id)
        await service.add_set(session.id, user.id, 0, SetData(reps_completed=10, weight_used="20kg"))
        await service.complete(session.id, user.id, SessionComplete())

        session = await service.start(user.id, workout.id)
        weaker = await service.add_set(
            session.id, user.id, 0, SetData(reps_completed=8, weight_used="20kg")
        )
        heavier = await service.add_set(
            session.id, user.id, 0, SetData(reps_completed=5, weight_used="25kg")
        )
        assert weaker.personal_best_achieved is False
        assert heavier.personal_best_achieved is True

    async def test_invalid_exercise_index(self, db, user):
        workout = await create_workout(db, user, sets=(3,))
        service = SessionService(db)
        session = await service.start(user.id, workout.id)
        with pytest.raises(BadRequestError):
            await service.add_set(session.id, user.id, 5, SetData(reps_completed=1))

    async def test_history_scan_is_bounded(self, db, user):
        service = SessionService(db)
        legs = await create_workout(db, user, sets=(3,), name="Legs")
        session = await service.start(user.id, legs.id)
        await service.add_set(session.id, user.id, 0, SetData(reps_completed=10, weight_used="50kg"))
        legs_done = await service.complete(session.id, user.id, SessionComplete())
        legs_done.completed_at = datetime.now(timezone.utc) - timedelta(days=1)
        await db.flush()
        squat_id = uuid.UUID(legs_done.exercises_performed[0]["exercise_id"])

        push = await create_workout(db, user, sets=(3,), name="Push")
        session = await service.start(user.id, push.id)
        await service.complete(session.id, user.id, SessionComplete())

        repository = SessionRepository(db)
        assert len(await repository.previous_sets(user.id, squat_id, 10)) == 1
        # The newest completed session does not contain the exercise
        assert await repository.previous_sets(user.id, squat_id, 10, scan_limit=1) == []


class TestComplete:
    async def test_volume_reps_and_duration(self, db, user):
        workout = await create_workout(db, user, sets=(2,))
        service = SessionService(db)
        session = await service.start(user.id, workout.id)
        session.started_at = datetime.now(timezone.utc) - timedelta(minutes=45)
        await db.flush()
        exercise_id = uuid.UUID(session.exercises_performed[0]["exercise_id"])
        await service.update(
            session.id,
            user.id,
            [
                ExercisePerformed(
                    exercise_id=exercise_id,
                    total_sets=2,
                    completed_sets=2,
                    sets_completed=[
                        SetRecord(weight_used="10kg", reps_completed=5, rest_after_seconds=60),
                        SetRecord(weight_used="corporal", reps_completed=8),
                    ],
                )
            ],
        )

        done = await service.complete(
            session.id,
            user.id,
            SessionComplete(perceived_difficulty=7, energy_level=6, mood_after="great", notes="Solid"),
        )

        assert done.completed is True
        assert done.abandoned is False
        assert done.total_volume_kg == 50
        assert done.total_reps == 13
        assert done.total_rest_seconds == 60
        assert done.total_duration_minutes == 45
        assert done.perceived_difficulty == 7
        assert done.mood_after.value == "great"
        assert done.completed_at is not None

    async def test_updates_workout_and_exercise_counters(self, db, user):
        workout = await create_workout(db, user, sets=(3, 3))
        service = SessionService(db)
        session = await service.start(user.id, workout.id)
        await service.complete(session.id, user.id, SessionComplete())

        workout = await WorkoutRepository(db).get_owned(workout.id, user.id)
        assert workout.times_completed == 1
        assert workout.last_performed is not None
        for entry in workout.exercises:
            await db.refresh(entry.exercise)
            assert entry.exercise.times_performed == 1
            assert entry.exercise.last_performed is not None

    async def test_predefined_exercise_counters_are_untouched(self, db, user):
        predefined = Exercise(name="Push-ups", type=ExerciseType.REPS, is_custom=False)
        db.add(predefined)
        await db.flush()
        workout = await create_workout(db, user, sets=(3,))
        service = SessionService(db)
        session = await service.start(user.id, workout.id)
        own_id = uuid.UUID(session.exercises_performed[0]["exercise_id"])
        await service.update(
            session.id,
            user.id,
            [
                ExercisePerformed(exercise_id=own_id, total_sets=3),
                ExercisePerformed(exercise_id=predefined.id, total_sets=2),
            ],
        )
        await service.complete(session.id, user.id, SessionComplete())

        await db.refresh(predefined)
        assert predefined.times_performed == 0
        assert predefined.last_performed is None
        own = await db.get(Exercise, own_id)
        await db.refresh(own)
        assert own.times_performed == 1


class TestTerminalStates:
    async def test_complete_then_abandon_fails(self, db, user):
        workout = await create_workout(db, user)
        service = SessionService(db)
        session = await service.start(user.id, workout.id)
        await service.complete(session.id, user.id, SessionComplete())

        with pytest.raises(NotFoundError):
            await service.abandon(session.id, user.id, "Too late")
        with pytest.raises(NotFoundError):
            await service.update(session.id, user.id, [])

        session = await service.get(session.id, user.id)
        assert session.completed is True
        assert session.abandoned is False

    async def test_abandon_then_complete_fails(self, db, user):
        workout = await create_workout(db, user)
        service = SessionService(db)
        session = await service.start(user.id, workout.id)
        abandoned = await service.abandon(session.id, user.id)

        assert abandoned.abandoned is True
        assert abandoned.abandon_reason == "User abandoned"
        assert abandoned.total_volume_kg == 0
        assert abandoned.total_duration_minutes is not None

        with pytest.raises(NotFoundError):
            await service.complete(session.id, user.id, SessionComplete())
        with pytest.raises(NotFoundError):
            await service.add_set(session.id, user.id, 0, SetData(reps_completed=1))
        session = await service.get(session.id, user.id)
        assert session.completed is False


class TestReads:
    async def test_list_filters_and_orders(self, db, user):
        workout = await create_workout(db, user)
        service = SessionService(db)
        first = await service.start(user.id, workout.id)
        first.started_at = datetime.now(timezone.utc) - timedelta(days=1)
        await db.flush()
        await service.complete(first.id, user.id, SessionComplete())
        second = await service.start(user.id, workout.id)

        all_sessions = await service.list(user.id)
        assert [s.id for s in all_sessions] == [second.id, first.id]
        assert [s.id for s in await service.list(user.id, completed=True)] == [first.id]
        assert [s.id for s in await service.list(user.id, completed=False)] == [second.id]
        assert len(await service.list(user.id, limit=1)) == 1

    async def test_get_active(self, db, user):
        service = SessionService(db)
        with pytest.raises(NotFoundError):
            await service.get_active(user.id)
        workout = await create_workout(db, user)
        session = await service.start(user.id, workout.id)
        assert (await service.get_active(user.id)).id == session.id

    async def test_get_other_users_session(self, db, user, other_user):
        workout = await create_workout(db, user)
        session = await SessionService(db).start(user.id, workout.id)
        with pytest.raises(NotFoundError):
            await SessionService(db).get(session.id, other_user.id)

    async def test_read_populates_references(self, db, user):
        workout = await create_workout(db, user, sets=(3, 4))
        service = SessionService(db)
        session = await service.start(user.id, workout.id)
        read = await service.read(session)
        assert read.workout.id == workout.id
        assert read.workout.name == "Push Day"
        assert [e.exercise.name for e in read.exercises_performed] == ["Exercise 1", "Exercise 2"]

    async def test_read_never_resolves_other_users_exercises(self, db, user, other_user):
        workout = await create_workout(db, user, sets=(3,))
        service = SessionService(db)
        session = await service.start(user.id, workout.id)
        theirs = await ExerciseService(db).create(
            other_user.id, ExerciseCreate(name="Private Lift", type=ExerciseType.REPS)
        )
        # A stored reference that predates validation
        session.exercises_performed = [
            *session.exercises_performed,
            {"exercise_id": str(theirs.id), "total_sets": 1, "completed_sets": 1, "sets_completed": []},
        ]
        await db.flush()

        read = await service.read(session)
        assert read.exercises_performed[0].exercise.name == "Exercise 1"
        assert read.exercises_performed[1].exercise is None

        await service.complete(session.id, user.id, SessionComplete())
        await db.refresh(theirs)
        assert theirs.times_performed == 0
        assert theirs.last_performed is None


class TestPause:
    async def test_pause_and_resume(self, db, user):
        workout = await create_workout(db, user)
        service = SessionService(db)
        session = await service.start(user.id, workout.id)

        paused = await service.pause(session.id, user.id)
        assert paused.paused_at is not None
        with pytest.raises(BadRequestError):
            await service.pause(session.id, user.id)

        paused.paused_at = datetime.now(timezone.utc) - timedelta(seconds=90)
        await db.flush()
        resumed = await service.resume(session.id, user.id)

        assert 90 <= resumed.pause_duration_seconds < 100
        assert resumed.session.paused_at is None
        assert resumed.session.total_paused_seconds == resumed.pause_duration_seconds
        assert resumed.session.completed is False

    async def test_resume_requires_a_pause(self, db, user):
        workout = await create_workout(db, user)
        service = SessionService(db)
        session = await service.start(user.id, workout.id)
        with pytest.raises(BadRequestError) as exc_info:
            await service.resume(session.id, user.id)
        assert exc_info.value.detail == "Session is not paused"

    async def test_complete_closes_an_open_pause(self, db, user):
        workout = await create_workout(db, user)
        service = SessionService(db)
        session = await service.start(user.id, workout.id)
        paused = await service.pause(session.id, user.id)
        paused.paused_at = datetime.now(timezone.utc) - timedelta(seconds=30)
        await db.flush()

        done = await service.complete(session.id, user.id, SessionComplete())
        assert done.paused_at is None
        assert done.total_paused_seconds >= 30

    async def test_terminal_session_cannot_be_paused(self, db, user, other_user):
        workout = await create_workout(db, user)
        service = SessionService(db)
        session = await service.start(user.id, workout.id)
        with pytest.raises(NotFoundError):
            await service.pause(session.id, other_user.id)
        await service.abandon(session.id, user.id)
        with pytest.raises(NotFoundError):
            await service.pause(session.id, user.id)
