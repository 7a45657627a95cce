"""Tests for account management, the weight log, the weekly schedule and update payloads."""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from grove.core.errors import BadRequestError
from grove.core.security import access_token_expiry, create_access_token, hash_password, verify_password
from grove.schemas.exercise import ExerciseUpdate
from grove.schemas.schedule import WeeklyScheduleUpdate
from grove.schemas.user import PasswordChange, PreferencesUpdate, ProfileUpdate
from grove.schemas.workout import WorkoutUpdate
from grove.services.auth import AuthService, is_revoked
from grove.services.schedule import ScheduleService
from grove.services.users import UserService
from tests.factories import create_user, create_workout

pytestmark = pytest.mark.anyio


class TestUsername:
    async def test_change(self, db, user):
        updated = await UserService(db).change_username(user, "lifter42")
        assert updated.username == "lifter42"
        # Keeping your own name is not a clash
        assert (await UserService(db).change_username(user, "lifter42")).username == "lifter42"

    async def test_taken_by_someone_else(self, db, user):
        await create_user(db, name="First", username="taken")
        with pytest.raises(BadRequestError) as exc_info:
            await UserService(db).change_username(user, "taken")
        assert exc_info.value.detail == "Username already taken"


class TestPassword:
    async def test_change_signs_out_everywhere(self, db, user):
        user.password_hash = hash_password("old-secret")
        user.refresh_tokens = [{"token": "r", "created_at": "x", "expires_at": "y"}]
        await db.flush()
        token = create_access_token(user.id)

        result = await AuthService(db).change_password(
            user, PasswordChange(current_password="old-secret", new_password="new-secret"), token
        )

        assert result.tokens_invalidated is True
        assert verify_password("new-secret", user.password_hash)
        assert user.refresh_tokens == []
        assert [e["token"] for e in user.blacklisted_tokens] == [token]
        assert user.password_changed_at is not None
        assert is_revoked(user, token)

    async def test_wrong_current_password(self, db, user):
        user.password_hash = hash_password("old-secret")
        await db.flush()
        with pytest.raises(BadRequestError) as exc_info:
            await AuthService(db).change_password(
                user,
                PasswordChange(current_password="guess", new_password="new-secret"),
                create_access_token(user.id),
            )
        assert exc_info.value.detail == "Current password is incorrect"
        assert verify_password("old-secret", user.password_hash)

    async def test_tokens_issued_before_the_change_are_revoked(self, user):
        changed_at = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)
        user.password_changed_at = changed_at
        assert is_revoked(user, "any", int(changed_at.timestamp()) - 60)
        assert not is_revoked(user, "any", int(changed_at.timestamp()))
        user.password_changed_at = None
        assert not is_revoked(user, "any", 0)


class TestBlacklist:
    async def test_logout_drops_expired_entries(self, db, user):
        now = datetime.now(timezone.utc)
        stamp = now.isoformat()
        still_valid = create_access_token(user.id)
        user.blacklisted_tokens = [
            {"token": "old", "blacklisted_at": stamp, "expires_at": (now - timedelta(hours=1)).isoformat()},
            {"token": "recent", "blacklisted_at": stamp, "expires_at": (now + timedelta(hours=1)).isoformat()},
            # Entries written without an expiry fall back to the token's own exp claim
            {"token": still_valid, "blacklisted_at": stamp},
            {"token": "unreadable", "blacklisted_at": stamp},
        ]
        await db.flush()
        token = create_access_token(user.id)

        await AuthService(db).logout(user, token)

        assert [e["token"] for e in user.blacklisted_tokens] == ["recent", still_valid, token]
        assert user.blacklisted_tokens[-1]["expires_at"] == access_token_expiry(token).isoformat()


class TestWeightLog:
    async def test_add_updates_current_weight(self, db, user):
        service = UserService(db)
        await service.add_weight(user, 82.5)
        history = await service.add_weight(user, 81.0)

        assert history.current_weight == 81.0
        assert user.weight == 81.0
        assert [e.weight_kg for e in history.weight_history] == [81.0, 82.5]

    async def test_history_is_limited_and_per_user(self, db, user, other_user):
        service = UserService(db)
        for weight in (80, 79, 78):
            await service.add_weight(user, weight)
        await service.add_weight(other_user, 95)

        history = await service.weight_history(user, limit=2)
        assert [e.weight_kg for e in history.weight_history] == [78, 79]
        assert (await service.weight_history(other_user)).current_weight == 95


class TestSchedule:
    async def test_set_and_read_week(self, db, user):
        push = await create_workout(db, user, name="Push")
        legs = await create_workout(db, user, name="Legs")
        service = ScheduleService(db, "UTC")

        week = await service.update(
            user, WeeklyScheduleUpdate(monday=push.id, thursday=push.id, saturday=legs.id)
        )
        assert week.monday.name == "Push"
        assert week.thursday.id == push.id
        assert week.saturday.name == "Legs"
        assert week.tuesday is None

        # Replaces the whole week
        week = await service.update(user, WeeklyScheduleUpdate(friday=legs.id))
        assert week.monday is None
        assert week.friday.name == "Legs"

    async def test_rejects_other_users_workout(self, db, user, other_user):
        theirs = await create_workout(db, other_user)
        with pytest.raises(BadRequestError) as exc_info:
            await ScheduleService(db, "UTC").update(user, WeeklyScheduleUpdate(monday=theirs.id))
        assert exc_info.value.detail == "Some workouts not found or not accessible"
        assert (await ScheduleService(db, "UTC").get(user)).monday is None

    async def test_unknown_day_is_rejected(self):
        with pytest.raises(ValidationError):
            WeeklyScheduleUpdate.model_validate({"funday": str(uuid.uuid4())})

    async def test_today(self, db, user):
        push = await create_workout(db, user, name="Push")
        service = ScheduleService(db, "UTC")
        await service.update(user, WeeklyScheduleUpdate(monday=push.id))
        monday = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)

        today = await service.today(user, now=monday)
        assert today.today == "monday"
        assert today.workout.name == "Push"
        assert [e.exercise.name for e in today.workout.exercises] == ["Exercise 1", "Exercise 2"]

        rest_day = await service.today(user, now=monday + timedelta(days=1))
        assert rest_day.today == "tuesday"
        assert rest_day.workout is None
        assert rest_day.message == "No workout scheduled for today (tuesday)"


class TestUpdatePayloads:
    @pytest.mark.parametrize(
        ("schema", "field"),
        [
            (ProfileUpdate, "name"),
            (ProfileUpdate, "fitness_level"),
            (PreferencesUpdate, "goals"),
            (PreferencesUpdate, "available_equipment"),
            (PreferencesUpdate, "personality"),
            (ExerciseUpdate, "name"),
            (ExerciseUpdate, "type"),
            (ExerciseUpdate, "muscle_groups"),
            (ExerciseUpdate, "equipment"),
            (WorkoutUpdate, "name"),
            (WorkoutUpdate, "is_template"),
        ],
    )
    async def test_null_is_rejected_for_required_columns(self, schema, field):
        with pytest.raises(ValidationError):
            schema.model_validate({field: None})

    async def test_omitted_and_nullable_fields(self):
        assert ProfileUpdate().model_dump(exclude_unset=True) == {}
        assert ProfileUpdate(weight=None).model_dump(exclude_unset=True) == {"weight": None}
        assert WorkoutUpdate(description=None).model_dump(exclude_unset=True) == {"description": None}
        assert ExerciseUpdate(category=None).model_dump(exclude_unset=True) == {"category": None}
