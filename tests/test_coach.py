"""Tests for the AI coach: gateway containment, chat memory and workout generation."""

import json

import pytest

from grove.core.enums import CoachPersonality, ExerciseType, WorkoutType
from grove.core.errors import BadRequestError, UpstreamError
from grove.schemas.exercise import ExerciseCreate
from grove.services.ai import STARTER_WORKOUT, CoachService
from grove.services.coach import PARSE_ERROR, CoachGateway, parse_json_response
from grove.services.exercises import ExerciseService
from tests.factories import FakeCompletionClient

pytestmark = pytest.mark.anyio

GENERATED = {
    "name": "Quick HIIT",
    "description": "Short and sharp",
    "workout_type": "full_body",
    "difficulty": "beginner",
    "estimated_duration_minutes": 20,
    "exercises": [
        {"name": "Squats", "sets": 3, "reps": 15, "rest_seconds": 30},
        {"name": "Burpees", "type": "explosive", "sets": 3, "reps": 10, "notes": "x" * 600},
    ],
    "ai_notes": "Go hard",
}


def _fenced(payload) -> str:
    return "```json\n" + json.dumps(payload) + "\n```"


def _coach(db, client) -> CoachService:
    return CoachService(db, CoachGateway(client))


class TestGateway:
    async def test_completion_error_is_contained(self):
        gateway = CoachGateway(FakeCompletionClient(error=RuntimeError("rate limited")))
        result = await gateway.chat("hi", [], CoachPersonality.MOTIVATOR)
        assert result.success is False
        assert result.error == "rate limited"
        assert result.raw_response is None

    async def test_chat_passes_history_and_personality(self):
        client = FakeCompletionClient(replies=["Let's go"])
        history = [{"role": "user", "content": "earlier"}]
        result = await CoachGateway(client).chat("hi", history, CoachPersonality.ANALYTICAL)
        assert result.success is True
        assert result.text == "Let's go"
        assert result.usage == {"total_tokens": 42}
        assert client.calls[0]["history"] == history
        assert client.calls[0]["user_message"] == "hi"

    async def test_malformed_workout_keeps_raw_reply(self):
        client = FakeCompletionClient(replies=["Sorry, I can't do JSON today"])
        result = await CoachGateway(client).generate_workout("legs", {})
        assert result.success is False
        assert result.error == PARSE_ERROR
        assert result.raw_response == "Sorry, I can't do JSON today"

    async def test_workout_without_exercises_is_rejected(self):
        client = FakeCompletionClient(replies=[json.dumps({"name": "Empty", "exercises": []})])
        result = await CoachGateway(client).generate_workout("anything", {})
        assert result.success is False
        assert result.workout is None


class TestParseJsonResponse:
    def test_strips_fences(self):
        assert parse_json_response('```json\n{"a": 1}\n```') == {"a": 1}
        assert parse_json_response('```\n{"a": 1}\n```') == {"a": 1}
        assert parse_json_response(' {"a": 1} ') == {"a": 1}

    def test_invalid_json_raises(self):
        with pytest.raises(ValueError):
            parse_json_response("not json")


class TestChat:
    async def test_history_is_capped(self, db, user):
        user.ai_context_history = [
            {"role": "user" if i % 2 == 0 else "assistant", "content": f"m{i}", "timestamp": ""}
            for i in range(24)
        ]
        client = FakeCompletionClient(replies=["Nice work"])

        response = await _coach(db, client).chat(user, "How am I doing?")

        assert response.response == "Nice work"
        assert response.personality == user.personality
        # Only the most recent messages go to the model, without timestamps
        sent = client.calls[0]["history"]
        assert len(sent) == 10
        assert sent[-1] == {"role": "assistant", "content": "m23"}
        assert len(user.ai_context_history) == 20
        assert [m["content"] for m in user.ai_context_history[-2:]] == ["How am I doing?", "Nice work"]

    async def test_failure_leaves_history_untouched(self, db, user):
        client = FakeCompletionClient(error=RuntimeError("down"))
        with pytest.raises(UpstreamError):
            await _coach(db, client).chat(user, "Hello")
        assert user.ai_context_history == []

    async def test_empty_message(self, db, user):
        with pytest.raises(BadRequestError):
            await _coach(db, FakeCompletionClient()).chat(user, "   ")

    async def test_clear_history(self, db, user):
        coach = _coach(db, FakeCompletionClient())
        await coach.chat(user, "Hello")
        assert len(user.ai_context_history) == 2
        await coach.clear_history(user)
        assert user.ai_context_history == []


class TestGenerateWorkout:
    async def test_saves_and_reuses_exercises(self, db, user):
        existing = await ExerciseService(db).create(
            user.id, ExerciseCreate(name="Squats", type=ExerciseType.REPS)
        )
        client = FakeCompletionClient(replies=[_fenced(GENERATED)])

        response = await _coach(db, client).generate_workout(user, "20 minute HIIT")

        assert response.success is True
        assert response.saved is True
        assert response.ai_notes == "Go hard"
        workout = response.workout
        assert workout.name == "Quick HIIT"
        assert workout.workout_type == WorkoutType.FULL_BODY
        assert workout.estimated_duration == 20
        assert [e.order for e in workout.exercises] == [1, 2]
        assert workout.exercises[0].exercise_id == existing.id
        assert workout.exercises[0].custom_reps == 15
        burpees = workout.exercises[1]
        assert burpees.exercise.name == "Burpees"
        assert burpees.exercise.type == ExerciseType.REPS
        assert len(burpees.notes) == 500

    async def test_without_saving(self, db, user):
        client = FakeCompletionClient(replies=[json.dumps(GENERATED)])
        response = await _coach(db, client).generate_workout(user, "HIIT", save_to_library=False)

        assert response.success is True
        assert response.saved is False
        assert response.workout is None
        assert response.workout_data.name == "Quick HIIT"
        assert await ExerciseService(db).list(user.id) == []

    async def test_parse_failure_returns_raw_response(self, db, user):
        client = FakeCompletionClient(replies=["{broken"])
        response = await _coach(db, client).generate_workout(user, "HIIT")
        assert response.success is False
        assert response.saved is False
        assert response.raw_response == "{broken"
        assert response.error == PARSE_ERROR

    async def test_completion_failure_raises(self, db, user):
        client = FakeCompletionClient(error=RuntimeError("timeout"))
        with pytest.raises(UpstreamError):
            await _coach(db, client).generate_workout(user, "HIIT")

    async def test_empty_prompt(self, db, user):
        with pytest.raises(BadRequestError):
            await _coach(db, FakeCompletionClient()).generate_workout(user, "")


class TestStarterWorkout:
    async def test_generated(self, db, user):
        client = FakeCompletionClient(replies=[json.dumps(GENERATED)])
        response = await _coach(db, client).starter_workout(user)
        assert response.workout.name == "Quick HIIT"
        assert response.preferences["time_per_session"] == 30

    async def test_falls_back_on_failure(self, db, user):
        client = FakeCompletionClient(error=RuntimeError("down"))
        response = await _coach(db, client).starter_workout(user)
        assert response.workout == STARTER_WORKOUT
        assert [e.name for e in response.workout.exercises] == ["Squats", "Push-ups", "Plank", "Lunges"]
        assert response.workout.exercises[2].type == ExerciseType.TIME


class TestOtherCalls:
    async def test_analyze_progress(self, db, user):
        client = FakeCompletionClient(replies=["Consistency is key"])
        analysis = await _coach(db, client).analyze_progress(user)
        assert analysis.ai_feedback == "Consistency is key"
        assert analysis.stats["total_workouts"] == 0
        assert "Total workouts: 0" in client.calls[0]["user_message"]

    async def test_ask(self, db, user):
        client = FakeCompletionClient(replies=["Eat protein"])
        assert await _coach(db, client).ask(user, "What should I eat?") == "Eat protein"

    async def test_ask_failure(self, db, user):
        client = FakeCompletionClient(error=RuntimeError("down"))
        with pytest.raises(UpstreamError):
            await _coach(db, client).ask(user, "What should I eat?")

    async def test_change_personality(self, db, user):
        coach = _coach(db, FakeCompletionClient())
        assert await coach.change_personality(user, "beast") == CoachPersonality.BEAST
        assert user.personality == CoachPersonality.BEAST
        with pytest.raises(BadRequestError):
            await coach.change_personality(user, "drill_sergeant")
        assert user.personality == CoachPersonality.BEAST
