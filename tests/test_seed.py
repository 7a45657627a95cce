"""Tests for the predefined exercise seed."""

import uuid

import pytest

from grove.data.predefined_exercises import PREDEFINED_EXERCISES
from grove.services.exercises import ExerciseService
from scripts.seed_exercises import seed

pytestmark = pytest.mark.anyio


class TestSeed:
    async def test_seeds_once(self, session_maker):
        assert await seed(session_maker) == len(PREDEFINED_EXERCISES)
        assert await seed(session_maker) == 0

        async with session_maker() as session:
            visible = await ExerciseService(session).list(uuid.uuid4())
        assert len(visible) == len(PREDEFINED_EXERCISES)
        assert all(e.user_id is None and not e.is_custom for e in visible)
