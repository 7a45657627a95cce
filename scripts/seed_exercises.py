"""Insert the predefined exercise catalogue. Skips if predefined exercises already exist."""

import asyncio
import logging

from sqlalchemy import func, select

from grove.core.config import get_settings
from grove.data.predefined_exercises import PREDEFINED_EXERCISES
from grove.db.session import async_session_maker, engine
from grove.models.exercise import Exercise
from grove.schemas.exercise import ExerciseCreate

logger = logging.getLogger("seed_exercises")


async def seed(session_maker=async_session_maker) -> int:
    """Returns the number of exercises created (0 when the catalogue is already present)."""
    async with session_maker() as session:
        existing = (
            await session.execute(
                select(func.count(Exercise.id)).where(Exercise.user_id.is_(None))
            )
        ).scalar() or 0
        if existing:
            logger.warning("%d predefined exercises already exist, skipping seed", existing)
            return 0

        session.add_all(
            Exercise(**ExerciseCreate(**data).model_dump(), user_id=None, is_custom=False)
            for data in PREDEFINED_EXERCISES
        )
        await session.commit()
        for data in PREDEFINED_EXERCISES:
            logger.info("  - %s (%s)", data["name"], data["category"])
        return len(PREDEFINED_EXERCISES)


async def main() -> None:
    logging.basicConfig(level=get_settings().log_level)
    try:
        created = await seed()
        logger.info("Seed complete: %d predefined exercises created", created)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
