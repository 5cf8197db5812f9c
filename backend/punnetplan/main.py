"""Development entry point: create tables, seed demo data and load a snapshot."""

import asyncio
import logging

from punnetplan.core.config import settings
from punnetplan.core.database import close_db, get_session
from punnetplan.db.init_db import create_tables
from punnetplan.db.seed import seed_if_empty
from punnetplan.db.snapshot import load_snapshot
from punnetplan.schemas import PlanningSnapshot

logger = logging.getLogger(__name__)


async def bootstrap() -> PlanningSnapshot:
    """Prepare the database and return the current planning snapshot."""
    logger.info("Starting %s ...", settings.PROJECT_NAME)

    await create_tables()
    logger.info("Database initialized")

    async with get_session() as session:
        result = await seed_if_empty(session)
        if result:
            logger.info("Demo data seeded: %s", result)
        else:
            logger.info("Database already has data, skipping seed")

    try:
        async with get_session() as session:
            return await load_snapshot(session)
    finally:
        await close_db()
        logger.info("Database disconnected")


def main() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    asyncio.run(bootstrap())


if __name__ == "__main__":
    main()
