"""
Recalculate the level of every user from their completed topics
"""
import asyncio
import logging
import sys

from app.database import async_session, init_db
from app.logging_config import setup_logging
from app.services import progress_service

logger = logging.getLogger("recalculate_levels")


async def recalculate_levels() -> dict:
    await init_db()
    async with async_session() as session:
        return await progress_service.recalculate_all_levels(session)


if __name__ == "__main__":
    setup_logging()
    summary = asyncio.run(recalculate_levels())
    sys.exit(1 if summary["errors"] else 0)
