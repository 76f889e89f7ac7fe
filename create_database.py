"""
Database initialization script
Creates the tables and seeds topic statuses and skill categories
"""
import asyncio
import logging

from sqlalchemy import select

from app.database import async_session, init_db
from app.logging_config import setup_logging
from app.models import SkillCategory, TopicStatus

logger = logging.getLogger("create_database")

TOPIC_STATUSES = ["Не начато", "В процессе", "Завершено"]

SKILL_CATEGORIES = ["Программирование", "Языки", "Дизайн", "Другое"]


async def seed(model, names):
    """Insert rows with the given names that don't exist yet"""
    async with async_session() as session:
        result = await session.execute(select(model.name))
        existing = set(result.scalars().all())

        missing = [name for name in names if name not in existing]
        session.add_all(model(name=name) for name in missing)
        await session.commit()

    logger.info("%s: inserted %d, already present %d", model.__tablename__, len(missing), len(existing))


async def create_database():
    await init_db()
    logger.info("Tables created")

    await seed(TopicStatus, TOPIC_STATUSES)
    await seed(SkillCategory, SKILL_CATEGORIES)


if __name__ == "__main__":
    setup_logging()
    asyncio.run(create_database())
    logger.info("Database initialization complete!")
