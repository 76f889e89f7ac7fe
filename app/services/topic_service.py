import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select

from app.models.skill import Skill
from app.models.topic import Topic
from app.services import progress_service
from app.exceptions import TopicNotFoundError, ProgressStoreError
from app.config import get_settings

settings = get_settings()

logger = logging.getLogger(__name__)


async def get_user_topic(db: AsyncSession, user_id: int, topic_id: int) -> Topic:
    """Топик, принадлежащий пользователю через навык"""
    try:
        result = await db.execute(
            select(Topic)
            .join(Skill, Skill.id == Topic.skill_id)
            .where(Topic.id == topic_id, Skill.user_id == user_id)
        )
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Failed to load topic %s: %s", topic_id, e)
        raise ProgressStoreError() from e
    topic = result.scalar_one_or_none()

    if not topic:
        raise TopicNotFoundError(topic_id)
    return topic


async def update_topic_progress(
    db: AsyncSession,
    user_id: int,
    topic_id: int,
    progress: int
) -> Topic:
    """
    Обновить прогресс топика (значение обрезается до 0-100)

    Уровень пользователя пересчитывается сразу только при
    AUTO_RECALCULATE_LEVEL, иначе - по запросу. Ошибка такого пересчёта
    не отменяет сохранённый прогресс.
    """
    topic = await get_user_topic(db, user_id, topic_id)

    old_progress = topic.progress
    topic.progress = max(0, min(100, progress))
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Failed to update progress of topic %s: %s", topic_id, e)
        raise ProgressStoreError("Ошибка при обновлении прогресса") from e

    logger.debug("Topic %s progress: %s -> %s", topic_id, old_progress, topic.progress)

    if settings.AUTO_RECALCULATE_LEVEL:
        try:
            await progress_service.recalculate_and_persist(db, user_id)
        except ProgressStoreError as e:
            # Progress stays saved; the level catches up on the next recalculation
            logger.warning("Level recalculation after topic %s update failed: %s", topic_id, e.message)
            await db.refresh(topic)

    return topic
