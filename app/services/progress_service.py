import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select, func, or_
from typing import Dict, Tuple

from app.models.user import User
from app.models.skill import Skill
from app.models.topic import Topic, TopicStatus
from app.schemas.progress import ProgressStats
from app.services.level_calculator import build_progress_stats, level_rank
from app.exceptions import UserNotFoundError, ProgressStoreError
from app.config import get_settings

settings = get_settings()

logger = logging.getLogger(__name__)


def _completed_condition():
    return or_(
        Topic.progress == settings.COMPLETED_PROGRESS,
        TopicStatus.name == settings.COMPLETED_STATUS_NAME
    )


async def _get_user(db: AsyncSession, user_id: int) -> User:
    try:
        result = await db.execute(select(User).where(User.id == user_id))
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Failed to load user %s: %s", user_id, e)
        raise ProgressStoreError() from e

    user = result.scalar_one_or_none()
    if not user:
        raise UserNotFoundError(user_id)
    return user


async def count_completed_topics(db: AsyncSession, user_id: int) -> int:
    """
    Количество завершённых топиков пользователя

    Топик принадлежит пользователю через навык. Завершён, если прогресс 100%
    или статус "Завершено". Каждый вызов читает текущее состояние БД.
    """
    query = (
        select(func.count(Topic.id))
        .join(Skill, Skill.id == Topic.skill_id)
        .outerjoin(TopicStatus, TopicStatus.id == Topic.status_id)
        .where(Skill.user_id == user_id, _completed_condition())
    )
    try:
        result = await db.execute(query)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Failed to count completed topics for user %s: %s", user_id, e)
        raise ProgressStoreError("Ошибка при подсчёте завершённых топиков") from e

    return result.scalar() or 0


async def is_topic_completed(db: AsyncSession, topic: Topic) -> bool:
    if topic.progress == settings.COMPLETED_PROGRESS:
        return True
    if topic.status_id is None:
        return False

    status_id = topic.status_id
    try:
        status_name = await db.scalar(select(TopicStatus.name).where(TopicStatus.id == status_id))
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Failed to load status %s: %s", status_id, e)
        raise ProgressStoreError() from e
    return status_name == settings.COMPLETED_STATUS_NAME


async def get_progress_stats(db: AsyncSession, user_id: int) -> ProgressStats:
    """Статистика прогресса без изменения сохранённого уровня"""
    await _get_user(db, user_id)
    completed_topics = await count_completed_topics(db, user_id)
    return build_progress_stats(completed_topics)


async def _recalculate(db: AsyncSession, user: User) -> Tuple[ProgressStats, bool]:
    user_id = user.id
    stats = build_progress_stats(await count_completed_topics(db, user_id))

    old_level = user.level
    if old_level == stats.current_level:
        logger.debug("User %s level unchanged: %s", user_id, old_level)
        return stats, False

    user.level = stats.current_level
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Failed to save level for user %s: %s", user_id, e)
        raise ProgressStoreError("Ошибка при сохранении уровня") from e

    try:
        direction = "up" if level_rank(stats.current_level) > level_rank(old_level) else "down"
    except ValueError:
        # Level stored before the current table
        direction = "reset"
    logger.info(
        "User %s level %s: %s -> %s (%s completed topics)",
        user_id, direction, old_level, stats.current_level, stats.completed_topics
    )
    return stats, True


async def recalculate_and_persist(db: AsyncSession, user_id: int) -> ProgressStats:
    """
    Пересчитать уровень пользователя и сохранить его

    Повторный вызов без изменений в топиках возвращает ту же статистику
    и не меняет запись пользователя. Уровень может как расти, так и падать.
    """
    user = await _get_user(db, user_id)
    stats, _ = await _recalculate(db, user)
    return stats


async def recalculate_all_levels(db: AsyncSession) -> Dict[str, int]:
    """
    Пересчитать уровни всех пользователей

    Returns:
        dict: Количество обновлённых, не изменившихся и ошибочных записей
    """
    try:
        result = await db.execute(select(User.id).order_by(User.id))
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Failed to load users: %s", e)
        raise ProgressStoreError() from e
    user_ids = list(result.scalars().all())

    logger.info("Recalculating levels for %d users", len(user_ids))

    summary = {"updated": 0, "unchanged": 0, "errors": 0}
    for user_id in user_ids:
        try:
            user = await _get_user(db, user_id)
            _, changed = await _recalculate(db, user)
        except (ProgressStoreError, UserNotFoundError) as e:
            logger.error("User %s: %s", user_id, e.message)
            summary["errors"] += 1
            continue
        summary["updated" if changed else "unchanged"] += 1

    logger.info(
        "Recalculation finished: %(updated)d updated, %(unchanged)d unchanged, %(errors)d errors",
        summary
    )
    return summary
