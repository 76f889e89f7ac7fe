"""
Уровни пользователя по количеству завершённых топиков

Таблица порогов упорядочена по возрастанию минимального количества топиков.
Уровень - последний порог, минимум которого не больше количества.
"""
from typing import NamedTuple, Tuple

from app.schemas.progress import ProgressStats


class LevelThreshold(NamedTuple):
    name: str
    min_topics: int


LEVEL_THRESHOLDS: Tuple[LevelThreshold, ...] = (
    LevelThreshold("Новичок", 0),
    LevelThreshold("Средний", 5),
    LevelThreshold("Продвинутый", 20),
    LevelThreshold("Профессионал", 50),
    LevelThreshold("Эксперт", 100),
)

LEVELS = [threshold.name for threshold in LEVEL_THRESHOLDS]
DEFAULT_LEVEL = LEVEL_THRESHOLDS[0].name


def calculate_level(completed_topics: float) -> str:
    """
    Определить уровень по количеству завершённых топиков

    Дробные значения не округляются: 4.9 -> Новичок, 5.1 -> Средний.
    Отрицательные значения дают самый низкий уровень.
    """
    level = DEFAULT_LEVEL
    for threshold in LEVEL_THRESHOLDS:
        if completed_topics >= threshold.min_topics:
            level = threshold.name
        else:
            break
    return level


def level_rank(level: str) -> int:
    """Позиция уровня в таблице (0 - Новичок)"""
    try:
        return LEVELS.index(level)
    except ValueError:
        raise ValueError(f"Unknown level: {level}") from None


def build_progress_stats(completed_topics: float) -> ProgressStats:
    """
    Собрать статистику прогресса: текущий уровень, следующий уровень
    и сколько топиков до него осталось

    Returns:
        ProgressStats: next_level = None и topics_to_next_level = 0
        на максимальном уровне
    """
    next_level = None
    topics_to_next_level = 0

    for threshold in LEVEL_THRESHOLDS:
        if threshold.min_topics > completed_topics:
            next_level = threshold.name
            topics_to_next_level = threshold.min_topics - completed_topics
            break

    return ProgressStats(
        current_level=calculate_level(completed_topics),
        completed_topics=completed_topics,
        next_level=next_level,
        topics_to_next_level=topics_to_next_level
    )
