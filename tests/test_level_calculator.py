"""Tests for the threshold table, level lookup and progress stats."""

import pytest

from app.services.level_calculator import (
    DEFAULT_LEVEL,
    LEVEL_THRESHOLDS,
    LEVELS,
    build_progress_stats,
    calculate_level,
    level_rank,
)


class TestThresholdTable:
    def test_starts_at_zero(self):
        assert LEVEL_THRESHOLDS[0].min_topics == 0
        assert DEFAULT_LEVEL == "Новичок"

    def test_minimums_strictly_increasing(self):
        minimums = [t.min_topics for t in LEVEL_THRESHOLDS]
        assert minimums == sorted(set(minimums))

    def test_level_order(self):
        assert LEVELS == ["Новичок", "Средний", "Продвинутый", "Профессионал", "Эксперт"]


class TestCalculateLevel:
    @pytest.mark.parametrize(
        "count,expected",
        [
            (0, "Новичок"),
            (4, "Новичок"),
            (5, "Средний"),
            (19, "Средний"),
            (20, "Продвинутый"),
            (49, "Продвинутый"),
            (50, "Профессионал"),
            (99, "Профессионал"),
            (100, "Эксперт"),
            (150, "Эксперт"),
        ],
    )
    def test_boundaries(self, count, expected):
        assert calculate_level(count) == expected

    @pytest.mark.parametrize(
        "count,expected",
        [
            (-1, "Новичок"),
            (-1000, "Новичок"),
            (4.9, "Новичок"),
            (5.1, "Средний"),
            (19.99, "Средний"),
            (999999, "Эксперт"),
        ],
    )
    def test_fractional_and_out_of_range(self, count, expected):
        assert calculate_level(count) == expected

    def test_monotonic(self):
        counts = [n / 2 for n in range(-10, 300)]
        ranks = [level_rank(calculate_level(n)) for n in counts]
        assert ranks == sorted(ranks)


class TestLevelRank:
    def test_known_levels(self):
        assert level_rank("Новичок") == 0
        assert level_rank("Эксперт") == len(LEVEL_THRESHOLDS) - 1

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            level_rank("базовый")


class TestBuildProgressStats:
    def test_zero_topics(self):
        stats = build_progress_stats(0)
        assert stats.current_level == "Новичок"
        assert stats.completed_topics == 0
        assert stats.next_level == "Средний"
        assert stats.topics_to_next_level == 5

    def test_middle_of_table(self):
        stats = build_progress_stats(75)
        assert stats.current_level == "Профессионал"
        assert stats.next_level == "Эксперт"
        assert stats.topics_to_next_level == 25

    def test_top_level_has_no_next(self):
        stats = build_progress_stats(150)
        assert stats.current_level == "Эксперт"
        assert stats.next_level is None
        assert stats.topics_to_next_level == 0

    def test_exact_threshold_points_to_following_level(self):
        stats = build_progress_stats(5)
        assert stats.current_level == "Средний"
        assert stats.next_level == "Продвинутый"
        assert stats.topics_to_next_level == 15

    def test_exactly_top_threshold(self):
        stats = build_progress_stats(100)
        assert stats.current_level == "Эксперт"
        assert stats.next_level is None
        assert stats.topics_to_next_level == 0

    def test_serialized_with_camel_case_keys(self):
        assert build_progress_stats(19).model_dump(by_alias=True) == {
            "currentLevel": "Средний",
            "completedTopics": 19,
            "nextLevel": "Продвинутый",
            "topicsToNextLevel": 1,
        }

    @pytest.mark.parametrize(
        "count,level,next_level,remaining",
        [
            (4.9, "Новичок", "Средний", 0.1),
            (5.1, "Средний", "Продвинутый", 14.9),
            (-1.5, "Новичок", "Средний", 6.5),
            (-1, "Новичок", "Средний", 6),
            (100.5, "Эксперт", None, 0),
        ],
    )
    def test_fractional_and_negative_counts(self, count, level, next_level, remaining):
        stats = build_progress_stats(count)
        assert stats.current_level == level
        assert stats.completed_topics == count
        assert stats.next_level == next_level
        assert stats.topics_to_next_level == pytest.approx(remaining)
