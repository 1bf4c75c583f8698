"""Tests for dashboard aggregates."""

from datetime import datetime, timedelta

import pytest
import pytz

from habitquest.services.stats import (
    completion_percentage,
    compute_stats,
    count_completed_today,
    format_percentage,
    get_aggregate_stats,
    highest_streak,
)

from conftest import NOW, USER_ID

PROFILE = {"xp": 2250, "level": 3, "coins": 40}


class TestPercentages:
    def test_no_habits_has_no_percentage(self):
        assert completion_percentage(0, 0) is None
        assert format_percentage(None) == "N/A"

    @pytest.mark.parametrize("completed,total,expected,label", [
        (0, 4, 0.0, "0%"),
        (1, 4, 25.0, "25%"),
        (1, 3, 33.33, "33.33%"),
        (2, 2, 100.0, "100%"),
    ])
    def test_percentage(self, completed, total, expected, label):
        percentage = completion_percentage(completed, total)
        assert percentage == expected
        assert format_percentage(percentage) == label


class TestCompletedToday:
    def test_counts_todays_completions(self):
        habits = [
            {"last_completion_date": (NOW - timedelta(hours=2)).isoformat()},
            {"last_completion_date": (NOW - timedelta(days=1)).isoformat()},
            {"last_completion_date": None},
        ]
        assert count_completed_today(habits, pytz.utc, NOW) == 1

    def test_today_depends_on_timezone(self):
        # 23:30 UTC on the 14th is already the 15th in Tokyo
        late = datetime(2024, 3, 14, 23, 30, tzinfo=pytz.utc)
        habits = [{"last_completion_date": late.isoformat()}]
        tokyo = pytz.timezone("Asia/Tokyo")

        assert count_completed_today(habits, pytz.utc, NOW) == 0
        assert count_completed_today(habits, tokyo, NOW) == 1

    def test_accepts_zulu_timestamps(self):
        habits = [{"last_completion_date": "2024-03-15T08:00:00Z"}]
        assert count_completed_today(habits, pytz.utc, NOW) == 1


class TestComputeStats:
    def test_empty(self):
        stats = compute_stats([], {"xp": 0, "level": 1, "coins": 0}, pytz.utc, NOW)

        assert stats["total_habits"] == 0
        assert stats["completion_percentage"] is None
        assert stats["completion_label"] == "N/A"
        assert stats["highest_streak"] == 0

    def test_aggregates(self):
        habits = [
            {"streak": 3, "last_completion_date": NOW.isoformat()},
            {"streak": 7, "last_completion_date": None},
        ]

        stats = compute_stats(habits, PROFILE, pytz.utc, NOW)

        assert stats["completed_today"] == 1
        assert stats["total_habits"] == 2
        assert stats["completion_label"] == "50%"
        assert stats["highest_streak"] == 7
        assert stats["level"] == 3
        assert stats["coins"] == 40
        assert stats["level_progress"] == pytest.approx(0.25)

    def test_highest_streak_ignores_nulls(self):
        assert highest_streak([{"streak": None}, {"streak": 2}]) == 2


class TestAggregateStats:
    def test_provisions_missing_profile(self, store, make_habit):
        make_habit(streak=1)

        result = get_aggregate_stats(USER_ID, pytz.utc)

        assert result["stats"]["total_habits"] == 1
        assert result["stats"]["coins"] == 0
        assert len(store.query("profiles", {"id": USER_ID})) == 1
