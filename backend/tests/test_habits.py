"""Tests for habit creation, editing, deletion and completion."""

import pytest

from habitquest.core.exceptions import (
    DatabaseError,
    HabitNotFoundError,
    InvalidHabitDataError,
    NotOwnerError,
)
from habitquest.services.habits import service as habits

from conftest import NOW, OTHER_USER_ID, USER_ID, get_row


class TestCreateHabit:
    def test_defaults(self, store):
        result = habits.create_habit(USER_ID, "  Meditate  ")

        habit = result["data"]
        assert result["status"] == "success"
        assert habit["title"] == "Meditate"
        assert habit["priority"] == 1
        assert habit["duration_minutes"] == 30
        assert habit["frequency"] == "daily"
        assert habit["streak"] == 0
        assert habit["streak_breaks_count"] == 0
        assert habit["total_completions"] == 0
        assert habit["last_completion_date"] is None
        assert habit["coin_reward"] == 10
        assert habit["streak_recovery_cost"] == 50
        assert set(result["stale"]) == {"habits", "stats"}

    def test_scheduled_time_is_normalized(self, store):
        habit = habits.create_habit(USER_ID, "Run", scheduled_time="07:30:00")["data"]
        assert habit["scheduled_time"] == "07:30"

    def test_category_must_be_a_goal_category(self, store, make_goal):
        make_goal(category="fitness")

        habit = habits.create_habit(USER_ID, "Run", category="fitness")["data"]
        assert habit["category"] == "fitness"

        with pytest.raises(InvalidHabitDataError, match="Unknown category"):
            habits.create_habit(USER_ID, "Read", category="reading")

    @pytest.mark.parametrize("fields", [
        {"title": "   "},
        {"title": "Run", "priority": 0},
        {"title": "Run", "priority": 6},
        {"title": "Run", "priority": True},
        {"title": "Run", "duration_minutes": 0},
        {"title": "Run", "duration_minutes": -5},
        {"title": "Run", "frequency": "hourly"},
        {"title": "Run", "scheduled_time": "25:00"},
    ])
    def test_invalid_input_rejected_before_any_write(self, store, fields):
        store.fail_on.update({("query", "user_goals"), ("insert", "habits")})

        with pytest.raises(InvalidHabitDataError):
            habits.create_habit(USER_ID, **fields)

        assert store.tables.get("habits", []) == []

    def test_store_failure_is_database_error(self, store):
        store.fail_on.add(("insert", "habits"))

        with pytest.raises(DatabaseError):
            habits.create_habit(USER_ID, "Run")


class TestEditHabit:
    def test_duration_change_resets_streak(self, store, make_habit):
        habit = make_habit(streak=5, streak_breaks_count=1, duration_minutes=30)

        result = habits.edit_habit(USER_ID, habit["id"], {"duration_minutes": 45})

        stored = get_row(store, "habits", habit["id"])
        assert stored["duration_minutes"] == 45
        assert stored["streak"] == 0
        assert stored["streak_breaks_count"] == 2
        assert "reset your streak" in result["message"]

    def test_same_duration_keeps_streak(self, store, make_habit):
        habit = make_habit(streak=5, duration_minutes=30)

        habits.edit_habit(USER_ID, habit["id"], {"duration_minutes": 30, "title": "Evening Workout"})

        stored = get_row(store, "habits", habit["id"])
        assert stored["streak"] == 5
        assert stored["streak_breaks_count"] == 0
        assert stored["title"] == "Evening Workout"

    def test_other_fields_keep_streak(self, store, make_habit):
        habit = make_habit(streak=3)

        habits.edit_habit(USER_ID, habit["id"], {"priority": 4, "frequency": "weekly"})

        stored = get_row(store, "habits", habit["id"])
        assert stored["priority"] == 4
        assert stored["frequency"] == "weekly"
        assert stored["streak"] == 3

    def test_no_changes(self, make_habit):
        habit = make_habit()

        result = habits.edit_habit(USER_ID, habit["id"], {})

        assert result["stale"] == []

    def test_unknown_field_rejected(self, make_habit):
        habit = make_habit()

        with pytest.raises(InvalidHabitDataError, match="streak"):
            habits.edit_habit(USER_ID, habit["id"], {"streak": 100})

    def test_invalid_value_changes_nothing(self, store, make_habit):
        habit = make_habit(priority=2)

        with pytest.raises(InvalidHabitDataError):
            habits.edit_habit(USER_ID, habit["id"], {"priority": 9})

        assert get_row(store, "habits", habit["id"])["priority"] == 2

    def test_not_owner(self, make_habit):
        habit = make_habit(user_id=OTHER_USER_ID)

        with pytest.raises(NotOwnerError):
            habits.edit_habit(USER_ID, habit["id"], {"title": "Mine now"})

    def test_not_found(self, store):
        with pytest.raises(HabitNotFoundError):
            habits.edit_habit(USER_ID, "missing", {"title": "Run"})


class TestDeleteHabit:
    def test_delete(self, store, make_habit):
        habit = make_habit()

        result = habits.delete_habit(USER_ID, habit["id"])

        assert result["habit_id"] == habit["id"]
        assert get_row(store, "habits", habit["id"]) is None

    def test_not_owner(self, store, make_habit):
        habit = make_habit(user_id=OTHER_USER_ID)

        with pytest.raises(NotOwnerError):
            habits.delete_habit(USER_ID, habit["id"])

        assert get_row(store, "habits", habit["id"]) is not None


class TestListHabits:
    def test_only_own_habits_by_priority(self, make_habit):
        make_habit(title="Low", priority=5)
        make_habit(title="High", priority=1)
        make_habit(user_id=OTHER_USER_ID, title="Theirs")

        titles = [h["title"] for h in habits.list_habits(USER_ID)["habits"]]

        assert titles == ["High", "Low"]


class TestCompleteHabit:
    def test_completion_updates_habit_and_profile(self, store, make_profile, make_habit):
        make_profile(coins=100, xp=990)
        habit = make_habit(streak=2, total_completions=7, coin_reward=15)

        result = habits.complete_habit(USER_ID, habit["id"], now=NOW)

        assert result["status"] == "success"
        stored = get_row(store, "habits", habit["id"])
        assert stored["streak"] == 3
        assert stored["total_completions"] == 8
        assert stored["last_completion_date"] == NOW.isoformat()
        profile = get_row(store, "profiles", USER_ID)
        assert profile["coins"] == 115
        assert profile["xp"] == 1000
        # Level is stored, never recomputed from XP
        assert profile["level"] == 1
        assert result["data"]["reward"] == {"coins": 15, "xp": 10}
        assert {"habits", "stats", "profile", "leaderboard"} <= set(result["stale"])

    def test_completion_is_logged(self, store, make_profile, make_habit):
        make_profile()
        habit = make_habit()

        habits.complete_habit(USER_ID, habit["id"], now=NOW)

        logs = store.query("habit_logs", {"habit_id": habit["id"]})
        assert len(logs) == 1
        assert logs[0]["coins_earned"] == 10
        assert logs[0]["xp_earned"] == 10

    def test_failed_credit_is_partial(self, store, make_profile, make_habit):
        make_profile(coins=100)
        habit = make_habit(streak=2)
        store.fail_on.add(("update", "profiles"))

        result = habits.complete_habit(USER_ID, habit["id"], now=NOW)

        assert result["status"] == "partial"
        assert "could not be added" in result["message"]
        assert get_row(store, "habits", habit["id"])["streak"] == 3
        assert get_row(store, "profiles", USER_ID)["coins"] == 100

    def test_failed_log_still_succeeds(self, store, make_profile, make_habit):
        make_profile(coins=0)
        habit = make_habit()
        store.fail_on.add(("insert", "habit_logs"))

        result = habits.complete_habit(USER_ID, habit["id"], now=NOW)

        assert result["status"] == "success"
        assert get_row(store, "profiles", USER_ID)["coins"] == 10

    def test_failed_habit_update_applies_nothing(self, store, make_profile, make_habit):
        make_profile(coins=0)
        habit = make_habit()
        store.fail_on.add(("update", "habits"))

        with pytest.raises(DatabaseError):
            habits.complete_habit(USER_ID, habit["id"], now=NOW)

        assert get_row(store, "profiles", USER_ID)["coins"] == 0

    def test_first_completion_provisions_profile(self, store, make_habit):
        habit = make_habit(coin_reward=10)

        result = habits.complete_habit(USER_ID, habit["id"], now=NOW)

        assert result["status"] == "success"
        profile = get_row(store, "profiles", USER_ID)
        assert profile["coins"] == 10
        assert profile["xp"] == 10
