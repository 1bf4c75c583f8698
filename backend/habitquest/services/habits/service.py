"""
Habits Service - Business logic for habit management
Handles creating, editing, completing and deleting habits
"""
from datetime import datetime
from typing import Optional, Dict, Any
import logging

from habitquest.core.config import settings
from habitquest.core.constants import (
    DEFAULT_DURATION_MINUTES,
    DEFAULT_PRIORITY,
    FREQUENCIES,
    MAX_PRIORITY,
    MIN_PRIORITY,
    VIEW_HABITS,
    VIEW_LEADERBOARD,
    VIEW_PROFILE,
    VIEW_STATS
)
from habitquest.core.exceptions import (
    DatabaseError,
    HabitNotFoundError,
    HabitQuestException,
    InvalidHabitDataError,
    NotOwnerError
)
from habitquest.services.economy import wallet
from habitquest.utils.timezone import get_utc_now
from . import repository

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "title",
    "description",
    "category",
    "priority",
    "scheduled_time",
    "duration_minutes",
    "frequency"
)


# ============================================================================
# VALIDATION
# ============================================================================

def _validate_title(title: Optional[str]) -> str:
    if title is None or not title.strip():
        raise InvalidHabitDataError("Habit title is required")
    return title.strip()


def _validate_priority(priority: int) -> int:
    if isinstance(priority, bool) or not isinstance(priority, int) \
            or not MIN_PRIORITY <= priority <= MAX_PRIORITY:
        raise InvalidHabitDataError(
            f"Invalid priority: {priority}. Use {MIN_PRIORITY} (highest) to {MAX_PRIORITY} (lowest)"
        )
    return priority


def _validate_duration(duration_minutes: int) -> int:
    if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, int) \
            or duration_minutes <= 0:
        raise InvalidHabitDataError(
            f"Invalid duration: {duration_minutes}. Duration must be a positive number of minutes"
        )
    return duration_minutes


def _validate_frequency(frequency: str) -> str:
    if frequency not in FREQUENCIES:
        raise InvalidHabitDataError(
            f"Invalid frequency: {frequency}. Use one of: {', '.join(FREQUENCIES)}"
        )
    return frequency


def _validate_scheduled_time(scheduled_time: Optional[str]) -> Optional[str]:
    if scheduled_time is None or scheduled_time == "":
        return None
    # Stored values come back from Postgres as HH:MM:SS
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(scheduled_time, fmt).strftime("%H:%M")
        except ValueError:
            continue
    raise InvalidHabitDataError(f"Invalid scheduled_time format: {scheduled_time}. Use HH:MM (24-hour)")


def _validate_category(user_id: str, category: Optional[str]) -> Optional[str]:
    if category is None or category == "":
        return None
    categories = {g.get("category") for g in repository.get_goals_for_user(user_id)}
    if category not in categories:
        raise InvalidHabitDataError(f"Unknown category '{category}'. Pick one of your goal categories")
    return category


# ============================================================================
# LOOKUP
# ============================================================================

def get_owned_habit(user_id: str, habit_id: str) -> Dict[str, Any]:
    """
    Get a habit and check that the caller owns it

    Raises:
        HabitNotFoundError: If the habit does not exist
        NotOwnerError: If the habit belongs to someone else
        DatabaseError: If the query fails
    """
    habit = repository.get_habit_by_id(habit_id)
    if habit is None:
        raise HabitNotFoundError(f"Habit {habit_id} not found")
    if habit.get("user_id") != user_id:
        raise NotOwnerError("You can only change your own habits")
    return habit


def list_habits(user_id: str) -> Dict[str, Any]:
    """
    Get all of a user's habits

    Returns:
        Dict with status and the habit rows
    """
    habits = repository.get_habits_for_user(user_id)
    return {
        "status": "success",
        "habits": habits
    }


# ============================================================================
# LIFECYCLE
# ============================================================================

def create_habit(user_id: str, title: str, description: Optional[str] = None,
                 category: Optional[str] = None, priority: int = DEFAULT_PRIORITY,
                 scheduled_time: Optional[str] = None,
                 duration_minutes: int = DEFAULT_DURATION_MINUTES,
                 frequency: str = "daily", theme: Optional[str] = None) -> Dict[str, Any]:
    """
    Create a new habit for a user

    Args:
        user_id: Owner of the habit
        title: Habit title (required)
        description: Optional description
        category: Optional category, must be one of the owner's goal categories
        priority: 1 (highest) to 5 (lowest)
        scheduled_time: Optional time of day in HH:MM format (24-hour)
        duration_minutes: Length of one session in minutes
        frequency: 'daily', 'weekly' or 'monthly'
        theme: Optional theme carried over from a template

    Returns:
        Dict with status, message, created habit data and stale views

    Raises:
        InvalidHabitDataError: If any field is invalid
        DatabaseError: If database operation fails
    """
    habit_data = {
        "user_id": user_id,
        "title": _validate_title(title),
        "description": description or None,
        "priority": _validate_priority(priority),
        "scheduled_time": _validate_scheduled_time(scheduled_time),
        "duration_minutes": _validate_duration(duration_minutes),
        "frequency": _validate_frequency(frequency),
        "streak": 0,
        "last_completion_date": None,
        "total_completions": 0,
        "streak_breaks_count": 0,
        "coin_reward": settings.DEFAULT_COIN_REWARD,
        "streak_recovery_cost": settings.DEFAULT_STREAK_RECOVERY_COST
    }
    if theme:
        habit_data["theme"] = theme
    # Only hits the store once the rest of the input is known to be valid
    habit_data["category"] = _validate_category(user_id, category)

    habit = repository.create_habit(habit_data)
    logger.info(f"Habit '{habit_data['title']}' created for user {user_id}")

    return {
        "status": "success",
        "message": f"Habit '{habit_data['title']}' created",
        "data": habit,
        "stale": [VIEW_HABITS, VIEW_STATS]
    }


def edit_habit(user_id: str, habit_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
    """
    Edit a habit's fields

    Changing the duration invalidates the current streak: the streak goes back
    to 0 and the habit's streak_breaks_count goes up by one. Any other change
    leaves the streak alone.

    Args:
        user_id: The caller
        habit_id: The habit to edit
        changes: Submitted fields (any of EDITABLE_FIELDS)

    Returns:
        Dict with status, message, updated habit data and stale views

    Raises:
        InvalidHabitDataError: If a submitted field is invalid
        HabitNotFoundError: If the habit does not exist
        NotOwnerError: If the caller does not own the habit
        DatabaseError: If database operation fails
    """
    unknown = set(changes) - set(EDITABLE_FIELDS)
    if unknown:
        raise InvalidHabitDataError(f"Cannot edit field(s): {', '.join(sorted(unknown))}")

    update_data = {}
    if "title" in changes:
        update_data["title"] = _validate_title(changes["title"])
    if "description" in changes:
        update_data["description"] = changes["description"] or None
    if "priority" in changes:
        update_data["priority"] = _validate_priority(changes["priority"])
    if "scheduled_time" in changes:
        update_data["scheduled_time"] = _validate_scheduled_time(changes["scheduled_time"])
    if "duration_minutes" in changes:
        update_data["duration_minutes"] = _validate_duration(changes["duration_minutes"])
    if "frequency" in changes:
        update_data["frequency"] = _validate_frequency(changes["frequency"])

    habit = get_owned_habit(user_id, habit_id)
    if "category" in changes:
        update_data["category"] = _validate_category(user_id, changes["category"])

    streak_reset = (
        "duration_minutes" in update_data
        and update_data["duration_minutes"] != habit.get("duration_minutes")
    )
    if streak_reset:
        update_data["streak"] = 0
        update_data["streak_breaks_count"] = (habit.get("streak_breaks_count") or 0) + 1

    if not update_data:
        return {
            "status": "success",
            "message": f"No changes to habit '{habit['title']}'",
            "data": habit,
            "stale": []
        }

    updated = repository.update_habit(habit_id, update_data)

    message = f"Habit '{updated.get('title', habit['title'])}' updated"
    if streak_reset:
        logger.info(f"Duration of habit {habit_id} changed, streak reset")
        message += ". Changing the duration reset your streak"

    return {
        "status": "success",
        "message": message,
        "data": updated,
        "stale": [VIEW_HABITS, VIEW_STATS]
    }


def delete_habit(user_id: str, habit_id: str) -> Dict[str, Any]:
    """
    Delete a habit

    Related log and statistics rows are left to the database.

    Raises:
        HabitNotFoundError: If the habit does not exist
        NotOwnerError: If the caller does not own the habit
        DatabaseError: If database operation fails
    """
    habit = get_owned_habit(user_id, habit_id)
    repository.delete_habit(habit_id)
    logger.info(f"Habit {habit_id} deleted by user {user_id}")

    return {
        "status": "success",
        "message": f"Habit '{habit['title']}' deleted",
        "habit_id": habit_id,
        "stale": [VIEW_HABITS, VIEW_STATS]
    }


def complete_habit(user_id: str, habit_id: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Record a completed session of a habit and pay out its reward

    The habit is updated first (streak, total completions, last completion
    date), then the profile is credited. If the credit fails the habit update
    stands and the result has status 'partial' with a message saying which
    part failed.

    Args:
        user_id: The owner completing the habit
        habit_id: The habit
        now: Completion time (defaults to the current time)

    Returns:
        Dict with status, message, habit/profile/reward data and stale views

    Raises:
        HabitNotFoundError: If the habit does not exist
        NotOwnerError: If the caller does not own the habit
        DatabaseError: If the habit update fails (nothing applied)
    """
    habit = get_owned_habit(user_id, habit_id)
    completed_at = (now or get_utc_now()).isoformat()
    streak = (habit.get("streak") or 0) + 1

    updated_habit = repository.update_habit(habit_id, {
        "last_completion_date": completed_at,
        "streak": streak,
        "total_completions": (habit.get("total_completions") or 0) + 1
    })

    reward = wallet.completion_reward(habit)
    stale = [VIEW_HABITS, VIEW_STATS, VIEW_PROFILE, VIEW_LEADERBOARD]

    try:
        profile = wallet.credit_rewards(user_id, reward["coins"], reward["xp"])
    except HabitQuestException as e:
        logger.error(f"Habit {habit_id} completed but reward credit failed: {e}")
        return {
            "status": "partial",
            "message": (
                f"'{habit['title']}' completed and your streak is now {streak}, "
                f"but your reward of {reward['coins']} coins could not be added: {e}"
            ),
            "data": {"habit": updated_habit, "profile": None, "reward": reward},
            "stale": stale
        }

    try:
        repository.create_habit_log(habit_id, user_id, completed_at, reward["coins"], reward["xp"])
    except DatabaseError as e:
        logger.warning(f"Completion of habit {habit_id} was applied but not logged: {e}")

    return {
        "status": "success",
        "message": f"'{habit['title']}' completed! +{reward['coins']} coins, streak {streak}",
        "data": {"habit": updated_habit, "profile": profile, "reward": reward},
        "stale": stale
    }
