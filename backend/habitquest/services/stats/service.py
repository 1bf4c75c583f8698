"""
Stats Service - Dashboard aggregates
Recomputed from the current habits and profile on every request, never stored
"""
from datetime import datetime
from typing import Optional, Dict, Any, List

from habitquest.services.economy import wallet
from habitquest.services.habits import repository as habit_repository
from habitquest.services.profiles.service import ensure_profile
from habitquest.utils.timezone import get_local_today, get_tz, local_date

NO_DATA_LABEL = "N/A"


def count_completed_today(habits: List[Dict[str, Any]], tz=None,
                          now: Optional[datetime] = None) -> int:
    """Number of habits whose last completion falls on today's local date"""
    tz = tz or get_tz()
    today = get_local_today(tz, now)
    return sum(1 for h in habits if local_date(h.get("last_completion_date"), tz) == today)


def highest_streak(habits: List[Dict[str, Any]]) -> int:
    """Largest current streak, 0 for no habits"""
    return max((h.get("streak") or 0 for h in habits), default=0)


def completion_percentage(completed: int, total: int) -> Optional[float]:
    """
    Share of habits completed today as a percentage

    Returns:
        Percentage rounded to 2 places, or None when there are no habits
    """
    if total <= 0:
        return None
    return round(completed / total * 100, 2)


def format_percentage(percentage: Optional[float]) -> str:
    """Display form of a completion percentage"""
    if percentage is None:
        return NO_DATA_LABEL
    return f"{percentage:g}%"


def compute_stats(habits: List[Dict[str, Any]], profile: Dict[str, Any], tz=None,
                  now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Aggregate habits and profile into dashboard numbers

    Args:
        habits: The user's habit rows
        profile: The user's profile row
        tz: Timezone that decides what "today" is
        now: Reference instant (defaults to the current time)

    Returns:
        Dict of aggregate values
    """
    completed = count_completed_today(habits, tz, now)
    total = len(habits)
    percentage = completion_percentage(completed, total)
    xp = profile.get("xp") or 0

    return {
        "completed_today": completed,
        "total_habits": total,
        "completion_percentage": percentage,
        "completion_label": format_percentage(percentage),
        "highest_streak": highest_streak(habits),
        "level": profile.get("level") or 1,
        "xp": xp,
        "coins": profile.get("coins") or 0,
        "level_progress": wallet.level_progress(xp)
    }


def get_aggregate_stats(user_id: str, tz=None) -> Dict[str, Any]:
    """
    Get dashboard stats for a user

    Args:
        user_id: The user
        tz: Caller's timezone (defaults to the app timezone)

    Returns:
        Dict with status and the aggregate values
    """
    habits = habit_repository.get_habits_for_user(user_id)
    profile = ensure_profile(user_id)
    return {
        "status": "success",
        "stats": compute_stats(habits, profile, tz)
    }
