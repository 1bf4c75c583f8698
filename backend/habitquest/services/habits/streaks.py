"""
Streak lapse checking
Resets the streak of habits that went longer than their frequency allows
without a completion
"""
from datetime import date, datetime
from typing import Optional, Dict, Any
import logging

from habitquest.core.constants import FREQUENCY_WINDOW_DAYS
from habitquest.utils.timezone import get_local_today, get_tz, local_date
from . import repository

logger = logging.getLogger(__name__)


def is_streak_lapsed(habit: Dict[str, Any], today: date, tz=None) -> bool:
    """
    Determine if a habit's streak has lapsed

    Args:
        habit: Habit row
        today: The local date to judge against
        tz: Timezone the completion date is read in

    Returns:
        True if the habit has a streak and its last completion is further back
        than its frequency window
    """
    if not habit.get("streak"):
        return False

    last_completed = local_date(habit.get("last_completion_date"), tz)
    if last_completed is None:
        return False

    window = FREQUENCY_WINDOW_DAYS.get(habit.get("frequency") or "daily", FREQUENCY_WINDOW_DAYS["daily"])
    return (today - last_completed).days > window


def check_lapsed_streaks(now: Optional[datetime] = None, tz=None) -> int:
    """
    Reset the streak of every lapsed habit to 0

    The breaks counter is not touched; it only moves on recovery and on
    duration changes.

    Args:
        now: Reference instant (defaults to the current time)
        tz: Timezone used for calendar dates (defaults to the app timezone)

    Returns:
        Number of streaks reset
    """
    tz = tz or get_tz()
    today = get_local_today(tz, now)

    logger.info("[STREAK SWEEP] Checking for lapsed streaks...")

    reset_count = 0
    for habit in repository.get_all_habits():
        if not is_streak_lapsed(habit, today, tz):
            continue

        try:
            repository.update_habit(habit["id"], {"streak": 0})
            reset_count += 1
            logger.info(
                f"[STREAK SWEEP] Streak of {habit.get('streak')} lapsed for habit_id={habit['id']} "
                f"({habit.get('title')})"
            )
        except Exception as e:
            logger.error(f"[STREAK SWEEP] Failed to reset streak for habit_id={habit['id']}: {e}")

    if reset_count > 0:
        logger.info(f"[STREAK SWEEP] Reset {reset_count} lapsed streak(s)")
    else:
        logger.info("[STREAK SWEEP] No lapsed streaks found")

    return reset_count
