"""
Habits Repository - Centralized database access layer
Store queries for habits, habit logs, user goals and habit templates
"""
from typing import List, Dict, Any, Optional
import logging

from habitquest.core.dependencies import get_store
from habitquest.core.exceptions import DatabaseError

logger = logging.getLogger(__name__)


# ============================================================================
# HABITS TABLE
# ============================================================================

def get_habits_for_user(user_id: str) -> List[Dict[str, Any]]:
    """
    Get all habits owned by a user, highest priority first

    Args:
        user_id: The owner's user ID

    Returns:
        List of habit dictionaries

    Raises:
        DatabaseError: If query fails
    """
    try:
        return get_store().query("habits", {"user_id": user_id}, order="priority")
    except Exception as e:
        logger.error(f"Database error fetching habits for user {user_id}: {e}")
        raise DatabaseError(f"Failed to fetch habits: {e}")


def get_all_habits() -> List[Dict[str, Any]]:
    """
    Get every habit in the database

    Raises:
        DatabaseError: If query fails
    """
    try:
        return get_store().query("habits")
    except Exception as e:
        logger.error(f"Database error fetching habits: {e}")
        raise DatabaseError(f"Failed to fetch habits: {e}")


def get_habit_by_id(habit_id: str) -> Optional[Dict[str, Any]]:
    """
    Get a single habit by ID

    Args:
        habit_id: The habit ID

    Returns:
        Habit dictionary or None if not found

    Raises:
        DatabaseError: If query fails
    """
    try:
        rows = get_store().query("habits", {"id": habit_id})
        return rows[0] if rows else None
    except Exception as e:
        logger.error(f"Database error fetching habit {habit_id}: {e}")
        raise DatabaseError(f"Failed to fetch habit: {e}")


def create_habit(habit_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create a new habit

    Args:
        habit_data: Column values for the new row

    Returns:
        Created habit data

    Raises:
        DatabaseError: If insert fails
    """
    try:
        return get_store().insert("habits", habit_data)
    except Exception as e:
        logger.error(f"Database error creating habit: {e}")
        raise DatabaseError(f"Failed to create habit: {e}")


def update_habit(habit_id: str, update_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Update a habit

    Args:
        habit_id: The habit ID
        update_data: Dictionary of fields to update

    Returns:
        Updated habit data

    Raises:
        DatabaseError: If update fails
    """
    try:
        rows = get_store().update("habits", {"id": habit_id}, update_data)
        return rows[0] if rows else {}
    except Exception as e:
        logger.error(f"Database error updating habit {habit_id}: {e}")
        raise DatabaseError(f"Failed to update habit: {e}")


def update_habit_if_unchanged(habit_id: str, expected: Dict[str, Any],
                              update_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    Update a habit only if the given columns still hold the expected values

    Returns:
        Updated habit, or None if another writer changed it first

    Raises:
        DatabaseError: If update fails
    """
    try:
        rows = get_store().update("habits", {"id": habit_id, **expected}, update_data)
        return rows[0] if rows else None
    except Exception as e:
        logger.error(f"Database error updating habit {habit_id}: {e}")
        raise DatabaseError(f"Failed to update habit: {e}")


def delete_habit(habit_id: str) -> Dict[str, Any]:
    """
    Delete a habit

    Args:
        habit_id: The habit ID

    Returns:
        Deleted habit data

    Raises:
        DatabaseError: If delete fails
    """
    try:
        rows = get_store().delete("habits", {"id": habit_id})
        return rows[0] if rows else {}
    except Exception as e:
        logger.error(f"Database error deleting habit {habit_id}: {e}")
        raise DatabaseError(f"Failed to delete habit: {e}")


# ============================================================================
# HABIT_LOGS TABLE
# ============================================================================

def create_habit_log(habit_id: str, user_id: str, completed_at: str,
                     coins_earned: int, xp_earned: int) -> Dict[str, Any]:
    """
    Record one completion of a habit

    Raises:
        DatabaseError: If insert fails
    """
    try:
        return get_store().insert("habit_logs", {
            "habit_id": habit_id,
            "user_id": user_id,
            "completed_at": completed_at,
            "coins_earned": coins_earned,
            "xp_earned": xp_earned
        })
    except Exception as e:
        logger.error(f"Database error logging completion of habit {habit_id}: {e}")
        raise DatabaseError(f"Failed to log completion: {e}")


# ============================================================================
# HABIT_STATISTICS TABLE
# ============================================================================

def create_habit_statistics(habit_id: str, user_id: str) -> Dict[str, Any]:
    """
    Create the empty statistics row of a new habit

    Raises:
        DatabaseError: If insert fails
    """
    try:
        return get_store().insert("habit_statistics", {
            "habit_id": habit_id,
            "user_id": user_id,
            "completion_rate": 0,
            "streak_history": [0],
            "monthly_completions": 0
        })
    except Exception as e:
        logger.error(f"Database error creating statistics for habit {habit_id}: {e}")
        raise DatabaseError(f"Failed to create habit statistics: {e}")


# ============================================================================
# USER_GOALS TABLE
# ============================================================================

def get_goals_for_user(user_id: str) -> List[Dict[str, Any]]:
    """
    Get the goals a user declared during onboarding

    Raises:
        DatabaseError: If query fails
    """
    try:
        return get_store().query("user_goals", {"user_id": user_id})
    except Exception as e:
        logger.error(f"Database error fetching goals for user {user_id}: {e}")
        raise DatabaseError(f"Failed to fetch goals: {e}")


def create_goal(user_id: str, category: str, description: Optional[str],
                target: Optional[str]) -> Dict[str, Any]:
    """
    Create a user goal

    Raises:
        DatabaseError: If insert fails
    """
    try:
        return get_store().insert("user_goals", {
            "user_id": user_id,
            "category": category,
            "description": description,
            "target": target
        })
    except Exception as e:
        logger.error(f"Database error creating goal: {e}")
        raise DatabaseError(f"Failed to create goal: {e}")


# ============================================================================
# HABIT_TEMPLATES TABLE
# ============================================================================

def get_habit_templates() -> List[Dict[str, Any]]:
    """
    Get the habit template catalog ordered by title

    Raises:
        DatabaseError: If query fails
    """
    try:
        return get_store().query("habit_templates", order="title")
    except Exception as e:
        logger.error(f"Database error fetching habit templates: {e}")
        raise DatabaseError(f"Failed to fetch habit templates: {e}")


def get_habit_template_by_id(template_id: str) -> Optional[Dict[str, Any]]:
    """
    Get a single habit template

    Raises:
        DatabaseError: If query fails
    """
    try:
        rows = get_store().query("habit_templates", {"id": template_id})
        return rows[0] if rows else None
    except Exception as e:
        logger.error(f"Database error fetching habit template {template_id}: {e}")
        raise DatabaseError(f"Failed to fetch habit template: {e}")
