"""
Onboarding Service - First-run goal capture and template-seeded habits
"""
from typing import Optional, Dict, Any
import logging

from habitquest.core.constants import (
    DEFAULT_DURATION_MINUTES,
    VIEW_GOALS,
    VIEW_HABITS,
    VIEW_PROFILE,
    VIEW_STATS
)
from habitquest.core.exceptions import InvalidProfileDataError, TemplateNotFoundError
from habitquest.services.habits import repository as habit_repository
from habitquest.services.habits.service import create_habit
from habitquest.services.profiles import repository as profile_repository
from habitquest.services.profiles.service import ensure_profile

logger = logging.getLogger(__name__)


def list_templates() -> Dict[str, Any]:
    """Get the habit template catalog ordered by title"""
    return {
        "status": "success",
        "templates": habit_repository.get_habit_templates()
    }


def list_goals(user_id: str) -> Dict[str, Any]:
    """Get a user's goals"""
    return {
        "status": "success",
        "goals": habit_repository.get_goals_for_user(user_id)
    }


def submit_onboarding(user_id: str, category: str, description: Optional[str] = None,
                      target: Optional[str] = None, display_name: Optional[str] = None,
                      template_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Save a new user's goal and optionally seed a habit from a template

    A seeded habit also gets its empty habit_statistics row.

    Args:
        user_id: The new user
        category: Goal category (e.g. 'fitness'); becomes a valid habit category
        description: Free-text goal description
        target: Free-text target ("75kg")
        display_name: Optional display name to set on the profile
        template_id: Optional habit template to create a first habit from

    Returns:
        Dict with status, message, goal/habit data and stale views

    Raises:
        InvalidProfileDataError: If the category is empty
        TemplateNotFoundError: If the template does not exist
        DatabaseError: If a store call fails
    """
    if category is None or not category.strip():
        raise InvalidProfileDataError("Pick a goal category")
    category = category.strip()

    template = None
    if template_id:
        template = habit_repository.get_habit_template_by_id(template_id)
        if template is None:
            raise TemplateNotFoundError(f"Habit template {template_id} not found")

    ensure_profile(user_id)
    if display_name and display_name.strip():
        profile_repository.update_profile(user_id, {"display_name": display_name.strip()})

    goal = habit_repository.create_goal(user_id, category, description or None, target or None)
    stale = [VIEW_GOALS, VIEW_PROFILE]

    habit = None
    if template is not None:
        result = create_habit(
            user_id,
            title=template["title"],
            description=template.get("description"),
            category=category,
            duration_minutes=template.get("duration_minutes") or DEFAULT_DURATION_MINUTES,
            frequency=template.get("frequency") or "daily",
            theme=template.get("theme")
        )
        habit = result["data"]
        habit_repository.create_habit_statistics(habit["id"], user_id)
        stale += [VIEW_HABITS, VIEW_STATS]

    logger.info(f"Onboarding saved for user {user_id} (template: {template_id or 'none'})")

    return {
        "status": "success",
        "message": "Your goals have been saved. Let's start creating your plan!",
        "data": {"goal": goal, "habit": habit},
        "stale": stale
    }
