"""
Profiles Service - Profile reads and edits, leaderboard and achievements
"""
from typing import Optional, Dict, Any
import logging

from habitquest.core.constants import VIEW_LEADERBOARD, VIEW_PROFILE
from habitquest.core.exceptions import InvalidProfileDataError
from habitquest.services.economy import wallet
from . import repository

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("display_name", "username", "avatar_url")


def ensure_profile(user_id: str) -> Dict[str, Any]:
    """
    Get a user's profile, creating an empty one for a new account

    Returns:
        Profile dictionary
    """
    profile = repository.get_profile(user_id)
    if profile is not None:
        return profile

    logger.info(f"Provisioning profile for new user {user_id}")
    return repository.create_profile({
        "id": user_id,
        "username": None,
        "display_name": None,
        "avatar_url": None,
        "xp": 0,
        "level": 1,
        "coins": 0
    })


def get_profile(user_id: str) -> Dict[str, Any]:
    """
    Get a user's profile with level progress

    Returns:
        Dict with status, profile data and the XP progress through the current level
    """
    profile = ensure_profile(user_id)
    return {
        "status": "success",
        "profile": profile,
        "level_progress": wallet.level_progress(profile.get("xp") or 0)
    }


def edit_profile(user_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
    """
    Edit display fields of a profile

    Args:
        user_id: The caller
        changes: Any of display_name, username, avatar_url

    Raises:
        InvalidProfileDataError: If a field is not editable or a username is blank
    """
    unknown = set(changes) - set(EDITABLE_FIELDS)
    if unknown:
        raise InvalidProfileDataError(f"Cannot edit field(s): {', '.join(sorted(unknown))}")

    update_data = {}
    for field in EDITABLE_FIELDS:
        if field not in changes:
            continue
        value = changes[field]
        if isinstance(value, str):
            value = value.strip() or None
        update_data[field] = value

    if "username" in changes and update_data["username"] is None:
        raise InvalidProfileDataError("Username cannot be empty")

    ensure_profile(user_id)
    if not update_data:
        return {
            "status": "success",
            "message": "No changes to your profile",
            "data": repository.get_profile(user_id),
            "stale": []
        }

    profile = repository.update_profile(user_id, update_data)
    return {
        "status": "success",
        "message": "Your profile has been updated",
        "data": profile,
        "stale": [VIEW_PROFILE, VIEW_LEADERBOARD]
    }


def get_leaderboard(limit: Optional[int] = None) -> Dict[str, Any]:
    """
    Get the global leaderboard with 1-based ranks

    Returns:
        Dict with status and ranked entries (username, xp, streak)
    """
    rows = repository.get_leaderboard(limit)
    entries = [
        {
            "rank": position,
            "username": row.get("username"),
            "xp": row.get("xp") or 0,
            "streak": row.get("streak") or 0
        }
        for position, row in enumerate(rows, start=1)
    ]
    return {
        "status": "success",
        "entries": entries
    }


def get_achievements(user_id: str) -> Dict[str, Any]:
    """
    Get a user's achievements with percentage progress

    Returns:
        Dict with status and achievement rows, each with a 'percent' key
    """
    achievements = []
    for row in repository.get_achievements_for_user(user_id):
        target = row.get("target") or 0
        progress = row.get("progress") or 0
        percent = min(100.0, progress / target * 100) if target > 0 else 0.0
        achievements.append({**row, "progress": progress, "percent": round(percent, 2)})

    return {
        "status": "success",
        "achievements": achievements
    }
