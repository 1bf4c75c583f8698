"""
Profiles Repository - Store access for profiles, leaderboard and achievements
"""
from typing import List, Dict, Any, Optional
import logging

from habitquest.core.dependencies import get_store
from habitquest.core.exceptions import DatabaseError

logger = logging.getLogger(__name__)


# ============================================================================
# PROFILES TABLE
# ============================================================================

def get_profile(user_id: str) -> Optional[Dict[str, Any]]:
    """
    Get a user's profile

    Args:
        user_id: The user ID (same as the identity provider's id)

    Returns:
        Profile dictionary or None if the user has no profile yet

    Raises:
        DatabaseError: If query fails
    """
    try:
        rows = get_store().query("profiles", {"id": user_id})
        return rows[0] if rows else None
    except Exception as e:
        logger.error(f"Database error fetching profile {user_id}: {e}")
        raise DatabaseError(f"Failed to fetch profile: {e}")


def create_profile(profile_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create a profile row

    Raises:
        DatabaseError: If insert fails
    """
    try:
        return get_store().insert("profiles", profile_data)
    except Exception as e:
        logger.error(f"Database error creating profile: {e}")
        raise DatabaseError(f"Failed to create profile: {e}")


def update_profile(user_id: str, update_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Update profile fields unconditionally

    Raises:
        DatabaseError: If update fails
    """
    try:
        rows = get_store().update("profiles", {"id": user_id}, update_data)
        return rows[0] if rows else {}
    except Exception as e:
        logger.error(f"Database error updating profile {user_id}: {e}")
        raise DatabaseError(f"Failed to update profile: {e}")


def update_profile_if_unchanged(user_id: str, expected: Dict[str, Any],
                                update_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    Update a profile only if the given columns still hold the expected values

    Args:
        user_id: The user ID
        expected: Column values observed when the change was computed
        update_data: Dictionary of fields to update

    Returns:
        Updated profile, or None if another writer changed it first

    Raises:
        DatabaseError: If update fails
    """
    try:
        rows = get_store().update("profiles", {"id": user_id, **expected}, update_data)
        return rows[0] if rows else None
    except Exception as e:
        logger.error(f"Database error updating profile {user_id}: {e}")
        raise DatabaseError(f"Failed to update profile: {e}")


# ============================================================================
# GLOBAL_LEADERBOARD VIEW
# ============================================================================

def get_leaderboard(limit: Optional[int] = None) -> List[Dict[str, Any]]:
    """
    Get leaderboard rows ordered by XP, highest first

    Raises:
        DatabaseError: If query fails
    """
    try:
        return get_store().query("global_leaderboard", order="xp", desc=True, limit=limit)
    except Exception as e:
        logger.error(f"Database error fetching leaderboard: {e}")
        raise DatabaseError(f"Failed to fetch leaderboard: {e}")


# ============================================================================
# ACHIEVEMENTS TABLE
# ============================================================================

def get_achievements_for_user(user_id: str) -> List[Dict[str, Any]]:
    """
    Get a user's achievement progress rows

    Raises:
        DatabaseError: If query fails
    """
    try:
        return get_store().query("achievements", {"user_id": user_id})
    except Exception as e:
        logger.error(f"Database error fetching achievements for user {user_id}: {e}")
        raise DatabaseError(f"Failed to fetch achievements: {e}")
