"""
Teams Repository - Store access for teams and team memberships
"""
from typing import List, Dict, Any, Optional
import logging

from habitquest.core.dependencies import get_store
from habitquest.core.exceptions import DatabaseError

logger = logging.getLogger(__name__)


# ============================================================================
# TEAMS TABLE
# ============================================================================

def get_all_teams() -> List[Dict[str, Any]]:
    """
    Get all teams ordered by name

    Raises:
        DatabaseError: If query fails
    """
    try:
        return get_store().query("teams", order="name")
    except Exception as e:
        logger.error(f"Database error fetching teams: {e}")
        raise DatabaseError(f"Failed to fetch teams: {e}")


def get_team_by_id(team_id: str) -> Optional[Dict[str, Any]]:
    """
    Get a single team

    Raises:
        DatabaseError: If query fails
    """
    try:
        rows = get_store().query("teams", {"id": team_id})
        return rows[0] if rows else None
    except Exception as e:
        logger.error(f"Database error fetching team {team_id}: {e}")
        raise DatabaseError(f"Failed to fetch team: {e}")


def create_team(name: str, description: Optional[str], created_by: str) -> Dict[str, Any]:
    """
    Create a team

    Raises:
        DatabaseError: If insert fails
    """
    try:
        return get_store().insert("teams", {
            "name": name,
            "description": description,
            "created_by": created_by
        })
    except Exception as e:
        logger.error(f"Database error creating team: {e}")
        raise DatabaseError(f"Failed to create team: {e}")


def delete_team(team_id: str) -> Dict[str, Any]:
    """
    Delete a team

    Raises:
        DatabaseError: If delete fails
    """
    try:
        rows = get_store().delete("teams", {"id": team_id})
        return rows[0] if rows else {}
    except Exception as e:
        logger.error(f"Database error deleting team {team_id}: {e}")
        raise DatabaseError(f"Failed to delete team: {e}")


# ============================================================================
# TEAM_MEMBERS TABLE
# ============================================================================

def get_membership(team_id: str, user_id: str) -> Optional[Dict[str, Any]]:
    """
    Get a user's membership in a team

    Raises:
        DatabaseError: If query fails
    """
    try:
        rows = get_store().query("team_members", {"team_id": team_id, "user_id": user_id})
        return rows[0] if rows else None
    except Exception as e:
        logger.error(f"Database error fetching membership of {user_id} in team {team_id}: {e}")
        raise DatabaseError(f"Failed to fetch membership: {e}")


def get_members(team_id: str) -> List[Dict[str, Any]]:
    """
    Get all memberships of a team

    Raises:
        DatabaseError: If query fails
    """
    try:
        return get_store().query("team_members", {"team_id": team_id})
    except Exception as e:
        logger.error(f"Database error fetching members of team {team_id}: {e}")
        raise DatabaseError(f"Failed to fetch team members: {e}")


def create_membership(team_id: str, user_id: str, role: str) -> Dict[str, Any]:
    """
    Add a user to a team

    Raises:
        DatabaseError: If insert fails
    """
    try:
        return get_store().insert("team_members", {
            "team_id": team_id,
            "user_id": user_id,
            "role": role
        })
    except Exception as e:
        logger.error(f"Database error adding {user_id} to team {team_id}: {e}")
        raise DatabaseError(f"Failed to add team member: {e}")


def delete_membership(team_id: str, user_id: str) -> Dict[str, Any]:
    """
    Remove a user from a team

    Raises:
        DatabaseError: If delete fails
    """
    try:
        rows = get_store().delete("team_members", {"team_id": team_id, "user_id": user_id})
        return rows[0] if rows else {}
    except Exception as e:
        logger.error(f"Database error removing {user_id} from team {team_id}: {e}")
        raise DatabaseError(f"Failed to remove team member: {e}")
