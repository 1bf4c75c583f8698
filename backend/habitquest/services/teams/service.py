"""
Teams Service - Read-side team queries
"""
from typing import Optional, Dict, Any

from habitquest.core.exceptions import TeamNotFoundError
from . import repository


def list_teams(search: Optional[str] = None) -> Dict[str, Any]:
    """
    List teams, optionally filtered by a case-insensitive name search

    Args:
        search: Substring to look for in team names

    Returns:
        Dict with status and matching teams
    """
    teams = repository.get_all_teams()
    if search:
        needle = search.strip().lower()
        teams = [t for t in teams if needle in (t.get("name") or "").lower()]

    return {
        "status": "success",
        "teams": teams
    }


def get_team_detail(team_id: str) -> Dict[str, Any]:
    """
    Get a team with its members

    Raises:
        TeamNotFoundError: If the team does not exist
    """
    team = repository.get_team_by_id(team_id)
    if team is None:
        raise TeamNotFoundError(f"Team {team_id} not found")

    members = repository.get_members(team_id)
    return {
        "status": "success",
        "team": team,
        "members": members,
        "member_count": len(members)
    }
