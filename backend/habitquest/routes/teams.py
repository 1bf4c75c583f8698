"""
Team Routes - Listing, creating and joining teams
"""
from typing import Optional
from fastapi import APIRouter, Depends
from habitquest.models.team import CreateTeamRequest
from habitquest.services import teams as team_service
from habitquest.services.economy import service as economy_service
from habitquest.core.dependencies import get_current_user_id
from habitquest.core.exceptions import HabitQuestException
from .errors import to_http_exception, unexpected_error

router = APIRouter(prefix="/teams", tags=["teams"])


@router.get("")
async def list_teams(q: Optional[str] = None, user_id: str = Depends(get_current_user_id)):
    """List teams, optionally searching by name"""
    try:
        return team_service.list_teams(q)
    except HabitQuestException as e:
        raise to_http_exception(e)
    except Exception as e:
        raise unexpected_error(e)


@router.get("/{team_id}")
async def get_team(team_id: str, user_id: str = Depends(get_current_user_id)):
    """Get a team with its members"""
    try:
        return team_service.get_team_detail(team_id)
    except HabitQuestException as e:
        raise to_http_exception(e)
    except Exception as e:
        raise unexpected_error(e)


@router.post("")
async def create_team(request: CreateTeamRequest, user_id: str = Depends(get_current_user_id)):
    """Create a team (1000 coins); the caller becomes its leader"""
    try:
        return economy_service.create_team(user_id, request.name, request.description)
    except HabitQuestException as e:
        raise to_http_exception(e)
    except Exception as e:
        raise unexpected_error(e)


@router.post("/{team_id}/join")
async def join_team(team_id: str, user_id: str = Depends(get_current_user_id)):
    """Join a team (500 coins)"""
    try:
        return economy_service.join_team(user_id, team_id)
    except HabitQuestException as e:
        raise to_http_exception(e)
    except Exception as e:
        raise unexpected_error(e)
