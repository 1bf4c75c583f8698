"""
Profile Routes - Own profile, leaderboard and achievements
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from habitquest.models.profile import EditProfileRequest
from habitquest.services import profiles as profile_service
from habitquest.core.dependencies import get_current_user_id
from habitquest.core.exceptions import HabitQuestException
from .errors import to_http_exception, unexpected_error

router = APIRouter(tags=["profiles"])


@router.get("/profile")
async def get_profile(user_id: str = Depends(get_current_user_id)):
    """Get the caller's profile (created on first access)"""
    try:
        return profile_service.get_profile(user_id)
    except HabitQuestException as e:
        raise to_http_exception(e)
    except Exception as e:
        raise unexpected_error(e)


@router.patch("/profile")
async def edit_profile(request: EditProfileRequest, user_id: str = Depends(get_current_user_id)):
    """Edit display name, username or avatar"""
    try:
        return profile_service.edit_profile(user_id, request.model_dump(exclude_unset=True))
    except HabitQuestException as e:
        raise to_http_exception(e)
    except Exception as e:
        raise unexpected_error(e)


@router.get("/leaderboard")
async def get_leaderboard(limit: Optional[int] = Query(None, gt=0, le=500),
                          user_id: str = Depends(get_current_user_id)):
    """Get the global leaderboard ordered by XP"""
    try:
        return profile_service.get_leaderboard(limit)
    except HabitQuestException as e:
        raise to_http_exception(e)
    except Exception as e:
        raise unexpected_error(e)


@router.get("/achievements")
async def get_achievements(user_id: str = Depends(get_current_user_id)):
    """Get the caller's achievements and their progress"""
    try:
        return profile_service.get_achievements(user_id)
    except HabitQuestException as e:
        raise to_http_exception(e)
    except Exception as e:
        raise unexpected_error(e)
