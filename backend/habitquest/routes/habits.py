"""
Habit Routes - Endpoints for habit management and streak recovery
"""
from fastapi import APIRouter, Depends
from habitquest.models.habit import CreateHabitRequest, EditHabitRequest
from habitquest.services import habits as habit_service
from habitquest.services.economy import service as economy_service
from habitquest.core.dependencies import get_current_user_id
from habitquest.core.exceptions import HabitQuestException
from .errors import to_http_exception, unexpected_error

router = APIRouter(prefix="/habits", tags=["habits"])


@router.get("")
async def list_habits(user_id: str = Depends(get_current_user_id)):
    """Get all of the caller's habits"""
    try:
        return habit_service.list_habits(user_id)
    except HabitQuestException as e:
        raise to_http_exception(e)
    except Exception as e:
        raise unexpected_error(e)


@router.post("")
async def create_habit(request: CreateHabitRequest, user_id: str = Depends(get_current_user_id)):
    """Create a new habit"""
    try:
        return habit_service.create_habit(
            user_id,
            title=request.title,
            description=request.description,
            category=request.category,
            priority=request.priority,
            scheduled_time=request.scheduled_time,
            duration_minutes=request.duration_minutes,
            frequency=request.frequency
        )
    except HabitQuestException as e:
        raise to_http_exception(e)
    except Exception as e:
        raise unexpected_error(e)


@router.put("/{habit_id}")
async def edit_habit(habit_id: str, request: EditHabitRequest,
                     user_id: str = Depends(get_current_user_id)):
    """Edit a habit; a new duration resets its streak"""
    try:
        return habit_service.edit_habit(user_id, habit_id, request.model_dump(exclude_unset=True))
    except HabitQuestException as e:
        raise to_http_exception(e)
    except Exception as e:
        raise unexpected_error(e)


@router.delete("/{habit_id}")
async def delete_habit(habit_id: str, user_id: str = Depends(get_current_user_id)):
    """Delete a habit"""
    try:
        return habit_service.delete_habit(user_id, habit_id)
    except HabitQuestException as e:
        raise to_http_exception(e)
    except Exception as e:
        raise unexpected_error(e)


@router.get("/{habit_id}/recovery-cost")
async def get_recovery_cost(habit_id: str, user_id: str = Depends(get_current_user_id)):
    """Get the current coin cost of recovering a habit's streak"""
    try:
        return economy_service.get_recovery_cost(user_id, habit_id)
    except HabitQuestException as e:
        raise to_http_exception(e)
    except Exception as e:
        raise unexpected_error(e)


@router.post("/{habit_id}/recover")
async def recover_streak(habit_id: str, user_id: str = Depends(get_current_user_id)):
    """Pay coins to recover a lapsed streak"""
    try:
        return economy_service.recover_streak(user_id, habit_id)
    except HabitQuestException as e:
        raise to_http_exception(e)
    except Exception as e:
        raise unexpected_error(e)
