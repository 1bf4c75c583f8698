"""
Session Routes - Start, inspect and cancel timed habit sessions
"""
from fastapi import APIRouter, Depends
from habitquest.models.session import StartSessionRequest
from habitquest.core.dependencies import get_current_user_id, get_session_manager
from habitquest.core.exceptions import HabitQuestException
from .errors import to_http_exception, unexpected_error

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("")
async def start_session(request: StartSessionRequest,
                        user_id: str = Depends(get_current_user_id),
                        manager=Depends(get_session_manager)):
    """Start a habit's countdown; only one session per user at a time"""
    try:
        return manager.start(user_id, request.habit_id)
    except HabitQuestException as e:
        raise to_http_exception(e)
    except Exception as e:
        raise unexpected_error(e)


@router.get("/current")
async def get_current_session(user_id: str = Depends(get_current_user_id),
                              manager=Depends(get_session_manager)):
    """Get the running session, if any, and the outcome of the last finished one"""
    session = manager.get_session(user_id)
    return {
        "status": "success",
        "active": session is not None,
        "session": session.to_dict() if session else None,
        "last_outcome": manager.get_last_outcome(user_id)
    }


@router.delete("/current")
async def cancel_session(user_id: str = Depends(get_current_user_id),
                         manager=Depends(get_session_manager)):
    """Abandon the running session without a reward"""
    try:
        return manager.cancel(user_id)
    except HabitQuestException as e:
        raise to_http_exception(e)
    except Exception as e:
        raise unexpected_error(e)
