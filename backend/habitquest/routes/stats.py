"""
Stats Routes - Dashboard aggregates
"""
from typing import Optional
import pytz
from fastapi import APIRouter, Depends, HTTPException
from habitquest.services.stats import get_aggregate_stats
from habitquest.core.dependencies import get_current_user_id
from habitquest.core.exceptions import HabitQuestException
from habitquest.utils.timezone import get_tz
from .errors import to_http_exception, unexpected_error

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("")
async def get_stats(tz: Optional[str] = None, user_id: str = Depends(get_current_user_id)):
    """Get completed-today, completion percentage, highest streak and level progress"""
    try:
        timezone = get_tz(tz)
    except pytz.UnknownTimeZoneError:
        raise HTTPException(status_code=400, detail=f"Unknown time zone '{tz}'")

    try:
        return get_aggregate_stats(user_id, timezone)
    except HabitQuestException as e:
        raise to_http_exception(e)
    except Exception as e:
        raise unexpected_error(e)
