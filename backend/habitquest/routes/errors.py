"""
Error translation - Maps service exceptions to HTTP responses
"""
from fastapi import HTTPException

from habitquest.core.exceptions import (
    ConcurrentUpdateError,
    DatabaseError,
    HabitNotFoundError,
    HabitQuestException,
    InvalidHabitDataError,
    InvalidProfileDataError,
    InvalidTeamDataError,
    NotAuthenticatedError,
    NotOwnerError,
    PreconditionError,
    TeamNotFoundError,
    TemplateNotFoundError
)

# Checked in order; the first matching class wins
STATUS_CODES = (
    ((InvalidHabitDataError, InvalidTeamDataError, InvalidProfileDataError), 400),
    ((NotAuthenticatedError,), 401),
    ((NotOwnerError,), 403),
    ((HabitNotFoundError, TeamNotFoundError, TemplateNotFoundError), 404),
    ((PreconditionError,), 409),
    ((ConcurrentUpdateError,), 503),
    ((DatabaseError,), 500),
)


def to_http_exception(error: HabitQuestException) -> HTTPException:
    """Build the HTTPException for a service error, keeping its message as the detail"""
    for error_types, status_code in STATUS_CODES:
        if isinstance(error, error_types):
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(status_code=500, detail=str(error))


def unexpected_error(error: Exception) -> HTTPException:
    return HTTPException(status_code=500, detail=f"Unexpected error: {str(error)}")
