"""
Pydantic models for the application
"""
from habitquest.models.habit import CreateHabitRequest, EditHabitRequest
from habitquest.models.session import StartSessionRequest
from habitquest.models.team import CreateTeamRequest
from habitquest.models.profile import EditProfileRequest, OnboardingRequest

__all__ = [
    "CreateHabitRequest",
    "EditHabitRequest",
    "StartSessionRequest",
    "CreateTeamRequest",
    "EditProfileRequest",
    "OnboardingRequest"
]
