"""
Pydantic models for profiles and onboarding
"""
from typing import Optional
from pydantic import BaseModel, Field


class EditProfileRequest(BaseModel):
    """Request model for editing a profile; only the submitted fields change"""
    display_name: Optional[str] = Field(None, max_length=100, description="Name shown to others")
    username: Optional[str] = Field(None, min_length=1, max_length=50, description="Unique handle")
    avatar_url: Optional[str] = Field(None, description="Avatar image URL")


class OnboardingRequest(BaseModel):
    """Request model for the first-run onboarding form"""
    category: str = Field(..., min_length=1, description="Main goal category, e.g. 'fitness'")
    description: Optional[str] = Field(None, description="More about the goal")
    target: Optional[str] = Field(None, description="Target, e.g. '75kg'")
    display_name: Optional[str] = Field(None, max_length=100, description="Display name")
    template_id: Optional[str] = Field(None, description="Habit template to start with")
