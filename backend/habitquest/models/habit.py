"""
Pydantic models for habits
"""
from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator

Frequency = Literal["daily", "weekly", "monthly"]


def _check_time_format(v: Optional[str]) -> Optional[str]:
    """Validate time format is HH:MM if provided"""
    if v is None or v == "":
        return None
    try:
        datetime.strptime(v, "%H:%M")
        return v
    except ValueError:
        raise ValueError(f"Invalid time format '{v}'. Use HH:MM (24-hour format)")


class CreateHabitRequest(BaseModel):
    """Request model for creating a habit"""
    title: str = Field(..., min_length=1, max_length=200, description="Habit title")
    description: Optional[str] = Field(None, description="What the habit involves")
    category: Optional[str] = Field(None, description="One of the user's goal categories")
    priority: int = Field(1, ge=1, le=5, description="1 (highest) to 5 (lowest)")
    scheduled_time: Optional[str] = Field(None, description="Time of day in HH:MM format (24-hour)")
    duration_minutes: int = Field(30, gt=0, description="Session length in minutes")
    frequency: Frequency = Field("daily", description="How often the habit repeats")

    @field_validator('scheduled_time')
    @classmethod
    def validate_time_format(cls, v: Optional[str]) -> Optional[str]:
        return _check_time_format(v)


class EditHabitRequest(BaseModel):
    """Request model for editing a habit; only the submitted fields change"""
    title: Optional[str] = Field(None, min_length=1, max_length=200, description="Habit title")
    description: Optional[str] = Field(None, description="What the habit involves")
    category: Optional[str] = Field(None, description="One of the user's goal categories")
    priority: Optional[int] = Field(None, ge=1, le=5, description="1 (highest) to 5 (lowest)")
    scheduled_time: Optional[str] = Field(None, description="Time of day in HH:MM format (24-hour)")
    duration_minutes: Optional[int] = Field(
        None, gt=0, description="Session length in minutes; changing it resets the streak"
    )
    frequency: Optional[Frequency] = Field(None, description="How often the habit repeats")

    @field_validator('scheduled_time')
    @classmethod
    def validate_time_format(cls, v: Optional[str]) -> Optional[str]:
        return _check_time_format(v)
