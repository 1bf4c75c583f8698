"""
Pydantic models for timed habit sessions
"""
from pydantic import BaseModel, Field


class StartSessionRequest(BaseModel):
    """Request model for starting a habit session"""
    habit_id: str = Field(..., min_length=1, description="Habit to start")
