"""
Pydantic models for teams
"""
from typing import Optional
from pydantic import BaseModel, Field


class CreateTeamRequest(BaseModel):
    """Request model for creating a team"""
    name: str = Field(..., min_length=1, max_length=100, description="Team name")
    description: Optional[str] = Field(None, max_length=500, description="Team description")
