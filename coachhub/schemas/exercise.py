"""CoachHub API - Exercise Schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ExerciseInput(BaseModel):
    """
    Schema for creating or updating a library exercise.

    System fields (id, owner, timestamps) are set server-side.
    """

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "name": "Sentadilla trasera",
                "muscle_groups": ["piernas"],
                "specific_muscles": ["cuádriceps", "glúteo mayor"],
                "video_url": "https://ik.imagekit.io/coachhub/squat.mp4"
            }
        }
    )

    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    muscle_groups: List[str] = Field(..., min_length=1)
    specific_muscles: List[str] = Field(default_factory=list)
    image_url: Optional[str] = None
    video_url: Optional[str] = None


class Exercise(BaseModel):
    """Library exercise."""

    id: str
    coach_id: Optional[str] = None
    name: str
    description: Optional[str] = None
    muscle_groups: List[str] = Field(default_factory=list)
    specific_muscles: List[str] = Field(default_factory=list)
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
