"""
CoachHub API - Routine Schemas.

A routine is an ordered list of days, each an ordered list of exercises,
each an ordered list of prescribed sets.
"""

from datetime import datetime
from typing import List, Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class RoutineSet(BaseModel):
    """Prescribed set within a routine exercise."""

    type: Literal["warmup", "working", "failure", "drop"] = "working"
    reps: Optional[str] = Field(None, description="Target reps or range, e.g. '8-12'")
    rpe_target: Optional[float] = Field(None, ge=1, le=10)
    rest_seconds: Optional[int] = Field(None, ge=0)


class RoutineExercise(BaseModel):
    """Exercise slot within a routine day."""

    exercise_id: str
    exercise_name: str
    notes: Optional[str] = None
    order: int = 0
    sets: List[RoutineSet] = Field(default_factory=list)


class RoutineDay(BaseModel):
    """Training day within a routine."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    exercises: List[RoutineExercise] = Field(default_factory=list)


class RoutineInput(BaseModel):
    """
    Schema for creating or updating a routine.

    Attributes:
        name: Routine name.
        description: Strategy notes.
        athlete_id: Assigned athlete; omitted for templates.
        active: Whether this is the athlete's current routine.
        schedule: Ordered training days.
    """

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "name": "Torso / Pierna",
                "active": True,
                "schedule": [
                    {
                        "name": "Día 1 - Torso",
                        "exercises": [
                            {
                                "exercise_id": "bench-press",
                                "exercise_name": "Press Banca",
                                "order": 1,
                                "sets": [
                                    {"type": "warmup", "reps": "15", "rpe_target": 5},
                                    {"type": "working", "reps": "8-10", "rpe_target": 8}
                                ]
                            }
                        ]
                    }
                ]
            }
        }
    )

    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    athlete_id: Optional[str] = None
    active: bool = True
    schedule: List[RoutineDay] = Field(default_factory=list)


class Routine(BaseModel):
    """Routine as returned to coaches and athletes."""

    id: str
    name: str
    description: Optional[str] = None
    coach_id: Optional[str] = None
    athlete_id: Optional[str] = None
    active: bool
    original_routine_id: Optional[str] = None
    schedule: List[RoutineDay] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
