"""
CoachHub API - Workout Schemas.

Pydantic schemas for logged training sessions and the statistics derived
from them.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class LoggedSet(BaseModel):
    """Set actually performed by the athlete."""

    reps: int = Field(..., ge=0)
    weight: float = Field(..., ge=0, description="Load in kg")
    rpe: Optional[float] = Field(None, ge=1, le=10)
    completed: bool = True


class LoggedExercise(BaseModel):
    """Per-exercise performance within a workout."""

    exercise_id: str
    exercise_name: str
    feedback: Optional[str] = None
    sets: List[LoggedSet] = Field(default_factory=list)


class WorkoutInput(BaseModel):
    """
    Schema for logging a completed training session.

    Attributes:
        routine_id: Routine the session came from, if any.
        day_id: Routine day that was trained.
        routine_name: Denormalized routine name.
        completed_at: Completion time; defaults to now (allows retroactive logs).
        duration_seconds: Session length.
        total_volume: Overrides the volume computed from completed sets.
        session_rpe: Overall perceived exertion.
        notes: Free-text session feedback.
        exercises: Performed exercises.
    """

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "routine_name": "Torso / Pierna",
                "duration_seconds": 3900,
                "session_rpe": 8,
                "exercises": [
                    {
                        "exercise_id": "bench-press",
                        "exercise_name": "Press Banca",
                        "sets": [
                            {"reps": 8, "weight": 80, "rpe": 8},
                            {"reps": 8, "weight": 80, "rpe": 9}
                        ]
                    }
                ]
            }
        }
    )

    routine_id: Optional[str] = None
    day_id: Optional[str] = None
    routine_name: Optional[str] = None
    completed_at: Optional[datetime] = None
    duration_seconds: int = Field(0, ge=0)
    total_volume: Optional[float] = Field(None, ge=0)
    session_rpe: Optional[float] = Field(None, ge=1, le=10)
    notes: Optional[str] = None
    exercises: List[LoggedExercise] = Field(default_factory=list)


class WorkoutSummary(BaseModel):
    """Workout history entry."""

    id: str
    user_id: str
    routine_id: Optional[str] = None
    routine_name: Optional[str] = None
    completed_at: datetime
    duration_seconds: int = 0
    total_volume: float = 0
    session_rpe: Optional[float] = None
    notes: Optional[str] = None
    exercises: List[LoggedExercise] = Field(default_factory=list)


class MonthlyStats(BaseModel):
    """Current-month aggregate over the caller's own workouts."""

    total_sessions: int = 0
    duration_hours: float = 0
    total_volume: float = 0


class ProgressionSuggestion(BaseModel):
    """Next-session load suggestion for one exercise."""

    exercise_id: str
    last_weight: float
    last_rpe: float
    suggested_weight: float
    reason: str
    last_date: datetime


class WeeklyActivityPoint(BaseModel):
    """Volume lifted on one weekday of the current week."""

    name: str
    total: float = 0


class CoachStats(BaseModel):
    """Coach dashboard figures."""

    total_athletes: int = 0
    total_routines: int = 0
    total_exercises: int = 0
    weekly_volume: float = 0
    weekly_chart_data: List[WeeklyActivityPoint] = Field(default_factory=list)


class AthleteDetails(BaseModel):
    """Athlete profile with recent training, for the coach."""

    id: str
    name: str
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    goal: Optional[str] = None
    onboarding_completed: bool = False
    coach_id: Optional[str] = None
    created_at: Optional[datetime] = None
    recent_workouts: List[WorkoutSummary] = Field(default_factory=list)


class PersonalRecord(BaseModel):
    """Heaviest completed set of one exercise among recent workouts."""

    exercise: str
    weight: float
    date: datetime
