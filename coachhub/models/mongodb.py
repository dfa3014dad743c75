# coachhub/models/mongodb.py
"""
CoachHub MongoDB Document Models.

Beanie ODM models for MongoDB. The store is schemaless, so these models
are the validation boundary: a document that does not fit its model fails
to load and the calling data-access function reports a store failure.
Optional fields that older documents may lack are defaulted in
``coachhub.services.mappers``, not here.
"""

from beanie import Document
from pydantic import Field
from datetime import datetime
from typing import Optional, List
from uuid import uuid4

from coachhub.schemas.measurement import BodyMeasurements
from coachhub.schemas.routine import RoutineDay
from coachhub.schemas.workout import LoggedExercise
from coachhub.utils.dates import utcnow


def new_uid() -> str:
    """Generate a document identity."""
    return str(uuid4())


class UserDocument(Document):
    """User model for MongoDB."""

    uid: str = Field(default_factory=new_uid)
    email: Optional[str] = None
    name: Optional[str] = None
    avatar_url: Optional[str] = None

    # athlete / coach / admin; legacy documents may lack it
    role: Optional[str] = None
    onboarding_completed: Optional[bool] = None
    goal: Optional[str] = None

    # Onboarding answers
    age: Optional[int] = None
    gender: Optional[str] = None
    weight: Optional[float] = None
    height: Optional[float] = None
    experience_level: Optional[str] = None
    available_days: Optional[int] = None
    injuries: List[str] = Field(default_factory=list)
    medical_conditions: List[str] = Field(default_factory=list)

    # Latest logged measurements
    measurements: Optional[BodyMeasurements] = None

    # Coach link (athletes only)
    coach_id: Optional[str] = None
    coach_name: Optional[str] = None
    linked_at: Optional[datetime] = None

    # Timestamps
    created_at: Optional[datetime] = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = Field(default_factory=utcnow)

    class Settings:
        name = "users"  # Collection name in MongoDB
        indexes = [
            "uid",
            "role",
            "coach_id",
        ]


class ExerciseDocument(Document):
    """Library exercise model for MongoDB."""

    uid: str = Field(default_factory=new_uid)
    coach_id: str
    name: str
    description: Optional[str] = None
    muscle_groups: List[str] = Field(default_factory=list)
    specific_muscles: List[str] = Field(default_factory=list)
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "exercises"
        indexes = [
            "uid",
            "coach_id",
        ]


class RoutineDocument(Document):
    """Routine model for MongoDB."""

    uid: str = Field(default_factory=new_uid)
    coach_id: Optional[str] = None
    athlete_id: Optional[str] = None  # None for templates
    name: str
    description: Optional[str] = None
    active: bool = True
    original_routine_id: Optional[str] = None
    schedule: List[RoutineDay] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "routines"
        indexes = [
            "uid",
            "coach_id",
            "athlete_id",
        ]


class WorkoutDocument(Document):
    """Completed training session model for MongoDB. Never updated after insert."""

    uid: str = Field(default_factory=new_uid)
    user_id: str
    routine_id: Optional[str] = None
    day_id: Optional[str] = None
    routine_name: Optional[str] = None
    completed_at: datetime
    duration_seconds: int = 0
    total_volume: float = 0
    session_rpe: Optional[float] = None
    notes: Optional[str] = None
    exercises: List[LoggedExercise] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "workouts"
        indexes = [
            "uid",
            "user_id",
            "completed_at",
        ]


class NotificationDocument(Document):
    """Notification model for MongoDB."""

    uid: str = Field(default_factory=new_uid)
    recipient_id: str
    kind: str
    title: str
    message: str
    athlete_id: Optional[str] = None
    read: bool = False
    created_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "notifications"
        indexes = [
            "uid",
            "recipient_id",
        ]


class BodyMeasurementDocument(Document):
    """Body measurement entry for MongoDB. Never updated after insert."""

    uid: str = Field(default_factory=new_uid)
    user_id: str
    date: datetime
    notes: Optional[str] = None
    measurements: BodyMeasurements = Field(default_factory=BodyMeasurements)
    created_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "body_measurements"
        indexes = [
            "uid",
            "user_id",
            "date",
        ]


class ScheduleAssignmentDocument(Document):
    """Routine day planned on a calendar date for an athlete."""

    uid: str = Field(default_factory=new_uid)
    athlete_id: str
    routine_id: str  # The athlete's copy
    original_routine_id: Optional[str] = None
    day_id: str
    date: str  # YYYY-MM-DD
    routine_name: Optional[str] = None
    day_name: str
    assigned_by: str
    created_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "assignments"
        indexes = [
            "uid",
            "athlete_id",
            "date",
        ]


DOCUMENT_MODELS = [
    UserDocument,
    ExerciseDocument,
    RoutineDocument,
    WorkoutDocument,
    NotificationDocument,
    BodyMeasurementDocument,
    ScheduleAssignmentDocument,
]
