"""
CoachHub API - User Schemas.

Roles, the resolved request session and the user-facing user entities.
"""

from datetime import datetime
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from coachhub.schemas.measurement import BodyMeasurements

Gender = Literal["male", "female"]
ExperienceLevel = Literal["beginner", "intermediate", "advanced"]


class Role(str, Enum):
    """Closed set of user roles."""

    ATHLETE = "athlete"
    COACH = "coach"
    ADMIN = "admin"


class Session(BaseModel):
    """
    Authenticated identity for one request.

    Data-access functions only read a session; it is never mutated.

    Attributes:
        id: Auth-provider user id.
        role: Role claimed by the identity token.
        onboarding_completed: Whether onboarding has finished.
        auth_provider: Provider that issued the identity (credentials, google...).
    """

    model_config = ConfigDict(frozen=True)

    id: str
    role: Role = Role.ATHLETE
    onboarding_completed: bool = False
    auth_provider: Optional[str] = None


class AthleteSummary(BaseModel):
    """Athlete row as listed to a coach."""

    id: str
    name: str
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    role: Role
    onboarding_completed: bool
    goal: Optional[str] = None
    coach_id: Optional[str] = None
    created_at: Optional[str] = Field(None, description="ISO-8601 creation timestamp")


class UserProfile(BaseModel):
    """The caller's own profile."""

    id: str
    name: str
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    role: Role
    onboarding_completed: bool
    goal: Optional[str] = None
    coach_id: Optional[str] = None
    coach_name: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    weight: Optional[float] = None
    height: Optional[float] = None
    experience_level: Optional[str] = None
    available_days: Optional[int] = None
    injuries: List[str] = Field(default_factory=list)
    medical_conditions: List[str] = Field(default_factory=list)
    measurements: Optional[BodyMeasurements] = None
    created_at: Optional[datetime] = None


class ProfileUpdate(BaseModel):
    """
    Schema for profile updates.

    Attributes:
        name: Display name (min 2 characters).
        avatar_url: Uploaded avatar reference.
        goal: Training goal.
        onboarding_completed: Set once onboarding finishes.
    """

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "name": "Lucía Pérez",
                "goal": "hypertrophy",
                "onboarding_completed": True
            }
        }
    )

    name: Optional[str] = Field(None, min_length=2, max_length=120)
    avatar_url: Optional[str] = None
    goal: Optional[str] = None
    onboarding_completed: Optional[bool] = None


class UserSummary(BaseModel):
    """Row of the user administration listing."""

    id: str
    name: str
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    role: Role


class OnboardingInput(BaseModel):
    """
    Schema for finishing onboarding.

    Numeric fields accept numeric strings, as sent by HTML forms.

    Attributes:
        age: Years, 10..100.
        gender: male / female.
        weight: kg, 30..300.
        height: cm, 100..250.
        experience_level: beginner / intermediate / advanced.
        goal: Training goal.
        available_days: Training days per week, 1..7.
        injuries: Current injuries.
        medical_conditions: Relevant medical conditions.
        measurements: Initial body measurements; also stored as the first
            entry of the measurement history.
    """

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "age": 29,
                "gender": "female",
                "weight": 62,
                "height": 168,
                "experience_level": "intermediate",
                "goal": "hypertrophy",
                "available_days": 4,
                "injuries": ["hombro derecho"],
                "measurements": {"waist": 70, "hips": 96}
            }
        }
    )

    age: int = Field(..., ge=10, le=100)
    gender: Gender
    weight: float = Field(..., ge=30, le=300)
    height: float = Field(..., ge=100, le=250)
    experience_level: ExperienceLevel
    goal: str = Field(..., min_length=1)
    available_days: int = Field(..., ge=1, le=7)
    injuries: List[str] = Field(default_factory=list)
    medical_conditions: List[str] = Field(default_factory=list)
    measurements: Optional[BodyMeasurements] = None
