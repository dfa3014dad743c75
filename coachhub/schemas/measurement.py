"""
CoachHub API - Body Measurement Schemas.

Circumferences are in cm, weight in kg, height in cm, body fat in percent.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BodyMeasurements(BaseModel):
    """One set of body measurements; every field is optional."""

    weight: Optional[float] = Field(None, ge=0)
    height: Optional[float] = Field(None, ge=0)
    body_fat: Optional[float] = Field(None, ge=0, le=100)

    chest: Optional[float] = Field(None, ge=0)
    waist: Optional[float] = Field(None, ge=0)
    hips: Optional[float] = Field(None, ge=0)
    shoulders: Optional[float] = Field(None, ge=0)
    glutes: Optional[float] = Field(None, ge=0)
    neck: Optional[float] = Field(None, ge=0)

    # Limbs
    biceps_left: Optional[float] = Field(None, ge=0)
    biceps_right: Optional[float] = Field(None, ge=0)
    forearms_left: Optional[float] = Field(None, ge=0)
    forearms_right: Optional[float] = Field(None, ge=0)
    quads_left: Optional[float] = Field(None, ge=0)
    quads_right: Optional[float] = Field(None, ge=0)
    calves_left: Optional[float] = Field(None, ge=0)
    calves_right: Optional[float] = Field(None, ge=0)

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)


class MeasurementInput(BodyMeasurements):
    """
    Schema for logging body measurements.

    Attributes:
        date: When the measurements were taken; defaults to now.
        notes: Free text.
    """

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "date": "2025-03-01T08:00:00Z",
                "weight": 72.4,
                "waist": 80,
                "biceps_left": 34.5,
                "biceps_right": 35
            }
        }
    )

    date: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=500)


class BodyMeasurementLog(BodyMeasurements):
    """Stored measurement entry."""

    id: str
    user_id: str
    date: datetime
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
