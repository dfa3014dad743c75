"""
CoachHub API - Schedule Schemas.

A schedule assignment pins one routine day to a calendar date for an
athlete. Dates are plain calendar dates (``YYYY-MM-DD``), stored as strings
so that range queries compare lexicographically.
"""

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ScheduledDay(BaseModel):
    """Routine day planned on a date."""

    day_id: str = Field(..., min_length=1)
    date: dt.date


class AssignmentInput(BaseModel):
    """Schema for planning a single routine day."""

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "athlete_id": "athlete-1",
                "routine_id": "c0ffee00-0000-4000-8000-000000000001",
                "day_id": "day-1",
                "date": "2025-03-03"
            }
        }
    )

    athlete_id: str = Field(..., min_length=1)
    routine_id: str = Field(..., min_length=1)
    day_id: str = Field(..., min_length=1)
    date: dt.date


class WeekAssignmentInput(BaseModel):
    """
    Schema for planning several routine days at once.

    Attributes:
        athlete_id: Athlete receiving the plan.
        routine_id: Template routine the days come from.
        days: One entry per date; dates must be distinct.
    """

    model_config = ConfigDict(extra="forbid")

    athlete_id: str = Field(..., min_length=1)
    routine_id: str = Field(..., min_length=1)
    days: List[ScheduledDay] = Field(..., min_length=1)

    @field_validator("days")
    @classmethod
    def distinct_dates(cls, days: List[ScheduledDay]) -> List[ScheduledDay]:
        dates = [day.date for day in days]
        if len(set(dates)) != len(dates):
            raise ValueError("Each date can only be planned once")
        return days


class ConflictQuery(BaseModel):
    """Dates to check against an athlete's calendar."""

    model_config = ConfigDict(extra="forbid")

    athlete_id: str = Field(..., min_length=1)
    dates: List[dt.date] = Field(..., min_length=1)


class DateRange(BaseModel):
    """Inclusive calendar range."""

    start: dt.date
    end: dt.date

    @model_validator(mode="after")
    def ordered(self) -> "DateRange":
        if self.end < self.start:
            raise ValueError("end must not be before start")
        return self


class Assignment(BaseModel):
    """Planned routine day in an athlete's calendar."""

    id: str
    athlete_id: str
    routine_id: str
    original_routine_id: Optional[str] = None
    day_id: str
    date: dt.date
    routine_name: Optional[str] = None
    day_name: str
    assigned_by: str
    created_at: Optional[dt.datetime] = None
