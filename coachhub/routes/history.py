# coachhub/routes/history.py
"""CoachHub API - Workout History Routes."""

from typing import Optional

from fastapi import APIRouter, Depends

from coachhub.dependencies import get_session
from coachhub.schemas.user import Session
from coachhub.services.history import get_workout_history, get_monthly_stats

router = APIRouter()


@router.get("")
async def workout_history(session: Optional[Session] = Depends(get_session)):
    """Get the caller's last 20 workouts."""
    return (await get_workout_history(session)).to_response()


@router.get("/monthly-stats")
async def monthly_stats(session: Optional[Session] = Depends(get_session)):
    return (await get_monthly_stats(session)).to_response()
