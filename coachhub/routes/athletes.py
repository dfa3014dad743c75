# coachhub/routes/athletes.py
"""CoachHub API - Athlete Directory Routes (coach only)."""

from typing import Optional

from fastapi import APIRouter, Depends

from coachhub.dependencies import get_session
from coachhub.schemas.user import Session
from coachhub.services.athletes import list_athletes, get_athlete_details

router = APIRouter()


@router.get("")
async def athletes(session: Optional[Session] = Depends(get_session)):
    """List all non-coach users."""
    return (await list_athletes(session)).to_response()


@router.get("/{athlete_id}")
async def athlete_details(athlete_id: str, session: Optional[Session] = Depends(get_session)):
    """Athlete profile with the five most recent workouts."""
    return (await get_athlete_details(session, athlete_id)).to_response()
