# coachhub/routes/training.py
"""CoachHub API - Training Routes."""

from typing import Optional

from fastapi import APIRouter, Depends

from coachhub.dependencies import get_session
from coachhub.schemas.user import Session
from coachhub.services.training import log_workout, get_progression_suggestion

router = APIRouter()


@router.post("/workouts")
async def create_workout(data: dict, session: Optional[Session] = Depends(get_session)):
    """Log a completed training session."""
    return (await log_workout(session, data)).to_response()


@router.get("/progression/{exercise_id}")
async def progression(exercise_id: str, session: Optional[Session] = Depends(get_session)):
    """Suggested load for the next session of an exercise."""
    return (await get_progression_suggestion(session, exercise_id)).to_response()
