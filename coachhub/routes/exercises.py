# coachhub/routes/exercises.py
"""CoachHub API - Exercise Library Routes (coach only)."""

from typing import Optional

from fastapi import APIRouter, Depends

from coachhub.dependencies import get_session
from coachhub.schemas.user import Session
from coachhub.services.exercises import (
    list_exercises,
    create_exercise,
    update_exercise,
    delete_exercise,
)

router = APIRouter()


@router.get("")
async def exercises(session: Optional[Session] = Depends(get_session)):
    return (await list_exercises(session)).to_response()


@router.post("")
async def add_exercise(data: dict, session: Optional[Session] = Depends(get_session)):
    return (await create_exercise(session, data)).to_response()


@router.put("/{exercise_id}")
async def edit_exercise(
    exercise_id: str,
    data: dict,
    session: Optional[Session] = Depends(get_session)
):
    return (await update_exercise(session, exercise_id, data)).to_response()


@router.delete("/{exercise_id}")
async def remove_exercise(exercise_id: str, session: Optional[Session] = Depends(get_session)):
    return (await delete_exercise(session, exercise_id)).to_response()
