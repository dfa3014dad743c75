# coachhub/routes/routines.py
"""
CoachHub API - Routine Routes.

Coaches build and assign routines; athletes read their active routine.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from coachhub.dependencies import get_session
from coachhub.schemas.user import Session
from coachhub.services.routines import (
    list_routines,
    get_routine,
    get_active_routine,
    save_routine,
    delete_routine,
    assign_routine,
)

router = APIRouter()


@router.get("")
async def routines(session: Optional[Session] = Depends(get_session)):
    """Coach: own routines. Athlete: own active routines."""
    return (await list_routines(session)).to_response()


@router.get("/active")
async def active_routine(session: Optional[Session] = Depends(get_session)):
    return (await get_active_routine(session)).to_response()


@router.get("/{routine_id}")
async def routine(routine_id: str, session: Optional[Session] = Depends(get_session)):
    return (await get_routine(session, routine_id)).to_response()


@router.post("")
async def create_routine(data: dict, session: Optional[Session] = Depends(get_session)):
    """Create a routine (coach only)."""
    return (await save_routine(session, data)).to_response()


@router.put("/{routine_id}")
async def update_routine(
    routine_id: str,
    data: dict,
    session: Optional[Session] = Depends(get_session)
):
    """Update a routine (coach only)."""
    return (await save_routine(session, data, routine_id)).to_response()


@router.delete("/{routine_id}")
async def remove_routine(routine_id: str, session: Optional[Session] = Depends(get_session)):
    return (await delete_routine(session, routine_id)).to_response()


@router.post("/{routine_id}/assign")
async def assign(
    routine_id: str,
    data: dict,
    session: Optional[Session] = Depends(get_session)
):
    """
    Assign a copy of the routine to an athlete.

    Body: ``{"athlete_id": "..."}``
    """
    athlete_id = str(data.get("athlete_id") or "")
    return (await assign_routine(session, routine_id, athlete_id)).to_response()
