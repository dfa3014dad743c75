# coachhub/routes/users.py
"""
CoachHub API - User Routes.

Profile management, onboarding, coach linking and user administration.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from coachhub.dependencies import get_session
from coachhub.schemas.user import Session
from coachhub.services.users import (
    get_profile,
    update_profile,
    link_with_coach,
    unlink_coach,
    complete_onboarding,
    list_users,
    update_user_role,
)

router = APIRouter()


@router.get("/me")
async def profile(session: Optional[Session] = Depends(get_session)):
    """Get current user's profile."""
    return (await get_profile(session)).to_response()


@router.put("/me")
async def edit_profile(data: dict, session: Optional[Session] = Depends(get_session)):
    """Update current user's profile."""
    return (await update_profile(session, data)).to_response()


@router.post("/me/coach")
async def link_coach(data: dict, session: Optional[Session] = Depends(get_session)):
    """
    Link with a coach.

    Body: ``{"coach_id": "..."}`` (the coach's invite code is their id).
    """
    coach_id = str(data.get("coach_id") or "")
    return (await link_with_coach(session, coach_id)).to_response()


@router.delete("/me/coach")
async def unlink(session: Optional[Session] = Depends(get_session)):
    """Remove the link with the current coach."""
    return (await unlink_coach(session)).to_response()


@router.post("/me/onboarding")
async def onboarding(data: dict, session: Optional[Session] = Depends(get_session)):
    """Store onboarding answers and mark onboarding as completed."""
    return (await complete_onboarding(session, data)).to_response()


@router.get("")
async def all_users(session: Optional[Session] = Depends(get_session)):
    """List every user (coach or admin)."""
    return (await list_users(session)).to_response()


@router.put("/{user_id}/role")
async def change_role(
    user_id: str,
    data: dict,
    session: Optional[Session] = Depends(get_session)
):
    """Body: ``{"role": "athlete" | "coach" | "admin"}``."""
    role = str(data.get("role") or "")
    return (await update_user_role(session, user_id, role)).to_response()
