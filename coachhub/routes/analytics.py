# coachhub/routes/analytics.py
"""
CoachHub API - Analytics Routes.

Progress figures for the caller, or for ``user_id`` when the caller is a coach.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from coachhub.dependencies import get_session
from coachhub.schemas.user import Session
from coachhub.services.analytics import (
    get_weekly_activity,
    get_weekly_progress,
    get_personal_records,
    get_strength_progress,
)

router = APIRouter()


@router.get("/weekly-activity")
async def weekly_activity(
    user_id: Optional[str] = None,
    session: Optional[Session] = Depends(get_session)
):
    """Completed-set volume per day of the current week."""
    return (await get_weekly_activity(session, user_id)).to_response()


@router.get("/weekly-progress")
async def weekly_progress(
    user_id: Optional[str] = None,
    session: Optional[Session] = Depends(get_session)
):
    return (await get_weekly_progress(session, user_id)).to_response()


@router.get("/personal-records")
async def personal_records(
    user_id: Optional[str] = None,
    session: Optional[Session] = Depends(get_session)
):
    return (await get_personal_records(session, user_id)).to_response()


@router.get("/strength-progress")
async def strength_progress(
    user_id: Optional[str] = None,
    session: Optional[Session] = Depends(get_session)
):
    """Estimated 1RM change over the last 20 workouts, in percent."""
    return (await get_strength_progress(session, user_id)).to_response()
