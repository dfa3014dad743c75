# coachhub/routes/schedule.py
"""
CoachHub API - Schedule Routes.

Coaches plan routine days on athlete calendars. Writes over taken dates
answer ``requires_confirmation`` until repeated with ``confirm_replace=true``.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from coachhub.dependencies import get_session
from coachhub.schemas.user import Session
from coachhub.services.schedule import (
    assign_routine_day,
    assign_routine_week,
    check_assignment_conflicts,
    get_athlete_assignments,
    get_today_assignment,
)

router = APIRouter()


@router.post("/day")
async def plan_day(
    data: dict,
    confirm_replace: bool = False,
    session: Optional[Session] = Depends(get_session)
):
    """Body: ``{"athlete_id", "routine_id", "day_id", "date"}``."""
    return (await assign_routine_day(session, data, confirm_replace)).to_response()


@router.post("/week")
async def plan_week(
    data: dict,
    confirm_replace: bool = False,
    session: Optional[Session] = Depends(get_session)
):
    """Body: ``{"athlete_id", "routine_id", "days": [{"day_id", "date"}]}``."""
    return (await assign_routine_week(session, data, confirm_replace)).to_response()


@router.post("/conflicts")
async def conflicts(data: dict, session: Optional[Session] = Depends(get_session)):
    """Body: ``{"athlete_id", "dates": ["YYYY-MM-DD", ...]}``."""
    return (await check_assignment_conflicts(session, data)).to_response()


@router.get("/{athlete_id}")
async def athlete_calendar(
    athlete_id: str,
    start: str,
    end: str,
    session: Optional[Session] = Depends(get_session)
):
    return (await get_athlete_assignments(session, athlete_id, start, end)).to_response()


@router.get("/{athlete_id}/today")
async def today(
    athlete_id: str,
    date: Optional[str] = None,
    session: Optional[Session] = Depends(get_session)
):
    """Planned day for today, or for ``date`` when given."""
    return (await get_today_assignment(session, athlete_id, date)).to_response()
