# coachhub/routes/dashboard.py
"""
CoachHub API - Dashboard Route.

Issues the independent reads of the dashboard concurrently. Each section is
its own envelope, so one failing section never fails the others.
"""

import asyncio
from typing import Optional

from fastapi import APIRouter, Depends

from coachhub.dependencies import get_session
from coachhub.schemas.envelope import failure
from coachhub.schemas.user import Role, Session
from coachhub.services.athletes import list_athletes
from coachhub.services.coach_stats import get_coach_stats
from coachhub.services.history import get_monthly_stats, get_workout_history
from coachhub.services.notifications import list_notifications
from coachhub.services.routines import get_active_routine
from coachhub.utils.errors import UNAUTHORIZED

router = APIRouter()


@router.get("")
async def dashboard(session: Optional[Session] = Depends(get_session)):
    """
    Coach: stats, athletes and notifications.
    Anyone else: monthly stats, recent history and the active routine.
    """
    if session is None:
        return failure(UNAUTHORIZED).to_response()

    if session.role == Role.COACH:
        stats, athletes, notifications = await asyncio.gather(
            get_coach_stats(session),
            list_athletes(session),
            list_notifications(session),
        )
        return {
            "role": session.role.value,
            "stats": stats.to_response(),
            "athletes": athletes.to_response(),
            "notifications": notifications.to_response(),
        }

    stats, history, routine = await asyncio.gather(
        get_monthly_stats(session),
        get_workout_history(session),
        get_active_routine(session),
    )
    return {
        "role": session.role.value,
        "stats": stats.to_response(),
        "history": history.to_response(),
        "routine": routine.to_response(),
    }
