"""
CoachHub Coach Dashboard Statistics.

Athlete count and weekly training volume are global across the platform;
routine and exercise counts are the caller's own. Weekly volume is
recomputed from the completed sets of each workout, never read from the
stored ``total_volume``.
"""

from typing import Any, Dict, List, Optional
import logging

from coachhub.models.mongodb import (
    ExerciseDocument,
    RoutineDocument,
    UserDocument,
    WorkoutDocument,
)
from coachhub.schemas.envelope import Envelope, success, failure
from coachhub.schemas.user import Role, Session
from coachhub.schemas.workout import CoachStats, WeeklyActivityPoint
from coachhub.utils.dates import start_of_week
from coachhub.utils.errors import COACH_STATS_LOAD_FAILED
from settings import settings
from .cache import cached
from .cache_tags import CacheTag
from .session import require_role
from .training import session_volume

logger = logging.getLogger(__name__)

# Indexed by datetime.weekday()
WEEKDAY_LABELS = ["Lun", "Mar", "Mié", "Jue", "Vie", "Sáb", "Dom"]


def weekly_chart(workouts: List[WorkoutDocument]) -> List[WeeklyActivityPoint]:
    """Completed-set volume per weekday, Monday first, zero-filled."""
    totals = [0.0] * len(WEEKDAY_LABELS)
    for workout in workouts:
        totals[workout.completed_at.weekday()] += session_volume(workout.exercises)
    return [
        WeeklyActivityPoint(name=label, total=total)
        for label, total in zip(WEEKDAY_LABELS, totals)
    ]


@cached(CacheTag.COACH_STATS, ttl_seconds=settings.CACHE_TTL_STATS)
async def _load_coach_stats(coach_id: str, week_start: str) -> Dict[str, Any]:
    total_athletes = await UserDocument.find(
        UserDocument.role == Role.ATHLETE.value
    ).count()
    total_routines = await RoutineDocument.find(
        RoutineDocument.coach_id == coach_id
    ).count()
    total_exercises = await ExerciseDocument.find(
        ExerciseDocument.coach_id == coach_id
    ).count()

    workouts = await WorkoutDocument.find(
        WorkoutDocument.completed_at >= start_of_week()
    ).to_list()
    chart = weekly_chart(workouts)

    return CoachStats(
        total_athletes=total_athletes,
        total_routines=total_routines,
        total_exercises=total_exercises,
        weekly_volume=sum(point.total for point in chart),
        weekly_chart_data=chart,
    ).model_dump(mode="json")


async def get_coach_stats(session: Optional[Session]) -> Envelope:
    """
    Coach dashboard figures.

    Returns:
        Envelope with ``stats: CoachStats``. ``weekly_chart_data`` always has
        seven points, Lun..Dom, covering workouts since Monday 00:00 UTC.
    """
    denied = require_role(session, {Role.COACH})
    if denied:
        return denied

    try:
        row = await _load_coach_stats(session.id, start_of_week().isoformat())
        return success(stats=CoachStats.model_validate(row))
    except Exception as e:
        logger.error(f"Error fetching coach stats for {session.id}: {e}", exc_info=True)
        return failure(COACH_STATS_LOAD_FAILED)
