"""
CoachHub Workout History Service.

Reads and aggregates over the caller's own workouts. Every query filters on
``user_id == session.id`` in the store itself, so another user's workouts
never reach this process.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional
import logging

from coachhub.models.mongodb import WorkoutDocument
from coachhub.schemas.envelope import Envelope, success, failure
from coachhub.schemas.user import Session
from coachhub.schemas.workout import MonthlyStats, WorkoutSummary
from coachhub.utils.dates import start_of_month
from coachhub.utils.errors import HISTORY_LOAD_FAILED, STATS_LOAD_FAILED
from coachhub.utils.numbers import round_half_up
from .cache import cached
from .cache_tags import CacheTag
from .mappers import workout_from_document
from .session import require_role

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 20
SECONDS_PER_HOUR = 3600


@cached(CacheTag.TRAINING_LOGS)
async def _load_workout_history(user_id: str) -> List[Dict[str, Any]]:
    workouts = await WorkoutDocument.find(
        WorkoutDocument.user_id == user_id
    ).sort(-WorkoutDocument.completed_at).limit(HISTORY_LIMIT).to_list()
    return [workout_from_document(w).model_dump(mode="json") for w in workouts]


async def get_workout_history(session: Optional[Session]) -> Envelope:
    """
    Most recent workouts of the caller.

    Returns:
        Envelope with ``workouts: List[WorkoutSummary]``, at most 20,
        newest ``completed_at`` first, timestamps as datetimes.
    """
    denied = require_role(session)
    if denied:
        return denied

    try:
        rows = await _load_workout_history(session.id)
        return success(workouts=[WorkoutSummary.model_validate(row) for row in rows])
    except Exception as e:
        logger.error(f"Error fetching history for {session.id}: {e}", exc_info=True)
        return failure(HISTORY_LOAD_FAILED)


def summarize_month(workouts: List[WorkoutDocument]) -> MonthlyStats:
    """Accumulate session count, duration and volume over ``workouts``."""
    total_sessions = 0
    total_seconds = 0
    total_volume = 0

    for workout in workouts:
        total_sessions += 1
        total_seconds += workout.duration_seconds or 0
        total_volume += workout.total_volume or 0

    return MonthlyStats(
        total_sessions=total_sessions,
        duration_hours=round_half_up(Decimal(total_seconds) / SECONDS_PER_HOUR),
        total_volume=total_volume,
    )


@cached(CacheTag.TRAINING_LOGS)
async def _load_monthly_stats(user_id: str, month_start: str) -> Dict[str, Any]:
    # month_start is part of the cache key so a new month never reuses the old value
    first_day = start_of_month()
    workouts = await WorkoutDocument.find(
        WorkoutDocument.user_id == user_id,
        WorkoutDocument.completed_at >= first_day,
    ).to_list()
    return summarize_month(workouts).model_dump(mode="json")


async def get_monthly_stats(session: Optional[Session]) -> Envelope:
    """
    Current calendar month totals for the caller.

    ``duration_hours`` is the summed ``duration_seconds`` in hours rounded
    half up to one decimal (900 s is 0.3 h). With no workouts this month
    every figure is 0.

    Returns:
        Envelope with ``stats: MonthlyStats``.
    """
    denied = require_role(session)
    if denied:
        return denied

    try:
        row = await _load_monthly_stats(session.id, start_of_month().isoformat())
        return success(stats=MonthlyStats.model_validate(row))
    except Exception as e:
        logger.error(f"Error computing monthly stats for {session.id}: {e}", exc_info=True)
        return failure(STATS_LOAD_FAILED)
