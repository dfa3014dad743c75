"""
CoachHub Athlete Analytics.

Per-user training figures for the progress page. Each function reads the
caller's own data unless ``user_id`` names someone else, which only a coach
may do.

- Weekly activity: completed-set volume per weekday since Monday 00:00 UTC.
- Weekly progress: sessions logged this week against the weekly target
  (days in the active routine, else ``available_days``, else 3).
- Personal records: top 3 heaviest completed sets among the last 20 workouts.
- Strength progress: change in average estimated 1RM between the newer and
  the older half of the last 20 workouts, in percent.
"""

from math import ceil
from typing import Any, Dict, List, Optional
import logging

from coachhub.models.mongodb import RoutineDocument, UserDocument, WorkoutDocument
from coachhub.schemas.envelope import Envelope, success, failure
from coachhub.schemas.user import Session
from coachhub.schemas.workout import PersonalRecord, WeeklyActivityPoint
from coachhub.utils.dates import start_of_week
from coachhub.utils.errors import (
    UNAUTHORIZED,
    ACTIVITY_LOAD_FAILED,
    WEEKLY_PROGRESS_FAILED,
    PERSONAL_RECORDS_FAILED,
    STRENGTH_PROGRESS_FAILED,
)
from coachhub.utils.numbers import round_half_up
from .cache import cached
from .cache_tags import CacheTag
from .coach_stats import weekly_chart
from .session import can_view_user, require_role
from .training import DEFAULT_RPE

logger = logging.getLogger(__name__)

RECENT_WORKOUTS = 20
TOP_RECORDS = 3
DEFAULT_WEEKLY_TARGET = 3


def _target(session: Session, user_id: Optional[str]) -> Optional[str]:
    target_id = user_id or session.id
    if not can_view_user(session, target_id):
        logger.info(f"User {session.id} denied analytics of {target_id}")
        return None
    return target_id


async def _recent_workouts(user_id: str) -> List[WorkoutDocument]:
    return await WorkoutDocument.find(
        WorkoutDocument.user_id == user_id
    ).sort(-WorkoutDocument.completed_at).limit(RECENT_WORKOUTS).to_list()


# ==================== WEEKLY ACTIVITY ====================

@cached(CacheTag.TRAINING_LOGS)
async def _load_weekly_activity(user_id: str, week_start: str) -> List[Dict[str, Any]]:
    workouts = await WorkoutDocument.find(
        WorkoutDocument.user_id == user_id,
        WorkoutDocument.completed_at >= start_of_week(),
    ).to_list()
    return [
        WeeklyActivityPoint(name=point.name, total=round_half_up(point.total, 0)).model_dump(mode="json")
        for point in weekly_chart(workouts)
    ]


async def get_weekly_activity(session: Optional[Session], user_id: Optional[str] = None) -> Envelope:
    """
    Returns:
        Envelope with ``activity``: seven ``WeeklyActivityPoint`` Lun..Dom,
        totals rounded to whole kg.
    """
    denied = require_role(session)
    if denied:
        return denied
    target_id = _target(session, user_id)
    if target_id is None:
        return failure(UNAUTHORIZED)

    try:
        rows = await _load_weekly_activity(target_id, start_of_week().isoformat())
        return success(activity=[WeeklyActivityPoint.model_validate(row) for row in rows])
    except Exception as e:
        logger.error(f"Error fetching weekly activity of {target_id}: {e}", exc_info=True)
        return failure(ACTIVITY_LOAD_FAILED)


# ==================== WEEKLY PROGRESS ====================

@cached(CacheTag.TRAINING_LOGS, CacheTag.ROUTINES, CacheTag.ATHLETE_DETAILS)
async def _load_weekly_progress(user_id: str, week_start: str) -> Dict[str, int]:
    completed = await WorkoutDocument.find(
        WorkoutDocument.user_id == user_id,
        WorkoutDocument.completed_at >= start_of_week(),
    ).count()

    routine = await RoutineDocument.find(
        RoutineDocument.athlete_id == user_id,
        RoutineDocument.active == True,  # noqa: E712
    ).sort(-RoutineDocument.updated_at).first_or_none()

    if routine and routine.schedule:
        target = len(routine.schedule)
    else:
        user = await UserDocument.find_one(UserDocument.uid == user_id)
        target = (user.available_days if user else None) or DEFAULT_WEEKLY_TARGET

    return {"completed": completed, "target": target}


async def get_weekly_progress(session: Optional[Session], user_id: Optional[str] = None) -> Envelope:
    """
    Sessions completed this week and the weekly target.

    Returns:
        Envelope with ``completed`` and ``target``.
    """
    denied = require_role(session)
    if denied:
        return denied
    target_id = _target(session, user_id)
    if target_id is None:
        return failure(UNAUTHORIZED)

    try:
        row = await _load_weekly_progress(target_id, start_of_week().isoformat())
        return success(completed=row["completed"], target=row["target"])
    except Exception as e:
        logger.error(f"Error fetching weekly progress of {target_id}: {e}", exc_info=True)
        return failure(WEEKLY_PROGRESS_FAILED)


# ==================== PERSONAL RECORDS ====================

def personal_records(workouts: List[WorkoutDocument]) -> List[PersonalRecord]:
    """
    Heaviest completed set per exercise name, top 3 by weight.

    ``workouts`` come newest first; on equal weight the newer set is kept.
    """
    best: Dict[str, PersonalRecord] = {}
    for workout in workouts:
        for exercise in workout.exercises:
            for s in exercise.sets:
                if not s.completed or s.weight <= 0:
                    continue
                current = best.get(exercise.exercise_name)
                if current is None or s.weight > current.weight:
                    best[exercise.exercise_name] = PersonalRecord(
                        exercise=exercise.exercise_name,
                        weight=s.weight,
                        date=workout.completed_at,
                    )
    return sorted(best.values(), key=lambda record: record.weight, reverse=True)[:TOP_RECORDS]


@cached(CacheTag.TRAINING_LOGS)
async def _load_personal_records(user_id: str) -> List[Dict[str, Any]]:
    workouts = await _recent_workouts(user_id)
    return [record.model_dump(mode="json") for record in personal_records(workouts)]


async def get_personal_records(session: Optional[Session], user_id: Optional[str] = None) -> Envelope:
    """
    Returns:
        Envelope with ``records: List[PersonalRecord]`` (at most 3).
    """
    denied = require_role(session)
    if denied:
        return denied
    target_id = _target(session, user_id)
    if target_id is None:
        return failure(UNAUTHORIZED)

    try:
        rows = await _load_personal_records(target_id)
        return success(records=[PersonalRecord.model_validate(row) for row in rows])
    except Exception as e:
        logger.error(f"Error fetching personal records of {target_id}: {e}", exc_info=True)
        return failure(PERSONAL_RECORDS_FAILED)


# ==================== STRENGTH PROGRESS ====================

def average_e1rm(workouts: List[WorkoutDocument]) -> float:
    """
    Mean over (workout, exercise) pairs of the best estimated 1RM.

    e1RM = weight * (1 + (reps + (10 - RPE)) / 30), RPE 8 when not recorded.
    """
    total = 0.0
    count = 0
    for workout in workouts:
        for exercise in workout.exercises:
            best = 0.0
            for s in exercise.sets:
                if s.completed and s.weight and s.reps:
                    rpe = s.rpe or DEFAULT_RPE
                    best = max(best, s.weight * (1 + (s.reps + (10 - rpe)) / 30))
            if best > 0:
                total += best
                count += 1
    return total / count if count else 0.0


def strength_progress(workouts: List[WorkoutDocument]) -> float:
    """Percent change of ``average_e1rm`` from the older to the newer half."""
    if len(workouts) < 2:
        return 0.0

    half = ceil(len(workouts) / 2)
    recent = average_e1rm(workouts[:half])
    older = average_e1rm(workouts[half:])

    if older > 0:
        change = (recent - older) / older * 100
    elif recent > 0:
        change = 100.0
    else:
        change = 0.0
    return round_half_up(change, 1)


@cached(CacheTag.TRAINING_LOGS)
async def _load_strength_progress(user_id: str) -> float:
    return strength_progress(await _recent_workouts(user_id))


async def get_strength_progress(session: Optional[Session], user_id: Optional[str] = None) -> Envelope:
    """
    Returns:
        Envelope with ``progress`` in percent, one decimal; 0 with fewer
        than two workouts.
    """
    denied = require_role(session)
    if denied:
        return denied
    target_id = _target(session, user_id)
    if target_id is None:
        return failure(UNAUTHORIZED)

    try:
        progress = await _load_strength_progress(target_id)
        return success(progress=progress)
    except Exception as e:
        logger.error(f"Error computing strength progress of {target_id}: {e}", exc_info=True)
        return failure(STRENGTH_PROGRESS_FAILED)
