"""
CoachHub Training Service.

Logging completed sessions and the load-progression heuristic.

The progression rule looks at the heaviest completed set of the exercise in
the caller's most recent session that contains it:

- RPE 7 or lower: add 2.5 kg
- otherwise (or RPE not recorded, read as 8): keep the load
"""

from typing import Any, Dict, Iterable, Optional
import logging

from pydantic import ValidationError

from coachhub.models.mongodb import NotificationDocument, UserDocument, WorkoutDocument
from coachhub.schemas.envelope import Envelope, success, failure
from coachhub.schemas.user import Session
from coachhub.schemas.workout import LoggedExercise, LoggedSet, ProgressionSuggestion, WorkoutInput
from coachhub.utils.dates import as_naive_utc, utcnow
from coachhub.utils.errors import INVALID_DATA, PROGRESSION_FAILED, WORKOUT_SAVE_FAILED
from .cache import cached
from .cache_tags import CacheTag, ATHLETE_SCOPE, revalidate_tags
from .mappers import DEFAULT_USER_NAME, workout_from_document
from .session import require_role

logger = logging.getLogger(__name__)

LOG_WORKOUT_TAGS = ATHLETE_SCOPE | {CacheTag.COACH_NOTIFICATIONS, CacheTag.NOTIFICATIONS}

WORKOUT_COMPLETED = "workout_completed"
FREE_SESSION_NAME = "Entrenamiento Libre"

DEFAULT_RPE = 8.0
LOW_RPE_THRESHOLD = 7.0
LOAD_INCREMENT_KG = 2.5
# Sessions searched back for a completed set of the exercise
PROGRESSION_LOOKBACK = 10


def session_volume(exercises: Iterable[LoggedExercise]) -> float:
    """Sum of weight x reps over completed sets."""
    return sum(
        s.weight * s.reps
        for exercise in exercises
        for s in exercise.sets
        if s.completed
    )


async def _notify_coach(session: Session, workout: WorkoutDocument) -> None:
    # Best effort: the workout is already stored
    try:
        athlete = await UserDocument.find_one(UserDocument.uid == session.id)
        if not athlete or not athlete.coach_id:
            return

        await NotificationDocument(
            recipient_id=athlete.coach_id,
            kind=WORKOUT_COMPLETED,
            title="Entrenamiento completado",
            message=(
                f"{athlete.name or DEFAULT_USER_NAME} ha completado "
                f"{workout.routine_name or FREE_SESSION_NAME}"
            ),
            athlete_id=session.id,
        ).insert()
    except Exception as e:
        logger.warning(f"Coach notification failed for workout {workout.uid}: {e}")


async def log_workout(session: Optional[Session], data: Dict[str, Any]) -> Envelope:
    """
    Store a completed training session for the caller.

    ``total_volume`` is computed from the completed sets unless the payload
    provides it; ``completed_at`` defaults to now. The caller's linked coach,
    if any, receives a notification.

    Args:
        session: Caller (any role).
        data: ``WorkoutInput`` fields.

    Returns:
        Envelope with the stored ``workout``.
    """
    denied = require_role(session)
    if denied:
        return denied

    try:
        workout_in = WorkoutInput.model_validate(data)
    except ValidationError as e:
        logger.info(f"Invalid workout payload from {session.id}: {e.error_count()} errors")
        return failure(INVALID_DATA)

    try:
        total_volume = workout_in.total_volume
        if total_volume is None:
            total_volume = session_volume(workout_in.exercises)

        workout = WorkoutDocument(
            user_id=session.id,
            routine_id=workout_in.routine_id,
            day_id=workout_in.day_id,
            routine_name=workout_in.routine_name,
            completed_at=as_naive_utc(workout_in.completed_at) if workout_in.completed_at else utcnow(),
            duration_seconds=workout_in.duration_seconds,
            total_volume=total_volume,
            session_rpe=workout_in.session_rpe,
            notes=workout_in.notes,
            exercises=workout_in.exercises,
        )
        await workout.insert()
        logger.info(f"Workout {workout.uid} logged by {session.id} ({total_volume} kg)")

        await _notify_coach(session, workout)

        await revalidate_tags(LOG_WORKOUT_TAGS)
        return success(workout=workout_from_document(workout))
    except Exception as e:
        logger.error(f"Error logging workout for {session.id}: {e}", exc_info=True)
        return failure(WORKOUT_SAVE_FAILED)


def _top_set(workout: WorkoutDocument, exercise_id: str) -> Optional[LoggedSet]:
    completed = [
        s
        for exercise in workout.exercises
        if exercise.exercise_id == exercise_id
        for s in exercise.sets
        if s.completed
    ]
    if not completed:
        return None
    return max(completed, key=lambda s: s.weight)


def suggest_progression(
    exercise_id: str,
    top_set: LoggedSet,
    performed_at
) -> ProgressionSuggestion:
    """Apply the RPE rule to the last top set."""
    rpe = top_set.rpe if top_set.rpe is not None else DEFAULT_RPE

    if rpe <= LOW_RPE_THRESHOLD:
        suggested = top_set.weight + LOAD_INCREMENT_KG
        reason = "RPE bajo: sube la carga"
    else:
        suggested = top_set.weight
        reason = "Mantén la carga"

    return ProgressionSuggestion(
        exercise_id=exercise_id,
        last_weight=top_set.weight,
        last_rpe=rpe,
        suggested_weight=suggested,
        reason=reason,
        last_date=performed_at,
    )


@cached(CacheTag.TRAINING_LOGS)
async def _load_progression(user_id: str, exercise_id: str) -> Optional[Dict[str, Any]]:
    workouts = await WorkoutDocument.find(
        {"user_id": user_id, "exercises.exercise_id": exercise_id}
    ).sort(-WorkoutDocument.completed_at).limit(PROGRESSION_LOOKBACK).to_list()

    for workout in workouts:
        top_set = _top_set(workout, exercise_id)
        if top_set is not None:
            return suggest_progression(
                exercise_id, top_set, workout.completed_at
            ).model_dump(mode="json")
    return None


async def get_progression_suggestion(session: Optional[Session], exercise_id: str) -> Envelope:
    """Next-session load for ``exercise_id``; ``suggestion=None`` without history."""
    denied = require_role(session)
    if denied:
        return denied

    try:
        row = await _load_progression(session.id, exercise_id)
        suggestion = ProgressionSuggestion.model_validate(row) if row else None
        return success(suggestion=suggestion)
    except Exception as e:
        logger.error(f"Error computing progression for {exercise_id}: {e}", exc_info=True)
        return failure(PROGRESSION_FAILED)
