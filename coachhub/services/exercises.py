"""
CoachHub Exercise Library Service.

Each coach owns a private exercise library. Only the owning coach may edit
or delete an entry.
"""

from typing import Any, Dict, List, Optional
import logging

from pydantic import ValidationError

from coachhub.models.mongodb import ExerciseDocument
from coachhub.schemas.envelope import Envelope, success, failure
from coachhub.schemas.exercise import Exercise, ExerciseInput
from coachhub.schemas.user import Role, Session
from coachhub.utils.dates import utcnow
from coachhub.utils.errors import (
    UNAUTHORIZED,
    INVALID_DATA,
    EXERCISES_LOAD_FAILED,
    EXERCISE_SAVE_FAILED,
    EXERCISE_DELETE_FAILED,
)
from .cache import cached
from .cache_tags import CacheTag, COACH_SCOPE, revalidate_tags
from .mappers import exercise_from_document
from .session import require_role

logger = logging.getLogger(__name__)

EXERCISE_MUTATION_TAGS = COACH_SCOPE


@cached(CacheTag.EXERCISES)
async def _load_exercises(coach_id: str) -> List[Dict[str, Any]]:
    exercises = await ExerciseDocument.find(
        ExerciseDocument.coach_id == coach_id
    ).sort("name").to_list()
    return [exercise_from_document(e).model_dump(mode="json") for e in exercises]


async def list_exercises(session: Optional[Session]) -> Envelope:
    """
    The caller's exercise library sorted by name.

    Returns:
        Envelope with ``exercises: List[Exercise]`` (empty list for a new coach).
    """
    denied = require_role(session, {Role.COACH})
    if denied:
        return denied

    try:
        rows = await _load_exercises(session.id)
        return success(exercises=[Exercise.model_validate(row) for row in rows])
    except Exception as e:
        logger.error(f"Error fetching exercises for {session.id}: {e}", exc_info=True)
        return failure(EXERCISES_LOAD_FAILED)


def _validate(session: Session, data: Dict[str, Any]) -> Optional[ExerciseInput]:
    try:
        return ExerciseInput.model_validate(data)
    except ValidationError as e:
        logger.info(f"Invalid exercise payload from {session.id}: {e.error_count()} errors")
        return None


async def create_exercise(session: Optional[Session], data: Dict[str, Any]) -> Envelope:
    """Add an exercise to the caller's library; returns the new ``exercise``."""
    denied = require_role(session, {Role.COACH})
    if denied:
        return denied

    exercise_in = _validate(session, data)
    if exercise_in is None:
        return failure(INVALID_DATA)

    try:
        exercise = ExerciseDocument(coach_id=session.id, **exercise_in.model_dump())
        await exercise.insert()
        logger.info(f"Exercise {exercise.uid} created by coach {session.id}")

        await revalidate_tags(EXERCISE_MUTATION_TAGS)
        return success(exercise=exercise_from_document(exercise))
    except Exception as e:
        logger.error(f"Error creating exercise: {e}", exc_info=True)
        return failure(EXERCISE_SAVE_FAILED)


async def update_exercise(
    session: Optional[Session],
    exercise_id: str,
    data: Dict[str, Any]
) -> Envelope:
    """
    Replace the editable fields of one of the caller's exercises.

    Returns:
        Envelope with ``updated`` (False when the exercise does not exist).
    """
    denied = require_role(session, {Role.COACH})
    if denied:
        return denied

    exercise_in = _validate(session, data)
    if exercise_in is None:
        return failure(INVALID_DATA)

    try:
        exercise = await ExerciseDocument.find_one(ExerciseDocument.uid == exercise_id)
        if not exercise:
            return success(updated=False)
        if exercise.coach_id != session.id:
            return failure(UNAUTHORIZED)

        for field, value in exercise_in.model_dump().items():
            setattr(exercise, field, value)
        exercise.updated_at = utcnow()
        await exercise.save()

        await revalidate_tags(EXERCISE_MUTATION_TAGS)
        return success(updated=True, exercise=exercise_from_document(exercise))
    except Exception as e:
        logger.error(f"Error updating exercise {exercise_id}: {e}", exc_info=True)
        return failure(EXERCISE_SAVE_FAILED)


async def delete_exercise(session: Optional[Session], exercise_id: str) -> Envelope:
    denied = require_role(session, {Role.COACH})
    if denied:
        return denied

    try:
        exercise = await ExerciseDocument.find_one(ExerciseDocument.uid == exercise_id)
        if not exercise:
            return success(deleted=False)
        if exercise.coach_id != session.id:
            return failure(UNAUTHORIZED)

        await exercise.delete()
        logger.info(f"Exercise {exercise_id} deleted by coach {session.id}")

        await revalidate_tags(EXERCISE_MUTATION_TAGS)
        return success(deleted=True)
    except Exception as e:
        logger.error(f"Error deleting exercise {exercise_id}: {e}", exc_info=True)
        return failure(EXERCISE_DELETE_FAILED)
