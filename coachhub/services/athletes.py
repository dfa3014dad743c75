"""
CoachHub Athlete Directory Service.

Coach-facing reads over the users collection.
"""

from typing import Any, Dict, List, Optional
import logging

from coachhub.models.mongodb import UserDocument, WorkoutDocument
from coachhub.schemas.envelope import Envelope, success, failure
from coachhub.schemas.user import AthleteSummary, Role, Session
from coachhub.schemas.workout import AthleteDetails
from coachhub.utils.errors import ATHLETES_LOAD_FAILED, ATHLETE_DETAILS_LOAD_FAILED
from .cache import cached
from .cache_tags import CacheTag
from .mappers import athlete_from_document, athlete_details_from_document
from .session import require_role

logger = logging.getLogger(__name__)

RECENT_WORKOUTS_LIMIT = 5


@cached(CacheTag.ATHLETES)
async def _load_athletes() -> List[Dict[str, Any]]:
    users = await UserDocument.find(
        UserDocument.role != Role.COACH.value
    ).sort("name").to_list()
    return [athlete_from_document(user).model_dump(mode="json") for user in users]


async def list_athletes(session: Optional[Session]) -> Envelope:
    """
    List every user that is not a coach.

    Requires the coach role. Missing ``name``/``role``/``onboarding_completed``
    fields are defaulted by the mapper and ``created_at`` is sent as ISO-8601.

    Returns:
        Envelope with ``athletes: List[AthleteSummary]``.
    """
    denied = require_role(session, {Role.COACH})
    if denied:
        return denied

    try:
        rows = await _load_athletes()
        return success(athletes=[AthleteSummary.model_validate(row) for row in rows])
    except Exception as e:
        logger.error(f"Error fetching athletes: {e}", exc_info=True)
        return failure(ATHLETES_LOAD_FAILED)


@cached(CacheTag.ATHLETE_DETAILS, CacheTag.TRAINING_LOGS)
async def _load_athlete_details(athlete_id: str) -> Optional[Dict[str, Any]]:
    user = await UserDocument.find_one(UserDocument.uid == athlete_id)
    if not user:
        return None

    workouts = await WorkoutDocument.find(
        WorkoutDocument.user_id == athlete_id
    ).sort(-WorkoutDocument.completed_at).limit(RECENT_WORKOUTS_LIMIT).to_list()

    return athlete_details_from_document(user, workouts).model_dump(mode="json")


async def get_athlete_details(session: Optional[Session], athlete_id: str) -> Envelope:
    """Athlete profile plus the five most recent workouts (coach only)."""
    denied = require_role(session, {Role.COACH})
    if denied:
        return denied

    try:
        row = await _load_athlete_details(athlete_id)
        athlete = AthleteDetails.model_validate(row) if row else None
        return success(athlete=athlete)
    except Exception as e:
        logger.error(f"Error fetching athlete details for {athlete_id}: {e}", exc_info=True)
        return failure(ATHLETE_DETAILS_LOAD_FAILED)
