"""
CoachHub Body Measurement Service.

Measurement entries are append-only. Logging one also replaces the latest
snapshot kept on the user document, which the profile shows.
"""

from typing import Any, Dict, List, Optional
import logging

from pydantic import ValidationError

from coachhub.models.mongodb import BodyMeasurementDocument, UserDocument
from coachhub.schemas.envelope import Envelope, success, failure
from coachhub.schemas.measurement import BodyMeasurementLog, BodyMeasurements, MeasurementInput
from coachhub.schemas.user import Session
from coachhub.utils.dates import as_naive_utc, utcnow
from coachhub.utils.errors import (
    INVALID_DATA,
    MEASUREMENTS_FORBIDDEN,
    MEASUREMENTS_LOAD_FAILED,
    MEASUREMENTS_SAVE_FAILED,
)
from .cache import cached
from .cache_tags import CacheTag, revalidate_tags
from .mappers import measurement_from_document
from .session import can_view_user, require_role

logger = logging.getLogger(__name__)

LOG_MEASUREMENTS_TAGS = frozenset({CacheTag.MEASUREMENTS, CacheTag.ATHLETE_DETAILS})


async def log_body_measurements(session: Optional[Session], data: Dict[str, Any]) -> Envelope:
    """
    Append a measurement entry for the caller.

    Args:
        session: Caller (any role).
        data: ``MeasurementInput`` fields; ``date`` defaults to now.

    Returns:
        Envelope with the stored ``measurement``.
    """
    denied = require_role(session)
    if denied:
        return denied

    try:
        entry_in = MeasurementInput.model_validate(data)
    except ValidationError as e:
        logger.info(f"Invalid measurements from {session.id}: {e.error_count()} errors")
        return failure(INVALID_DATA)

    try:
        values = BodyMeasurements.model_validate(
            entry_in.model_dump(include=set(BodyMeasurements.model_fields))
        )
        entry = BodyMeasurementDocument(
            user_id=session.id,
            date=as_naive_utc(entry_in.date) if entry_in.date else utcnow(),
            notes=entry_in.notes,
            measurements=values,
        )
        await entry.insert()

        user = await UserDocument.find_one(UserDocument.uid == session.id)
        if user:
            user.measurements = values
            if values.weight is not None:
                user.weight = values.weight
            user.updated_at = utcnow()
            await user.save()

        logger.info(f"Measurements {entry.uid} logged by {session.id}")

        await revalidate_tags(LOG_MEASUREMENTS_TAGS)
        return success(measurement=measurement_from_document(entry))
    except Exception as e:
        logger.error(f"Error logging measurements for {session.id}: {e}", exc_info=True)
        return failure(MEASUREMENTS_SAVE_FAILED)


@cached(CacheTag.MEASUREMENTS)
async def _load_measurements(user_id: str) -> List[Dict[str, Any]]:
    entries = await BodyMeasurementDocument.find(
        BodyMeasurementDocument.user_id == user_id
    ).sort("date").to_list()
    return [measurement_from_document(e).model_dump(mode="json") for e in entries]


async def get_body_measurements_history(
    session: Optional[Session],
    user_id: Optional[str] = None
) -> Envelope:
    """
    Measurement history, oldest first, for charting.

    Args:
        session: Caller.
        user_id: Whose history; defaults to the caller. Only coaches may
            read another user's history.

    Returns:
        Envelope with ``measurements: List[BodyMeasurementLog]``.
    """
    denied = require_role(session)
    if denied:
        return denied

    target_id = user_id or session.id
    if not can_view_user(session, target_id):
        logger.info(f"User {session.id} denied measurements of {target_id}")
        return failure(MEASUREMENTS_FORBIDDEN)

    try:
        rows = await _load_measurements(target_id)
        return success(measurements=[BodyMeasurementLog.model_validate(row) for row in rows])
    except Exception as e:
        logger.error(f"Error fetching measurements of {target_id}: {e}", exc_info=True)
        return failure(MEASUREMENTS_LOAD_FAILED)
