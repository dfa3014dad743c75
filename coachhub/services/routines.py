"""
CoachHub Routine Service.

Coaches own routines (``coach_id``); a routine with an ``athlete_id`` is
assigned to that athlete, otherwise it is a template. Assigning a template
copies it so that later edits to the template never alter the athlete's
in-progress plan.
"""

from typing import Any, Dict, List, Optional
import logging

from pydantic import ValidationError

from coachhub.models.mongodb import RoutineDocument
from coachhub.schemas.envelope import Envelope, success, failure
from coachhub.schemas.routine import Routine, RoutineInput
from coachhub.schemas.user import Role, Session
from coachhub.utils.dates import utcnow
from coachhub.utils.errors import (
    UNAUTHORIZED,
    INVALID_DATA,
    ROUTINES_LOAD_FAILED,
    ROUTINE_LOAD_FAILED,
    ROUTINE_SAVE_FAILED,
    ROUTINE_DELETE_FAILED,
    ROUTINE_ASSIGN_FAILED,
)
from .cache import cached
from .cache_tags import CacheTag, COACH_SCOPE, revalidate_tags
from .mappers import routine_from_document
from .session import require_role

logger = logging.getLogger(__name__)

SAVE_ROUTINE_TAGS = COACH_SCOPE
DELETE_ROUTINE_TAGS = COACH_SCOPE
ASSIGN_ROUTINE_TAGS = COACH_SCOPE | {CacheTag.ATHLETE_DETAILS}

ASSIGNED_SUFFIX = " (Asignada)"


def _owns(session: Session, routine: Dict[str, Any]) -> bool:
    return session.id in (routine.get("coach_id"), routine.get("athlete_id"))


# ==================== READS ====================

@cached(CacheTag.ROUTINES)
async def _load_routines(user_id: str, role: str) -> List[Dict[str, Any]]:
    if role == Role.COACH.value:
        query = RoutineDocument.find(RoutineDocument.coach_id == user_id)
    else:
        query = RoutineDocument.find(
            RoutineDocument.athlete_id == user_id,
            RoutineDocument.active == True,  # noqa: E712
        )
    routines = await query.sort(-RoutineDocument.updated_at).to_list()
    return [routine_from_document(r).model_dump(mode="json") for r in routines]


async def list_routines(session: Optional[Session]) -> Envelope:
    """
    Routines visible to the caller.

    Coaches get every routine they created (templates and assigned copies);
    anyone else gets their own active routines.

    Returns:
        Envelope with ``routines: List[Routine]``.
    """
    denied = require_role(session)
    if denied:
        return denied

    try:
        rows = await _load_routines(session.id, session.role.value)
        return success(routines=[Routine.model_validate(row) for row in rows])
    except Exception as e:
        logger.error(f"Error fetching routines for {session.id}: {e}", exc_info=True)
        return failure(ROUTINES_LOAD_FAILED)


@cached(CacheTag.ROUTINES)
async def _load_routine(routine_id: str) -> Optional[Dict[str, Any]]:
    routine = await RoutineDocument.find_one(RoutineDocument.uid == routine_id)
    if not routine:
        return None
    return routine_from_document(routine).model_dump(mode="json")


async def get_routine(session: Optional[Session], routine_id: str) -> Envelope:
    """
    Single routine by id.

    Returns ``routine=None`` when it does not exist. A routine that exists
    but neither belongs to the caller as coach nor is assigned to them is an
    authorization failure.
    """
    denied = require_role(session)
    if denied:
        return denied

    try:
        row = await _load_routine(routine_id)
        if row is None:
            return success(routine=None)
        if not _owns(session, row):
            logger.info(f"User {session.id} denied access to routine {routine_id}")
            return failure(UNAUTHORIZED)
        return success(routine=Routine.model_validate(row))
    except Exception as e:
        logger.error(f"Error fetching routine {routine_id}: {e}", exc_info=True)
        return failure(ROUTINE_LOAD_FAILED)


@cached(CacheTag.ROUTINES)
async def _load_active_routine(athlete_id: str) -> Optional[Dict[str, Any]]:
    routine = await RoutineDocument.find(
        RoutineDocument.athlete_id == athlete_id,
        RoutineDocument.active == True,  # noqa: E712
    ).sort(-RoutineDocument.updated_at).first_or_none()
    if not routine:
        return None
    return routine_from_document(routine).model_dump(mode="json")


async def get_active_routine(session: Optional[Session]) -> Envelope:
    """The caller's current routine, or ``routine=None`` when none is assigned."""
    denied = require_role(session)
    if denied:
        return denied

    try:
        row = await _load_active_routine(session.id)
        return success(routine=Routine.model_validate(row) if row else None)
    except Exception as e:
        logger.error(f"Error fetching active routine for {session.id}: {e}", exc_info=True)
        return failure(ROUTINE_LOAD_FAILED)


# ==================== MUTATIONS ====================

async def save_routine(
    session: Optional[Session],
    data: Dict[str, Any],
    routine_id: Optional[str] = None
) -> Envelope:
    """
    Create a routine, or replace the editable fields of an existing one.

    Args:
        session: Caller; must be a coach.
        data: ``RoutineInput`` fields.
        routine_id: Routine to update; None creates a new routine.

    Returns:
        Envelope with ``routine`` on create. On update, ``updated`` tells
        whether the routine existed (and ``routine`` carries it when it did).
    """
    denied = require_role(session, {Role.COACH})
    if denied:
        return denied

    try:
        routine_in = RoutineInput.model_validate(data)
    except ValidationError as e:
        logger.info(f"Invalid routine payload from {session.id}: {e.error_count()} errors")
        return failure(INVALID_DATA)

    try:
        if routine_id is None:
            routine = RoutineDocument(
                coach_id=session.id,
                **routine_in.model_dump()
            )
            await routine.insert()
            logger.info(f"Routine {routine.uid} created by coach {session.id}")
            payload = {"routine": routine_from_document(routine)}
        else:
            routine = await RoutineDocument.find_one(RoutineDocument.uid == routine_id)
            if not routine:
                return success(updated=False)
            if routine.coach_id != session.id:
                return failure(UNAUTHORIZED)

            for field in RoutineInput.model_fields:
                setattr(routine, field, getattr(routine_in, field))
            routine.updated_at = utcnow()
            await routine.save()
            logger.info(f"Routine {routine_id} updated by coach {session.id}")
            payload = {"updated": True, "routine": routine_from_document(routine)}

        await revalidate_tags(SAVE_ROUTINE_TAGS)
        return success(**payload)
    except Exception as e:
        logger.error(f"Error saving routine {routine_id}: {e}", exc_info=True)
        return failure(ROUTINE_SAVE_FAILED)


async def delete_routine(session: Optional[Session], routine_id: str) -> Envelope:
    """Delete one of the caller's routines; ``deleted=False`` when it does not exist."""
    denied = require_role(session, {Role.COACH})
    if denied:
        return denied

    try:
        routine = await RoutineDocument.find_one(RoutineDocument.uid == routine_id)
        if not routine:
            return success(deleted=False)
        if routine.coach_id != session.id:
            return failure(UNAUTHORIZED)

        await routine.delete()
        logger.info(f"Routine {routine_id} deleted by coach {session.id}")

        await revalidate_tags(DELETE_ROUTINE_TAGS)
        return success(deleted=True)
    except Exception as e:
        logger.error(f"Error deleting routine {routine_id}: {e}", exc_info=True)
        return failure(ROUTINE_DELETE_FAILED)


async def assign_routine(
    session: Optional[Session],
    routine_id: str,
    athlete_id: str
) -> Envelope:
    """
    Assign a copy of one of the caller's routines to an athlete.

    Every routine currently active for the athlete is deactivated, then an
    active copy named ``"<name> (Asignada)"`` is inserted with
    ``original_routine_id`` pointing at the source.

    Returns:
        Envelope with ``routine`` (the new copy), or ``assigned=False`` when
        the source routine does not exist.
    """
    denied = require_role(session, {Role.COACH})
    if denied:
        return denied

    if not athlete_id:
        return failure(INVALID_DATA)

    try:
        source = await RoutineDocument.find_one(RoutineDocument.uid == routine_id)
        if not source:
            return success(assigned=False)
        if source.coach_id != session.id:
            return failure(UNAUTHORIZED)

        await RoutineDocument.find(
            RoutineDocument.athlete_id == athlete_id,
            RoutineDocument.active == True,  # noqa: E712
        ).update({"$set": {"active": False, "updated_at": utcnow()}})

        copy = RoutineDocument(
            coach_id=session.id,
            athlete_id=athlete_id,
            name=f"{source.name}{ASSIGNED_SUFFIX}",
            description=source.description,
            active=True,
            original_routine_id=source.uid,
            schedule=source.schedule,
        )
        await copy.insert()
        logger.info(f"Routine {routine_id} assigned to athlete {athlete_id} as {copy.uid}")

        await revalidate_tags(ASSIGN_ROUTINE_TAGS)
        return success(assigned=True, routine=routine_from_document(copy))
    except Exception as e:
        logger.error(f"Error assigning routine {routine_id} to {athlete_id}: {e}", exc_info=True)
        return failure(ROUTINE_ASSIGN_FAILED)
