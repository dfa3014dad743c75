"""
CoachHub User Profile Service.

Profile reads and updates for the caller, onboarding, linking an athlete
with a coach, and user administration. Users are never deleted here.
"""

from typing import Any, Dict, List, Optional
import logging

from pydantic import ValidationError

from coachhub.models.mongodb import BodyMeasurementDocument, UserDocument
from coachhub.schemas.envelope import Envelope, success, failure
from coachhub.schemas.user import (
    OnboardingInput,
    ProfileUpdate,
    Role,
    Session,
    UserProfile,
    UserSummary,
)
from coachhub.utils.dates import utcnow
from coachhub.utils.errors import (
    UNAUTHORIZED,
    INVALID_DATA,
    PROFILE_LOAD_FAILED,
    PROFILE_UPDATE_FAILED,
    COACH_LINK_FAILED,
    COACH_NOT_FOUND,
    COACH_UNLINK_FAILED,
    USERS_LOAD_FAILED,
    ONBOARDING_SAVE_FAILED,
    ROLE_UPDATE_FAILED,
    SELF_ROLE_CHANGE,
)
from .cache import cached
from .cache_tags import CacheTag, revalidate_tags
from .mappers import DEFAULT_USER_NAME, profile_from_document, user_summary_from_document
from .session import require_role

logger = logging.getLogger(__name__)

UPDATE_PROFILE_TAGS = frozenset({CacheTag.ATHLETES, CacheTag.ATHLETE_DETAILS})
LINK_COACH_TAGS = frozenset({CacheTag.ATHLETES, CacheTag.ATHLETE_DETAILS, CacheTag.COACH_STATS})
UPDATE_ROLE_TAGS = frozenset({CacheTag.ATHLETES, CacheTag.ATHLETE_DETAILS, CacheTag.COACH_STATS})
UNLINK_COACH_TAGS = LINK_COACH_TAGS
ONBOARDING_TAGS = UPDATE_PROFILE_TAGS | {CacheTag.MEASUREMENTS, CacheTag.COACH_STATS}

# Roles each administering role may hand out
GRANTABLE_ROLES = {
    Role.COACH: frozenset({Role.ATHLETE, Role.COACH}),
    Role.ADMIN: frozenset(Role),
}


@cached(CacheTag.ATHLETE_DETAILS)
async def _load_profile(user_id: str) -> Optional[Dict[str, Any]]:
    user = await UserDocument.find_one(UserDocument.uid == user_id)
    if not user:
        return None
    return profile_from_document(user).model_dump(mode="json")


async def get_profile(session: Optional[Session]) -> Envelope:
    """The caller's own profile, or ``user=None`` if it has no user document."""
    denied = require_role(session)
    if denied:
        return denied

    try:
        row = await _load_profile(session.id)
        return success(user=UserProfile.model_validate(row) if row else None)
    except Exception as e:
        logger.error(f"Error fetching profile for {session.id}: {e}", exc_info=True)
        return failure(PROFILE_LOAD_FAILED)


async def update_profile(session: Optional[Session], data: Dict[str, Any]) -> Envelope:
    """
    Update the caller's editable profile fields.

    Only the fields present in ``data`` are written.

    Returns:
        Envelope with ``updated`` (False when the caller has no user document).
    """
    denied = require_role(session)
    if denied:
        return denied

    try:
        changes = ProfileUpdate.model_validate(data).model_dump(exclude_unset=True)
    except ValidationError as e:
        logger.info(f"Invalid profile payload from {session.id}: {e.error_count()} errors")
        return failure(INVALID_DATA)

    try:
        user = await UserDocument.find_one(UserDocument.uid == session.id)
        if not user:
            return success(updated=False)

        for field, value in changes.items():
            setattr(user, field, value)
        user.updated_at = utcnow()
        await user.save()

        await revalidate_tags(UPDATE_PROFILE_TAGS)
        return success(updated=True, user=profile_from_document(user))
    except Exception as e:
        logger.error(f"Error updating profile for {session.id}: {e}", exc_info=True)
        return failure(PROFILE_UPDATE_FAILED)


async def complete_onboarding(session: Optional[Session], data: Dict[str, Any]) -> Envelope:
    """
    Store the onboarding answers and mark onboarding as completed.

    Creates the caller's user document when it does not exist yet. Initial
    measurements, if any, also become the first entry of the measurement
    history; failing to write that entry does not fail onboarding.

    Returns:
        Envelope with the updated ``user``.
    """
    denied = require_role(session)
    if denied:
        return denied

    try:
        answers = OnboardingInput.model_validate(data)
    except ValidationError as e:
        logger.info(f"Invalid onboarding payload from {session.id}: {e.error_count()} errors")
        return failure(INVALID_DATA)

    try:
        user = await UserDocument.find_one(UserDocument.uid == session.id)
        is_new = user is None
        if is_new:
            user = UserDocument(uid=session.id, role=session.role.value)

        for field, value in answers.model_dump(exclude={"measurements"}).items():
            setattr(user, field, value)
        has_measurements = answers.measurements is not None and not answers.measurements.is_empty()
        if has_measurements:
            user.measurements = answers.measurements.model_copy(update={"weight": answers.weight})
        user.onboarding_completed = True
        user.updated_at = utcnow()

        if is_new:
            await user.insert()
        else:
            await user.save()
        logger.info(f"User {session.id} completed onboarding")

        if has_measurements:
            await _log_initial_measurements(user)

        await revalidate_tags(ONBOARDING_TAGS)
        return success(user=profile_from_document(user))
    except Exception as e:
        logger.error(f"Error saving onboarding for {session.id}: {e}", exc_info=True)
        return failure(ONBOARDING_SAVE_FAILED)


async def _log_initial_measurements(user: UserDocument) -> None:
    # Best effort: onboarding is already stored
    try:
        await BodyMeasurementDocument(
            user_id=user.uid,
            date=user.updated_at,
            measurements=user.measurements,
        ).insert()
    except Exception as e:
        logger.warning(f"Initial measurements for {user.uid} not logged: {e}")


async def link_with_coach(session: Optional[Session], coach_id: str) -> Envelope:
    """
    Link the caller with a coach, using the coach's id as the invite code.

    Returns:
        Envelope with ``coach_name``; "Coach no encontrado con ese código"
        when the id does not belong to a coach.
    """
    denied = require_role(session)
    if denied:
        return denied

    try:
        coach = await UserDocument.find_one(UserDocument.uid == coach_id)
        if not coach or coach.role != Role.COACH.value:
            return failure(COACH_NOT_FOUND)

        user = await UserDocument.find_one(UserDocument.uid == session.id)
        if not user:
            return success(linked=False)

        user.coach_id = coach.uid
        user.coach_name = coach.name or DEFAULT_USER_NAME
        user.linked_at = utcnow()
        user.updated_at = user.linked_at
        await user.save()
        logger.info(f"User {session.id} linked with coach {coach_id}")

        await revalidate_tags(LINK_COACH_TAGS)
        return success(linked=True, coach_name=user.coach_name)
    except Exception as e:
        logger.error(f"Error linking {session.id} with coach {coach_id}: {e}", exc_info=True)
        return failure(COACH_LINK_FAILED)


async def unlink_coach(session: Optional[Session]) -> Envelope:
    """
    Remove the caller's coach link.

    Returns:
        Envelope with ``unlinked`` (False when the caller has no user document).
    """
    denied = require_role(session)
    if denied:
        return denied

    try:
        user = await UserDocument.find_one(UserDocument.uid == session.id)
        if not user:
            return success(unlinked=False)

        previous = user.coach_id
        user.coach_id = None
        user.coach_name = None
        user.linked_at = None
        user.updated_at = utcnow()
        await user.save()
        logger.info(f"User {session.id} unlinked from coach {previous}")

        await revalidate_tags(UNLINK_COACH_TAGS)
        return success(unlinked=True)
    except Exception as e:
        logger.error(f"Error unlinking {session.id} from coach: {e}", exc_info=True)
        return failure(COACH_UNLINK_FAILED)


# ==================== ADMINISTRATION ====================

@cached(CacheTag.ATHLETES)
async def _load_users() -> List[Dict[str, Any]]:
    users = await UserDocument.find_all().sort("name").to_list()
    return [user_summary_from_document(u).model_dump(mode="json") for u in users]


async def list_users(session: Optional[Session]) -> Envelope:
    """
    Every user, sorted by name, for role administration (coach or admin).

    Returns:
        Envelope with ``users: List[UserSummary]``; missing names read as
        "Usuario" and missing roles as athlete.
    """
    denied = require_role(session, {Role.COACH, Role.ADMIN})
    if denied:
        return denied

    try:
        rows = await _load_users()
        return success(users=[UserSummary.model_validate(row) for row in rows])
    except Exception as e:
        logger.error(f"Error fetching users for {session.id}: {e}", exc_info=True)
        return failure(USERS_LOAD_FAILED)


async def update_user_role(session: Optional[Session], user_id: str, role: str) -> Envelope:
    """
    Change another user's role (coach or admin only).

    Coaches may only grant athlete or coach; only an admin grants admin.

    Args:
        session: Caller.
        user_id: Target user; never the caller.
        role: New role, one of ``Role``.

    Returns:
        Envelope with ``updated`` (False when the target does not exist).
    """
    denied = require_role(session, {Role.COACH, Role.ADMIN})
    if denied:
        return denied

    try:
        new_role = Role(role)
    except ValueError:
        return failure(INVALID_DATA)

    if new_role not in GRANTABLE_ROLES[session.role]:
        logger.warning(f"User {session.id} ({session.role.value}) tried to grant {new_role.value}")
        return failure(UNAUTHORIZED)

    if user_id == session.id:
        return failure(SELF_ROLE_CHANGE)

    try:
        user = await UserDocument.find_one(UserDocument.uid == user_id)
        if not user:
            return success(updated=False)

        previous = user.role
        user.role = new_role.value
        user.updated_at = utcnow()
        await user.save()
        logger.info(f"User {user_id} role changed {previous} -> {new_role.value} by {session.id}")

        await revalidate_tags(UPDATE_ROLE_TAGS)
        return success(updated=True)
    except Exception as e:
        logger.error(f"Error updating role of {user_id}: {e}", exc_info=True)
        return failure(ROLE_UPDATE_FAILED)
