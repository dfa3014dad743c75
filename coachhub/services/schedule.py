"""
CoachHub Training Schedule Service.

Coaches plan routine days on an athlete's calendar. The first plan made
from a template gives the athlete an active copy of it (same name, with
``original_routine_id`` set); later plans from the same template reuse that
copy. A date holds at most one planned day: planning over an occupied date
requires ``confirm_replace``, and then replaces what was there.
"""

from typing import Any, Dict, List, Optional
import logging

from beanie.operators import In
from pydantic import ValidationError

from coachhub.models.mongodb import RoutineDocument, ScheduleAssignmentDocument
from coachhub.schemas.envelope import Envelope, success, failure
from coachhub.schemas.schedule import (
    Assignment,
    AssignmentInput,
    ConflictQuery,
    DateRange,
    WeekAssignmentInput,
)
from coachhub.schemas.user import Role, Session
from coachhub.utils.dates import utcnow
from coachhub.utils.errors import (
    UNAUTHORIZED,
    INVALID_DATA,
    SCHEDULE_DAY_TAKEN,
    SCHEDULE_DAYS_TAKEN,
    SCHEDULE_ASSIGN_FAILED,
    SCHEDULE_WEEK_ASSIGN_FAILED,
    SCHEDULE_CONFLICTS_FAILED,
    SCHEDULE_LOAD_FAILED,
    TODAY_ASSIGNMENT_FAILED,
)
from .cache import cached
from .cache_tags import CacheTag, revalidate_tags
from .mappers import assignment_from_document
from .session import can_view_user, require_role

logger = logging.getLogger(__name__)

ASSIGN_SCHEDULE_TAGS = frozenset({CacheTag.SCHEDULE, CacheTag.ROUTINES, CacheTag.ATHLETE_DETAILS})

DEFAULT_DAY_NAME = "Día de Rutina"


def _day_name(routine: RoutineDocument, day_id: str) -> str:
    for day in routine.schedule:
        if day.id == day_id:
            return day.name
    return DEFAULT_DAY_NAME


async def _conflicts(athlete_id: str, dates: List[str]) -> List[ScheduleAssignmentDocument]:
    return await ScheduleAssignmentDocument.find(
        ScheduleAssignmentDocument.athlete_id == athlete_id,
        In(ScheduleAssignmentDocument.date, dates),
    ).sort("date").to_list()


async def _athlete_copy(source: RoutineDocument, athlete_id: str, coach_id: str) -> RoutineDocument:
    """The athlete's active copy of ``source``, created on first use."""
    copy = await RoutineDocument.find_one(
        RoutineDocument.athlete_id == athlete_id,
        RoutineDocument.original_routine_id == source.uid,
        RoutineDocument.active == True,  # noqa: E712
    )
    if copy:
        return copy

    copy = RoutineDocument(
        coach_id=coach_id,
        athlete_id=athlete_id,
        name=source.name,
        description=source.description,
        active=True,
        original_routine_id=source.uid,
        schedule=[day.model_copy(deep=True) for day in source.schedule],
    )
    await copy.insert()
    logger.info(f"Routine {source.uid} copied to athlete {athlete_id} as {copy.uid}")
    return copy


async def _plan(
    session: Session,
    athlete_id: str,
    routine_id: str,
    days: List[Dict[str, str]],
    confirm_replace: bool,
    taken_message: str,
) -> Envelope:
    """
    Shared write path of the day and week assignments.

    ``days`` holds ``{"day_id", "date"}`` with ISO dates. Returns the
    envelope to answer with; store errors propagate to the caller.
    """
    source = await RoutineDocument.find_one(RoutineDocument.uid == routine_id)
    if not source:
        return success(assigned=False)
    if source.coach_id != session.id:
        return failure(UNAUTHORIZED)

    conflicts = await _conflicts(athlete_id, [day["date"] for day in days])
    if conflicts and not confirm_replace:
        return failure(
            taken_message.format(count=len(conflicts)),
            requires_confirmation=True,
            conflicts=[assignment_from_document(c) for c in conflicts],
        )

    copy = await _athlete_copy(source, athlete_id, session.id)

    if conflicts:
        for conflict in conflicts:
            await conflict.delete()
        logger.info(f"Replaced {len(conflicts)} planned days of athlete {athlete_id}")

    created = [
        ScheduleAssignmentDocument(
            athlete_id=athlete_id,
            routine_id=copy.uid,
            original_routine_id=source.uid,
            day_id=day["day_id"],
            date=day["date"],
            routine_name=copy.name,
            day_name=_day_name(copy, day["day_id"]),
            assigned_by=session.id,
        )
        for day in days
    ]
    await ScheduleAssignmentDocument.insert_many(created)
    logger.info(f"Coach {session.id} planned {len(created)} days of {routine_id} for {athlete_id}")

    await revalidate_tags(ASSIGN_SCHEDULE_TAGS)
    return success(assigned=True, assignments=[assignment_from_document(a) for a in created])


# ==================== MUTATIONS ====================

async def assign_routine_day(
    session: Optional[Session],
    data: Dict[str, Any],
    confirm_replace: bool = False
) -> Envelope:
    """
    Plan one routine day on a date of an athlete's calendar (coach only).

    Returns:
        Envelope with ``assignments`` (one entry), ``assigned=False`` when
        the routine does not exist, or a failure with
        ``requires_confirmation`` and ``conflicts`` when the date is taken
        and ``confirm_replace`` is not set.
    """
    denied = require_role(session, {Role.COACH})
    if denied:
        return denied

    try:
        plan = AssignmentInput.model_validate(data)
    except ValidationError as e:
        logger.info(f"Invalid day assignment from {session.id}: {e.error_count()} errors")
        return failure(INVALID_DATA)

    try:
        return await _plan(
            session,
            plan.athlete_id,
            plan.routine_id,
            [{"day_id": plan.day_id, "date": plan.date.isoformat()}],
            confirm_replace,
            SCHEDULE_DAY_TAKEN,
        )
    except Exception as e:
        logger.error(f"Error planning routine day for {plan.athlete_id}: {e}", exc_info=True)
        return failure(SCHEDULE_ASSIGN_FAILED)


async def assign_routine_week(
    session: Optional[Session],
    data: Dict[str, Any],
    confirm_replace: bool = False
) -> Envelope:
    """
    Plan several routine days at once (coach only).

    Conflicts are checked for every date before anything is written; the
    confirmation failure reports how many dates are taken.
    """
    denied = require_role(session, {Role.COACH})
    if denied:
        return denied

    try:
        plan = WeekAssignmentInput.model_validate(data)
    except ValidationError as e:
        logger.info(f"Invalid week assignment from {session.id}: {e.error_count()} errors")
        return failure(INVALID_DATA)

    try:
        return await _plan(
            session,
            plan.athlete_id,
            plan.routine_id,
            [{"day_id": day.day_id, "date": day.date.isoformat()} for day in plan.days],
            confirm_replace,
            SCHEDULE_DAYS_TAKEN,
        )
    except Exception as e:
        logger.error(f"Error planning routine week for {plan.athlete_id}: {e}", exc_info=True)
        return failure(SCHEDULE_WEEK_ASSIGN_FAILED)


# ==================== READS ====================

async def check_assignment_conflicts(session: Optional[Session], data: Dict[str, Any]) -> Envelope:
    """
    Planned days already on the given dates (coach only).

    Always read from the store, so a write decided on it sees current data.

    Returns:
        Envelope with ``has_conflicts`` and ``conflicts: List[Assignment]``.
    """
    denied = require_role(session, {Role.COACH})
    if denied:
        return denied

    try:
        query = ConflictQuery.model_validate(data)
    except ValidationError:
        return failure(INVALID_DATA)

    try:
        conflicts = await _conflicts(query.athlete_id, [d.isoformat() for d in query.dates])
        return success(
            has_conflicts=bool(conflicts),
            conflicts=[assignment_from_document(c) for c in conflicts],
        )
    except Exception as e:
        logger.error(f"Error checking calendar of {query.athlete_id}: {e}", exc_info=True)
        return failure(SCHEDULE_CONFLICTS_FAILED)


@cached(CacheTag.SCHEDULE)
async def _load_assignments(athlete_id: str, start: str, end: str) -> List[Dict[str, Any]]:
    assignments = await ScheduleAssignmentDocument.find(
        ScheduleAssignmentDocument.athlete_id == athlete_id,
        ScheduleAssignmentDocument.date >= start,
        ScheduleAssignmentDocument.date <= end,
    ).sort("date").to_list()
    return [assignment_from_document(a).model_dump(mode="json") for a in assignments]


async def get_athlete_assignments(
    session: Optional[Session],
    athlete_id: str,
    start: str,
    end: str
) -> Envelope:
    """
    Planned days between ``start`` and ``end`` (inclusive, ``YYYY-MM-DD``).

    The athlete reads their own calendar; coaches read any athlete's.

    Returns:
        Envelope with ``assignments: List[Assignment]`` in date order.
    """
    denied = require_role(session)
    if denied:
        return denied
    if not can_view_user(session, athlete_id):
        return failure(UNAUTHORIZED)

    try:
        period = DateRange(start=start, end=end)
    except ValidationError:
        return failure(INVALID_DATA)

    try:
        rows = await _load_assignments(athlete_id, period.start.isoformat(), period.end.isoformat())
        return success(assignments=[Assignment.model_validate(row) for row in rows])
    except Exception as e:
        logger.error(f"Error fetching calendar of {athlete_id}: {e}", exc_info=True)
        return failure(SCHEDULE_LOAD_FAILED)


@cached(CacheTag.SCHEDULE)
async def _load_assignment_on(athlete_id: str, day: str) -> Optional[Dict[str, Any]]:
    assignment = await ScheduleAssignmentDocument.find_one(
        ScheduleAssignmentDocument.athlete_id == athlete_id,
        ScheduleAssignmentDocument.date == day,
    )
    if not assignment:
        return None
    return assignment_from_document(assignment).model_dump(mode="json")


async def get_today_assignment(
    session: Optional[Session],
    athlete_id: str,
    day: Optional[str] = None
) -> Envelope:
    """
    The day planned for ``day`` (defaults to today, UTC).

    Returns:
        Envelope with ``assignment``, None when nothing is planned.
    """
    denied = require_role(session)
    if denied:
        return denied
    if not can_view_user(session, athlete_id):
        return failure(UNAUTHORIZED)

    try:
        on = DateRange(start=day, end=day).start if day else utcnow().date()
    except ValidationError:
        return failure(INVALID_DATA)

    try:
        row = await _load_assignment_on(athlete_id, on.isoformat())
        return success(assignment=Assignment.model_validate(row) if row else None)
    except Exception as e:
        logger.error(f"Error fetching planned day of {athlete_id}: {e}", exc_info=True)
        return failure(TODAY_ASSIGNMENT_FAILED)
