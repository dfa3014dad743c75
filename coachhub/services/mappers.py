"""
CoachHub Document-to-Entity Mapping.

One mapping function per entity. This is the only place where fields that
older documents may lack get defaulted:

- User ``name`` missing -> "Usuario"
- User ``role`` missing -> athlete (logged as a warning, see ``role_of``)
- User ``onboarding_completed`` missing -> False
- Workout ``duration_seconds`` / ``total_volume`` missing -> 0 (model default)

Unknown stored values (e.g. a role outside the ``Role`` enum) raise
``ValueError`` and surface as a store failure of the calling function.
"""

import logging

from coachhub.models.mongodb import (
    UserDocument,
    ExerciseDocument,
    RoutineDocument,
    WorkoutDocument,
    NotificationDocument,
    BodyMeasurementDocument,
    ScheduleAssignmentDocument,
)
from coachhub.schemas.exercise import Exercise
from coachhub.schemas.measurement import BodyMeasurementLog
from coachhub.schemas.notification import Notification
from coachhub.schemas.routine import Routine
from coachhub.schemas.schedule import Assignment
from coachhub.schemas.user import AthleteSummary, Role, UserProfile, UserSummary
from coachhub.schemas.workout import AthleteDetails, WorkoutSummary
from coachhub.utils.dates import to_iso

logger = logging.getLogger(__name__)

DEFAULT_USER_NAME = "Usuario"


def role_of(user: UserDocument) -> Role:
    """Role of a stored user; documents without one are read as athletes."""
    if not user.role:
        logger.warning(f"User document {user.uid} has no role, reading it as athlete")
        return Role.ATHLETE
    return Role(user.role)


def athlete_from_document(user: UserDocument) -> AthleteSummary:
    return AthleteSummary(
        id=user.uid,
        name=user.name or DEFAULT_USER_NAME,
        email=user.email,
        avatar_url=user.avatar_url,
        role=role_of(user),
        onboarding_completed=bool(user.onboarding_completed),
        goal=user.goal,
        coach_id=user.coach_id,
        created_at=to_iso(user.created_at),
    )


def profile_from_document(user: UserDocument) -> UserProfile:
    return UserProfile(
        id=user.uid,
        name=user.name or DEFAULT_USER_NAME,
        email=user.email,
        avatar_url=user.avatar_url,
        role=role_of(user),
        onboarding_completed=bool(user.onboarding_completed),
        goal=user.goal,
        coach_id=user.coach_id,
        coach_name=user.coach_name,
        age=user.age,
        gender=user.gender,
        weight=user.weight,
        height=user.height,
        experience_level=user.experience_level,
        available_days=user.available_days,
        injuries=user.injuries,
        medical_conditions=user.medical_conditions,
        measurements=user.measurements,
        created_at=user.created_at,
    )


def user_summary_from_document(user: UserDocument) -> UserSummary:
    return UserSummary(
        id=user.uid,
        name=user.name or DEFAULT_USER_NAME,
        email=user.email,
        avatar_url=user.avatar_url,
        role=role_of(user),
    )


def athlete_details_from_document(user: UserDocument, workouts) -> AthleteDetails:
    return AthleteDetails(
        id=user.uid,
        name=user.name or DEFAULT_USER_NAME,
        email=user.email,
        avatar_url=user.avatar_url,
        goal=user.goal,
        onboarding_completed=bool(user.onboarding_completed),
        coach_id=user.coach_id,
        created_at=user.created_at,
        recent_workouts=[workout_from_document(w) for w in workouts],
    )


def exercise_from_document(exercise: ExerciseDocument) -> Exercise:
    return Exercise(
        id=exercise.uid,
        coach_id=exercise.coach_id,
        name=exercise.name,
        description=exercise.description,
        muscle_groups=exercise.muscle_groups,
        specific_muscles=exercise.specific_muscles,
        image_url=exercise.image_url,
        video_url=exercise.video_url,
        created_at=exercise.created_at,
        updated_at=exercise.updated_at,
    )


def routine_from_document(routine: RoutineDocument) -> Routine:
    return Routine(
        id=routine.uid,
        name=routine.name,
        description=routine.description,
        coach_id=routine.coach_id,
        athlete_id=routine.athlete_id,
        active=routine.active,
        original_routine_id=routine.original_routine_id,
        schedule=routine.schedule,
        created_at=routine.created_at,
        updated_at=routine.updated_at,
    )


def workout_from_document(workout: WorkoutDocument) -> WorkoutSummary:
    return WorkoutSummary(
        id=workout.uid,
        user_id=workout.user_id,
        routine_id=workout.routine_id,
        routine_name=workout.routine_name,
        completed_at=workout.completed_at,
        duration_seconds=workout.duration_seconds,
        total_volume=workout.total_volume,
        session_rpe=workout.session_rpe,
        notes=workout.notes,
        exercises=workout.exercises,
    )


def notification_from_document(notification: NotificationDocument) -> Notification:
    return Notification(
        id=notification.uid,
        recipient_id=notification.recipient_id,
        kind=notification.kind,
        title=notification.title,
        message=notification.message,
        athlete_id=notification.athlete_id,
        read=notification.read,
        created_at=notification.created_at,
    )


def measurement_from_document(entry: BodyMeasurementDocument) -> BodyMeasurementLog:
    return BodyMeasurementLog(
        id=entry.uid,
        user_id=entry.user_id,
        date=entry.date,
        notes=entry.notes,
        created_at=entry.created_at,
        **entry.measurements.model_dump(),
    )


def assignment_from_document(assignment: ScheduleAssignmentDocument) -> Assignment:
    return Assignment(
        id=assignment.uid,
        athlete_id=assignment.athlete_id,
        routine_id=assignment.routine_id,
        original_routine_id=assignment.original_routine_id,
        day_id=assignment.day_id,
        date=assignment.date,
        routine_name=assignment.routine_name,
        day_name=assignment.day_name,
        assigned_by=assignment.assigned_by,
        created_at=assignment.created_at,
    )
