"""CoachHub API - Pydantic Schemas Package."""

from coachhub.schemas.envelope import Envelope, success, failure
from coachhub.schemas.user import (
    Role,
    Session,
    AthleteSummary,
    UserProfile,
    ProfileUpdate,
    UserSummary,
    OnboardingInput,
)
from coachhub.schemas.routine import (
    RoutineSet,
    RoutineExercise,
    RoutineDay,
    RoutineInput,
    Routine,
)
from coachhub.schemas.exercise import ExerciseInput, Exercise
from coachhub.schemas.workout import (
    LoggedSet,
    LoggedExercise,
    WorkoutInput,
    WorkoutSummary,
    MonthlyStats,
    ProgressionSuggestion,
    WeeklyActivityPoint,
    CoachStats,
    AthleteDetails,
    PersonalRecord,
)
from coachhub.schemas.notification import Notification
from coachhub.schemas.measurement import BodyMeasurements, MeasurementInput, BodyMeasurementLog
from coachhub.schemas.schedule import (
    ScheduledDay,
    AssignmentInput,
    WeekAssignmentInput,
    ConflictQuery,
    DateRange,
    Assignment,
)

__all__ = [
    "Envelope",
    "success",
    "failure",
    "Role",
    "Session",
    "AthleteSummary",
    "UserProfile",
    "ProfileUpdate",
    "UserSummary",
    "OnboardingInput",
    "RoutineSet",
    "RoutineExercise",
    "RoutineDay",
    "RoutineInput",
    "Routine",
    "ExerciseInput",
    "Exercise",
    "LoggedSet",
    "LoggedExercise",
    "WorkoutInput",
    "WorkoutSummary",
    "MonthlyStats",
    "ProgressionSuggestion",
    "WeeklyActivityPoint",
    "CoachStats",
    "AthleteDetails",
    "PersonalRecord",
    "Notification",
    "BodyMeasurements",
    "MeasurementInput",
    "BodyMeasurementLog",
    "ScheduledDay",
    "AssignmentInput",
    "WeekAssignmentInput",
    "ConflictQuery",
    "DateRange",
    "Assignment",
]
