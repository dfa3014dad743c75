"""
CoachHub API - MongoDB Models Package.

Export all Beanie ODM models for MongoDB operations.
"""

from coachhub.models.mongodb import (
    UserDocument,
    ExerciseDocument,
    RoutineDocument,
    WorkoutDocument,
    NotificationDocument,
    BodyMeasurementDocument,
    ScheduleAssignmentDocument,
    DOCUMENT_MODELS,
)

__all__ = [
    "UserDocument",
    "ExerciseDocument",
    "RoutineDocument",
    "WorkoutDocument",
    "NotificationDocument",
    "BodyMeasurementDocument",
    "ScheduleAssignmentDocument",
    "DOCUMENT_MODELS",
]
