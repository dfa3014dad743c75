"""Document builders shared by the test modules."""

from datetime import datetime

from coachhub.models.mongodb import WorkoutDocument
from coachhub.schemas.workout import LoggedExercise, LoggedSet


def make_workout(
    user_id: str,
    completed_at: datetime,
    duration_seconds: int = 3600,
    total_volume: float = 1000,
    exercises=None,
    routine_name: str = "Torso / Pierna",
) -> WorkoutDocument:
    return WorkoutDocument(
        user_id=user_id,
        routine_name=routine_name,
        completed_at=completed_at,
        duration_seconds=duration_seconds,
        total_volume=total_volume,
        exercises=exercises or [],
    )


def bench_press(*sets, completed: bool = True) -> LoggedExercise:
    """``sets`` are ``(reps, weight, rpe)`` tuples."""
    return LoggedExercise(
        exercise_id="bench-press",
        exercise_name="Press Banca",
        sets=[
            LoggedSet(reps=reps, weight=weight, rpe=rpe, completed=completed)
            for reps, weight, rpe in sets
        ],
    )
