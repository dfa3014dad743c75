"""Tests for workout logging and the progression heuristic."""

from datetime import datetime, timedelta, timezone

from coachhub.models.mongodb import NotificationDocument, WorkoutDocument
from coachhub.services.notifications import list_notifications
from coachhub.services.training import (
    get_progression_suggestion,
    log_workout,
    session_volume,
    suggest_progression,
)
from coachhub.schemas.workout import LoggedSet
from tests.factories import bench_press, make_workout


WORKOUT = {
    "routine_name": "Torso",
    "duration_seconds": 3900,
    "session_rpe": 8,
    "exercises": [
        {
            "exercise_id": "bench-press",
            "exercise_name": "Press Banca",
            "sets": [
                {"reps": 8, "weight": 80, "rpe": 8},
                {"reps": 6, "weight": 85, "rpe": 9},
                {"reps": 10, "weight": 100, "completed": False},
            ],
        }
    ],
}


class TestLogWorkout:

    async def test_volume_counts_completed_sets_only(self, athlete_session):
        result = await log_workout(athlete_session, WORKOUT)

        assert result.success is True
        assert result.workout.total_volume == 8 * 80 + 6 * 85
        assert result.workout.user_id == athlete_session.id

    async def test_explicit_volume_is_kept(self, athlete_session):
        result = await log_workout(athlete_session, {**WORKOUT, "total_volume": 5000})
        assert result.workout.total_volume == 5000

    async def test_completed_at_defaults_to_now(self, athlete_session, now):
        result = await log_workout(athlete_session, WORKOUT)
        assert abs(result.workout.completed_at - now) < timedelta(minutes=1)

    async def test_aware_completed_at_is_stored_as_utc(self, athlete_session):
        completed_at = datetime(2024, 3, 1, 10, 0, tzinfo=timezone(timedelta(hours=2)))

        result = await log_workout(athlete_session, {**WORKOUT, "completed_at": completed_at.isoformat()})

        stored = await WorkoutDocument.find_one(WorkoutDocument.uid == result.workout.id)
        assert stored.completed_at == datetime(2024, 3, 1, 8, 0)

    async def test_invalid_payload(self, athlete_session):
        result = await log_workout(athlete_session, {"duration_seconds": -5})
        assert result.to_response() == {"success": False, "error": "Datos inválidos"}
        assert await WorkoutDocument.count() == 0

    async def test_unknown_fields_are_rejected(self, athlete_session):
        result = await log_workout(athlete_session, {**WORKOUT, "user_id": "someone-else"})
        assert result.error == "Datos inválidos"

    async def test_anonymous_is_denied(self):
        result = await log_workout(None, WORKOUT)
        assert result.error == "No autorizado"
        assert await WorkoutDocument.count() == 0

    async def test_linked_coach_is_notified(self, users, athlete_session, coach_session):
        assert (await list_notifications(coach_session)).notifications == []

        await log_workout(athlete_session, WORKOUT)

        result = await list_notifications(coach_session)
        assert len(result.notifications) == 1
        notification = result.notifications[0]
        assert notification.athlete_id == athlete_session.id
        assert notification.kind == "workout_completed"
        assert "Lucía" in notification.message

    async def test_unlinked_athlete_notifies_nobody(self, users, other_athlete_session):
        result = await log_workout(other_athlete_session, WORKOUT)

        assert result.success is True
        assert await NotificationDocument.count() == 0


class TestProgression:

    def test_low_rpe_adds_load(self, now):
        suggestion = suggest_progression("bench-press", LoggedSet(reps=8, weight=80, rpe=7), now)

        assert suggestion.suggested_weight == 82.5
        assert suggestion.reason == "RPE bajo: sube la carga"

    def test_high_rpe_keeps_load(self, now):
        suggestion = suggest_progression("bench-press", LoggedSet(reps=8, weight=80, rpe=8.5), now)

        assert suggestion.suggested_weight == 80
        assert suggestion.reason == "Mantén la carga"

    def test_missing_rpe_reads_as_eight(self, now):
        suggestion = suggest_progression("bench-press", LoggedSet(reps=8, weight=80), now)

        assert suggestion.last_rpe == 8
        assert suggestion.suggested_weight == 80

    async def test_uses_top_set_of_latest_session(self, athlete_session, now):
        await make_workout(
            athlete_session.id, now - timedelta(days=7),
            exercises=[bench_press((8, 90, 6))],
        ).insert()
        await make_workout(
            athlete_session.id, now - timedelta(days=1),
            exercises=[bench_press((8, 70, 9), (6, 80, 6))],
        ).insert()

        result = await get_progression_suggestion(athlete_session, "bench-press")

        assert result.success is True
        assert result.suggestion.last_weight == 80
        assert result.suggestion.suggested_weight == 82.5

    async def test_skips_sessions_without_completed_sets(self, athlete_session, now):
        await make_workout(
            athlete_session.id, now - timedelta(days=3),
            exercises=[bench_press((5, 100, 9))],
        ).insert()
        await make_workout(
            athlete_session.id, now,
            exercises=[bench_press((5, 120, 6), completed=False)],
        ).insert()

        result = await get_progression_suggestion(athlete_session, "bench-press")

        assert result.suggestion.last_weight == 100

    async def test_no_history(self, athlete_session, other_athlete_session, now):
        await make_workout(other_athlete_session.id, now, exercises=[bench_press((8, 80, 6))]).insert()

        result = await get_progression_suggestion(athlete_session, "bench-press")

        assert result.to_response() == {"success": True, "suggestion": None}


def test_session_volume_ignores_incomplete_sets():
    exercises = [bench_press((10, 50, 7)), bench_press((10, 100, 7), completed=False)]
    assert session_volume(exercises) == 500
