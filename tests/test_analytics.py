"""Tests for athlete progress analytics."""

from datetime import timedelta

from coachhub.models.mongodb import RoutineDocument, UserDocument
from coachhub.schemas.routine import RoutineDay
from coachhub.schemas.workout import LoggedExercise, LoggedSet
from coachhub.services.analytics import (
    get_personal_records,
    get_strength_progress,
    get_weekly_activity,
    get_weekly_progress,
    personal_records,
    strength_progress,
)
from coachhub.services.coach_stats import WEEKDAY_LABELS
from coachhub.services.training import log_workout
from tests.factories import bench_press, make_workout


def lift(name, reps, weight, rpe=None, completed=True) -> LoggedExercise:
    return LoggedExercise(
        exercise_id=name.lower(),
        exercise_name=name,
        sets=[LoggedSet(reps=reps, weight=weight, rpe=rpe, completed=completed)],
    )


class TestWeeklyActivity:

    async def test_volume_on_todays_weekday(self, athlete_session, now):
        await make_workout(
            athlete_session.id, now,
            exercises=[bench_press((10, 100, 8)), bench_press((10, 80, 8), completed=False)],
        ).insert()

        result = await get_weekly_activity(athlete_session)

        assert [p.name for p in result.activity] == WEEKDAY_LABELS
        totals = {p.name: p.total for p in result.activity}
        assert totals[WEEKDAY_LABELS[now.weekday()]] == 1000
        assert sum(totals.values()) == 1000

    async def test_last_week_is_ignored(self, athlete_session, now):
        await make_workout(athlete_session.id, now - timedelta(days=8), exercises=[bench_press((5, 100, 8))]).insert()

        result = await get_weekly_activity(athlete_session)

        assert all(p.total == 0 for p in result.activity)

    async def test_logging_refreshes_activity(self, athlete_session, now):
        await get_weekly_activity(athlete_session)

        await log_workout(athlete_session, {
            "routine_name": "Torso",
            "exercises": [{"exercise_id": "bench-press", "exercise_name": "Press Banca",
                           "sets": [{"reps": 8, "weight": 50}]}],
        })

        result = await get_weekly_activity(athlete_session)
        assert sum(p.total for p in result.activity) == 400

    async def test_athlete_cannot_read_others(self, athlete_session, other_athlete_session):
        result = await get_weekly_activity(athlete_session, other_athlete_session.id)
        assert result.to_response() == {"success": False, "error": "No autorizado"}

    async def test_coach_reads_athlete(self, coach_session, athlete_session, now):
        await make_workout(athlete_session.id, now, exercises=[bench_press((2, 50, 8))]).insert()

        result = await get_weekly_activity(coach_session, athlete_session.id)

        assert sum(p.total for p in result.activity) == 100


class TestWeeklyProgress:

    async def test_default_target(self, users, athlete_session, now):
        await make_workout(athlete_session.id, now).insert()
        await make_workout(athlete_session.id, now - timedelta(days=8)).insert()

        result = await get_weekly_progress(athlete_session)

        assert result.to_response() == {"success": True, "completed": 1, "target": 3}

    async def test_target_from_available_days(self, users, athlete_session):
        user = await UserDocument.find_one(UserDocument.uid == athlete_session.id)
        user.available_days = 5
        await user.save()

        assert (await get_weekly_progress(athlete_session)).target == 5

    async def test_target_from_active_routine(self, users, athlete_session):
        await RoutineDocument(
            coach_id="coach-1",
            athlete_id=athlete_session.id,
            name="Torso / Pierna",
            schedule=[RoutineDay(name=f"Día {n}") for n in range(1, 5)],
        ).insert()

        assert (await get_weekly_progress(athlete_session)).target == 4


class TestPersonalRecords:

    def test_heaviest_completed_set_per_exercise(self, now):
        workouts = [
            make_workout("athlete-1", now, exercises=[
                lift("Press Banca", 3, 105), lift("Sentadilla", 5, 140), lift("Remo", 8, 80),
            ]),
            make_workout("athlete-1", now - timedelta(days=2), exercises=[
                lift("Press Banca", 5, 100), lift("Peso Muerto", 3, 180), lift("Sentadilla", 1, 200, completed=False),
            ]),
        ]

        records = personal_records(workouts)

        assert [(r.exercise, r.weight) for r in records] == [
            ("Peso Muerto", 180), ("Sentadilla", 140), ("Press Banca", 105),
        ]

    def test_bodyweight_sets_are_ignored(self, now):
        workouts = [make_workout("athlete-1", now, exercises=[lift("Dominadas", 10, 0)])]
        assert personal_records(workouts) == []

    async def test_envelope(self, athlete_session, now):
        await make_workout(athlete_session.id, now, exercises=[lift("Press Banca", 3, 105)]).insert()

        result = await get_personal_records(athlete_session)

        assert len(result.records) == 1
        payload = result.to_response()
        assert payload["records"][0]["exercise"] == "Press Banca"
        assert isinstance(payload["records"][0]["date"], str)


class TestStrengthProgress:

    def test_fewer_than_two_workouts(self, now):
        assert strength_progress([]) == 0
        assert strength_progress([make_workout("athlete-1", now, exercises=[lift("Press Banca", 5, 100)])]) == 0

    def test_percent_change_between_halves(self, now):
        newer = make_workout("athlete-1", now, exercises=[lift("Press Banca", 10, 100, rpe=10)])
        older = make_workout("athlete-1", now - timedelta(days=7), exercises=[lift("Press Banca", 10, 90, rpe=10)])

        assert strength_progress([newer, older]) == 11.1

    def test_older_half_without_load(self, now):
        newer = make_workout("athlete-1", now, exercises=[lift("Press Banca", 5, 100)])
        older = make_workout("athlete-1", now - timedelta(days=7), exercises=[lift("Dominadas", 10, 0)])

        assert strength_progress([newer, older]) == 100

    async def test_envelope_uses_newest_first(self, athlete_session, now):
        await make_workout(athlete_session.id, now - timedelta(days=7),
                           exercises=[lift("Press Banca", 10, 90, rpe=10)]).insert()
        await make_workout(athlete_session.id, now, exercises=[lift("Press Banca", 10, 100, rpe=10)]).insert()

        result = await get_strength_progress(athlete_session)

        assert result.to_response() == {"success": True, "progress": 11.1}

    async def test_anonymous_is_denied(self):
        assert (await get_strength_progress(None)).error == "No autorizado"
