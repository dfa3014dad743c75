"""Tests for the coach dashboard statistics."""

from datetime import timedelta

from coachhub.services.coach_stats import WEEKDAY_LABELS, get_coach_stats, weekly_chart
from coachhub.services.exercises import create_exercise
from coachhub.services.routines import save_routine
from coachhub.services.training import log_workout
from coachhub.utils.dates import start_of_week
from tests.factories import bench_press, make_workout


class TestCoachStats:

    async def test_counts(self, users, coach_session, other_coach_session):
        await save_routine(coach_session, {"name": "A"})
        await save_routine(coach_session, {"name": "B"})
        await save_routine(other_coach_session, {"name": "C"})
        await create_exercise(coach_session, {"name": "Remo", "muscle_groups": ["espalda"]})

        result = await get_coach_stats(coach_session)

        assert result.success is True
        assert result.stats.total_athletes == 2
        assert result.stats.total_routines == 2
        assert result.stats.total_exercises == 1

    async def test_weekly_volume_covers_current_week_only(self, coach_session):
        monday = start_of_week()
        await make_workout(
            "athlete-1", monday + timedelta(hours=10), exercises=[bench_press((10, 100, 8))]
        ).insert()
        await make_workout(
            "athlete-2", monday + timedelta(hours=11), exercises=[bench_press((5, 100, 8))]
        ).insert()
        await make_workout(
            "athlete-1", monday - timedelta(hours=1), exercises=[bench_press((10, 999, 8))]
        ).insert()

        result = await get_coach_stats(coach_session)

        assert result.stats.weekly_volume == 1500
        chart = result.stats.weekly_chart_data
        assert [point.name for point in chart] == WEEKDAY_LABELS
        assert chart[0].total == 1500
        assert sum(point.total for point in chart[1:]) == 0

    async def test_stored_total_volume_is_ignored(self, coach_session):
        exercises = [bench_press((10, 50, 8)), bench_press((10, 80, 8), completed=False)]
        await make_workout(
            "athlete-1", start_of_week() + timedelta(hours=9), total_volume=99999, exercises=exercises
        ).insert()

        result = await get_coach_stats(coach_session)

        assert result.stats.weekly_volume == 500

    async def test_non_coach_is_denied(self, athlete_session):
        assert (await get_coach_stats(athlete_session)).error == "No autorizado"

    async def test_coach_mutation_refreshes_stats(self, coach_session):
        before = await get_coach_stats(coach_session)
        assert before.stats.total_routines == 0

        await save_routine(coach_session, {"name": "Nueva"})

        after = await get_coach_stats(coach_session)
        assert after.stats.total_routines == 1

    async def test_logged_workout_refreshes_stats(self, users, coach_session, athlete_session):
        before = await get_coach_stats(coach_session)

        await log_workout(athlete_session, {
            "exercises": [{
                "exercise_id": "bench-press",
                "exercise_name": "Press Banca",
                "sets": [{"reps": 10, "weight": 75}],
            }],
        })

        after = await get_coach_stats(coach_session)
        assert after.stats.weekly_volume == before.stats.weekly_volume + 750


def test_weekly_chart_is_zero_filled():
    sunday = start_of_week() + timedelta(days=6, hours=9)

    chart = weekly_chart([make_workout("athlete-1", sunday, exercises=[bench_press((3, 100, 8))])])

    assert len(chart) == 7
    assert chart[6].name == "Dom"
    assert chart[6].total == 300
    assert all(point.total == 0 for point in chart[:6])
