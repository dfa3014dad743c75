"""Tests for body measurement logging and history."""

from datetime import timedelta

from coachhub.models.mongodb import UserDocument
from coachhub.services.measurements import get_body_measurements_history, log_body_measurements
from coachhub.services.users import get_profile


class TestLogBodyMeasurements:

    async def test_log_entry(self, users, athlete_session):
        result = await log_body_measurements(
            athlete_session, {"weight": 61.5, "waist": 70, "biceps_left": 29, "notes": "mañana"}
        )

        assert result.success is True
        assert result.measurement.user_id == athlete_session.id
        assert result.measurement.waist == 70
        assert result.measurement.biceps_left == 29
        assert result.measurement.notes == "mañana"

    async def test_updates_profile_snapshot_and_weight(self, users, athlete_session):
        await get_profile(athlete_session)

        await log_body_measurements(athlete_session, {"weight": 61.5, "hips": 95})

        profile = (await get_profile(athlete_session)).user
        assert profile.weight == 61.5
        assert profile.measurements.hips == 95

    async def test_without_weight_keeps_profile_weight(self, users, athlete_session):
        user = await UserDocument.find_one(UserDocument.uid == athlete_session.id)
        user.weight = 60
        await user.save()

        await log_body_measurements(athlete_session, {"waist": 71})

        stored = await UserDocument.find_one(UserDocument.uid == athlete_session.id)
        assert stored.weight == 60
        assert stored.measurements.waist == 71

    async def test_negative_value_is_rejected(self, users, athlete_session):
        result = await log_body_measurements(athlete_session, {"waist": -1})
        assert result.to_response() == {"success": False, "error": "Datos inválidos"}

    async def test_body_fat_above_hundred_is_rejected(self, users, athlete_session):
        result = await log_body_measurements(athlete_session, {"body_fat": 120})
        assert result.error == "Datos inválidos"

    async def test_unknown_field_is_rejected(self, users, athlete_session):
        result = await log_body_measurements(athlete_session, {"user_id": "athlete-2", "waist": 70})
        assert result.error == "Datos inválidos"

    async def test_anonymous_is_denied(self):
        assert (await log_body_measurements(None, {"waist": 70})).error == "No autorizado"


class TestMeasurementHistory:

    async def test_oldest_first(self, users, athlete_session, now):
        await log_body_measurements(athlete_session, {"waist": 70, "date": (now - timedelta(days=1)).isoformat()})
        await log_body_measurements(athlete_session, {"waist": 72, "date": (now - timedelta(days=30)).isoformat()})

        result = await get_body_measurements_history(athlete_session)

        assert [m.waist for m in result.measurements] == [72, 70]

    async def test_new_entry_refreshes_history(self, users, athlete_session):
        assert (await get_body_measurements_history(athlete_session)).measurements == []

        await log_body_measurements(athlete_session, {"chest": 90})

        result = await get_body_measurements_history(athlete_session)
        assert len(result.measurements) == 1
        assert result.measurements[0].chest == 90

    async def test_coach_reads_athlete_history(self, users, coach_session, athlete_session):
        await log_body_measurements(athlete_session, {"waist": 70})

        result = await get_body_measurements_history(coach_session, athlete_session.id)

        assert len(result.measurements) == 1

    async def test_athlete_cannot_read_others(self, users, athlete_session, other_athlete_session):
        await log_body_measurements(athlete_session, {"waist": 70})

        result = await get_body_measurements_history(other_athlete_session, athlete_session.id)

        assert result.to_response() == {"success": False, "error": "No autorizado para ver estos datos"}

    async def test_explicit_own_id(self, users, athlete_session):
        await log_body_measurements(athlete_session, {"waist": 70})

        result = await get_body_measurements_history(athlete_session, athlete_session.id)

        assert len(result.measurements) == 1
