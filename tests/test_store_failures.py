"""Store failures surface as localized error envelopes without internal details."""

from coachhub.models.mongodb import BodyMeasurementDocument, UserDocument, WorkoutDocument
from coachhub.services.athletes import list_athletes
from coachhub.services.history import get_workout_history
from coachhub.services.measurements import log_body_measurements
from coachhub.services.users import list_users


def exploding(*args, **kwargs):
    raise RuntimeError("boom")


class TestReadFailures:

    async def test_history_query_error(self, monkeypatch, athlete_session):
        monkeypatch.setattr(WorkoutDocument, "find", exploding)

        result = await get_workout_history(athlete_session)

        payload = result.to_response()
        assert payload == {"success": False, "error": "Error al obtener historial"}
        assert "boom" not in str(payload)

    async def test_unknown_stored_role_fails_athlete_listing(self, users, coach_session):
        await UserDocument(uid="odd-1", name="Raro", role="superuser").insert()

        result = await list_athletes(coach_session)

        assert result.to_response() == {"success": False, "error": "Error al cargar atletas"}

    async def test_unknown_stored_role_fails_user_listing(self, users, admin_session):
        await UserDocument(uid="odd-1", name="Raro", role="superuser").insert()

        result = await list_users(admin_session)

        assert result.to_response() == {"success": False, "error": "Error al cargar usuarios"}

    async def test_failures_are_not_cached(self, users, coach_session):
        odd = UserDocument(uid="odd-1", name="Raro", role="superuser")
        await odd.insert()
        assert (await list_athletes(coach_session)).success is False

        await odd.delete()

        assert (await list_athletes(coach_session)).success is True


class TestWriteFailures:

    async def test_measurement_insert_error(self, monkeypatch, users, athlete_session):
        async def failing_insert(self, *args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(BodyMeasurementDocument, "insert", failing_insert)

        result = await log_body_measurements(athlete_session, {"waist": 70})

        assert result.to_response() == {"success": False, "error": "Error al guardar medidas"}
        stored = await UserDocument.find_one(UserDocument.uid == athlete_session.id)
        assert stored.measurements is None
