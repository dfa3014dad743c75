"""Tests for the coach exercise library."""

from coachhub.models.mongodb import ExerciseDocument
from coachhub.services.exercises import (
    create_exercise,
    delete_exercise,
    list_exercises,
    update_exercise,
)


SQUAT = {
    "name": "Sentadilla trasera",
    "muscle_groups": ["piernas"],
    "specific_muscles": ["cuádriceps", "glúteo mayor"],
}


class TestExerciseLibrary:

    async def test_create_and_list_sorted_by_name(self, coach_session):
        await create_exercise(coach_session, SQUAT)
        await create_exercise(coach_session, {"name": "Dominadas", "muscle_groups": ["espalda"]})

        result = await list_exercises(coach_session)

        assert [e.name for e in result.exercises] == ["Dominadas", "Sentadilla trasera"]
        assert all(e.coach_id == coach_session.id for e in result.exercises)

    async def test_new_coach_has_empty_library(self, coach_session):
        assert (await list_exercises(coach_session)).to_response() == {"success": True, "exercises": []}

    async def test_libraries_are_private(self, coach_session, other_coach_session):
        await create_exercise(coach_session, SQUAT)

        result = await list_exercises(other_coach_session)

        assert result.exercises == []

    async def test_athlete_is_denied(self, athlete_session):
        assert (await list_exercises(athlete_session)).error == "No autorizado"
        assert (await create_exercise(athlete_session, SQUAT)).error == "No autorizado"

    async def test_muscle_groups_are_required(self, coach_session):
        result = await create_exercise(coach_session, {"name": "Plancha", "muscle_groups": []})

        assert result.to_response() == {"success": False, "error": "Datos inválidos"}
        assert await ExerciseDocument.count() == 0

    async def test_system_fields_cannot_be_set(self, coach_session):
        result = await create_exercise(coach_session, {**SQUAT, "coach_id": "coach-2"})
        assert result.error == "Datos inválidos"


class TestExerciseChanges:

    async def test_update(self, coach_session):
        created = (await create_exercise(coach_session, SQUAT)).exercise
        await list_exercises(coach_session)

        result = await update_exercise(coach_session, created.id, {**SQUAT, "name": "Sentadilla frontal"})

        assert result.updated is True
        listed = await list_exercises(coach_session)
        assert [e.name for e in listed.exercises] == ["Sentadilla frontal"]

    async def test_update_missing(self, coach_session):
        result = await update_exercise(coach_session, "missing", SQUAT)
        assert result.to_response() == {"success": True, "updated": False}

    async def test_update_not_owned(self, coach_session, other_coach_session):
        created = (await create_exercise(coach_session, SQUAT)).exercise

        result = await update_exercise(other_coach_session, created.id, {**SQUAT, "name": "Robada"})

        assert result.error == "No autorizado"
        stored = await ExerciseDocument.find_one(ExerciseDocument.uid == created.id)
        assert stored.name == "Sentadilla trasera"

    async def test_update_validates_before_lookup(self, coach_session):
        result = await update_exercise(coach_session, "missing", {"name": "Sin grupos"})
        assert result.error == "Datos inválidos"

    async def test_delete(self, coach_session):
        created = (await create_exercise(coach_session, SQUAT)).exercise

        assert (await delete_exercise(coach_session, created.id)).deleted is True
        assert (await delete_exercise(coach_session, created.id)).deleted is False
        assert (await list_exercises(coach_session)).exercises == []

    async def test_delete_not_owned(self, coach_session, other_coach_session):
        created = (await create_exercise(coach_session, SQUAT)).exercise

        assert (await delete_exercise(other_coach_session, created.id)).error == "No autorizado"
        assert await ExerciseDocument.count() == 1
