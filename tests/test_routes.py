"""
Tests for the HTTP layer: media upload credentials, bearer session
extraction, the dashboard fan-out, the profile, measurement, analytics and
schedule routers and the health endpoint.
"""

import hashlib
import hmac
import time

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from settings import settings
from coachhub.models.mongodb import RoutineDocument
from coachhub.routes import analytics, athletes, dashboard, measurements, media, schedule
from coachhub.routes import users as user_routes
from coachhub.schemas.envelope import failure
from coachhub.services.auth import create_access_token


@pytest.fixture
def media_client() -> TestClient:
    app = FastAPI()
    app.include_router(media.router, prefix="/api")
    return TestClient(app)


@pytest.fixture
def athletes_client() -> TestClient:
    app = FastAPI()
    app.include_router(athletes.router, prefix="/api/athletes")
    return TestClient(app)


@pytest.fixture
def api_client() -> TestClient:
    app = FastAPI()
    app.include_router(user_routes.router, prefix="/api/users")
    app.include_router(measurements.router, prefix="/api/measurements")
    app.include_router(analytics.router, prefix="/api/analytics")
    app.include_router(schedule.router, prefix="/api/schedule")
    return TestClient(app)


# ---------------------------------------------------------------------------
# Media upload credentials
# ---------------------------------------------------------------------------

class TestImageKitAuth:

    def test_missing_private_key_is_500(self, media_client, monkeypatch):
        monkeypatch.setattr(settings, "IMAGEKIT_PRIVATE_KEY", None)

        response = media_client.get("/api/imagekit-auth")

        assert response.status_code == 500
        assert response.json() == {"error": "Configuración de ImageKit no disponible"}

    def test_credentials_are_signed(self, media_client, monkeypatch):
        monkeypatch.setattr(settings, "IMAGEKIT_PRIVATE_KEY", "private_test_key")
        before = int(time.time())

        response = media_client.get("/api/imagekit-auth")

        assert response.status_code == 200
        body = response.json()
        assert set(body) == {"token", "expire", "signature"}
        assert len(body["token"]) == 64
        int(body["token"], 16)
        assert before + 600 <= body["expire"] <= int(time.time()) + 600
        expected = hmac.new(
            b"private_test_key",
            f"{body['token']}{body['expire']}".encode(),
            hashlib.sha1,
        ).hexdigest()
        assert body["signature"] == expected

    def test_tokens_are_unique(self, media_client, monkeypatch):
        monkeypatch.setattr(settings, "IMAGEKIT_PRIVATE_KEY", "private_test_key")

        first = media_client.get("/api/imagekit-auth").json()
        second = media_client.get("/api/imagekit-auth").json()

        assert first["token"] != second["token"]

    def test_unexpected_failure_is_500(self, media_client, monkeypatch):
        def explode(private_key):
            raise RuntimeError("entropy exhausted")

        monkeypatch.setattr(media, "issue_upload_credentials", explode)

        response = media_client.get("/api/imagekit-auth")

        assert response.status_code == 500
        assert response.json() == {"error": "Error al generar credenciales de subida"}


# ---------------------------------------------------------------------------
# Bearer session extraction
# ---------------------------------------------------------------------------

class TestBearerSession:

    def test_missing_token_gets_authorization_failure(self, athletes_client):
        response = athletes_client.get("/api/athletes")

        assert response.status_code == 200
        assert response.json() == {"success": False, "error": "No autorizado"}

    def test_invalid_token_gets_authorization_failure(self, athletes_client):
        response = athletes_client.get(
            "/api/athletes", headers={"Authorization": "Bearer not-a-jwt"}
        )
        assert response.json() == {"success": False, "error": "No autorizado"}

    def test_athlete_token_is_denied_coach_listing(self, athletes_client):
        token = create_access_token({"sub": "athlete-1", "role": "athlete"})

        response = athletes_client.get(
            "/api/athletes", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.json() == {"success": False, "error": "No autorizado"}


# ---------------------------------------------------------------------------
# Dashboard fan-out
# ---------------------------------------------------------------------------

class TestDashboard:

    async def test_coach_sections(self, users, coach_session):
        body = await dashboard.dashboard(session=coach_session)

        assert body["role"] == "coach"
        assert body["stats"]["success"] is True
        assert body["athletes"]["success"] is True
        assert body["notifications"] == {"success": True, "notifications": []}

    async def test_athlete_sections(self, users, athlete_session):
        body = await dashboard.dashboard(session=athlete_session)

        assert body["role"] == "athlete"
        assert body["stats"]["stats"]["total_sessions"] == 0
        assert body["history"] == {"success": True, "workouts": []}
        assert body["routine"] == {"success": True, "routine": None}

    async def test_failing_section_does_not_fail_the_others(self, users, coach_session, monkeypatch):
        async def broken_stats(session):
            return failure("Error al cargar estadísticas del coach")

        monkeypatch.setattr(dashboard, "get_coach_stats", broken_stats)

        body = await dashboard.dashboard(session=coach_session)

        assert body["stats"]["success"] is False
        assert body["athletes"]["success"] is True

    async def test_anonymous(self):
        assert await dashboard.dashboard(session=None) == {"success": False, "error": "No autorizado"}


# ---------------------------------------------------------------------------
# Profile, measurements, analytics and schedule
# ---------------------------------------------------------------------------

class TestAnonymousRequests:

    @pytest.mark.parametrize(
        "method, path",
        [
            ("get", "/api/users"),
            ("delete", "/api/users/me/coach"),
            ("get", "/api/measurements"),
            ("get", "/api/analytics/weekly-activity"),
            ("get", "/api/analytics/weekly-progress"),
            ("get", "/api/analytics/personal-records"),
            ("get", "/api/analytics/strength-progress"),
            ("get", "/api/schedule/athlete-1?start=2025-03-01&end=2025-03-31"),
            ("get", "/api/schedule/athlete-1/today"),
        ],
    )
    def test_reads_are_denied(self, api_client, method, path):
        response = getattr(api_client, method)(path)

        assert response.status_code == 200
        assert response.json() == {"success": False, "error": "No autorizado"}

    @pytest.mark.parametrize(
        "path",
        ["/api/users/me/onboarding", "/api/measurements", "/api/schedule/day", "/api/schedule/week",
         "/api/schedule/conflicts"],
    )
    def test_writes_are_denied(self, api_client, path):
        response = api_client.post(path, json={})

        assert response.json() == {"success": False, "error": "No autorizado"}


class TestRouteHandlers:

    async def test_list_users(self, users, admin_session):
        body = await user_routes.all_users(session=admin_session)

        assert body["success"] is True
        assert len(body["users"]) == 4

    async def test_measurements_round_trip(self, users, athlete_session, coach_session):
        logged = await measurements.log_measurements(data={"waist": 70}, session=athlete_session)
        history = await measurements.measurements_history(user_id="athlete-1", session=coach_session)

        assert logged["success"] is True
        assert [m["waist"] for m in history["measurements"]] == [70]

    async def test_weekly_progress(self, users, athlete_session):
        body = await analytics.weekly_progress(user_id=None, session=athlete_session)
        assert body == {"success": True, "completed": 0, "target": 3}

    async def test_plan_day_confirmation_flag(self, users, coach_session):
        routine = RoutineDocument(coach_id=coach_session.id, name="Full Body")
        await routine.insert()
        data = {"athlete_id": "athlete-1", "routine_id": routine.uid, "day_id": "d1", "date": "2025-03-03"}

        first = await schedule.plan_day(data=data, confirm_replace=False, session=coach_session)
        again = await schedule.plan_day(data=data, confirm_replace=False, session=coach_session)
        replaced = await schedule.plan_day(data=data, confirm_replace=True, session=coach_session)

        assert first["assigned"] is True
        assert again["requires_confirmation"] is True
        assert replaced["assigned"] is True


def test_health():
    from main import app

    response = TestClient(app).get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
