"""Tests for session resolution and the role gate."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from coachhub.schemas.user import Role, Session
from coachhub.services.auth import create_access_token
from coachhub.services.session import require_role, resolve_session, session_from_claims


class TestResolveSession:

    def test_valid_token_yields_session(self):
        token = create_access_token({
            "sub": "coach-1",
            "role": "coach",
            "onboarding_completed": True,
            "auth_provider": "google",
        })

        session = resolve_session(token)

        assert session == Session(
            id="coach-1", role=Role.COACH, onboarding_completed=True, auth_provider="google"
        )

    def test_missing_role_claim_means_athlete(self):
        session = session_from_claims({"sub": "user-1"})
        assert session.role == Role.ATHLETE
        assert session.onboarding_completed is False

    def test_unknown_role_invalidates_session(self):
        assert session_from_claims({"sub": "user-1", "role": "superuser"}) is None

    def test_missing_subject_invalidates_session(self):
        assert session_from_claims({"role": "coach"}) is None

    def test_no_token(self):
        assert resolve_session(None) is None
        assert resolve_session("") is None

    def test_garbage_token(self):
        assert resolve_session("not-a-jwt") is None

    def test_expired_token(self):
        token = create_access_token({"sub": "user-1"}, expires_delta=timedelta(seconds=-1))
        assert resolve_session(token) is None

    def test_session_is_immutable(self, athlete_session):
        with pytest.raises(ValidationError):
            athlete_session.role = Role.COACH


class TestRequireRole:

    def test_anonymous_is_denied(self):
        denied = require_role(None)
        assert denied.to_response() == {"success": False, "error": "No autorizado"}

    def test_any_authenticated_identity_passes_without_allowed_roles(self, athlete_session):
        assert require_role(athlete_session) is None

    def test_role_outside_allowed_is_denied(self, athlete_session):
        denied = require_role(athlete_session, {Role.COACH})
        assert denied.success is False
        assert denied.error == "No autorizado"

    def test_allowed_role_passes(self, coach_session, admin_session):
        assert require_role(coach_session, {Role.COACH}) is None
        assert require_role(admin_session, {Role.COACH, Role.ADMIN}) is None
