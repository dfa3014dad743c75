"""
Shared fixtures.

MongoDB is replaced by an in-memory mongomock-motor database (fresh per
test) and Redis by a private fakeredis server, so every test starts with an
empty store and an empty cache.
"""

import os

os.environ.setdefault("DATABASE_URL", "mongodb://localhost:27017")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ENV", "test")

from datetime import datetime, timedelta

import fakeredis.aioredis
import pytest
from beanie import init_beanie
from mongomock_motor import AsyncMongoMockClient

from coachhub.models.mongodb import DOCUMENT_MODELS, UserDocument
from coachhub.schemas.user import Role, Session
from coachhub.services.cache import cache_service
from coachhub.utils.dates import utcnow


@pytest.fixture(autouse=True)
async def db():
    """Fresh in-memory database with all document models registered."""
    client = AsyncMongoMockClient()
    database = client["coachhub_test"]
    await init_beanie(database=database, document_models=DOCUMENT_MODELS)
    yield database


@pytest.fixture(autouse=True)
async def redis_client():
    """Private fake Redis wired into the global cache service."""
    client = fakeredis.aioredis.FakeRedis(
        server=fakeredis.FakeServer(),
        decode_responses=True,
    )
    cache_service.configure(client)
    yield client
    await client.flushall()


@pytest.fixture
def coach_session() -> Session:
    return Session(id="coach-1", role=Role.COACH, onboarding_completed=True)


@pytest.fixture
def other_coach_session() -> Session:
    return Session(id="coach-2", role=Role.COACH, onboarding_completed=True)


@pytest.fixture
def athlete_session() -> Session:
    return Session(id="athlete-1", role=Role.ATHLETE, onboarding_completed=True)


@pytest.fixture
def other_athlete_session() -> Session:
    return Session(id="athlete-2", role=Role.ATHLETE, onboarding_completed=True)


@pytest.fixture
def admin_session() -> Session:
    return Session(id="admin-1", role=Role.ADMIN, onboarding_completed=True)


@pytest.fixture
async def users(coach_session, athlete_session, other_athlete_session):
    """One coach, two athletes (one linked to the coach) and a legacy user without role."""
    documents = [
        UserDocument(uid=coach_session.id, name="Coach Demo", email="coach@example.com", role="coach"),
        UserDocument(
            uid=athlete_session.id,
            name="Lucía",
            email="lucia@example.com",
            role="athlete",
            onboarding_completed=True,
            coach_id=coach_session.id,
        ),
        UserDocument(uid=other_athlete_session.id, name="Marco", email="marco@example.com", role="athlete"),
        UserDocument(uid="legacy-1", email="legacy@example.com"),
    ]
    for document in documents:
        await document.insert()
    return documents


@pytest.fixture
def now() -> datetime:
    return utcnow()


@pytest.fixture
def this_month(now) -> datetime:
    """A moment safely inside the current month and not in the future."""
    start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    return max(start, now - timedelta(minutes=5))
