# tests/conftest.py
import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="conference-api-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TMP_DIR}/test.db"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["GEOCODING_ENABLED"] = "false"
os.environ.pop("REDIS_URL", None)

import httpx
import pytest

from conference_api.auth import create_user
from conference_api.content import ContentService
from conference_api.database import async_session, drop_db, init_db
from conference_api.geocoding import get_geocoder
from conference_api.main import app
from conference_api.models import Role

from tests.helpers import (
    StubGeocoder,
    article_fields,
    conference_fields,
    principal_of,
    track_fields,
)


@pytest.fixture(autouse=True)
async def database():
    await drop_db()
    await init_db()
    yield


@pytest.fixture
async def session():
    async with async_session() as session:
        yield session


@pytest.fixture
def geocoder():
    return StubGeocoder()


@pytest.fixture
def content(session, geocoder):
    return ContentService(session, geocoder=geocoder)


@pytest.fixture
async def client(geocoder):
    app.dependency_overrides[get_geocoder] = lambda: geocoder
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
async def admin(session):
    return await create_user(session, "Admin", "admin@example.org", "adminpass", role=Role.ADMIN)


@pytest.fixture
async def alice(session):
    return await create_user(session, "Alice", "alice@example.org", "alicepass")


@pytest.fixture
async def bob(session):
    return await create_user(session, "Bob", "bob@example.org", "bobpass1")


@pytest.fixture
async def conference(content, admin):
    return await content.create_conference(principal_of(admin), conference_fields())


@pytest.fixture
async def track(content, admin, conference):
    return await content.create_track(principal_of(admin), conference.id, track_fields())


@pytest.fixture
async def article(content, admin, conference, track):
    return await content.create_article(principal_of(admin), conference.id, track.id, article_fields())
