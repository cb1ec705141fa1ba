# tests/helpers.py
from datetime import datetime, timezone

from conference_api.auth import create_access_token
from conference_api.policy import Principal
from conference_api.schemas import ArticleIn, ConferenceIn, TrackIn


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


def principal_of(user):
    return Principal(id=user.id, role=user.role)


def auth_headers(user):
    token = create_access_token(data={"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


def conference_fields(**overrides):
    fields = dict(
        name="PyCon",
        latitude=38.7223,
        longitude=-9.1393,
        start_date=utc(2025, 3, 1, 8),
        end_date=utc(2025, 3, 3, 18),
        description="Python conference",
    )
    fields.update(overrides)
    return ConferenceIn(**fields)


def track_fields(**overrides):
    fields = dict(name="Main hall", room="A1", description="Keynotes")
    fields.update(overrides)
    return TrackIn(**fields)


def article_fields(**overrides):
    fields = dict(
        title="Quantum Computing",
        authors="A. Smith",
        abstract="Qubits for everyone",
        start_date=utc(2025, 3, 1, 9),
        end_date=utc(2025, 3, 1, 10),
    )
    fields.update(overrides)
    return ArticleIn(**fields)


class StubGeocoder:
    def __init__(self, city="Lisbon"):
        self.city = city
        self.calls = []

    async def city_for(self, latitude, longitude):
        self.calls.append((latitude, longitude))
        return self.city
