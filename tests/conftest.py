"""Shared fixtures: an app over in-memory SQLite and seeded sessions."""

from __future__ import annotations

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from sbx_fantasy.app import create_app
from sbx_fantasy.core import ADMIN_EMAIL, ADMIN_PASSWORD, build_engine
from sbx_fantasy.models import Athlete, Race

API = "/api"


@pytest.fixture
def app():
    return create_app(database_url="sqlite://", api_prefix=API)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def _auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client):
    response = client.post(
        f"{API}/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 200, response.text
    return _auth(response.json()["token"])


@pytest.fixture
def user_headers(client):
    response = client.post(
        f"{API}/auth/register",
        json={"email": "a@x.com", "password": "pw123", "name": "Alex"},
    )
    assert response.status_code == 200, response.text
    return _auth(response.json()["token"])


# ── Service-level fixtures ───────────────────────────────────────────────────


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def seeded(db_session):
    """Three athletes and one race; returns ``(race_id, [athlete ids])``."""

    athletes = [
        Athlete(name="Jane Doe", country="USA"),
        Athlete(name="Eva Adams", country="AUT"),
        Athlete(name="Lina Berg", country="SWE"),
    ]
    race = Race(name="Cervinia SBX")
    db_session.add_all([*athletes, race])
    db_session.commit()
    for row in [*athletes, race]:
        db_session.refresh(row)
    return race.id, [athlete.id for athlete in athletes]
