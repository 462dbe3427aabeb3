import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("JWT_ALGORITHM", "HS256")
os.environ.setdefault("JWT_EXPIRES_MINUTES", "60")
os.environ["USE_DB"] = "false"
os.environ.pop("DATABASE_URL", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from airsense.controllers.auth_controller import new_guest_user
from airsense.core.config import get_settings
from airsense.core.db import get_db
from airsense.core.security import create_guest_token
from airsense.main import app
from airsense.models.base import Base
from airsense.models import account_model  # noqa: F401
from airsense.repositories.pollutant_source_repo import PollutantSource, get_pollutant_source
from airsense.repositories.profile_repo import InMemoryProfileStore, get_profile_store


class FakeSource(PollutantSource):
    """Stands in for a live provider: returns canned measurements or raises."""

    name = "fake_live"

    def __init__(self, measurements=None, error=None):
        super().__init__()
        self.measurements = measurements or []
        self.error = error
        self.calls = []

    async def fetch_measurements(self, lat, lng, radius_meters):
        self.calls.append((lat, lng, radius_meters))
        if self.error is not None:
            raise self.error
        return list(self.measurements)


@pytest.fixture()
def anyio_backend():
    return "asyncio"


@pytest.fixture()
def db_session():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def profile_store():
    return InMemoryProfileStore()


@pytest.fixture()
def client(db_session, profile_store):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_profile_store] = lambda: profile_store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def db_mode(monkeypatch):
    monkeypatch.setattr(get_settings(), "use_db", True)


@pytest.fixture()
def use_source():
    def _install(source):
        app.dependency_overrides[get_pollutant_source] = lambda: source
        return source

    return _install


@pytest.fixture()
def guest_user():
    return new_guest_user()


@pytest.fixture()
def guest_headers(guest_user):
    token = create_guest_token(guest_user)
    return {"Authorization": f"Bearer {token}"}


def make_guest_headers(**overrides):
    user = new_guest_user(**overrides)
    token = create_guest_token(user)
    return {"Authorization": f"Bearer {token}"}
