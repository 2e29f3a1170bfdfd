import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from typing import Callable, Dict, Generator
from datetime import datetime
from faker import Faker

from pomotrack import config

config.AUTH_JWT_SECRET = "test_secret_key_for_testing_only"
config.AUTH_JWT_AUDIENCE = None

from pomotrack.main import app
from pomotrack.database import get_db
from pomotrack.api.deps import get_classifier, get_clock
from pomotrack.models.models import Base, ScheduledSession, SessionTemplate, TimerSession
from pomotrack.services.auth_service import create_access_token
from pomotrack.utils.clock import FixedClock

# Single shared in-memory database; tables are rebuilt for every test
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Sunday 2026-10-18, 09:30 UTC
NOW = datetime(2026, 10, 18, 9, 30, 0)

fake = Faker()


class StubClassifier:
    """Deterministic stand-in for the sentiment classifier"""

    def __init__(self, label: str = "POSITIVE", score: float = 0.91):
        self.label = label
        self.score = score
        self.calls = []

    def classify(self, text: str):
        self.calls.append(text)
        return self.label, self.score


@pytest.fixture
def db() -> Generator:
    """Get test database session"""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def classifier() -> StubClassifier:
    return StubClassifier()


@pytest.fixture
def client(db, clock, classifier) -> TestClient:
    """Get test client with database, clock and classifier overrides"""
    def override_get_db_for_test():
        try:
            yield db
        finally:
            pass  # Let the db fixture handle cleanup

    app.dependency_overrides[get_db] = override_get_db_for_test
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_classifier] = lambda: classifier
    yield TestClient(app)
    app.dependency_overrides.clear()


def _make_user() -> Dict:
    user_id = fake.uuid4()
    access_token = create_access_token(data={"sub": user_id, "email": fake.email()})
    return {
        "user_id": user_id,
        "access_token": access_token,
        "headers": {"Authorization": f"Bearer {access_token}"}
    }


@pytest.fixture
def test_user() -> Dict:
    """An identity-provider user with a valid bearer token"""
    return _make_user()


@pytest.fixture
def test_user2() -> Dict:
    """A second user for testing user isolation"""
    return _make_user()


@pytest.fixture
def make_timer_session(db) -> Callable[..., TimerSession]:
    """Insert a timer session directly, bypassing the service"""
    def _make(user_id: str, start_time: datetime = NOW, **fields) -> TimerSession:
        values = {
            "duration_minutes": 25,
            "phase": "focus",
            "current_cycle": 0,
            "target_cycles": 4,
            "completed": True,
            "paused": False,
            "start_time": start_time,
            "created_at": start_time,
        }
        values.update(fields)
        session = TimerSession(user_id=user_id, **values)
        db.add(session)
        db.commit()
        db.refresh(session)
        return session
    return _make


@pytest.fixture
def make_template(db) -> Callable[..., SessionTemplate]:
    def _make(user_id: str, name: str = "Deep Work", focus_duration: int = 50, break_duration: int = 10) -> SessionTemplate:
        template = SessionTemplate(
            user_id=user_id,
            name=name,
            focus_duration=focus_duration,
            break_duration=break_duration,
            created_at=NOW,
            updated_at=NOW,
        )
        db.add(template)
        db.commit()
        db.refresh(template)
        return template
    return _make


@pytest.fixture
def make_scheduled_session(db) -> Callable[..., ScheduledSession]:
    def _make(user_id: str, start_datetime: datetime, **fields) -> ScheduledSession:
        values = {"duration_min": None, "title": None, "template_id": None, "completed": False}
        values.update(fields)
        entry = ScheduledSession(user_id=user_id, start_datetime=start_datetime, created_at=NOW, **values)
        db.add(entry)
        db.commit()
        db.refresh(entry)
        return entry
    return _make
