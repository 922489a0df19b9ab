"""Shared pytest fixtures: an in-memory database, services and an HTTP client."""

import pytest
from argon2 import PasswordHasher
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from taskboard.auth import passwords
from taskboard.auth.identity import Identity
from taskboard.auth.rate_limit import LoginThrottle
from taskboard.database import Base, get_db
from taskboard.main import create_app
from taskboard.models.task import Task
from taskboard.models.user import User
from taskboard.schemas.user import SignupRequest
from taskboard.services.auth_service import AuthService

DEFAULT_PASSWORD = 'secret123'


@pytest.fixture(autouse=True)
def fast_password_hasher(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(passwords, '_password_hasher', PasswordHasher(time_cost=1, memory_cost=1024, parallelism=1))


@pytest.fixture
def engine():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine, tables=[User.__table__, Task.__table__])
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine, tables=[Task.__table__, User.__table__])
        engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    """Sign a user up through AuthService and return their Identity."""

    def _make_user(email: str, role: str = 'student', teacher_id: str | None = None) -> Identity:
        result = AuthService(db).signup(
            SignupRequest(email=email, password=DEFAULT_PASSWORD, role=role, teacher_id=teacher_id)
        )
        return Identity(
            id=result.user.id,
            email=result.user.email,
            role=result.user.role,
            teacher_id=result.user.teacher_id,
        )

    return _make_user


@pytest.fixture
def app(session_factory):
    application = create_app(login_throttle=LoginThrottle(max_attempts=5, window_seconds=900))

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest.fixture
def client(app):
    return TestClient(app)
