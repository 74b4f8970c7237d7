# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

os.environ.setdefault("JWT_SECRET", "test-secret-key-that-is-at-least-32-chars")
os.environ.setdefault("ADMIN_USERNAME", "admin")
os.environ.setdefault("ADMIN_PASSWORD", "admin-password")

from ballot_box.core.security import hash_password
from ballot_box.core.settings import Settings
from ballot_box.db.session import build_engine, build_session_factory, create_tables, drop_tables
from ballot_box.db.session import get_db as app_get_session
from ballot_box.main import create_app
from ballot_box.models import User
from ballot_box.repositories import SqlUserRepository, SqlVoteRepository
from ballot_box.schemas.auth import Role
from ballot_box.services import AuthService

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "correct-horse"

_USERNAME_COUNTER = count(1)
_TEST_SETTINGS_INSTANCE = Settings(
    JWT_SECRET="test-secret-key-that-is-at-least-32-chars",
    ADMIN_USERNAME="admin",
    ADMIN_PASSWORD="admin-password",
    SALT_ROUNDS=8,
    DATABASE_URL=TEST_DB_URL,
    ACCESS_TOKEN_DURATION_HOURS=72,
)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Provide the settings every test application is built with."""
    return _TEST_SETTINGS_INSTANCE


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = build_engine(TEST_DB_URL)
    create_tables(engine)
    try:
        yield engine
    finally:
        drop_tables(engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def app(test_settings: Settings, engine: Engine) -> FastAPI:
    return create_app(test_settings, engine=engine)


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def user_repo(db_session: Session) -> SqlUserRepository:
    return SqlUserRepository(db_session)


@pytest.fixture()
def vote_repo(db_session: Session) -> SqlVoteRepository:
    return SqlVoteRepository(db_session)


@pytest.fixture()
def auth_service(test_settings: Settings, user_repo: SqlUserRepository) -> AuthService:
    return AuthService(test_settings, user_repo)


@pytest.fixture()
def make_user(user_repo: SqlUserRepository) -> Callable[..., User]:
    """Return a factory persisting users.

    Passing ``password`` stores a real bcrypt hash; otherwise a placeholder
    hash is stored to keep bulk setup fast.
    """

    def _make(username: str | None = None, password: str | None = None) -> User:
        username = username or f"voter{next(_USERNAME_COUNTER)}"
        if password is None:
            return user_repo.create(
                username=username,
                password_hash="unused-hash",
                initial_password="unused",
            )
        return user_repo.create(
            username=username,
            password_hash=hash_password(password, 8),
            initial_password=password,
        )

    return _make


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return a persisted voter whose password is TEST_PASSWORD."""
    return make_user("testuser", TEST_PASSWORD)


@pytest.fixture()
def auth_token(auth_service: AuthService, test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    token = auth_service.issue_token(test_user.id, Role.USER)
    return {"Authorization": f"Bearer {token.access_token}"}


@pytest.fixture()
def admin_token(auth_service: AuthService) -> dict[str, str]:
    """Return authorization headers for the administrator."""
    token = auth_service.issue_token("admin", Role.ADMIN)
    return {"Authorization": f"Bearer {token.access_token}"}
