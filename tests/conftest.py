# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")
os.environ.setdefault("REQUIRE_AUTH", "true")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from chat_geo.core.security import create_access_token, hash_password
from chat_geo.db.session import Base, enable_sqlite_foreign_keys
from chat_geo.db.session import get_db as app_get_session
from chat_geo.main import app as fastapi_app
from chat_geo.models import Channel, ChannelType, User
from chat_geo.realtime.rooms import RoomRegistry
from chat_geo.repositories import ChannelRepository, UserRepository

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "correct horse battery staple"

_USER_COUNTER = count(1)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture(autouse=True)
def fresh_rooms(app: FastAPI) -> Iterator[RoomRegistry]:
    """Give every test an empty room registry."""
    rooms = RoomRegistry()
    app.state.rooms = rooms
    yield rooms
    rooms.clear()


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists users with the shared test password."""
    repo = UserRepository(db_session)

    def _make_user(username: str | None = None, **overrides: Any) -> User:
        n = next(_USER_COUNTER)
        username = username or f"user{n}"
        return repo.create(
            fullname=overrides.pop("fullname", username.title()),
            username=username,
            email=overrides.pop("email", f"{username}@example.com"),
            password_hash=hash_password(overrides.pop("password", TEST_PASSWORD)),
            avatar=overrides.pop("avatar", None),
        )

    return _make_user


@pytest.fixture()
def make_channel(db_session: Session) -> Callable[..., Channel]:
    """Return a factory that persists channels."""
    repo = ChannelRepository(db_session)

    def _make_channel(
        user_uuids: list[str],
        name: str = "Team",
        type: str = ChannelType.GROUP,
    ) -> Channel:
        return repo.create(name=name, user_uuids=user_uuids, type=type)

    return _make_channel


def bearer(user: User) -> dict[str, str]:
    """Return authorization headers for ``user``."""
    token = create_access_token(user.uuid, username=user.username, email=user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def user_password() -> str:
    """Password every factory-made user shares."""
    return TEST_PASSWORD


@pytest.fixture()
def auth_headers_for() -> Callable[[User], dict[str, str]]:
    return bearer


@pytest.fixture()
def alice(make_user: Callable[..., User]) -> User:
    return make_user("alice", fullname="Alice Liddell")


@pytest.fixture()
def bob(make_user: Callable[..., User]) -> User:
    return make_user("bob", fullname="Bob Builder")


@pytest.fixture()
def alice_headers(alice: User) -> dict[str, str]:
    return bearer(alice)


@pytest.fixture()
def bob_headers(bob: User) -> dict[str, str]:
    return bearer(bob)


@pytest.fixture()
def team(make_channel: Callable[..., Channel], alice: User, bob: User) -> Channel:
    """A group channel containing alice and bob."""
    return make_channel([alice.uuid, bob.uuid], name="Team")
