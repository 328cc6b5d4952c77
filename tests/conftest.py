# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from securezone.core.security import create_access_token
from securezone.db.session import Base, build_engine
from securezone.db.session import get_db as app_get_session
from securezone.main import app as fastapi_app
from securezone.models import Report, User, UserRole
from securezone.services.locks import ReportLockRegistry
from securezone.services.tags import TagSynchronizer
from securezone.services.votes import VoteLedger

TEST_DB_URL = "sqlite://"

_USER_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = build_engine(TEST_DB_URL, poolclass=StaticPool)

    # pysqlite defers BEGIN; emit it ourselves so SAVEPOINTs nest correctly.
    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record) -> None:  # pragma: no cover
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn) -> None:  # pragma: no cover - SQLAlchemy internals
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits leaked through.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


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


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def ledger() -> VoteLedger:
    """Return a vote ledger with its own lock registry."""
    return VoteLedger(ReportLockRegistry())


@pytest.fixture()
def tag_synchronizer() -> TagSynchronizer:
    return TagSynchronizer(ReportLockRegistry(), max_length=50)


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists users with the given role and ban state."""

    def _make_user(
        username: str | None = None,
        *,
        role: UserRole = UserRole.NORMAL,
        is_banned: bool = False,
        password: str = "secret",
    ) -> User:
        name = username or f"user{next(_USER_COUNTER)}"
        user = User(
            email=f"{name}@example.com",
            username=name.lower(),
            password=password,
            role=role,
            is_banned=is_banned,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def normal_user(make_user: Callable[..., User]) -> User:
    return make_user("alice")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    return make_user("bob")


@pytest.fixture()
def moderator_user(make_user: Callable[..., User]) -> User:
    return make_user("mod", role=UserRole.MODERATOR)


@pytest.fixture()
def admin_user(make_user: Callable[..., User]) -> User:
    return make_user("root", role=UserRole.ADMIN)


@pytest.fixture()
def banned_user(make_user: Callable[..., User]) -> User:
    return make_user("mallory", is_banned=True)


@pytest.fixture()
def headers_for() -> Callable[[User], dict[str, str]]:
    """Return a helper building authorization headers for a user."""

    def _headers_for(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _headers_for


@pytest.fixture()
def make_report(db_session: Session) -> Callable[..., Report]:
    """Return a factory for reports owned by a given user."""

    def _make_report(
        owner: User,
        *,
        is_anonymous: bool = False,
        title: str = "Broken streetlight",
    ) -> Report:
        report = Report(
            user_id=owner.id,
            title=title,
            description="The light at the corner has been out for a week.",
            location="5th and Main",
            is_anonymous=is_anonymous,
            upvotes=0,
            downvotes=0,
        )
        db_session.add(report)
        db_session.commit()
        db_session.refresh(report)
        return report

    return _make_report


@pytest.fixture()
def report(make_report: Callable[..., Report], normal_user: User) -> Report:
    """Create a baseline report owned by ``normal_user``."""
    return make_report(normal_user)
