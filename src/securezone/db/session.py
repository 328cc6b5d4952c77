"""Database session configuration."""

from __future__ import annotations

from collections.abc import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import Pool

from securezone.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


def _enable_sqlite_foreign_keys(engine: Engine) -> None:
    """Turn on FK enforcement so ON DELETE CASCADE behaves like other backends."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record) -> None:  # pragma: no cover - driver hook
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(
    url: str,
    *,
    echo: bool = False,
    poolclass: type[Pool] | None = None,
    connect_args: dict[str, object] | None = None,
) -> Engine:
    """Create an engine for ``url`` with the project's connection defaults."""
    connect_args = dict(connect_args or {})
    if url.startswith("sqlite"):
        connect_args.setdefault("check_same_thread", False)
    extra: dict[str, object] = {}
    if poolclass is not None:
        extra["poolclass"] = poolclass
    engine = create_engine(url, pool_pre_ping=True, echo=echo, connect_args=connect_args, **extra)
    _enable_sqlite_foreign_keys(engine)
    return engine


# Ensure model modules are imported so that metadata is populated when create_all runs.
import securezone.models  # noqa: E402,F401

engine = build_engine(settings.effective_database_url, echo=settings.sql_debug)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create all database tables."""
    Base.metadata.create_all(bind=engine)
