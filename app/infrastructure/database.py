"""Database configuration and session management."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.config import Settings, get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


logger = logging.getLogger(__name__)

SessionLocal = sessionmaker(autocommit=False, autoflush=False)

_engine: Engine | None = None


def _build_connect_args(settings: Settings) -> dict[str, Any]:
    """Return driver specific arguments that bound every store call."""

    url = make_url(settings.database_url)
    timeout = settings.database_timeout_seconds
    backend = url.get_backend_name()

    if backend == "sqlite":
        return {"timeout": timeout, "check_same_thread": False}
    if backend == "postgresql":
        return {
            "connect_timeout": max(1, int(timeout)),
            "options": f"-c statement_timeout={int(timeout * 1000)}",
        }
    if backend == "mysql":
        return {
            "connect_timeout": max(1, int(timeout)),
            "read_timeout": max(1, int(timeout)),
            "write_timeout": max(1, int(timeout)),
        }
    return {}


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


def build_engine(settings: Settings) -> Engine:
    """Create a SQLAlchemy engine for ``settings.database_url``."""

    url = make_url(settings.database_url)
    options: dict[str, Any] = {
        "pool_pre_ping": True,
        "connect_args": _build_connect_args(settings),
    }
    if url.get_backend_name() != "sqlite":
        options["pool_timeout"] = settings.database_timeout_seconds

    engine = create_engine(url, **options)
    if url.get_backend_name() == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def init_engine(settings: Settings | None = None) -> Engine:
    """Create the process wide engine once and bind the session factory to it."""

    global _engine
    if _engine is not None:
        return _engine

    settings = settings or get_settings()
    _engine = build_engine(settings)
    SessionLocal.configure(bind=_engine)
    logger.info("Database engine initialised for %s", _engine.url.render_as_string(hide_password=True))
    return _engine


def get_engine() -> Engine:
    """Return the initialised engine."""

    if _engine is None:
        raise RuntimeError("Database engine is not initialised; call init_engine() first")
    return _engine


def dispose_engine() -> None:
    """Release pooled connections and forget the engine."""

    global _engine
    if _engine is None:
        return
    _engine.dispose()
    _engine = None


def initialize_database(engine: Engine | None = None) -> None:
    """Ensure all ORM models have corresponding database tables."""

    from app.infrastructure import models  # noqa: F401  # ensure models are imported

    Base.metadata.create_all(bind=engine or get_engine(), checkfirst=True)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


__all__ = [
    "Base",
    "SessionLocal",
    "build_engine",
    "dispose_engine",
    "get_db",
    "get_engine",
    "init_engine",
    "initialize_database",
]
