"""Database configuration and session management."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import logging
from uuid import uuid4

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from relay.config import get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


def generate_id() -> str:
    """Return a new primary key for relay tables."""

    return uuid4().hex


logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> Engine:
    """Create an engine for ``database_url``.

    SQLite connections are shared with worker threads because the relay runs
    blocking queries through ``anyio.to_thread``.
    """

    connect_args: dict[str, object] = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


def build_session_factory(bind: Engine) -> sessionmaker[Session]:
    """Return a session factory bound to ``bind``."""

    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=bind)


settings = get_settings()
engine = build_engine(settings.database_url)
SessionLocal = build_session_factory(engine)


def initialize_database(bind: Engine | None = None) -> None:
    """Ensure all ORM models have corresponding database tables."""

    from relay.infrastructure import models  # noqa: F401  # ensure models are imported

    target = bind or engine
    Base.metadata.create_all(bind=target, checkfirst=True)
    logger.debug("Database schema ensured on %s", target.url.render_as_string(hide_password=True))


@contextmanager
def session_scope(factory: sessionmaker[Session] | None = None) -> Iterator[Session]:
    """Yield a session that is rolled back on error and always closed."""

    session = (factory or SessionLocal)()
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

