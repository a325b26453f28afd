"""
Engine and session factory for the relational store.

The connection URL is assembled from the `DB_*` settings. An in-memory
SQLite database shares a single connection so every session sees the
same tables.
"""

from typing import Iterator

from sqlalchemy import URL, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from knowledge_assistant.database.config.config import settings


class Base(DeclarativeBase):
    """Declarative base shared by all entities."""


def build_database_url() -> URL:
    """Build the SQLAlchemy URL from the `DB_*` settings."""
    return URL.create(
        drivername=settings.DB_DRIVER_NAME,
        username=settings.DB_USERNAME,
        password=settings.DB_PASSWORD,
        host=settings.DB_HOST,
        database=settings.DB_DATABASE_NAME,
    )


def _engine_kwargs(url: URL) -> dict:
    if not url.drivername.startswith("sqlite"):
        return {"pool_pre_ping": True, "pool_size": 5, "max_overflow": 10}
    kwargs = {"connect_args": {"check_same_thread": False}}
    if url.database in (None, "", ":memory:"):
        kwargs["poolclass"] = StaticPool
    return kwargs


database_url = build_database_url()
engine = create_engine(database_url, **_engine_kwargs(database_url))
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db() -> None:
    """Create all tables that do not exist yet."""
    # entities must be imported so their tables are registered on Base.metadata
    from knowledge_assistant.database import entities  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_db() -> Iterator[Session]:
    """FastAPI dependency yielding one session per request."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
