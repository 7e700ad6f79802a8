from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from movietrack.db.models import Base
from movietrack.settings import get_settings

logger = logging.getLogger(__name__)


def get_database_url() -> str:
    """Return the SQLite database URL configured for the service.

    Validation lives in :class:`movietrack.settings.AppSettings` so every code
    path observes the same error message when ``DATABASE_URL`` is malformed.
    """

    return get_settings().resolved_database_url


def _ensure_sqlite_directory(url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""

    database = make_url(url).database
    if not database or database == ":memory:":
        return
    Path(database).expanduser().parent.mkdir(parents=True, exist_ok=True)


def create_engine(url: str | None = None) -> AsyncEngine:
    """Create the async SQLAlchemy engine for the favorites database."""

    resolved = url or get_database_url()
    _ensure_sqlite_directory(resolved)
    return create_async_engine(resolved, future=True, echo=False)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def init_models(engine: AsyncEngine) -> None:
    """Create any missing tables."""

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.debug("Ensured tables exist: %s", ", ".join(sorted(Base.metadata.tables)))


# Global engine/session instances shared by the API process and scripts
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """Get or create the global engine instance."""
    global _engine
    if _engine is None:
        _engine = create_engine()
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Lazily create a session factory bound to the shared engine."""
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory(get_engine())
    return _session_factory


async def dispose_engine() -> None:
    """Dispose the shared engine and forget the cached factory."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
