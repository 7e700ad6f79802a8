"""Database-oriented helpers for the local favorites store."""

from __future__ import annotations

from sqlalchemy import inspect, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from movietrack.db.models import FavoriteMovie
from movietrack.schemas.movie import Movie


class FavoritesStore:
    """Keyed record store holding every movie the user favorited.

    Each operation opens its own session and commits on success, so writes
    scheduled in the background never share a session with a request.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._tables_ready: bool | None = None

    async def tables_ready(self) -> bool:
        """Check if the ``movies`` table exists, caching successes."""

        if self._tables_ready is True:
            return True

        def _check_tables(sync_session) -> bool:
            inspector = inspect(sync_session.connection())
            return FavoriteMovie.__tablename__ in inspector.get_table_names()

        async with self._session_factory() as session:
            ready = await session.run_sync(_check_tables)

        self._tables_ready = ready
        return ready

    async def get_all(self) -> list[Movie]:
        """Return every stored favorite ordered by catalog id."""

        if not await self.tables_ready():
            return []

        async with self._session_factory() as session:
            result = await session.execute(select(FavoriteMovie).order_by(FavoriteMovie.id))
            return [_to_schema(row) for row in result.scalars().all()]

    async def upsert(self, movie: Movie) -> None:
        """Insert or replace ``movie`` by id, always stored as a favorite."""

        async with self._session_factory() as session, session.begin():
            await session.merge(
                FavoriteMovie(
                    id=movie.id,
                    title=movie.title,
                    artwork_url=movie.artwork_url,
                    price=movie.price,
                    genre=movie.genre,
                    description=movie.description,
                    is_favorite=True,
                )
            )

    async def delete(self, movie: Movie) -> None:
        """Remove the row keyed by ``movie.id``; absent rows are ignored."""

        async with self._session_factory() as session, session.begin():
            row = await session.get(FavoriteMovie, movie.id)
            if row is not None:
                await session.delete(row)


def _to_schema(row: FavoriteMovie) -> Movie:
    return Movie.model_validate(row)
