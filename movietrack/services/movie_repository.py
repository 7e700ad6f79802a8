"""Coordinates the catalog and the favorites store behind one search call.

Collaborators:
* ``catalog.search`` supplies the remote, ranked result list (or a failure).
* ``favorites.get_all``/``upsert``/``delete`` own the locally persisted flags.
* :func:`movietrack.services.merge.merge_movies` combines both; it is pure,
  so everything asynchronous happens here.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Protocol

from movietrack.catalog.result import CatalogResult
from movietrack.exceptions import CatalogRequestError
from movietrack.schemas.movie import Movie
from movietrack.services.merge import LoadKind, merge_movies
from movietrack.services.toggle import Delete, StoreOperation, Upsert


class CatalogSearcher(Protocol):
    async def search(self, term: str) -> CatalogResult: ...


class FavoritesStoreProtocol(Protocol):
    async def get_all(self) -> list[Movie]: ...

    async def upsert(self, movie: Movie) -> None: ...

    async def delete(self, movie: Movie) -> None: ...


@dataclass(frozen=True, slots=True)
class MergedSearch:
    movies: list[Movie]
    remote_error: CatalogRequestError | None = None


class MovieRepository:
    def __init__(
        self,
        *,
        catalog: CatalogSearcher,
        favorites: FavoritesStoreProtocol,
    ) -> None:
        self._catalog = catalog
        self._favorites = favorites

    async def search(
        self, term: str, load_kind: LoadKind = LoadKind.USER_SEARCH
    ) -> MergedSearch:
        """Fetch remote results and stored favorites concurrently, then merge."""

        remote_result, stored_favorites = await asyncio.gather(
            self._catalog.search(term),
            self._favorites.get_all(),
        )
        movies = merge_movies(remote_result, stored_favorites, load_kind)
        return MergedSearch(movies=movies, remote_error=remote_result.error)

    async def get_movies(
        self, term: str, load_kind: LoadKind = LoadKind.USER_SEARCH
    ) -> list[Movie]:
        return (await self.search(term, load_kind)).movies

    async def list_favorites(self) -> list[Movie]:
        return await self._favorites.get_all()

    async def add_favorite(self, movie: Movie) -> None:
        await self._favorites.upsert(movie.model_copy(update={"is_favorite": True}))

    async def remove_favorite(self, movie: Movie) -> None:
        await self._favorites.delete(movie)

    async def apply(self, operation: StoreOperation) -> None:
        """Persist the store operation produced by a favorite toggle."""

        if isinstance(operation, Upsert):
            await self.add_favorite(operation.movie)
        elif isinstance(operation, Delete):
            await self.remove_favorite(operation.movie)
        else:
            raise TypeError(f"Unsupported store operation: {operation!r}")


__all__ = [
    "CatalogSearcher",
    "FavoritesStoreProtocol",
    "MergedSearch",
    "MovieRepository",
]
