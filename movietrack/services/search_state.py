"""Process-lifetime search state shared by the HTTP routes.

The state is the single writer of the display list.  Readers either pull a
:class:`~movietrack.schemas.movie.SearchStateSnapshot` or subscribe a callback
that receives a fresh snapshot whenever the list, the loading flag, or the
last-visited value changes.

Two behaviors are worth knowing about:

* Every search is numbered.  A response that arrives after a newer search has
  already been applied is dropped, so a slow request can never overwrite the
  results of a faster, later one.
* Favorite toggles update the list immediately.  The store write runs as a
  background task; a failed write is logged and the list is not rolled back.
  Writes are applied one at a time in toggle order, and a search waits for
  outstanding writes so the favorites it reads match the list it replaces.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

from movietrack.exceptions import MovieNotFoundError
from movietrack.schemas.movie import Movie, SearchStateSnapshot
from movietrack.services.merge import LoadKind
from movietrack.services.movie_repository import MovieRepository
from movietrack.services.preferences import LAST_VISITED_DEFAULT
from movietrack.services.toggle import StoreOperation, toggle_favorite

logger = logging.getLogger(__name__)

Listener = Callable[[SearchStateSnapshot], None]


class LastVisitedStore(Protocol):
    async def last_visited(self) -> str: ...

    async def save_last_visited(self) -> str: ...


class SearchState:
    def __init__(
        self,
        repository: MovieRepository,
        preferences: LastVisitedStore,
        *,
        default_term: str = "star",
    ) -> None:
        self._repository = repository
        self._preferences = preferences
        self._term = default_term
        self._movies: list[Movie] = []
        self._last_visited = LAST_VISITED_DEFAULT
        self._last_error: str | None = None
        self._in_flight = 0
        self._issued_sequence = 0
        self._applied_sequence = 0
        self._listeners: list[Listener] = []
        self._pending_writes: set[asyncio.Task[None]] = set()
        self._write_lock = asyncio.Lock()

    @property
    def term(self) -> str:
        return self._term

    @property
    def movies(self) -> list[Movie]:
        return list(self._movies)

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    @property
    def last_visited(self) -> str:
        return self._last_visited

    def snapshot(self) -> SearchStateSnapshot:
        return SearchStateSnapshot(
            term=self._term,
            movies=list(self._movies),
            is_loading=self.is_loading,
            last_visited=self._last_visited,
            last_error=self._last_error,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that unregisters it."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    async def load_initial(self) -> SearchStateSnapshot:
        """Run the startup search and read the stored last-visited value.

        An empty result on this search shows the stored favorites instead.
        """

        self._last_visited = await self._preferences.last_visited()
        return await self._run_search(self._term, LoadKind.INITIAL_LOAD)

    async def search(self, term: str) -> SearchStateSnapshot:
        self._term = term
        return await self._run_search(term, LoadKind.USER_SEARCH)

    def get_movie(self, movie_id: int) -> Movie:
        movie = next((movie for movie in self._movies if movie.id == movie_id), None)
        if movie is None:
            raise MovieNotFoundError(f"Movie {movie_id} is not in the current list")
        return movie

    def toggle_favorite(self, movie_id: int) -> Movie:
        """Flip the favorite flag of ``movie_id`` in the current list.

        Returns the updated movie.  Raises :class:`MovieNotFoundError` when the
        id is not displayed.
        """

        target = self.get_movie(movie_id)

        outcome = toggle_favorite(self._movies, target)
        self._movies = outcome.movies
        self._notify()

        if outcome.operation is not None:
            self._schedule_write(outcome.operation)
            return outcome.operation.movie
        return target

    async def update_last_visited(self) -> str:
        self._last_visited = await self._preferences.save_last_visited()
        self._notify()
        return self._last_visited

    async def drain(self) -> None:
        """Wait for every scheduled favorite write to finish."""

        while self._pending_writes:
            await asyncio.gather(*list(self._pending_writes))

    async def _run_search(self, term: str, load_kind: LoadKind) -> SearchStateSnapshot:
        self._issued_sequence += 1
        sequence = self._issued_sequence
        self._in_flight += 1
        self._notify()

        try:
            await self.drain()
            result = await self._repository.search(term, load_kind)
        except Exception:
            self._in_flight -= 1
            self._notify()
            raise
        self._in_flight -= 1

        if sequence < self._applied_sequence:
            logger.debug(
                "Discarding stale results for %r (search #%s, already showing #%s)",
                term,
                sequence,
                self._applied_sequence,
            )
        else:
            self._applied_sequence = sequence
            self._movies = result.movies
            self._last_error = str(result.remote_error) if result.remote_error else None

        self._notify()
        return self.snapshot()

    def _schedule_write(self, operation: StoreOperation) -> None:
        task = asyncio.create_task(self._persist(operation))
        self._pending_writes.add(task)
        task.add_done_callback(self._pending_writes.discard)

    async def _persist(self, operation: StoreOperation) -> None:
        async with self._write_lock:
            try:
                await self._repository.apply(operation)
            except Exception:
                logger.exception(
                    "Failed to persist favorite change for movie %s (%s)",
                    operation.movie.id,
                    type(operation).__name__,
                )

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)


__all__ = ["LastVisitedStore", "Listener", "SearchState"]
