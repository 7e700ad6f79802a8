"""Search state wired to the SQLite favorites store."""

from __future__ import annotations

import pytest

from movietrack.services.favorites import FavoritesStore
from movietrack.services.movie_repository import MovieRepository
from movietrack.services.search_state import SearchState
from tests.movietrack.support.factories import MemoryPreferences, StubCatalog, make_movie


def _state(session_factory, catalog: StubCatalog) -> tuple[SearchState, FavoritesStore]:
    store = FavoritesStore(session_factory)
    repository = MovieRepository(catalog=catalog, favorites=store)
    return SearchState(repository, MemoryPreferences()), store


@pytest.mark.asyncio
async def test_toggle_round_trip_reaches_database(session_factory) -> None:
    state, store = _state(session_factory, StubCatalog.returning([make_movie(1), make_movie(2)]))
    await state.search("star")

    state.toggle_favorite(2)
    await state.drain()

    assert [movie.id for movie in await store.get_all()] == [2]
    assert (await store.get_all())[0].is_favorite is True


@pytest.mark.parametrize("rounds", [1, 2, 3])
@pytest.mark.asyncio
async def test_rapid_toggles_leave_store_matching_list(session_factory, rounds: int) -> None:
    state, store = _state(session_factory, StubCatalog.returning([make_movie(1)]))
    await state.search("star")

    for _ in range(rounds):
        state.toggle_favorite(1)
        state.toggle_favorite(1)
    await state.drain()

    assert state.movies[0].is_favorite is False
    assert await store.get_all() == []


@pytest.mark.asyncio
async def test_odd_number_of_toggles_keeps_favorite(session_factory) -> None:
    state, store = _state(session_factory, StubCatalog.returning([make_movie(1)]))
    await state.search("star")

    for _ in range(3):
        state.toggle_favorite(1)
    await state.drain()

    assert state.movies[0].is_favorite is True
    assert [movie.id for movie in await store.get_all()] == [1]


@pytest.mark.asyncio
async def test_search_after_toggle_sees_pending_favorite(session_factory) -> None:
    state, store = _state(session_factory, StubCatalog.returning([make_movie(1), make_movie(2)]))
    await state.search("star")

    state.toggle_favorite(1)
    snapshot = await state.search("star")

    assert [(movie.id, movie.is_favorite) for movie in snapshot.movies] == [(1, True), (2, False)]
    assert [movie.id for movie in await store.get_all()] == [1]


@pytest.mark.asyncio
async def test_search_after_unfavorite_drops_flag(session_factory) -> None:
    catalog = StubCatalog.returning([make_movie(1)])
    state, store = _state(session_factory, catalog)
    await store.upsert(make_movie(1))
    await state.search("star")
    assert state.movies[0].is_favorite is True

    state.toggle_favorite(1)
    snapshot = await state.search("star")

    assert snapshot.movies[0].is_favorite is False
    assert await store.get_all() == []
