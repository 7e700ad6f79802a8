"""FastAPI router exposing the search state and favorite toggling.

Unknown movie ids raise :class:`~movietrack.exceptions.MovieNotFoundError`,
which the application turns into a structured 404.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from movietrack.schemas.movie import Movie, SearchRequest, SearchStateSnapshot
from movietrack.services.dependencies import get_search_state
from movietrack.services.search_state import SearchState

router = APIRouter()


@router.get("", response_model=SearchStateSnapshot)
async def get_state(
    state: SearchState = Depends(get_search_state),
) -> SearchStateSnapshot:
    """Return the current term, display list, and loading flag."""

    return state.snapshot()


@router.post("/search", response_model=SearchStateSnapshot)
async def search_movies(
    payload: SearchRequest,
    state: SearchState = Depends(get_search_state),
) -> SearchStateSnapshot:
    """Search the catalog and overlay the stored favorites.

    A catalog failure yields an empty list; ``last_error`` explains why.
    """

    return await state.search(payload.term)


@router.get("/{movie_id}", response_model=Movie)
async def get_movie(
    movie_id: int,
    state: SearchState = Depends(get_search_state),
) -> Movie:
    """Detail view of one movie from the current display list."""

    return state.get_movie(movie_id)


@router.post("/{movie_id}/favorite/toggle", response_model=Movie)
async def toggle_favorite(
    movie_id: int,
    state: SearchState = Depends(get_search_state),
) -> Movie:
    """Flip the favorite flag of a displayed movie.

    The response reflects the new flag right away; persistence happens in the
    background.
    """

    return state.toggle_favorite(movie_id)
