"""Overlay locally stored favorite flags on remote search results."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from movietrack.catalog.result import CatalogResult
from movietrack.schemas.movie import Movie


class LoadKind(str, Enum):
    """Why a search is being run; decides the empty-result fallback."""

    INITIAL_LOAD = "initial_load"
    USER_SEARCH = "user_search"


def merge_movies(
    remote_result: CatalogResult,
    local_favorites: Sequence[Movie],
    load_kind: LoadKind,
) -> list[Movie]:
    """Combine a catalog result with the stored favorites into a display list.

    A failed search counts as zero results.  When nothing came back on the
    initial load the favorites themselves become the list, so the first screen
    is never empty without network.  Otherwise the remote order is kept and
    each movie's ``is_favorite`` reflects the matching stored record, if any.
    """

    api_movies = remote_result.movies_or_empty()

    if not api_movies and load_kind is LoadKind.INITIAL_LOAD:
        return list(local_favorites)

    favorites_by_id = {movie.id: movie for movie in local_favorites}
    merged: list[Movie] = []
    for api_movie in api_movies:
        stored = favorites_by_id.get(api_movie.id)
        merged.append(
            api_movie.model_copy(
                update={"is_favorite": stored.is_favorite if stored is not None else False}
            )
        )
    return merged


__all__ = ["LoadKind", "merge_movies"]
