"""Translate a favorite toggle into a new display list and a store write."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from movietrack.schemas.movie import Movie


@dataclass(frozen=True, slots=True)
class Upsert:
    movie: Movie


@dataclass(frozen=True, slots=True)
class Delete:
    movie: Movie


StoreOperation = Upsert | Delete


@dataclass(frozen=True, slots=True)
class ToggleOutcome:
    movies: list[Movie]
    # None when the target is not in the list and nothing needs persisting
    operation: StoreOperation | None


def toggle_favorite(current: Sequence[Movie], target: Movie) -> ToggleOutcome:
    """Invert the favorite flag of the movie sharing ``target.id``.

    Every other movie is carried over untouched and in the same order.  The
    returned operation upserts the updated movie when it became a favorite and
    deletes it otherwise.
    """

    updated: Movie | None = None
    movies: list[Movie] = []
    for movie in current:
        if movie.id != target.id:
            movies.append(movie)
            continue
        flipped = movie.model_copy(update={"is_favorite": not movie.is_favorite})
        updated = updated or flipped
        movies.append(flipped)

    if updated is None:
        return ToggleOutcome(movies=movies, operation=None)

    operation: StoreOperation = Upsert(updated) if updated.is_favorite else Delete(updated)
    return ToggleOutcome(movies=movies, operation=operation)


__all__ = ["Delete", "StoreOperation", "ToggleOutcome", "Upsert", "toggle_favorite"]
