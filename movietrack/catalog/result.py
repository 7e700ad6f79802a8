"""Outcome type returned by the catalog client."""

from __future__ import annotations

from dataclasses import dataclass

from movietrack.exceptions import CatalogRequestError
from movietrack.schemas.movie import Movie


@dataclass(frozen=True, slots=True)
class CatalogResult:
    """Either the movies a search returned or the error that prevented it."""

    movies: list[Movie] | None = None
    error: CatalogRequestError | None = None

    @classmethod
    def succeeded(cls, movies: list[Movie]) -> CatalogResult:
        return cls(movies=list(movies))

    @classmethod
    def failed(cls, error: CatalogRequestError) -> CatalogResult:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None and self.movies is not None

    def movies_or_empty(self) -> list[Movie]:
        """Return the remote movies, treating a failure as zero results."""

        if not self.ok:
            return []
        return list(self.movies or [])
