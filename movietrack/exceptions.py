"""Exception hierarchy shared across the MovieTrack packages."""

from __future__ import annotations


class MovieTrackError(Exception):
    """Base class for errors raised by MovieTrack code."""


class CatalogRequestError(MovieTrackError):
    """The catalog search could not produce a result list.

    Covers non-success HTTP statuses, transport failures, timeouts, and bodies
    that do not decode into the expected envelope.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MovieNotFoundError(MovieTrackError, LookupError):
    """The requested movie is not part of the current display list."""


__all__ = ["CatalogRequestError", "MovieNotFoundError", "MovieTrackError"]
