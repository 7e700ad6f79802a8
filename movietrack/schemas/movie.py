"""Pydantic schemas for catalog movies, search state, and preferences."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Movie(BaseModel):
    """A catalog movie as displayed to the user.

    Everything except ``is_favorite`` is copied verbatim from the catalog;
    the favorite flag is an overlay computed from local storage.  Instances are
    frozen so flag changes always go through ``model_copy``.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int = Field(..., description="Catalog track identifier")
    title: str = ""
    artwork_url: str = ""
    price: float = 0.0
    genre: str = ""
    description: str = ""
    is_favorite: bool = False


class CatalogMovie(BaseModel):
    """One row of the catalog search payload, keyed by the API's field names."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    track_id: int = Field(..., alias="trackId")
    track_name: str = Field("", alias="trackName")
    artwork_url_100: str = Field("", alias="artworkUrl100")
    track_price: float = Field(0.0, alias="trackPrice")
    primary_genre_name: str = Field("", alias="primaryGenreName")
    long_description: str = Field("", alias="longDescription")

    @field_validator(
        "track_name",
        "artwork_url_100",
        "primary_genre_name",
        "long_description",
        mode="before",
    )
    @classmethod
    def _blank_missing_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("track_price", mode="before")
    @classmethod
    def _zero_missing_price(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    def to_movie(self) -> Movie:
        return Movie(
            id=self.track_id,
            title=self.track_name,
            artwork_url=self.artwork_url_100,
            price=self.track_price,
            genre=self.primary_genre_name,
            description=self.long_description,
        )


class CatalogSearchResponse(BaseModel):
    """Envelope returned by the catalog search endpoint."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    result_count: int = Field(0, alias="resultCount")
    results: list[dict[str, Any]] = Field(default_factory=list)

    def movies(self) -> list[Movie]:
        """Decode rows into movies, skipping rows that carry no ``trackId``."""

        return [
            CatalogMovie.model_validate(row).to_movie()
            for row in self.results
            if row.get("trackId") is not None
        ]


class SearchRequest(BaseModel):
    term: str = Field(..., min_length=1, max_length=256)

    @field_validator("term")
    @classmethod
    def _strip_term(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Search term must not be blank")
        return cleaned


class SearchStateSnapshot(BaseModel):
    """Read model of the process-wide search state."""

    term: str
    movies: list[Movie] = Field(default_factory=list)
    is_loading: bool = False
    last_visited: str = "Never"
    last_error: str | None = Field(
        None,
        description=(
            "Description of the most recent catalog failure, cleared by the next"
            " successful search.  The movie list itself never shows an error."
        ),
    )


class FavoriteListResponse(BaseModel):
    total: int
    movies: list[Movie]


class LastVisitedResponse(BaseModel):
    last_visited: str


__all__ = [
    "CatalogMovie",
    "CatalogSearchResponse",
    "FavoriteListResponse",
    "LastVisitedResponse",
    "Movie",
    "SearchRequest",
    "SearchStateSnapshot",
]
