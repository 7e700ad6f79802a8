"""HTTP client for the movie catalog search endpoint.

The client never raises for remote problems.  Non-success statuses, transport
errors, timeouts, and malformed payloads are all reported through
:class:`~movietrack.catalog.result.CatalogResult` so callers can decide how a
failed search should be presented.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from movietrack.catalog.result import CatalogResult
from movietrack.exceptions import CatalogRequestError
from movietrack.schemas.movie import CatalogSearchResponse
from movietrack.settings import AppSettings

logger = logging.getLogger(__name__)

USER_AGENT = "movietrack/0.1"


class CatalogClient:
    """Keyword search against the catalog's ``/search`` endpoint."""

    def __init__(
        self,
        *,
        base_url: str,
        country: str = "au",
        media: str = "movie",
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._search_url = f"{base_url.rstrip('/')}/search"
        self._country = country
        self._media = media
        self._timeout = timeout
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT}
        )

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> CatalogClient:
        return cls(
            base_url=settings.catalog_base_url,
            country=settings.catalog_country,
            media=settings.catalog_media,
            timeout=settings.catalog_timeout_seconds,
            http_client=http_client,
        )

    async def search(self, term: str) -> CatalogResult:
        params = {"country": self._country, "media": self._media, "term": term}

        try:
            response = await self._client.get(
                self._search_url, params=params, timeout=self._timeout
            )
        except httpx.TimeoutException as exc:
            return self._failure(
                term, CatalogRequestError(f"Catalog search timed out: {exc}"), exc
            )
        except httpx.HTTPError as exc:
            return self._failure(
                term, CatalogRequestError(f"Catalog request failed: {exc}"), exc
            )

        if not response.is_success:
            return self._failure(
                term,
                CatalogRequestError(
                    f"Catalog responded with HTTP {response.status_code}",
                    status_code=response.status_code,
                ),
            )

        try:
            payload = CatalogSearchResponse.model_validate(response.json())
            movies = payload.movies()
        except (ValueError, ValidationError) as exc:
            return self._failure(
                term,
                CatalogRequestError(
                    "Catalog response could not be decoded",
                    status_code=response.status_code,
                ),
                exc,
            )

        logger.debug("Catalog search for %r returned %s movies", term, len(movies))
        return CatalogResult.succeeded(movies)

    def _failure(
        self,
        term: str,
        error: CatalogRequestError,
        cause: BaseException | None = None,
    ) -> CatalogResult:
        error.__cause__ = cause
        logger.warning("Catalog search for %r failed: %s", term, error)
        return CatalogResult.failed(error)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> CatalogClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
