"""FastAPI dependency wiring for the MovieTrack services.

The application lifespan builds one :class:`ServiceContainer` and stores it
on ``app.state``.  Routers resolve collaborators through the functions below,
which keeps them free of construction details and lets tests swap in doubles
via ``app.dependency_overrides``.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, Request

from movietrack.catalog.client import CatalogClient
from movietrack.services.movie_repository import MovieRepository
from movietrack.services.preferences import PreferenceStore
from movietrack.services.search_state import SearchState


@dataclass
class ServiceContainer:
    catalog: CatalogClient
    repository: MovieRepository
    preferences: PreferenceStore
    search_state: SearchState


def get_container(request: Request) -> ServiceContainer:
    container: ServiceContainer | None = getattr(request.app.state, "services", None)
    if container is None:
        raise RuntimeError("MovieTrack services are not initialised")
    return container


def get_search_state(
    container: ServiceContainer = Depends(get_container),
) -> SearchState:
    return container.search_state


def get_movie_repository(
    container: ServiceContainer = Depends(get_container),
) -> MovieRepository:
    return container.repository


__all__ = [
    "ServiceContainer",
    "get_container",
    "get_movie_repository",
    "get_search_state",
]
