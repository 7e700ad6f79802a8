"""FastAPI router listing the locally stored favorites."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from movietrack.schemas.movie import FavoriteListResponse
from movietrack.services.dependencies import get_movie_repository
from movietrack.services.movie_repository import MovieRepository

router = APIRouter()


@router.get("", response_model=FavoriteListResponse)
async def list_favorites(
    repository: MovieRepository = Depends(get_movie_repository),
) -> FavoriteListResponse:
    movies = await repository.list_favorites()
    return FavoriteListResponse(total=len(movies), movies=movies)
