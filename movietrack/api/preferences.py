"""FastAPI router for the "last visited" preference."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from movietrack.schemas.movie import LastVisitedResponse
from movietrack.services.dependencies import get_search_state
from movietrack.services.search_state import SearchState

router = APIRouter()


@router.get("/last-visited", response_model=LastVisitedResponse)
async def get_last_visited(
    state: SearchState = Depends(get_search_state),
) -> LastVisitedResponse:
    return LastVisitedResponse(last_visited=state.last_visited)


@router.post("/last-visited", response_model=LastVisitedResponse)
async def update_last_visited(
    state: SearchState = Depends(get_search_state),
) -> LastVisitedResponse:
    """Record the current local time as the last visit."""

    return LastVisitedResponse(last_visited=await state.update_last_visited())
