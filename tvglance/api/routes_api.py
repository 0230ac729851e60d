"""API routes returning JSON for HTMX or external tools."""

import logging
from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, Query

from tvglance.core.deps import get_catalog
from tvglance.models.media import Episode, Show
from tvglance.services.catalog import Catalog
from tvglance.services.filters import filter_episodes, filter_shows
from tvglance.services.tvmaze import TVMazeError

router = APIRouter()
logger = logging.getLogger(__name__)

CatalogDep = Annotated[Catalog, Depends(get_catalog)]


@router.get("/shows", response_model=List[Show])
async def api_shows(
    catalog: CatalogDep,
    q: str = Query("", description="Search term matched against name, summary and genres"),
):
    """List cached shows, optionally filtered."""
    try:
        shows = await catalog.get_shows()
    except TVMazeError as exc:
        logger.error("Upstream failure listing shows: %s", exc)
        raise HTTPException(status_code=502, detail=str(exc))
    return filter_shows(shows, q)


@router.get("/shows/{show_id}/episodes", response_model=List[Episode])
async def api_episodes(
    show_id: int,
    catalog: CatalogDep,
    q: str = Query("", description="Search term or exact episode id"),
):
    """List a show's episodes, optionally filtered.

    Only ids from the fetched show list are accepted.
    """
    try:
        await catalog.get_shows()
        if catalog.get_show(show_id) is None:
            raise HTTPException(status_code=404, detail="Show not found")
        episodes = await catalog.get_episodes(show_id)
    except TVMazeError as exc:
        logger.error("Upstream failure listing episodes for %s: %s", show_id, exc)
        raise HTTPException(status_code=502, detail=str(exc))
    return filter_episodes(episodes, q)


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "service": "tvglance"}
