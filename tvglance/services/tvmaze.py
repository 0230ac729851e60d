"""TVMaze client for fetching the show catalog and episode lists."""

import logging
from typing import List, Type, TypeVar

import niquests
from pydantic import BaseModel, TypeAdapter, ValidationError

from tvglance.core.config import Settings, get_settings
from tvglance.models.media import Episode, Show

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class TVMazeError(Exception):
    """Domain exception for TVMaze failures."""

    def __init__(self, message: str, original_exception: Exception = None):
        super().__init__(message)
        self.original_exception = original_exception


class NetworkFailure(TVMazeError):
    """The request never produced an HTTP response."""


class HttpFailure(TVMazeError):
    """TVMaze answered with a non-success status or an unusable body."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        original_exception: Exception = None,
    ):
        super().__init__(message, original_exception)
        self.status_code = status_code


class TVMazeClient:
    """Thin async wrapper over the two TVMaze endpoints we use.

    Holds no state besides its HTTP session; callers own caching.
    """

    def __init__(self, settings: Settings | None = None):
        settings = settings or get_settings()
        self.base_url = settings.tvmaze_base_url
        self.timeout = settings.request_timeout
        self.session = niquests.AsyncSession()
        self.session.headers["User-Agent"] = settings.user_agent
        self.session.headers["Accept"] = "application/json"
        if settings.proxy:
            self.session.proxies = {"http": settings.proxy, "https": settings.proxy}

    async def aclose(self) -> None:
        """Properly close the internal HTTP session."""
        if hasattr(self, "session") and self.session:
            await self.session.close()

    async def _get_json(self, path: str):
        url = f"{self.base_url}{path}"
        logger.info("GET %s", url)
        try:
            response = await self.session.get(url, timeout=self.timeout)
        except niquests.exceptions.RequestException as exc:
            logger.error("Transport error fetching %s: %s", url, exc)
            raise NetworkFailure(f"Could not reach {url}", exc)

        if not response.ok:
            logger.error("TVMaze returned %s for %s", response.status_code, url)
            raise HttpFailure(
                f"TVMaze returned {response.status_code} for {path}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            logger.error("Invalid JSON from %s: %s", url, exc)
            raise HttpFailure(
                f"Invalid JSON from {path}",
                status_code=response.status_code,
                original_exception=exc,
            )

    async def _get_list(self, path: str, model: Type[T]) -> List[T]:
        data = await self._get_json(path)
        try:
            return TypeAdapter(List[model]).validate_python(data)
        except ValidationError as exc:
            logger.error("Malformed %s list from %s: %s", model.__name__, path, exc)
            raise HttpFailure(
                f"Malformed {model.__name__.lower()} list from {path}",
                original_exception=exc,
            )

    async def fetch_shows(self) -> List[Show]:
        """Fetch the show catalog (GET /shows)."""
        shows = await self._get_list("/shows", Show)
        logger.info("Fetched %d shows", len(shows))
        return shows

    async def fetch_episodes(self, show_id: int) -> List[Episode]:
        """Fetch every episode of a show (GET /shows/{id}/episodes)."""
        episodes = await self._get_list(f"/shows/{int(show_id)}/episodes", Episode)
        logger.info("Fetched %d episodes for show %s", len(episodes), show_id)
        return episodes
