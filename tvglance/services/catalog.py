"""In-memory catalog memoizing the show list and per-show episode lists."""

import asyncio
import logging
import math
from typing import Awaitable, Callable, Dict, List, Optional

from cachetools import Cache

from tvglance.models.media import Episode, Show
from tvglance.services.tvmaze import TVMazeClient

logger = logging.getLogger(__name__)

_SHOWS_KEY = "shows"


class Catalog:
    """Lazily populated, never invalidated cache in front of TVMazeClient.

    At most one result is stored per key and a failed fetch stores nothing,
    so the next call retries. Concurrent callers for the same key wait on a
    shared lock and reuse whatever the first caller stored. The lock is
    dropped once no fetch for its key is in flight.
    """

    def __init__(self, client: TVMazeClient):
        self.client = client
        self._shows: Cache = Cache(maxsize=math.inf)
        self._episodes: Cache = Cache(maxsize=math.inf)
        self._locks: Dict[object, asyncio.Lock] = {}
        # Callers holding or waiting on each lock
        self._lock_users: Dict[object, int] = {}

    async def _fetch_once(
        self, cache: Cache, key, lock_key, fetch: Callable[[], Awaitable[list]]
    ) -> list:
        cached = cache.get(key)
        if cached is not None:
            return cached

        lock = self._locks.setdefault(lock_key, asyncio.Lock())
        self._lock_users[lock_key] = self._lock_users.get(lock_key, 0) + 1
        try:
            async with lock:
                cached = cache.get(key)
                if cached is not None:
                    return cached
                result = await fetch()
                cache[key] = result
                return result
        finally:
            self._lock_users[lock_key] -= 1
            if not self._lock_users[lock_key]:
                del self._lock_users[lock_key]
                del self._locks[lock_key]

    async def get_shows(self) -> List[Show]:
        """Return the cached show list, fetching it on first use."""
        return await self._fetch_once(
            self._shows, _SHOWS_KEY, _SHOWS_KEY, self.client.fetch_shows
        )

    async def get_episodes(self, show_id: int) -> List[Episode]:
        """Return the cached episode list of a show, fetching it on first use."""
        episodes = await self._fetch_once(
            self._episodes,
            show_id,
            ("episodes", show_id),
            lambda: self.client.fetch_episodes(show_id),
        )
        logger.debug("Episodes for show %s: %d", show_id, len(episodes))
        return episodes

    def cached_shows(self) -> Optional[List[Show]]:
        """Show list if it has already been fetched, else None."""
        return self._shows.get(_SHOWS_KEY)

    def cached_episodes(self, show_id: int) -> Optional[List[Episode]]:
        """Episode list of a show if it has already been fetched, else None."""
        return self._episodes.get(show_id)

    def get_show(self, show_id: int) -> Optional[Show]:
        """Look a show up in the cached list."""
        for show in self.cached_shows() or []:
            if show.id == show_id:
                return show
        return None
