"""Per-session view controller: owns UI state and drives the single render path."""

import logging
import secrets
from typing import List, Optional, Tuple

from cachetools import LRUCache

from tvglance.models.media import Episode
from tvglance.models.state import SHOW_ALL, Message, View, ViewModel, ViewState
from tvglance.services.catalog import Catalog
from tvglance.services.filters import filter_episodes, filter_shows, normalize_term
from tvglance.services.tvmaze import TVMazeError

logger = logging.getLogger(__name__)

SHOWS_ERROR = (
    "We couldn't load the list of shows. "
    "Please check your connection and try again."
)
EPISODES_ERROR = "We couldn't load episodes for this show. Please try again later."
UNKNOWN_SHOW_ERROR = "That show is not in the catalog."


class Controller:
    """Mutates a ViewState in response to user actions.

    Every action leaves the state consistent; render() derives everything
    the templates draw from that state plus the catalog's cached data.
    """

    def __init__(self, catalog: Catalog):
        self.catalog = catalog
        self.state = ViewState()
        # Bumped on every navigation; fetches carrying an older value are stale
        self._nav_token = 0

    def _navigate(self) -> int:
        self._nav_token += 1
        return self._nav_token

    async def load_shows(self) -> None:
        """Fetch the show catalog, surfacing one message on failure."""
        try:
            await self.catalog.get_shows()
        except TVMazeError as exc:
            logger.error("Failed to load shows: %s", exc)
            self.state.message = Message(text=SHOWS_ERROR)
            return

        if self.state.message and self.state.message.text == SHOWS_ERROR:
            self.state.message = None

    async def select_show(self, show_id: int) -> None:
        """Shows -> Episodes. On failure the current view is kept as is."""
        if self.catalog.get_show(show_id) is None:
            logger.warning("Ignoring selection of unknown show %s", show_id)
            self.state.message = Message(text=UNKNOWN_SHOW_ERROR)
            return

        token = self._navigate()
        try:
            await self.catalog.get_episodes(show_id)
        except TVMazeError as exc:
            logger.error("Failed to load episodes for show %s: %s", show_id, exc)
            # A later navigation already moved on; only the current one reports
            if token == self._nav_token:
                self.state.message = Message(text=EPISODES_ERROR)
            return

        if token != self._nav_token:
            logger.warning("Discarding stale episode list for show %s", show_id)
            return

        self.state.current_view = View.EPISODES
        self.state.current_show_id = show_id
        self.state.search_term = ""
        self.state.search_source = None
        self.state.selected_episode_id = SHOW_ALL
        self.state.message = None

    def back(self) -> None:
        """Episodes -> Shows. The catalog keeps everything it fetched."""
        self._navigate()
        self.state.current_view = View.SHOWS
        self.state.current_show_id = None
        self.state.search_term = ""
        self.state.search_source = None
        self.state.selected_episode_id = SHOW_ALL
        self.state.message = None

    def select_episode(self, value: str) -> None:
        """Narrow the episode list to one id, or restore it with 'all'."""
        if self.state.current_view != View.EPISODES:
            logger.warning("Episode selection outside the episodes view ignored")
            return

        value = (value or "").strip()
        if not value or value == SHOW_ALL:
            self.state.search_term = ""
            self.state.selected_episode_id = SHOW_ALL
        else:
            self.state.search_term = value
            self.state.selected_episode_id = value
        self.state.search_source = "selector"

    def search(self, term: str) -> None:
        """Free-text episode search; overrides any selector narrowing."""
        self.state.search_term = term or ""
        self.state.search_source = "input"
        self.state.selected_episode_id = SHOW_ALL

    def search_shows(self, term: str) -> None:
        self.state.show_search_term = term or ""

    def _current_episodes(self) -> List[Episode]:
        if self.state.current_show_id is None:
            return []
        return self.catalog.cached_episodes(self.state.current_show_id) or []

    def visible_episodes(self, episodes: List[Episode]) -> List[Episode]:
        """Apply search_term the way the control that wrote it intends.

        A selector value picks exactly one episode by id; an id that is not
        in the list yields nothing. Typed terms go through filter_episodes.
        """
        if self.state.search_source == "selector" and self.state.search_term:
            return [ep for ep in episodes if str(ep.id) == self.state.search_term]
        return filter_episodes(episodes, self.state.search_term)

    def render(self) -> ViewModel:
        """Derive the complete view from state and cached data."""
        state = self.state
        all_shows = self.catalog.cached_shows()
        all_episodes = self._current_episodes()
        episodes = self.visible_episodes(all_episodes)

        count_text: Optional[str] = None
        typed = state.search_source == "input"
        if typed and normalize_term(state.search_term):
            count_text = f"Displaying {len(episodes)} / {len(all_episodes)} episodes."

        return ViewModel(
            view=state.current_view,
            shows=filter_shows(all_shows or [], state.show_search_term),
            shows_loaded=all_shows is not None,
            all_shows=all_shows or [],
            show_search_term=state.show_search_term,
            current_show_id=state.current_show_id,
            current_show=(
                self.catalog.get_show(state.current_show_id)
                if state.current_show_id is not None
                else None
            ),
            episodes=episodes,
            all_episodes=all_episodes,
            total_episodes=len(all_episodes),
            selected_episode_id=state.selected_episode_id,
            search_term=state.search_term if typed else "",
            count_text=count_text,
            message=state.message,
        )


class SessionRegistry:
    """One Controller per browser session, all sharing a single Catalog.

    The least recently used session is dropped once max_sessions is reached.
    """

    def __init__(self, catalog: Catalog, max_sessions: int = 1000):
        self.catalog = catalog
        self._controllers: LRUCache = LRUCache(maxsize=max_sessions)

    def get_or_create(self, session_id: str | None) -> Tuple[str, Controller]:
        """Return the session's controller, minting a new session if needed."""
        if session_id:
            controller = self._controllers.get(session_id)
            if controller is not None:
                return session_id, controller

        session_id = secrets.token_urlsafe(16)
        controller = Controller(self.catalog)
        self._controllers[session_id] = controller
        logger.debug("Created session %s", session_id[:6])
        return session_id, controller

    def __len__(self) -> int:
        return len(self._controllers)
