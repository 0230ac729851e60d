"""UI state models driving the single render path."""

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel

from tvglance.models.media import Episode, Show

SHOW_ALL = "all"


class View(str, Enum):
    """Top-level view currently on screen."""

    SHOWS = "shows"
    EPISODES = "episodes"


class Message(BaseModel):
    """A user-visible status message."""

    text: str
    type: Literal["error", "info"] = "error"


class ViewState(BaseModel):
    """Mutable per-session UI state.

    Only controller actions write to it; the renderer reads it.
    """

    current_view: View = View.SHOWS
    current_show_id: Optional[int] = None
    search_term: str = ""
    show_search_term: str = ""
    selected_episode_id: str = SHOW_ALL
    # Which control wrote search_term last: "input" (search box) or "selector"
    search_source: Optional[Literal["input", "selector"]] = None
    message: Optional[Message] = None


class SelectOption(BaseModel):
    """One <option> of a selector."""

    value: str
    label: str
    selected: bool = False


class ViewModel(BaseModel):
    """Everything the templates need to draw the page."""

    view: View
    shows: List[Show] = []
    shows_loaded: bool = False
    all_shows: List[Show] = []
    show_search_term: str = ""
    current_show_id: Optional[int] = None
    current_show: Optional[Show] = None
    episodes: List[Episode] = []
    all_episodes: List[Episode] = []
    total_episodes: int = 0
    selected_episode_id: str = SHOW_ALL
    search_term: str = ""
    count_text: Optional[str] = None
    message: Optional[Message] = None
