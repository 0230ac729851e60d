"""HTML rendering of show/episode cards and selectors via Jinja2."""

from pathlib import Path
from typing import Iterable, List, Optional

from bs4 import BeautifulSoup, Comment
from fastapi.templating import Jinja2Templates
from markupsafe import Markup

from tvglance.core.config import get_settings
from tvglance.models.media import Episode, Show
from tvglance.models.state import SHOW_ALL, SelectOption

# Templates directory
BASE_DIR = Path(__file__).resolve().parent.parent
templates = Jinja2Templates(directory=BASE_DIR / "templates")

# Markup TVMaze uses in summaries; anything else is reduced to its text
ALLOWED_SUMMARY_TAGS = {"p", "b", "i", "em", "strong", "br"}
DROPPED_SUMMARY_TAGS = ["script", "style", "iframe", "object", "embed"]

NOT_AVAILABLE = "N/A"


def sanitize_summary(html: Optional[str]) -> Markup:
    """Strip upstream summary HTML down to a few attribute-free inline tags."""
    if not html:
        return Markup("")

    soup = BeautifulSoup(html, "html.parser")
    for tag in soup.find_all(DROPPED_SUMMARY_TAGS):
        tag.decompose()
    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()
    for tag in soup.find_all(True):
        if tag.name in ALLOWED_SUMMARY_TAGS:
            tag.attrs = {}
        else:
            tag.unwrap()
    return Markup(str(soup))


def episode_code(season: int, number: Optional[int]) -> str:
    """Format S01E01; specials without a number get E00."""
    return f"S{season:02d}E{(number or 0):02d}"


def episode_title(episode: Episode) -> str:
    """Card title: '<name> S01E01'."""
    return f"{episode.name} {episode_code(episode.season, episode.number)}"


def selector_label(episode: Episode) -> str:
    """Selector option label: 'S01E01 - <name>'."""
    return f"{episode_code(episode.season, episode.number)} - {episode.name}"


def or_na(value) -> str:
    """Render optional numbers, falling back to N/A."""
    if value is None:
        return NOT_AVAILABLE
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_episode_options(
    episodes: Iterable[Episode], selected: str = SHOW_ALL
) -> List[SelectOption]:
    """Options for the episode selector, 'Show All Episodes' first."""
    options = [
        SelectOption(
            value=SHOW_ALL, label="Show All Episodes", selected=selected == SHOW_ALL
        )
    ]
    for ep in episodes:
        value = str(ep.id)
        options.append(
            SelectOption(value=value, label=selector_label(ep), selected=value == selected)
        )
    return options


def build_show_options(
    shows: Iterable[Show], selected: Optional[int] = None
) -> List[SelectOption]:
    """Options for the show selector, shows sorted by case-folded name."""
    options = [SelectOption(value="", label="Select a show", selected=selected is None)]
    for show in sorted(shows, key=lambda s: s.name.casefold()):
        options.append(
            SelectOption(value=str(show.id), label=show.name, selected=show.id == selected)
        )
    return options


templates.env.filters["sanitize"] = sanitize_summary
templates.env.filters["or_na"] = or_na
templates.env.globals["episode_title"] = episode_title


def _render(name: str, **context) -> Markup:
    return Markup(templates.get_template(name).render(**context))


def render_show_list(shows: Iterable[Show]) -> Markup:
    """One card per show; replaces whatever the container held."""
    return _render("partials/show_list.html", shows=list(shows))


def render_episode_list(
    episodes: Iterable[Episode], total: Optional[int] = None
) -> Markup:
    """One card per episode with the TVMaze attribution link.

    total is the size of the unfiltered list; 0 renders "No episodes found."
    """
    return _render(
        "partials/episode_list.html",
        episodes=list(episodes),
        total=total,
        attribution_url=get_settings().attribution_url,
    )


def render_episode_selector(
    episodes: Iterable[Episode], selected: str = SHOW_ALL
) -> Markup:
    return _render(
        "partials/episode_selector.html",
        options=build_episode_options(episodes, selected),
    )


def render_show_selector(shows: Iterable[Show], selected: Optional[int] = None) -> Markup:
    return _render(
        "partials/show_selector.html", options=build_show_options(shows, selected)
    )


# Templates draw every list and selector through these functions
templates.env.globals.update(
    render_show_list=render_show_list,
    render_episode_list=render_episode_list,
    render_episode_selector=render_episode_selector,
    render_show_selector=render_show_selector,
)
