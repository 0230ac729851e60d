"""Search filtering for show and episode lists."""

from typing import Iterable, List

from tvglance.models.media import Episode, Show


def normalize_term(term: str | None) -> str:
    """Trim and case-fold a search term."""
    return (term or "").strip().casefold()


def _matches(term: str, record_id: int, *fields: str | None) -> bool:
    """OR-match: empty term, exact id, or substring of any field."""
    if not term or term == str(record_id):
        return True
    return any(term in (field or "").casefold() for field in fields)


def filter_episodes(episodes: Iterable[Episode], term: str | None) -> List[Episode]:
    """Return episodes matching term, in their original order.

    Summaries are matched as raw HTML, tags included.
    """
    needle = normalize_term(term)
    return [ep for ep in episodes if _matches(needle, ep.id, ep.name, ep.summary)]


def filter_shows(shows: Iterable[Show], term: str | None) -> List[Show]:
    """Return shows whose name, summary or genres match term."""
    needle = normalize_term(term)
    return [
        show
        for show in shows
        if _matches(needle, show.id, show.name, show.summary, " ".join(show.genres))
    ]
