"""Process-wide service instances and their FastAPI dependency getters."""

from tvglance.core.config import get_settings
from tvglance.services.catalog import Catalog
from tvglance.services.controller import SessionRegistry
from tvglance.services.tvmaze import TVMazeClient

settings = get_settings()

client = TVMazeClient(settings)
catalog = Catalog(client)
sessions = SessionRegistry(catalog, max_sessions=settings.max_sessions)


def get_catalog() -> Catalog:
    """Dependency returning the shared catalog."""
    return catalog


def get_sessions() -> SessionRegistry:
    """Dependency returning the shared session registry."""
    return sessions
