"""UI routes returning HTML via Jinja2 templates.

Every HTMX event posts here, runs exactly one controller action and gets
the whole #app partial back, so there is a single render path.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, HTTPException, Request

from tvglance.core.config import get_settings
from tvglance.core.deps import get_sessions
from tvglance.services.controller import Controller, SessionRegistry
from tvglance.services.renderer import templates

router = APIRouter()
logger = logging.getLogger(__name__)

Sessions = Annotated[SessionRegistry, Depends(get_sessions)]


def _session(request: Request, sessions: SessionRegistry) -> tuple[str, Controller]:
    cookie_name = get_settings().session_cookie_name
    return sessions.get_or_create(request.cookies.get(cookie_name))


def _respond(
    request: Request,
    session_id: str,
    controller: Controller,
    name: str = "partials/app.html",
):
    """Render the current view and pin the session cookie."""
    settings = get_settings()
    response = templates.TemplateResponse(
        request=request,
        name=name,
        context={
            "vm": controller.render(),
            "attribution_url": settings.attribution_url,
        },
    )
    response.set_cookie(
        settings.session_cookie_name, session_id, httponly=True, samesite="lax"
    )
    return response


@router.get("/")
async def index(request: Request, sessions: Sessions):
    """Render the full page, loading the show catalog on first visit."""
    session_id, controller = _session(request, sessions)
    await controller.load_shows()
    return _respond(request, session_id, controller, name="index.html")


@router.post("/shows/reload")
async def reload_shows(request: Request, sessions: Sessions):
    """Retry loading the show catalog after a failure."""
    session_id, controller = _session(request, sessions)
    await controller.load_shows()
    return _respond(request, session_id, controller)


@router.post("/shows/select")
async def select_show(
    request: Request,
    sessions: Sessions,
    show_id: str = Form(""),
):
    """Open a show's episode list (show card click or show selector change)."""
    session_id, controller = _session(request, sessions)
    show_id = show_id.strip()
    if not show_id:
        controller.back()
    elif not (show_id.isascii() and show_id.isdigit()):
        raise HTTPException(status_code=400, detail="Invalid show id")
    else:
        await controller.select_show(int(show_id))
    return _respond(request, session_id, controller)


@router.post("/shows/search")
async def search_shows(request: Request, sessions: Sessions, term: str = Form("")):
    session_id, controller = _session(request, sessions)
    controller.search_shows(term)
    return _respond(request, session_id, controller)


@router.post("/episodes/search")
async def search_episodes(
    request: Request, sessions: Sessions, term: str = Form("")
):
    session_id, controller = _session(request, sessions)
    controller.search(term)
    return _respond(request, session_id, controller)


@router.post("/episodes/select")
async def select_episode(
    request: Request, sessions: Sessions, value: str = Form("all")
):
    session_id, controller = _session(request, sessions)
    controller.select_episode(value)
    return _respond(request, session_id, controller)


@router.post("/back")
async def back_to_shows(request: Request, sessions: Sessions):
    session_id, controller = _session(request, sessions)
    controller.back()
    return _respond(request, session_id, controller)
