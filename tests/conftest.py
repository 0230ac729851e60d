import asyncio

import pytest

from tvglance.models.media import Episode, Show


class FakeTVMazeClient:
    """Stands in for TVMazeClient, recording every fetch it serves."""

    def __init__(self, shows=None, episodes=None, gate: asyncio.Event | None = None):
        self.shows = shows or []
        self.episodes = episodes or {}
        self.errors: dict = {}
        self.gate = gate
        self.calls: list = []

    async def fetch_shows(self):
        self.calls.append("shows")
        if self.gate is not None:
            await self.gate.wait()
        if "shows" in self.errors:
            raise self.errors["shows"]
        return list(self.shows)

    async def fetch_episodes(self, show_id):
        self.calls.append(("episodes", show_id))
        if self.gate is not None:
            await self.gate.wait()
        if show_id in self.errors:
            raise self.errors[show_id]
        return list(self.episodes.get(show_id, []))

    async def aclose(self):
        pass


@pytest.fixture
def firefly():
    return Show(
        id=1,
        name="Firefly",
        summary="<p>Five hundred years in the future, a renegade crew...</p>",
        image={"medium": "https://static.tvmaze.com/firefly.jpg"},
        genres=["Drama", "Science-Fiction", "Western"],
        status="Ended",
        rating={"average": 8.9},
        runtime=60,
    )


@pytest.fixture
def dollhouse():
    return Show(
        id=2,
        name="Dollhouse",
        summary="<p>Echo is an <b>Active</b>.</p>",
        genres=["Thriller"],
        status="Ended",
        rating={"average": None},
        runtime=None,
    )


@pytest.fixture
def serenity():
    return Episode(
        id=10,
        name="Serenity",
        season=1,
        number=1,
        summary="pilot",
        image={"medium": "https://static.tvmaze.com/serenity.jpg"},
    )


@pytest.fixture
def episodes():
    return [
        Episode(id=10, name="Serenity", season=1, number=1, summary="<p>pilot</p>"),
        Episode(id=11, name="The Train Job", season=1, number=2, summary="<p>A heist.</p>"),
        Episode(id=12, name="Bushwhacked", season=1, number=3, summary="<p>Reavers attack.</p>"),
        Episode(id=13, name="Shindig", season=1, number=4, summary="<p>A ball on Persephone.</p>"),
    ]


@pytest.fixture
def fake_client(firefly, dollhouse, serenity):
    return FakeTVMazeClient(shows=[firefly, dollhouse], episodes={1: [serenity]})


@pytest.fixture
def client_factory():
    return FakeTVMazeClient
