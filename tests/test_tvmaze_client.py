import pytest
from unittest.mock import AsyncMock, MagicMock, patch

import niquests

from tvglance.core.config import Settings
from tvglance.services.tvmaze import HttpFailure, NetworkFailure, TVMazeClient


def _response(payload, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = payload
    return response


@pytest.fixture
async def tvmaze():
    client = TVMazeClient(Settings(tvmaze_base_url="https://api.example.test/"))
    yield client
    await client.aclose()


@pytest.mark.asyncio
async def test_fetch_shows_parses_records(tvmaze):
    payload = [
        {
            "id": 1,
            "name": "Firefly",
            "summary": "<p>Space western.</p>",
            "image": {"medium": "https://img/1.jpg", "original": "https://img/1o.jpg"},
            "genres": ["Drama"],
            "status": "Ended",
            "rating": {"average": 8.9},
            "runtime": 60,
            "language": "English",
        },
        {
            "id": 2,
            "name": "No Art",
            "summary": None,
            "image": None,
            "genres": [],
            "status": "Running",
            "rating": {"average": None},
            "runtime": None,
        },
    ]
    with patch.object(
        tvmaze.session, "get", new_callable=AsyncMock, return_value=_response(payload)
    ) as mock_get:
        shows = await tvmaze.fetch_shows()

    mock_get.assert_awaited_once()
    assert mock_get.call_args.args[0] == "https://api.example.test/shows"
    assert [s.name for s in shows] == ["Firefly", "No Art"]
    assert shows[0].poster_url == "https://img/1.jpg"
    assert shows[0].rating.average == 8.9
    assert shows[1].poster_url == ""
    assert shows[1].rating.average is None
    assert shows[1].runtime is None


@pytest.mark.asyncio
async def test_fetch_episodes_hits_show_endpoint(tvmaze):
    payload = [
        {"id": 10, "name": "Serenity", "season": 1, "number": 1, "summary": "pilot",
         "image": {"medium": "https://img/10.jpg"}},
        {"id": 99, "name": "Special", "season": 1, "number": None, "summary": None,
         "image": None},
    ]
    with patch.object(
        tvmaze.session, "get", new_callable=AsyncMock, return_value=_response(payload)
    ) as mock_get:
        episodes = await tvmaze.fetch_episodes(1)

    assert mock_get.call_args.args[0] == "https://api.example.test/shows/1/episodes"
    assert episodes[0].name == "Serenity"
    assert episodes[1].number is None


@pytest.mark.asyncio
async def test_non_success_status_raises_http_failure(tvmaze):
    with patch.object(
        tvmaze.session,
        "get",
        new_callable=AsyncMock,
        return_value=_response({"name": "Not Found"}, status_code=404),
    ):
        with pytest.raises(HttpFailure) as excinfo:
            await tvmaze.fetch_episodes(12345)

    assert excinfo.value.status_code == 404


@pytest.mark.asyncio
async def test_transport_error_raises_network_failure(tvmaze):
    error = niquests.exceptions.ConnectionError("connection refused")
    with patch.object(tvmaze.session, "get", new_callable=AsyncMock, side_effect=error):
        with pytest.raises(NetworkFailure) as excinfo:
            await tvmaze.fetch_shows()

    assert excinfo.value.original_exception is error


@pytest.mark.asyncio
async def test_malformed_body_raises_http_failure(tvmaze):
    with patch.object(
        tvmaze.session,
        "get",
        new_callable=AsyncMock,
        return_value=_response({"unexpected": "object"}),
    ):
        with pytest.raises(HttpFailure):
            await tvmaze.fetch_shows()


@pytest.mark.asyncio
async def test_invalid_json_raises_http_failure(tvmaze):
    response = _response(None)
    response.json.side_effect = ValueError("Expecting value")
    with patch.object(tvmaze.session, "get", new_callable=AsyncMock, return_value=response):
        with pytest.raises(HttpFailure) as excinfo:
            await tvmaze.fetch_shows()

    assert isinstance(excinfo.value.original_exception, ValueError)


def test_settings_reject_bad_proxy():
    with pytest.raises(ValueError):
        Settings(proxy="ftp://proxy:21")
    assert Settings(proxy="socks5://127.0.0.1:1080").proxy == "socks5://127.0.0.1:1080"


def test_settings_strip_trailing_slash_from_base_url():
    assert Settings(tvmaze_base_url="https://api.tvmaze.com/").tvmaze_base_url == (
        "https://api.tvmaze.com"
    )
