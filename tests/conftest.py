"""Shared fixtures for the Plex library tests."""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest

from plex_mcp.models.plex import (
    ARTIST_CAPABILITIES,
    MOVIE_CAPABILITIES,
    SHOW_CAPABILITIES,
    PlexMediaItem,
)
from plex_mcp.tools.plex_client import PlexClient
from plex_mcp.tools.section import Section

# Set environment variables before the client reads them (for CI without .env)
os.environ.setdefault("PLEX_URL", "http://plex.local:32400")
os.environ.setdefault("PLEX_TOKEN", "test-token")

BASE_URL = "http://plex.local:32400"


def make_item(rating_key: str, title: str, **extra) -> PlexMediaItem:
    return PlexMediaItem.model_validate({
        "ratingKey": rating_key,
        "key": f"/library/metadata/{rating_key}",
        "title": title,
        **extra,
    })


def fake_session(status: int, payload=None, text: str = "") -> MagicMock:
    """An aiohttp-like session whose get() yields one canned response."""
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=payload)
    response.text = AsyncMock(return_value=text)

    session = MagicMock()
    session.closed = False
    session.get.return_value.__aenter__.return_value = response
    session.get.return_value.__aexit__.return_value = False
    return session


@pytest.fixture
def client() -> PlexClient:
    """A client whose transport is replaced by mocks."""
    client = PlexClient(base_url=BASE_URL, token="test-token")
    client.get_items = AsyncMock(return_value=[])
    client.make_call = AsyncMock(return_value={})
    return client


@pytest.fixture
def show_section(client) -> Section:
    return Section(client, "2", "TV Shows", SHOW_CAPABILITIES)


@pytest.fixture
def movie_section(client) -> Section:
    return Section(client, "1", "Movies", MOVIE_CAPABILITIES)


@pytest.fixture
def music_section(client) -> Section:
    return Section(client, "3", "Music", ARTIST_CAPABILITIES)
