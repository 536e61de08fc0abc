"""TV show section helpers.

Thin functions over a show ``Section``: shows are the section's top-level
items and episodes its leaves.
"""

from typing import Union

from ..models.plex import EndpointCategory, PlexMediaItem, PolymorphicToken, SearchType
from .filters import viewed_by_days_filter
from .section import Section

EPISODE_VIEWED_FIELD = "episode.lastViewedAt"


def viewed_shows_filter(days: int) -> dict:
    return viewed_by_days_filter(SearchType.SHOW, days, field=EPISODE_VIEWED_FIELD)


def viewed_episodes_filter(days: int) -> dict:
    return viewed_by_days_filter(SearchType.EPISODE, days, field=EPISODE_VIEWED_FIELD)


async def get_all_shows(section: Section) -> list[PlexMediaItem]:
    return await section.get_all_items()


async def get_unwatched_shows(section: Section) -> list[PlexMediaItem]:
    return await section.get_unwatched_items()


async def get_recently_aired_episodes(section: Section) -> list[PlexMediaItem]:
    return await section.get_newest_items()


async def get_recently_added_episodes(section: Section) -> list[PlexMediaItem]:
    return await section.get_recently_added_items()


async def get_recently_viewed_episodes(section: Section) -> list[PlexMediaItem]:
    return await section.get_recently_viewed_items()


async def get_recently_viewed_shows(section: Section) -> list[PlexMediaItem]:
    return await section.get_items_by_category(EndpointCategory.RECENTLY_VIEWED_SHOWS)


async def get_viewed_shows_by_days(section: Section, days: int) -> list[PlexMediaItem]:
    """Shows with an episode viewed in the last ``days`` days, latest first."""
    return await section.get_all_with_filter(viewed_shows_filter(days))


async def get_viewed_episodes_by_days(section: Section, days: int) -> list[PlexMediaItem]:
    """Episodes viewed in the last ``days`` days, latest first."""
    return await section.get_all_with_filter(viewed_episodes_filter(days))


async def get_on_deck_episodes(section: Section) -> list[PlexMediaItem]:
    return await section.get_on_deck_items()


async def get_shows_by_collection(section: Section, collection_key) -> list[PlexMediaItem]:
    return await section.get_items_by_collection(collection_key)


async def get_shows_by_first_character(section: Section, character: str) -> list[PlexMediaItem]:
    return await section.get_items_by_first_character(character)


async def get_shows_by_genre(section: Section, genre_key) -> list[PlexMediaItem]:
    return await section.get_items_by_genre(genre_key)


async def get_shows_by_year(section: Section, year: int) -> list[PlexMediaItem]:
    return await section.get_items_by_year(year)


async def get_shows_by_content_rating(section: Section, content_rating: str) -> list[PlexMediaItem]:
    return await section.get_items_by_content_rating(content_rating)


async def get_content_ratings(section: Section) -> dict:
    """Raw content rating listing, name to key."""
    return await section.get_content_ratings()


async def search_shows(section: Section, query: str) -> list[PlexMediaItem]:
    return await section.search(query, SearchType.SHOW)


async def search_episodes(section: Section, query: str) -> list[PlexMediaItem]:
    return await section.search(query, SearchType.EPISODE)


async def get_show(section: Section, token: Union[int, str, PolymorphicToken]) -> PlexMediaItem:
    """One show by rating key, key, or exact title."""
    return await section.get_polymorphic_item(token, SearchType.SHOW, "show")


async def get_episode(section: Section, token: Union[int, str, PolymorphicToken]) -> PlexMediaItem:
    """One episode by rating key, key, or exact title."""
    return await section.get_polymorphic_item(token, SearchType.EPISODE, "episode")
