"""Movie section helpers."""

from typing import Union

from ..models.plex import PlexMediaItem, PolymorphicToken, SearchType
from .filters import viewed_by_days_filter
from .section import Section


def viewed_movies_filter(days: int) -> dict:
    return viewed_by_days_filter(SearchType.MOVIE, days)


async def get_all_movies(section: Section) -> list[PlexMediaItem]:
    return await section.get_all_items()


async def get_unwatched_movies(section: Section) -> list[PlexMediaItem]:
    return await section.get_unwatched_items()


async def get_recently_released_movies(section: Section) -> list[PlexMediaItem]:
    return await section.get_newest_items()


async def get_recently_added_movies(section: Section) -> list[PlexMediaItem]:
    return await section.get_recently_added_items()


async def get_recently_viewed_movies(section: Section) -> list[PlexMediaItem]:
    return await section.get_recently_viewed_items()


async def get_viewed_movies_by_days(section: Section, days: int) -> list[PlexMediaItem]:
    return await section.get_all_with_filter(viewed_movies_filter(days))


async def get_on_deck_movies(section: Section) -> list[PlexMediaItem]:
    return await section.get_on_deck_items()


async def get_movies_by_collection(section: Section, collection_key) -> list[PlexMediaItem]:
    return await section.get_items_by_collection(collection_key)


async def get_movies_by_first_character(section: Section, character: str) -> list[PlexMediaItem]:
    return await section.get_items_by_first_character(character)


async def get_movies_by_genre(section: Section, genre_key) -> list[PlexMediaItem]:
    return await section.get_items_by_genre(genre_key)


async def get_movies_by_year(section: Section, year: int) -> list[PlexMediaItem]:
    return await section.get_items_by_year(year)


async def get_movies_by_content_rating(section: Section, content_rating: str) -> list[PlexMediaItem]:
    return await section.get_items_by_content_rating(content_rating)


async def search_movies(section: Section, query: str) -> list[PlexMediaItem]:
    return await section.search(query, SearchType.MOVIE)


async def get_movie(section: Section, token: Union[int, str, PolymorphicToken]) -> PlexMediaItem:
    """One movie by rating key, key, or exact title."""
    return await section.get_polymorphic_item(token, SearchType.MOVIE, "movie")
