"""Music (artist) section helpers."""

from typing import Union

from ..models.plex import PlexMediaItem, PolymorphicToken, SearchType
from .section import Section


async def get_all_artists(section: Section) -> list[PlexMediaItem]:
    return await section.get_all_items()


async def get_recently_added_albums(section: Section) -> list[PlexMediaItem]:
    return await section.get_recently_added_items()


async def get_recently_viewed_tracks(section: Section) -> list[PlexMediaItem]:
    return await section.get_recently_viewed_items()


async def get_artists_by_genre(section: Section, genre_key) -> list[PlexMediaItem]:
    return await section.get_items_by_genre(genre_key)


async def get_artists_by_first_character(section: Section, character: str) -> list[PlexMediaItem]:
    return await section.get_items_by_first_character(character)


async def search_artists(section: Section, query: str) -> list[PlexMediaItem]:
    return await section.search(query, SearchType.ARTIST)


async def search_albums(section: Section, query: str) -> list[PlexMediaItem]:
    return await section.search(query, SearchType.ALBUM)


async def search_tracks(section: Section, query: str) -> list[PlexMediaItem]:
    return await section.search(query, SearchType.TRACK)


async def get_artist(section: Section, token: Union[int, str, PolymorphicToken]) -> PlexMediaItem:
    return await section.get_polymorphic_item(token, SearchType.ARTIST, "artist")


async def get_album(section: Section, token: Union[int, str, PolymorphicToken]) -> PlexMediaItem:
    return await section.get_polymorphic_item(token, SearchType.ALBUM, "album")


async def get_track(section: Section, token: Union[int, str, PolymorphicToken]) -> PlexMediaItem:
    return await section.get_polymorphic_item(token, SearchType.TRACK, "track")
