"""Library section retrieval.

A single ``Section`` type serves every content type; what differs between a
show section and a movie section lives in its ``SectionCapabilities`` record
(search type tags, extra endpoint categories, resource names used in errors).
"""

import logging
from typing import Optional, Union

from ..models.plex import (
    EndpointCategory,
    PlexMediaItem,
    PolymorphicToken,
    SearchType,
    SectionCapabilities,
    TitleToken,
)
from .endpoints import (
    build_endpoint,
    build_filter_endpoint,
    build_item_endpoint,
    build_metadata_endpoint,
    build_search_endpoint,
)
from .exceptions import LibraryError, TransportError, TransportErrorType
from .filters import FilterSpec
from .lookup import classify_token

logger = logging.getLogger(__name__)


class Section:
    """A library section bound to the client that serves it."""

    def __init__(self, client, key: str, title: str, capabilities: SectionCapabilities):
        self._client = client
        self._key = str(key)
        self._title = title
        self._capabilities = capabilities

    def __repr__(self) -> str:
        return f"<Section {self._key} {self._title!r} ({self._capabilities.section_type.value})>"

    @property
    def key(self) -> str:
        return self._key

    @property
    def title(self) -> str:
        return self._title

    @property
    def capabilities(self) -> SectionCapabilities:
        return self._capabilities

    @property
    def search_type(self) -> SearchType:
        return self._capabilities.search_type

    def build_endpoint(self, category: Union[EndpointCategory, str], *sub_paths) -> str:
        return build_endpoint(self._key, category, *sub_paths)

    def build_search_endpoint(self, search_type: SearchType, query: str) -> str:
        return build_search_endpoint(self._key, search_type, query)

    def build_url(self, endpoint: str) -> str:
        return self._client.build_url(endpoint)

    async def get_items(self, endpoint: str) -> list[PlexMediaItem]:
        return await self._client.get_items(endpoint)

    def _require(self, category: EndpointCategory):
        if not self._capabilities.supports(category):
            raise ValueError(
                f"{self._capabilities.section_type.value} sections do not support "
                f"the {category.value} category"
            )

    async def get_items_by_category(
        self, category: EndpointCategory, *sub_paths
    ) -> list[PlexMediaItem]:
        """Fetch items under any endpoint category this section supports."""
        self._require(category)
        return await self.get_items(self.build_endpoint(category, *sub_paths))

    async def get_all_items(self) -> list[PlexMediaItem]:
        return await self.get_items_by_category(EndpointCategory.ALL)

    async def get_unwatched_items(self) -> list[PlexMediaItem]:
        return await self.get_items_by_category(EndpointCategory.UNWATCHED)

    async def get_newest_items(self) -> list[PlexMediaItem]:
        return await self.get_items_by_category(EndpointCategory.NEWEST)

    async def get_recently_added_items(self) -> list[PlexMediaItem]:
        return await self.get_items_by_category(EndpointCategory.RECENTLY_ADDED)

    async def get_recently_viewed_items(self) -> list[PlexMediaItem]:
        return await self.get_items_by_category(EndpointCategory.RECENTLY_VIEWED)

    async def get_on_deck_items(self) -> list[PlexMediaItem]:
        return await self.get_items_by_category(EndpointCategory.ON_DECK)

    async def get_items_by_collection(self, collection_key) -> list[PlexMediaItem]:
        """Items in a collection; keys come from ``get_collections()``."""
        return await self.get_items_by_category(EndpointCategory.COLLECTION, collection_key)

    async def get_items_by_genre(self, genre_key) -> list[PlexMediaItem]:
        """Items under a genre; keys come from ``get_genres()``."""
        return await self.get_items_by_category(EndpointCategory.GENRE, genre_key)

    async def get_items_by_year(self, year: int) -> list[PlexMediaItem]:
        year = int(year)
        if not 1000 <= year <= 9999:
            raise ValueError(f"Expected a four digit year, got {year}")
        return await self.get_items_by_category(EndpointCategory.YEAR, year)

    async def get_items_by_first_character(self, character: str) -> list[PlexMediaItem]:
        if len(character) != 1:
            raise ValueError(f"Expected a single character, got {character!r}")
        return await self.get_items_by_category(
            EndpointCategory.FIRST_CHARACTER, character.upper()
        )

    async def get_items_by_content_rating(self, content_rating: str) -> list[PlexMediaItem]:
        """Items under a content rating; names come from ``get_content_ratings()``."""
        return await self.get_items_by_category(EndpointCategory.CONTENT_RATING, content_rating)

    async def _get_directory(self, category: EndpointCategory) -> dict:
        # Calls make_call directly: the listing is returned raw, not as items.
        self._require(category)
        data = await self._client.make_call(self.build_url(self.build_endpoint(category)))
        directories = data.get("MediaContainer", {}).get("Directory", [])
        return {d.get("title"): d.get("key") for d in directories}

    async def get_content_ratings(self) -> dict:
        """Content rating names mapped to their keys."""
        return await self._get_directory(EndpointCategory.CONTENT_RATING)

    async def get_collections(self) -> dict:
        return await self._get_directory(EndpointCategory.COLLECTION)

    async def get_genres(self) -> dict:
        return await self._get_directory(EndpointCategory.GENRE)

    async def get_years(self) -> dict:
        return await self._get_directory(EndpointCategory.YEAR)

    async def get_first_characters(self) -> dict:
        return await self._get_directory(EndpointCategory.FIRST_CHARACTER)

    async def search(
        self, query: str, search_type: Optional[SearchType] = None
    ) -> list[PlexMediaItem]:
        """Search titles in this section.

        Args:
            query: Free-text search term; an empty query matches everything
            search_type: Item type to search, defaults to the section's own

        Returns:
            Matching items, possibly empty
        """
        return await self.get_items(
            self.build_search_endpoint(search_type or self.search_type, query)
        )

    async def get_all_with_filter(self, filter_spec: Optional[FilterSpec] = None) -> list[PlexMediaItem]:
        """List items matching an arbitrary filter.

        ``get_all_with_filter({})`` requests the same endpoint as
        ``get_all_items()``.
        """
        return await self.get_items(build_filter_endpoint(self._key, filter_spec or {}))

    async def get_item_by_rating_key(self, rating_key: int) -> Optional[PlexMediaItem]:
        """Fetch one item by rating key, or None when the server has none."""
        try:
            items = await self.get_items(build_metadata_endpoint(rating_key))
        except TransportError as e:
            if e.type == TransportErrorType.NOT_FOUND.name:
                return None
            raise
        return self._in_section(items[0]) if items else None

    async def get_item_by_key(self, key: str) -> Optional[PlexMediaItem]:
        """Fetch the item a metadata key refers to, or None.

        A show or artist key names its children listing; the item itself is
        requested instead.
        """
        items = await self.get_items(build_item_endpoint(key))
        return self._in_section(items[0]) if items else None

    def _in_section(self, item: PlexMediaItem) -> Optional[PlexMediaItem]:
        # Metadata paths are global; drop items that live in another section.
        if item.library_section_id is not None and str(item.library_section_id) != self._key:
            logger.debug(
                "Item %s belongs to section %s, not %s",
                item.rating_key, item.library_section_id, self._key,
            )
            return None
        return item

    async def get_item_by_title(
        self,
        title: str,
        search_type: Optional[SearchType] = None,
        resource_name: Optional[str] = None,
    ) -> PlexMediaItem:
        """Fetch the single item whose title matches exactly.

        Matching is case-sensitive. Several items sharing the title is treated
        the same as no match.
        """
        resource_name = resource_name or self._capabilities.resource_name
        title = title.strip()
        matches = [item for item in await self.search(title, search_type) if item.title == title]

        if len(matches) == 1:
            return matches[0]
        if len(matches) > 1:
            logger.warning(
                'Title "%s" matches %d %s items in section %s',
                title, len(matches), resource_name, self._key,
            )
        raise LibraryError("RESOURCE_NOT_FOUND", resource_name, title)

    async def get_polymorphic_item(
        self,
        token: Union[int, str, PolymorphicToken],
        search_type: Optional[SearchType] = None,
        resource_name: Optional[str] = None,
    ) -> PlexMediaItem:
        """Fetch one item by rating key, key, or exact title.

        A rating key that resolves to nothing is retried as a title, so
        numeric titles remain reachable.
        """
        resource_name = resource_name or self._capabilities.resource_name
        lookup = classify_token(token)

        if lookup.kind == "rating_key":
            item = await self.get_item_by_rating_key(lookup.value)
            if item is not None:
                return item
            lookup = TitleToken(value=token if isinstance(token, str) else str(lookup.value))

        if lookup.kind == "key":
            item = await self.get_item_by_key(lookup.value)
            if item is None:
                raise LibraryError("RESOURCE_NOT_FOUND", resource_name, lookup.value)
            return item

        return await self.get_item_by_title(lookup.value, search_type, resource_name)
