"""Pydantic models for Plex API responses."""

from enum import Enum
from typing import Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class SearchType(int, Enum):
    """Plex item type discriminators used by search and filter queries."""
    MOVIE = 1
    SHOW = 2
    SEASON = 3
    EPISODE = 4
    ARTIST = 8
    ALBUM = 9
    TRACK = 10
    PHOTO = 13
    PHOTO_ALBUM = 14


class SectionType(str, Enum):
    """Library section content types."""
    MOVIE = "movie"
    SHOW = "show"
    ARTIST = "artist"
    PHOTO = "photo"


class EndpointCategory(str, Enum):
    """Path segments under a library section."""
    ALL = "all"
    UNWATCHED = "unwatched"
    NEWEST = "newest"
    RECENTLY_ADDED = "recentlyAdded"
    RECENTLY_VIEWED = "recentlyViewed"
    RECENTLY_VIEWED_SHOWS = "recentlyViewedShows"
    ON_DECK = "onDeck"
    COLLECTION = "collection"
    GENRE = "genre"
    YEAR = "year"
    FIRST_CHARACTER = "firstCharacter"
    CONTENT_RATING = "contentRating"
    SEARCH = "search"


COMMON_CATEGORIES = frozenset({
    EndpointCategory.ALL,
    EndpointCategory.UNWATCHED,
    EndpointCategory.NEWEST,
    EndpointCategory.RECENTLY_ADDED,
    EndpointCategory.RECENTLY_VIEWED,
    EndpointCategory.ON_DECK,
    EndpointCategory.COLLECTION,
    EndpointCategory.GENRE,
    EndpointCategory.YEAR,
    EndpointCategory.FIRST_CHARACTER,
    EndpointCategory.SEARCH,
})


class SectionCapabilities(BaseModel):
    """What a section of a given content type can be asked for."""
    model_config = ConfigDict(frozen=True)

    section_type: SectionType
    search_type: SearchType
    leaf_search_type: Optional[SearchType] = None
    resource_name: str
    leaf_resource_name: Optional[str] = None
    categories: frozenset[EndpointCategory] = COMMON_CATEGORIES

    def supports(self, category: EndpointCategory) -> bool:
        return category in self.categories


SHOW_CAPABILITIES = SectionCapabilities(
    section_type=SectionType.SHOW,
    search_type=SearchType.SHOW,
    leaf_search_type=SearchType.EPISODE,
    resource_name="show",
    leaf_resource_name="episode",
    categories=COMMON_CATEGORIES | {
        EndpointCategory.RECENTLY_VIEWED_SHOWS,
        EndpointCategory.CONTENT_RATING,
    },
)

MOVIE_CAPABILITIES = SectionCapabilities(
    section_type=SectionType.MOVIE,
    search_type=SearchType.MOVIE,
    resource_name="movie",
    categories=COMMON_CATEGORIES | {EndpointCategory.CONTENT_RATING},
)

ARTIST_CAPABILITIES = SectionCapabilities(
    section_type=SectionType.ARTIST,
    search_type=SearchType.ARTIST,
    leaf_search_type=SearchType.TRACK,
    resource_name="artist",
    leaf_resource_name="track",
)

PHOTO_CAPABILITIES = SectionCapabilities(
    section_type=SectionType.PHOTO,
    search_type=SearchType.PHOTO_ALBUM,
    leaf_search_type=SearchType.PHOTO,
    resource_name="photo album",
    leaf_resource_name="photo",
)

CAPABILITIES = {
    SectionType.SHOW: SHOW_CAPABILITIES,
    SectionType.MOVIE: MOVIE_CAPABILITIES,
    SectionType.ARTIST: ARTIST_CAPABILITIES,
    SectionType.PHOTO: PHOTO_CAPABILITIES,
}


class PlexLibrarySection(BaseModel):
    """A Plex library section (e.g., Movies, TV Shows)."""
    key: str
    title: str
    type: SectionType


class PlexMediaItem(BaseModel):
    """A media item from the Plex library."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    rating_key: str = Field(alias="ratingKey")
    key: str
    title: str
    type: Optional[str] = None
    year: Optional[int] = None
    summary: Optional[str] = None
    content_rating: Optional[str] = Field(default=None, alias="contentRating")
    parent_title: Optional[str] = Field(default=None, alias="parentTitle")
    grandparent_title: Optional[str] = Field(default=None, alias="grandparentTitle")
    index: Optional[int] = None
    view_count: Optional[int] = Field(default=None, alias="viewCount")
    last_viewed_at: Optional[int] = Field(default=None, alias="lastViewedAt")
    added_at: Optional[int] = Field(default=None, alias="addedAt")
    library_section_id: Optional[int] = Field(default=None, alias="librarySectionID")

    @property
    def display_title(self) -> str:
        """Title with show/season context for episodes and tracks."""
        if self.grandparent_title:
            return f"{self.grandparent_title} - {self.title}"
        return self.title


class RatingKey(BaseModel):
    """Lookup token naming an item by its numeric rating key."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["rating_key"] = "rating_key"
    value: int


class ItemKey(BaseModel):
    """Lookup token naming an item by its metadata key path."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["key"] = "key"
    value: str


class TitleToken(BaseModel):
    """Lookup token naming an item by exact title."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["title"] = "title"
    value: str


PolymorphicToken = Union[RatingKey, ItemKey, TitleToken]
