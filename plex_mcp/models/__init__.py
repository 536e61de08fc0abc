"""Pydantic models for the Plex library API."""

from .plex import (
    SearchType,
    SectionType,
    EndpointCategory,
    SectionCapabilities,
    CAPABILITIES,
    PlexLibrarySection,
    PlexMediaItem,
    RatingKey,
    ItemKey,
    TitleToken,
    PolymorphicToken,
)

__all__ = [
    "SearchType",
    "SectionType",
    "EndpointCategory",
    "SectionCapabilities",
    "CAPABILITIES",
    "PlexLibrarySection",
    "PlexMediaItem",
    "RatingKey",
    "ItemKey",
    "TitleToken",
    "PolymorphicToken",
]
