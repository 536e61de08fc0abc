"""Plex library client."""

from .exceptions import (
    PlexError,
    TypedPlexError,
    UnknownErrorTypeError,
    LibraryError,
    TransportError,
    ConfigurationError,
)
from .plex_client import PlexClient, map_response
from .section import Section

__all__ = [
    "PlexError",
    "TypedPlexError",
    "UnknownErrorTypeError",
    "LibraryError",
    "TransportError",
    "ConfigurationError",
    "PlexClient",
    "map_response",
    "Section",
]
