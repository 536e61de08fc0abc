"""Endpoint and URL composition for the Plex library API.

Everything here is plain string building: no I/O, no state.
"""

from typing import Union
from urllib.parse import quote, quote_plus

from ..models.plex import EndpointCategory, SearchType
from .filters import FilterSpec, render_filter

ENDPOINT_SECTIONS = "library/sections"
ENDPOINT_METADATA = "library/metadata"
CHILD_LISTINGS = ("/children", "/allLeaves")


def _segment(value) -> str:
    if isinstance(value, EndpointCategory):
        return value.value
    return quote(str(value), safe="")


def build_endpoint(
    section_key: str,
    category: Union[EndpointCategory, str],
    *sub_paths,
) -> str:
    """Build a path scoped to a library section.

    ``build_endpoint("2", EndpointCategory.GENRE, 31)`` gives
    ``library/sections/2/genre/31``. Categories are used verbatim; sub-paths
    are percent-escaped so that ratings like ``TV-14`` or ``PG/13`` stay one
    segment.
    """
    category_part = category.value if isinstance(category, EndpointCategory) else str(category)
    parts = [ENDPOINT_SECTIONS, str(section_key), category_part]
    parts.extend(_segment(p) for p in sub_paths)
    return "/".join(parts)


def build_search_endpoint(section_key: str, search_type: SearchType, query: str) -> str:
    """Build a section search path for one item type and a free-text query."""
    endpoint = build_endpoint(section_key, EndpointCategory.SEARCH)
    return f"{endpoint}?type={int(search_type)}&query={quote_plus(query.strip())}"


def build_filter_endpoint(section_key: str, filter_spec: FilterSpec) -> str:
    """Build the ``all`` listing path with a rendered filter query.

    An empty filter yields the bare ``all`` endpoint.
    """
    endpoint = build_endpoint(section_key, EndpointCategory.ALL)
    query = render_filter(filter_spec)
    if not query:
        return endpoint
    return f"{endpoint}?{query}"


def build_metadata_endpoint(rating_key: int) -> str:
    return f"{ENDPOINT_METADATA}/{int(rating_key)}"


def build_item_endpoint(key: str) -> str:
    """Path of the item a metadata key refers to.

    Show and artist keys point at their children listing
    (``/library/metadata/1234/children``); the item itself is one level up.
    """
    path = key.split("?", 1)[0].strip().strip("/")
    for suffix in CHILD_LISTINGS:
        if path.endswith(suffix):
            path = path[: -len(suffix)]
    return path


def build_url(root_url: str, endpoint: str) -> str:
    """Join the server root with an endpoint using exactly one slash."""
    return f"{root_url.rstrip('/')}/{endpoint.lstrip('/')}"
