"""Plex Library MCP Server - Plex library browsing via MCP protocol."""

import argparse
import logging
import os
from typing import Optional

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from .models.plex import PlexMediaItem, SectionType
from .tools import movies, music, shows
from .tools.exceptions import LibraryError, PlexError
from .tools.plex_client import PlexClient
from .tools.section import Section

load_dotenv()

# Configure logging
logging.basicConfig(
    level=getattr(logging, os.getenv("LOG_LEVEL", "INFO")),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize MCP server
mcp = FastMCP("plex-library-mcp")

# Global client instance
_client: Optional[PlexClient] = None

DEFAULT_LIMIT = 20
SUMMARY_LENGTH = 200

BROWSE_VIEWS = {
    "all": Section.get_all_items,
    "unwatched": Section.get_unwatched_items,
    "newest": Section.get_newest_items,
    "recently_added": Section.get_recently_added_items,
    "recently_viewed": Section.get_recently_viewed_items,
    "on_deck": Section.get_on_deck_items,
}

FILTER_FIELDS = {
    "collection": Section.get_items_by_collection,
    "genre": Section.get_items_by_genre,
    "year": Section.get_items_by_year,
    "first_character": Section.get_items_by_first_character,
    "content_rating": Section.get_items_by_content_rating,
}

ITEM_LOOKUPS = {
    (SectionType.SHOW, False): shows.get_show,
    (SectionType.SHOW, True): shows.get_episode,
    (SectionType.MOVIE, False): movies.get_movie,
    (SectionType.MOVIE, True): movies.get_movie,
    (SectionType.ARTIST, False): music.get_artist,
    (SectionType.ARTIST, True): music.get_track,
}


def get_client() -> PlexClient:
    """Get or create the Plex client."""
    global _client
    if _client is None:
        try:
            _client = PlexClient()
        except PlexError as e:
            raise ToolError(f"Configuration error: {str(e)}")
    return _client


def summarize_item(item: PlexMediaItem) -> dict:
    """Compact dict form of an item for tool output."""
    summary = item.summary
    if summary and len(summary) > SUMMARY_LENGTH:
        summary = summary[:SUMMARY_LENGTH] + "..."
    return {
        "rating_key": item.rating_key,
        "title": item.display_title,
        "type": item.type,
        "year": item.year,
        "content_rating": item.content_rating,
        "summary": summary,
    }


def item_listing(items: list[PlexMediaItem], limit: int, show_all: bool = False) -> dict:
    shown = items if show_all else items[:limit]
    return {
        "count": len(items),
        "returned": len(shown),
        "items": [summarize_item(i) for i in shown],
    }


@mcp.tool()
async def list_sections() -> dict:
    """List the Plex library sections.

    Returns:
        Section keys, titles and content types. Use the key or title with the
        other tools.
    """
    try:
        client = get_client()
        sections = await client.get_library_sections()
        return {
            "count": len(sections),
            "sections": [
                {"key": s.key, "title": s.title, "type": s.type.value}
                for s in sections
            ],
        }
    except PlexError as e:
        raise ToolError(f"Failed to list sections: {str(e)}")
    except Exception as e:
        raise ToolError(f"Unexpected error: {str(e)}")


@mcp.tool()
async def browse_section(
    section: str,
    view: str = "all",
    limit: int = DEFAULT_LIMIT,
    show_all: bool = False,
) -> dict:
    """Browse a library section.

    Args:
        section: Section key or title (from list_sections)
        view: One of "all", "unwatched", "newest", "recently_added",
            "recently_viewed" or "on_deck"
        limit: Maximum number of items to return (default 20)
        show_all: Set to true to return every item (ignores limit)

    Returns:
        Items in the requested view
    """
    try:
        fetch = BROWSE_VIEWS.get(view.lower())
        if fetch is None:
            raise ValueError(f"unknown view {view!r}, expected one of {', '.join(BROWSE_VIEWS)}")

        client = get_client()
        target = await client.get_section(section)
        items = await fetch(target)

        return {"section": target.title, "view": view.lower(), **item_listing(items, limit, show_all)}
    except PlexError as e:
        raise ToolError(f"Browse failed: {str(e)}")
    except ValueError as e:
        raise ToolError(f"Invalid input: {str(e)}")
    except Exception as e:
        raise ToolError(f"Unexpected error: {str(e)}")


@mcp.tool()
async def filter_section(
    section: str,
    field: str,
    value: str,
    limit: int = DEFAULT_LIMIT,
    show_all: bool = False,
) -> dict:
    """Get the items of a section sharing a collection, genre, year, first
    character or content rating.

    Args:
        section: Section key or title (from list_sections)
        field: One of "collection", "genre", "year", "first_character" or
            "content_rating"
        value: Collection or genre key, four digit year, single character, or
            content rating name (see get_content_ratings)
        limit: Maximum number of items to return (default 20)
        show_all: Set to true to return every item (ignores limit)

    Returns:
        Matching items
    """
    try:
        fetch = FILTER_FIELDS.get(field.lower())
        if fetch is None:
            raise ValueError(f"unknown field {field!r}, expected one of {', '.join(FILTER_FIELDS)}")

        client = get_client()
        target = await client.get_section(section)
        items = await fetch(target, value)

        return {
            "section": target.title,
            "filter": {"field": field.lower(), "value": value},
            **item_listing(items, limit, show_all),
        }
    except PlexError as e:
        raise ToolError(f"Filter failed: {str(e)}")
    except ValueError as e:
        raise ToolError(f"Invalid input: {str(e)}")
    except Exception as e:
        raise ToolError(f"Unexpected error: {str(e)}")


@mcp.tool()
async def get_content_ratings(section: str) -> dict:
    """List the content ratings used in a movie or TV section.

    Args:
        section: Section key or title (from list_sections)

    Returns:
        Content rating names mapped to their keys
    """
    try:
        client = get_client()
        target = await client.get_section(section)
        ratings = await target.get_content_ratings()
        return {"section": target.title, "content_ratings": ratings}
    except PlexError as e:
        raise ToolError(f"Failed to get content ratings: {str(e)}")
    except ValueError as e:
        raise ToolError(f"Invalid input: {str(e)}")
    except Exception as e:
        raise ToolError(f"Unexpected error: {str(e)}")


@mcp.tool()
async def search_section(
    query: str,
    section: Optional[str] = None,
    leaves: bool = False,
    limit: int = DEFAULT_LIMIT,
) -> dict:
    """Search titles in one section, or in every section.

    Args:
        query: Title search term
        section: Optional section key or title; searches all sections if omitted
        leaves: Search episodes/tracks instead of shows/artists
        limit: Maximum number of items to return (default 20)

    Returns:
        Matching items
    """
    try:
        client = get_client()
        if section is None:
            items = await client.search_library(query)
            return {"query": query, **item_listing(items, limit)}

        target = await client.get_section(section)
        search_type = target.capabilities.leaf_search_type if leaves else None
        items = await target.search(query, search_type)
        return {"query": query, "section": target.title, **item_listing(items, limit)}
    except PlexError as e:
        raise ToolError(f"Search failed: {str(e)}")
    except Exception as e:
        raise ToolError(f"Unexpected error: {str(e)}")


@mcp.tool()
async def get_item(section: str, item: str, leaf: bool = False) -> dict:
    """Get a single item by rating key, metadata key, or exact title.

    Args:
        section: Section key or title (from list_sections)
        item: A rating key (e.g. "1234"), a key (e.g. "/library/metadata/1234")
            or an exact title
        leaf: Look up an episode/track rather than a show/artist

    Returns:
        The item, or an error if it is not found or the title is ambiguous
    """
    try:
        client = get_client()
        target = await client.get_section(section)
        lookup = ITEM_LOOKUPS.get((target.capabilities.section_type, leaf))
        if lookup is None:
            found = await target.get_polymorphic_item(item)
        else:
            found = await lookup(target, item)
        return {"section": target.title, "item": summarize_item(found), "key": found.key}
    except LibraryError as e:
        raise ToolError(str(e))
    except PlexError as e:
        raise ToolError(f"Lookup failed: {str(e)}")
    except Exception as e:
        raise ToolError(f"Unexpected error: {str(e)}")


@mcp.tool()
async def get_recently_viewed(
    section: str,
    days: int = 7,
    episodes: bool = False,
    limit: int = DEFAULT_LIMIT,
) -> dict:
    """Get what was watched in a movie or TV section in the last N days.

    Args:
        section: Section key or title (from list_sections)
        days: Size of the window in days (default 7)
        episodes: For TV sections, list episodes instead of shows
        limit: Maximum number of items to return (default 20)

    Returns:
        Items ordered by most recently viewed
    """
    try:
        client = get_client()
        target = await client.get_section(section)
        section_type = target.capabilities.section_type

        if section_type == SectionType.SHOW:
            if episodes:
                items = await shows.get_viewed_episodes_by_days(target, days)
            else:
                items = await shows.get_viewed_shows_by_days(target, days)
        elif section_type == SectionType.MOVIE:
            items = await movies.get_viewed_movies_by_days(target, days)
        else:
            raise ValueError(f"{section_type.value} sections are not supported")

        return {"section": target.title, "days": days, **item_listing(items, limit)}
    except PlexError as e:
        raise ToolError(f"Failed to get recently viewed: {str(e)}")
    except ValueError as e:
        raise ToolError(f"Invalid input: {str(e)}")
    except Exception as e:
        raise ToolError(f"Unexpected error: {str(e)}")


@mcp.tool()
async def health_check() -> dict:
    """Check Plex server status and connectivity.

    Verifies the MCP server can connect to Plex.

    Returns:
        Server status and version information
    """
    try:
        client = get_client()
        status = await client.get_status()

        return {
            "status": "healthy",
            "plex": status,
        }
    except PlexError as e:
        return {
            "status": "unhealthy",
            "error": str(e),
        }
    except Exception as e:
        return {
            "status": "error",
            "error": str(e),
        }


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Plex Library MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse", "streamable-http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host for HTTP transport (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("PORT", "8080")),
        help="Port for HTTP transport (default: 8080)",
    )

    args = parser.parse_args()

    logger.info(f"Starting Plex Library MCP server with {args.transport} transport")

    if args.transport == "stdio":
        mcp.run()
    elif args.transport == "sse":
        mcp.run(transport="sse", host=args.host, port=args.port, stateless_http=True)
    elif args.transport == "streamable-http":
        mcp.run(transport="streamable-http", host=args.host, port=args.port, stateless_http=True)


if __name__ == "__main__":
    main()
