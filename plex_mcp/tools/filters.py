"""Filter and sort query rendering for section listings.

A FilterSpec is an ordered mapping of Plex filter keys to values, e.g.::

    {
        "type": SearchType.SHOW,
        "episode.lastViewedAt>>": RelativeDate(7),
        "sort": "lastViewedAt:desc",
    }

which renders as ``type=2&episode.lastViewedAt>>=-7d&sort=lastViewedAt:desc``.
Keys are written out as given, comparison suffix included, and keys that are
not special-cased pass through untouched and in order.
"""

from enum import Enum
from typing import Any, Mapping, Optional
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict

from ..models.plex import SearchType

FilterSpec = Mapping[str, Any]

KEY_SAFE = ".<>!=_"
VALUE_SAFE = "-:,._"


class Comparison(str, Enum):
    """Operator suffixes Plex accepts on filter keys."""
    IS = ""
    IS_NOT = "!"
    EXACT = "="
    NOT_EXACT = "!="
    AFTER = ">>"
    BEFORE = "<<"
    GREATER_OR_EQUAL = ">"
    LESS_OR_EQUAL = "<"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class RelativeDate(BaseModel):
    """A date relative to now, e.g. ``RelativeDate(7)`` is seven days ago."""
    model_config = ConfigDict(frozen=True)

    amount: int
    unit: str = "d"

    def __init__(self, amount: int, unit: str = "d", **data):
        super().__init__(amount=amount, unit=unit, **data)

    def __str__(self) -> str:
        return f"-{abs(int(self.amount))}{self.unit}"


class SortSpec(BaseModel):
    """Sort field with direction, rendered as ``field:direction``."""
    model_config = ConfigDict(frozen=True)

    field: str
    direction: SortDirection = SortDirection.ASC

    def __init__(self, field: str, direction=SortDirection.ASC, **data):
        super().__init__(field=field, direction=direction, **data)

    def __str__(self) -> str:
        return f"{self.field}:{self.direction.value}"


def field_key(field: str, comparison: Comparison = Comparison.IS) -> str:
    """Append a comparison suffix to a filter field name."""
    return f"{field}{comparison.value}"


def render_value(key: str, value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "1" if value else "0"
    if key == "sort" and isinstance(value, tuple) and len(value) == 2:
        return str(SortSpec(value[0], value[1]))
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(render_value(key, v) for v in value)
    return str(value)


def render_filter(filter_spec: Optional[FilterSpec]) -> str:
    """Render a FilterSpec into the query string Plex expects."""
    if not filter_spec:
        return ""
    pairs = []
    for key, value in filter_spec.items():
        rendered = render_value(key, value)
        pairs.append(f"{quote(str(key), safe=KEY_SAFE)}={quote(rendered, safe=VALUE_SAFE)}")
    return "&".join(pairs)


def unwatched_filter(search_type: SearchType) -> dict:
    return {"type": search_type, "unwatched": True}


def collection_filter(search_type: SearchType, collection_key) -> dict:
    return {"type": search_type, "collection": collection_key}


def genre_filter(search_type: SearchType, genre_key) -> dict:
    return {"type": search_type, "genre": genre_key}


def year_filter(search_type: SearchType, year: int) -> dict:
    return {"type": search_type, "year": int(year)}


def first_character_filter(search_type: SearchType, character: str) -> dict:
    return {"type": search_type, "firstCharacter": character.upper()}


def content_rating_filter(search_type: SearchType, content_rating: str) -> dict:
    return {"type": search_type, "contentRating": content_rating}


def newest_filter(search_type: SearchType) -> dict:
    return {"type": search_type, "sort": SortSpec("originallyAvailableAt", SortDirection.DESC)}


def recently_added_filter(search_type: SearchType) -> dict:
    return {"type": search_type, "sort": SortSpec("addedAt", SortDirection.DESC)}


def recently_viewed_filter(search_type: SearchType) -> dict:
    return {
        "type": search_type,
        field_key("viewCount", Comparison.AFTER): 0,
        "sort": SortSpec("lastViewedAt", SortDirection.DESC),
    }


def viewed_by_days_filter(search_type: SearchType, days: int, field: str = "lastViewedAt") -> dict:
    """Items viewed within the last ``days`` days, most recent first.

    ``field`` is the date field the window applies to; show sections filter on
    ``episode.lastViewedAt`` so a show counts as viewed when any of its
    episodes was.
    """
    return {
        "type": search_type,
        field_key(field, Comparison.AFTER): RelativeDate(int(days)),
        "sort": "lastViewedAt:desc",
    }
