"""Plex Media Server API client."""

import asyncio
import logging
import os
from typing import Optional, Type
import aiohttp
from pydantic import BaseModel, ValidationError
from yarl import URL

from ..models.plex import (
    CAPABILITIES,
    PlexLibrarySection,
    PlexMediaItem,
    SectionType,
)
from .endpoints import ENDPOINT_SECTIONS, build_url
from .exceptions import (
    ConfigurationError,
    LibraryError,
    TransportError,
)
from .section import Section

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
SEARCH_RESULT_CAP = 50


def map_response(raw: Optional[dict], item_model: Type[BaseModel] = PlexMediaItem) -> list:
    """Turn a decoded Plex response into a list of items.

    Entries come from ``MediaContainer.Metadata``; directory listings that
    carry rating keys (show and artist sections) are accepted too. Entries the
    model rejects are skipped.
    """
    container = (raw or {}).get("MediaContainer") or {}
    entries = container.get("Metadata")
    if entries is None:
        entries = [d for d in container.get("Directory", []) if "ratingKey" in d]

    items = []
    for entry in entries:
        try:
            items.append(item_model.model_validate(entry))
        except ValidationError:
            logger.debug("Skipping malformed entry: %s", entry.get("title", entry))
            continue
    return items


class PlexClient:
    """Async client for Plex Media Server API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or os.getenv("PLEX_URL", "")).rstrip("/")
        self.token = token or os.getenv("PLEX_TOKEN", "")
        self.timeout = float(timeout or os.getenv("PLEX_TIMEOUT", DEFAULT_TIMEOUT))
        self._session: Optional[aiohttp.ClientSession] = None
        self._sections_cache: Optional[list[PlexLibrarySection]] = None

        if not self.base_url:
            raise ConfigurationError("MISSING_SETTING", "PLEX_URL")
        if not self.token:
            raise ConfigurationError("MISSING_SETTING", "PLEX_TOKEN")

    async def __aenter__(self) -> "PlexClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={
                    "X-Plex-Token": self.token,
                    "Accept": "application/json",
                },
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
        return self._session

    async def close(self):
        """Close the session."""
        if self._session and not self._session.closed:
            await self._session.close()

    def build_url(self, endpoint: str) -> str:
        return build_url(self.base_url, endpoint)

    async def make_call(self, url: str) -> dict:
        """GET a fully qualified URL and return the decoded JSON body.

        The URL is sent as already encoded so filter keys such as
        ``episode.lastViewedAt>>`` reach the server verbatim.
        """
        session = await self._get_session()
        logger.debug("GET %s", url)

        try:
            async with session.get(URL(url, encoded=True)) as response:
                if response.status == 401:
                    raise TransportError("UNAUTHORIZED", status=401)
                if response.status == 404:
                    raise TransportError("NOT_FOUND", url, status=404)
                if response.status >= 400:
                    text = await response.text()
                    raise TransportError(
                        "BAD_RESPONSE", response.status, text, status=response.status
                    )
                try:
                    data = await response.json(content_type=None)
                except ValueError as e:
                    raise TransportError(
                        "BAD_RESPONSE", response.status, f"undecodable body ({e})",
                        status=response.status,
                    ) from e
                return data or {}
        except asyncio.TimeoutError as e:
            raise TransportError("CONNECTION_FAILED", f"timed out after {self.timeout}s") from e
        except aiohttp.ClientError as e:
            raise TransportError("CONNECTION_FAILED", str(e)) from e

    async def _request(self, endpoint: str) -> dict:
        return await self.make_call(self.build_url(endpoint))

    async def get_items(self, endpoint: str, item_model: Type[BaseModel] = PlexMediaItem) -> list:
        """Request an endpoint and map the response into items."""
        return map_response(await self._request(endpoint), item_model)

    async def get_status(self) -> dict:
        """Get Plex server identity/status."""
        data = await self._request("identity")
        mc = data.get("MediaContainer", {})
        return {
            "version": mc.get("version"),
            "machine_id": mc.get("machineIdentifier"),
        }

    async def get_library_sections(self) -> list[PlexLibrarySection]:
        """Get library sections, using cache if available."""
        if self._sections_cache is not None:
            return self._sections_cache

        data = await self._request(ENDPOINT_SECTIONS)
        directories = data.get("MediaContainer", {}).get("Directory", [])

        sections = []
        for d in directories:
            try:
                section_type = SectionType(d.get("type", ""))
            except ValueError:
                logger.debug("Ignoring section %s of type %s", d.get("title"), d.get("type"))
                continue
            sections.append(PlexLibrarySection(
                key=str(d["key"]),
                title=d["title"],
                type=section_type,
            ))

        self._sections_cache = sections
        return sections

    async def get_section(self, key_or_title: str) -> Section:
        """Get a section by its key or its title.

        Titles are compared exactly first, then case-insensitively.
        """
        sections = await self.get_library_sections()
        token = str(key_or_title).strip()

        match = next((s for s in sections if s.key == token), None)
        if match is None:
            match = next((s for s in sections if s.title == token), None)
        if match is None:
            match = next((s for s in sections if s.title.casefold() == token.casefold()), None)
        if match is None:
            raise LibraryError("RESOURCE_NOT_FOUND", "section", key_or_title)

        return Section(self, match.key, match.title, CAPABILITIES[match.type])

    async def get_sections(self, section_type: Optional[SectionType] = None) -> list[Section]:
        sections = await self.get_library_sections()
        return [
            Section(self, s.key, s.title, CAPABILITIES[s.type])
            for s in sections
            if section_type is None or s.type == section_type
        ]

    async def search_library(
        self,
        query: str,
        media_type: Optional[SectionType] = None,
    ) -> list[PlexMediaItem]:
        """Search every library section by title.

        Args:
            query: Title search term
            media_type: Optional filter - only search sections of this type

        Returns:
            List of matching media items, capped at 50
        """
        results = []
        for section in await self.get_sections(media_type):
            results.extend(await section.search(query))
            if len(results) >= SEARCH_RESULT_CAP:
                return results[:SEARCH_RESULT_CAP]

        return results
