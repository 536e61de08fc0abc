"""Tests for the section retrieval contract."""

import pytest

from conftest import make_item
from plex_mcp.models.plex import SearchType, TitleToken
from plex_mcp.tools.exceptions import LibraryError, TransportError


def requested_endpoint(client) -> str:
    return client.get_items.await_args.args[0]


class TestListings:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("method, category", [
        ("get_all_items", "all"),
        ("get_unwatched_items", "unwatched"),
        ("get_newest_items", "newest"),
        ("get_recently_added_items", "recentlyAdded"),
        ("get_recently_viewed_items", "recentlyViewed"),
        ("get_on_deck_items", "onDeck"),
    ])
    async def test_category_endpoints(self, client, show_section, method, category):
        await getattr(show_section, method)()

        assert requested_endpoint(client) == f"library/sections/2/{category}"

    @pytest.mark.asyncio
    async def test_items_are_returned_as_given(self, client, show_section):
        items = [make_item("10", "Lost"), make_item("11", "Fringe")]
        client.get_items.return_value = items

        assert await show_section.get_all_items() == items

    @pytest.mark.asyncio
    async def test_empty_result_is_not_an_error(self, client, show_section):
        client.get_items.return_value = []

        assert await show_section.get_unwatched_items() == []

    @pytest.mark.asyncio
    async def test_keyed_listings(self, client, movie_section):
        await movie_section.get_items_by_collection(55)
        assert requested_endpoint(client) == "library/sections/1/collection/55"

        await movie_section.get_items_by_genre(31)
        assert requested_endpoint(client) == "library/sections/1/genre/31"

        await movie_section.get_items_by_year("1999")
        assert requested_endpoint(client) == "library/sections/1/year/1999"

        await movie_section.get_items_by_first_character("m")
        assert requested_endpoint(client) == "library/sections/1/firstCharacter/M"

        await movie_section.get_items_by_content_rating("PG-13")
        assert requested_endpoint(client) == "library/sections/1/contentRating/PG-13"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("year", [99, 20001])
    async def test_year_must_have_four_digits(self, client, movie_section, year):
        with pytest.raises(ValueError):
            await movie_section.get_items_by_year(year)
        client.get_items.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_first_character_must_be_single(self, client, movie_section):
        with pytest.raises(ValueError):
            await movie_section.get_items_by_first_character("ab")

    @pytest.mark.asyncio
    async def test_unsupported_category_is_rejected(self, client, music_section):
        with pytest.raises(ValueError):
            await music_section.get_items_by_content_rating("PG")
        client.get_items.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_transport_errors_propagate(self, client, show_section):
        client.get_items.side_effect = TransportError("UNAUTHORIZED", status=401)

        with pytest.raises(TransportError):
            await show_section.get_all_items()


class TestRawListings:
    @pytest.mark.asyncio
    async def test_content_ratings_bypass_item_mapping(self, client, show_section):
        client.make_call.return_value = {
            "MediaContainer": {
                "Directory": [
                    {"key": "TV-14", "title": "TV-14"},
                    {"key": "TV-MA", "title": "TV-MA"},
                ]
            }
        }

        ratings = await show_section.get_content_ratings()

        assert ratings == {"TV-14": "TV-14", "TV-MA": "TV-MA"}
        client.make_call.assert_awaited_once_with(
            "http://plex.local:32400/library/sections/2/contentRating"
        )
        client.get_items.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_genres(self, client, movie_section):
        client.make_call.return_value = {
            "MediaContainer": {"Directory": [{"key": "31", "title": "Drama"}]}
        }

        assert await movie_section.get_genres() == {"Drama": "31"}

    @pytest.mark.asyncio
    async def test_empty_listing(self, client, movie_section):
        client.make_call.return_value = {}

        assert await movie_section.get_years() == {}


class TestSearch:
    @pytest.mark.asyncio
    async def test_defaults_to_section_search_type(self, client, show_section):
        await show_section.search("lost")

        assert requested_endpoint(client) == "library/sections/2/search?type=2&query=lost"

    @pytest.mark.asyncio
    async def test_explicit_search_type(self, client, show_section):
        await show_section.search("pilot", SearchType.EPISODE)

        assert requested_endpoint(client) == "library/sections/2/search?type=4&query=pilot"

    @pytest.mark.asyncio
    async def test_empty_query_is_sent_as_is(self, client, movie_section):
        await movie_section.search("")

        assert requested_endpoint(client) == "library/sections/1/search?type=1&query="


class TestFilter:
    @pytest.mark.asyncio
    async def test_empty_filter_matches_all_items(self, client, show_section):
        await show_section.get_all_with_filter({})
        filtered = requested_endpoint(client)

        await show_section.get_all_items()

        assert filtered == requested_endpoint(client)

    @pytest.mark.asyncio
    async def test_no_filter_matches_all_items(self, client, show_section):
        await show_section.get_all_with_filter()

        assert requested_endpoint(client) == "library/sections/2/all"

    @pytest.mark.asyncio
    async def test_filter_is_rendered(self, client, movie_section):
        await movie_section.get_all_with_filter({"type": SearchType.MOVIE, "year>>": 2000})

        assert requested_endpoint(client) == "library/sections/1/all?type=1&year>>=2000"


class TestPolymorphicLookup:
    @pytest.mark.asyncio
    async def test_rating_key(self, client, show_section):
        show = make_item("1234", "Lost")
        client.get_items.return_value = [show]

        assert await show_section.get_polymorphic_item(1234) == show
        assert requested_endpoint(client) == "library/metadata/1234"

    @pytest.mark.asyncio
    async def test_key(self, client, show_section):
        show = make_item("1234", "Lost", type="show")

        async def respond(endpoint):
            if endpoint == "library/metadata/1234":
                return [show]
            return [make_item("77", "Season 1", type="season")]

        client.get_items.side_effect = respond

        result = await show_section.get_polymorphic_item("/library/metadata/1234/children")

        assert result == show
        assert requested_endpoint(client) == "library/metadata/1234"

    @pytest.mark.asyncio
    async def test_plain_key(self, client, movie_section):
        movie = make_item("42", "Alien")
        client.get_items.return_value = [movie]

        assert await movie_section.get_polymorphic_item("/library/metadata/42") == movie
        assert requested_endpoint(client) == "library/metadata/42"

    @pytest.mark.asyncio
    async def test_key_from_another_section_is_not_found(self, client, show_section):
        client.get_items.return_value = [make_item("42", "Alien", librarySectionID=1)]

        with pytest.raises(LibraryError):
            await show_section.get_polymorphic_item("/library/metadata/42")

    @pytest.mark.asyncio
    async def test_rating_key_in_this_section(self, client, show_section):
        show = make_item("1234", "Lost", librarySectionID=2)
        client.get_items.return_value = [show]

        assert await show_section.get_polymorphic_item("1234") == show
        client.get_items.assert_awaited_once_with("library/metadata/1234")

    @pytest.mark.asyncio
    async def test_rating_key_from_another_section_falls_back_to_title(self, client, show_section):
        titled = make_item("9", "1234", librarySectionID=2)

        async def respond(endpoint):
            if endpoint.startswith("library/metadata/"):
                return [make_item("1234", "Alien", librarySectionID=1)]
            return [titled]

        client.get_items.side_effect = respond

        assert await show_section.get_polymorphic_item("1234") == titled
        assert requested_endpoint(client) == "library/sections/2/search?type=2&query=1234"

    @pytest.mark.asyncio
    async def test_title_is_stripped_before_matching(self, client, show_section):
        lost = make_item("1", "Lost")
        client.get_items.return_value = [lost]

        assert await show_section.get_polymorphic_item("  Lost ") == lost
        assert requested_endpoint(client) == "library/sections/2/search?type=2&query=Lost"

    @pytest.mark.asyncio
    async def test_unique_exact_title(self, client, show_section):
        lost = make_item("1", "Lost")
        client.get_items.return_value = [make_item("2", "Lost Girl"), lost]

        assert await show_section.get_polymorphic_item("Lost") == lost
        assert requested_endpoint(client) == "library/sections/2/search?type=2&query=Lost"

    @pytest.mark.asyncio
    async def test_title_match_is_case_sensitive(self, client, show_section):
        client.get_items.return_value = [make_item("1", "LOST")]

        with pytest.raises(LibraryError):
            await show_section.get_polymorphic_item("Lost")

    @pytest.mark.asyncio
    async def test_duplicate_titles_are_not_found(self, client, show_section):
        client.get_items.return_value = [make_item("1", "The Office"), make_item("2", "The Office")]

        with pytest.raises(LibraryError) as excinfo:
            await show_section.get_polymorphic_item("The Office")

        assert excinfo.value.type == "RESOURCE_NOT_FOUND"
        assert excinfo.value.message == 'The show "The Office" was not found.'

    @pytest.mark.asyncio
    async def test_nothing_matches(self, client, show_section):
        client.get_items.return_value = []

        with pytest.raises(LibraryError) as excinfo:
            await show_section.get_polymorphic_item("Nope")

        assert excinfo.value.code == 404

    @pytest.mark.asyncio
    async def test_missing_key(self, client, show_section):
        client.get_items.return_value = []

        with pytest.raises(LibraryError):
            await show_section.get_polymorphic_item("/library/metadata/999")

    @pytest.mark.asyncio
    async def test_unknown_rating_key_falls_back_to_title(self, client, movie_section):
        nineteen = make_item("500", "1984")

        async def respond(endpoint):
            if endpoint.startswith("library/metadata/"):
                raise TransportError("NOT_FOUND", endpoint, status=404)
            return [nineteen]

        client.get_items.side_effect = respond

        assert await movie_section.get_polymorphic_item("1984") == nineteen
        assert requested_endpoint(client) == "library/sections/1/search?type=1&query=1984"

    @pytest.mark.asyncio
    async def test_unknown_rating_key_without_title_is_not_found(self, client, movie_section):
        client.get_items.return_value = []

        with pytest.raises(LibraryError) as excinfo:
            await movie_section.get_polymorphic_item(4321)

        assert '"4321"' in str(excinfo.value)

    @pytest.mark.asyncio
    async def test_other_transport_errors_propagate(self, client, movie_section):
        client.get_items.side_effect = TransportError("CONNECTION_FAILED", "refused")

        with pytest.raises(TransportError):
            await movie_section.get_polymorphic_item(4321)

    @pytest.mark.asyncio
    async def test_pre_classified_token(self, client, show_section):
        client.get_items.return_value = [make_item("9", "24")]

        result = await show_section.get_polymorphic_item(TitleToken(value="24"))

        assert result.rating_key == "9"
        assert requested_endpoint(client) == "library/sections/2/search?type=2&query=24"
