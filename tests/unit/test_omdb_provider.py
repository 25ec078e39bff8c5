# ABOUTME: Unit tests for the OMDb provider.
# ABOUTME: Covers API key handling, in-body errors, type dispatch, and "N/A" normalization.

import pytest

from mediadb.metadata.config import ProviderSettings
from mediadb.metadata.errors import (
    AuthenticationError,
    ConfigurationError,
    MalformedResponseError,
    ProviderError,
)
from mediadb.metadata.http import MetadataFetchError
from mediadb.metadata.omdb import OMDbAPI, parse_title
from mediadb.metadata.provider import MetadataProvider
from mediadb.metadata.types import GameRecord, MediaType, MovieRecord, SeriesRecord
from tests.fixtures.fake_http import FakeHttpClient
from tests.fixtures.omdb_responses import (
    EPISODE_RESPONSE,
    GAME_RESPONSE,
    INCORRECT_ID_RESPONSE,
    MOVIE_RESPONSE,
    NOT_FOUND_RESPONSE,
    SEARCH_RESPONSE,
    SERIES_RESPONSE,
    TOO_MANY_RESPONSE,
)

KEYED = ProviderSettings(omdb_api_key="secret")


class TestOMDbProtocol:
    """Tests that OMDbAPI satisfies MetadataProvider."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(OMDbAPI(FakeHttpClient()), MetadataProvider)

    def test_covers_movies_series_games(self) -> None:
        assert OMDbAPI(FakeHttpClient()).covered_kinds == frozenset(
            {MediaType.MOVIE, MediaType.SERIES, MediaType.GAME}
        )


class TestApiKey:
    """Tests for the API key requirement."""

    def test_search_without_key_raises_before_network(self) -> None:
        client = FakeHttpClient({"omdbapi": SEARCH_RESPONSE})
        with pytest.raises(ConfigurationError, match="API key for OMDbAPI missing"):
            OMDbAPI(client).search_by_title("alien")
        assert client.request_log == []

    def test_fetch_without_key_raises(self) -> None:
        client = FakeHttpClient({"omdbapi": MOVIE_RESPONSE})
        with pytest.raises(ConfigurationError):
            OMDbAPI(client).fetch_by_id("tt0078748")
        assert client.request_log == []

    def test_key_sent_as_param(self) -> None:
        client = FakeHttpClient({"omdbapi": SEARCH_RESPONSE})
        OMDbAPI(client, KEYED).search_by_title("alien")
        assert client.params_log[0] == {"s": "alien", "apikey": "secret"}

    def test_rejected_key_raises_authentication_error(self) -> None:
        client = FakeHttpClient({"omdbapi": MetadataFetchError("HTTP 401", status_code=401)})
        with pytest.raises(AuthenticationError) as exc_info:
            OMDbAPI(client, KEYED).search_by_title("alien")
        assert exc_info.value.status_code == 401


class TestSearchByTitle:
    """Tests for title search."""

    def test_maps_supported_types(self) -> None:
        client = FakeHttpClient({"omdbapi": SEARCH_RESPONSE})
        results = OMDbAPI(client, KEYED).search_by_title("alien")

        assert [type(record) for record in results] == [MovieRecord, SeriesRecord, GameRecord]
        assert [record.id for record in results] == ["tt0078748", "tt0096521", "tt3445914"]

    def test_poster_na_becomes_empty(self) -> None:
        client = FakeHttpClient({"omdbapi": SEARCH_RESPONSE})
        results = OMDbAPI(client, KEYED).search_by_title("alien")
        assert results[0].image == "https://m.media-amazon.com/alien.jpg"  # type: ignore[attr-defined]
        assert results[1].image == ""  # type: ignore[attr-defined]

    def test_not_found_is_empty(self) -> None:
        client = FakeHttpClient({"omdbapi": NOT_FOUND_RESPONSE})
        assert OMDbAPI(client, KEYED).search_by_title("zzzz") == []

    def test_other_error_raises(self) -> None:
        client = FakeHttpClient({"omdbapi": TOO_MANY_RESPONSE})
        with pytest.raises(ProviderError, match="Too many results"):
            OMDbAPI(client, KEYED).search_by_title("a")


class TestParseTitle:
    """Tests for by-id payload mapping."""

    def test_movie(self) -> None:
        movie = parse_title(MOVIE_RESPONSE, "OMDbAPI", "%Y-%m-%d")

        assert isinstance(movie, MovieRecord)
        assert movie.title == "Alien"
        assert movie.year == "1979"
        assert movie.url == "https://www.imdb.com/title/tt0078748/"
        assert movie.genres == ["Horror", "Sci-Fi"]
        assert movie.director == ["Ridley Scott"]
        assert movie.writer == ["Dan O'Bannon", "Ronald Shusett"]
        assert movie.studio == []
        assert movie.duration == "117 min"
        assert movie.online_rating == 8.5
        assert movie.premiere == "1979-06-22"
        assert movie.released is True

    def test_series_with_missing_values(self) -> None:
        series = parse_title(SERIES_RESPONSE, "OMDbAPI", "%Y-%m-%d")

        assert isinstance(series, SeriesRecord)
        assert series.seasons == 1
        assert series.plot == ""
        assert series.image == ""
        assert series.online_rating == 0.0
        assert series.aired_from == "1989-09-18"

    def test_game(self) -> None:
        game = parse_title(GAME_RESPONSE, "OMDbAPI", "%Y-%m-%d")

        assert isinstance(game, GameRecord)
        assert game.genres == ["Action", "Adventure", "Horror"]
        assert game.release_date == ""

    def test_unsupported_type(self) -> None:
        with pytest.raises(ValueError, match="unsupported type"):
            parse_title(EPISODE_RESPONSE, "OMDbAPI", "%Y-%m-%d")


class TestFetchById:
    """Tests for by-id lookup."""

    def test_fetch_movie(self) -> None:
        client = FakeHttpClient({"omdbapi": MOVIE_RESPONSE})
        movie = OMDbAPI(client, KEYED).fetch_by_id("tt0078748")

        assert isinstance(movie, MovieRecord)
        assert client.params_log[0] == {"i": "tt0078748", "apikey": "secret"}

    def test_incorrect_id_raises(self) -> None:
        client = FakeHttpClient({"omdbapi": INCORRECT_ID_RESPONSE})
        with pytest.raises(ProviderError, match="Incorrect IMDb ID"):
            OMDbAPI(client, KEYED).fetch_by_id("bogus")

    def test_unsupported_type_is_malformed(self) -> None:
        client = FakeHttpClient({"omdbapi": EPISODE_RESPONSE})
        with pytest.raises(MalformedResponseError):
            OMDbAPI(client, KEYED).fetch_by_id("tt0000001")
