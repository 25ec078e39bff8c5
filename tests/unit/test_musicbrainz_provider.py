# ABOUTME: Unit tests for the MusicBrainz provider.
# ABOUTME: Covers release-group mapping, User-Agent headers, and tolerant release enrichment.

import logging

import pytest

from mediadb.metadata.config import ProviderSettings
from mediadb.metadata.errors import MalformedResponseError, ProviderError
from mediadb.metadata.http import MetadataFetchError
from mediadb.metadata.musicbrainz import (
    MusicBrainzAPI,
    parse_release_details,
    parse_release_group,
)
from mediadb.metadata.provider import MetadataProvider
from mediadb.metadata.types import MusicReleaseRecord
from tests.fixtures.fake_http import FakeHttpClient
from tests.fixtures.musicbrainz_responses import (
    RELEASE_GROUP_RESPONSE,
    RELEASE_RESPONSE,
    SEARCH_RESPONSE,
    SEARCH_RESPONSE_EMPTY,
)

GROUP_ID = "f5093c06-23e3-404f-aeaa-40f72885ee3a"
RELEASE_ID = "b84ee12a-09ef-421b-82de-0441a926375b"


class TestMusicBrainzProtocol:
    """Tests that MusicBrainzAPI satisfies MetadataProvider."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(MusicBrainzAPI(FakeHttpClient()), MetadataProvider)

    def test_name(self) -> None:
        assert MusicBrainzAPI(FakeHttpClient()).name == "MusicBrainz API"


class TestParsing:
    """Tests for release-group and release mapping."""

    def test_parse_release_group(self) -> None:
        record = parse_release_group(RELEASE_GROUP_RESPONSE, "MusicBrainz API")

        assert record.id == GROUP_ID
        assert record.title == "The Dark Side of the Moon"
        assert record.year == "1973"
        assert record.artists == ["Pink Floyd"]
        assert record.genres == ["progressive rock", "rock"]
        assert record.sub_type == "Album"
        assert record.url == f"https://musicbrainz.org/release-group/{GROUP_ID}"
        assert record.image == f"https://coverartarchive.org/release-group/{GROUP_ID}/front"

    def test_rating_scaled_to_ten(self) -> None:
        assert parse_release_group(RELEASE_GROUP_RESPONSE, "MusicBrainz API").rating == 9.0

    def test_unrated_group(self) -> None:
        record = parse_release_group({"id": "x", "title": "Demo"}, "MusicBrainz API")
        assert record.rating == 0.0
        assert record.label == ""

    def test_parse_release_details(self) -> None:
        label, duration = parse_release_details(RELEASE_RESPONSE)
        assert label == "Harvest"
        assert duration == "7:48"

    def test_parse_release_details_empty(self) -> None:
        assert parse_release_details({}) == ("", "")


class TestSearchByTitle:
    """Tests for release-group search."""

    def test_returns_records_and_skips_malformed(self) -> None:
        client = FakeHttpClient({"/release-group": SEARCH_RESPONSE})
        results = MusicBrainzAPI(client).search_by_title("dark side")

        assert len(results) == 2
        assert all(isinstance(record, MusicReleaseRecord) for record in results)
        assert results[1].year == ""
        assert results[1].artists == []

    def test_sends_descriptive_user_agent(self) -> None:
        client = FakeHttpClient({"/release-group": SEARCH_RESPONSE_EMPTY})
        settings = ProviderSettings(contact="me@example.com")
        MusicBrainzAPI(client, settings).search_by_title("dark side")

        assert client.headers_log[0] == {"User-Agent": "mediadb/0.1.0 (me@example.com)"}
        assert client.params_log[0] == {"query": "dark side", "limit": "20", "fmt": "json"}

    def test_http_error_raises_provider_error(self) -> None:
        client = FakeHttpClient({"/release-group": MetadataFetchError("HTTP 503", status_code=503)})
        with pytest.raises(ProviderError) as exc_info:
            MusicBrainzAPI(client).search_by_title("dark side")
        assert exc_info.value.status_code == 503


class TestFetchById:
    """Tests for release-group lookup with release enrichment."""

    def test_fetch_adds_label_and_duration(self) -> None:
        client = FakeHttpClient(
            {"/release-group/": RELEASE_GROUP_RESPONSE, "/release/": RELEASE_RESPONSE}
        )
        record = MusicBrainzAPI(client).fetch_by_id(GROUP_ID)

        assert record.label == "Harvest"
        assert record.duration == "7:48"
        assert client.request_log[1] == f"https://musicbrainz.org/ws/2/release/{RELEASE_ID}"
        assert client.params_log[1] == {"inc": "labels+recordings", "fmt": "json"}

    def test_release_failure_keeps_record(self, caplog: pytest.LogCaptureFixture) -> None:
        """A failed release lookup leaves label and duration empty."""
        client = FakeHttpClient(
            {
                "/release-group/": RELEASE_GROUP_RESPONSE,
                "/release/": MetadataFetchError("HTTP 503", status_code=503),
            }
        )
        with caplog.at_level(logging.WARNING, logger="mediadb.metadata.musicbrainz"):
            record = MusicBrainzAPI(client).fetch_by_id(GROUP_ID)

        assert record.title == "The Dark Side of the Moon"
        assert record.label == ""
        assert record.duration == ""
        assert "Failed to fetch release info" in caplog.text

    def test_group_without_releases_skips_lookup(self) -> None:
        group = {**RELEASE_GROUP_RESPONSE, "releases": []}
        client = FakeHttpClient({"/release-group/": group})
        MusicBrainzAPI(client).fetch_by_id(GROUP_ID)
        assert len(client.request_log) == 1

    @pytest.mark.parametrize("entry", ["not-a-dict", {"title": "no id"}, None])
    def test_release_entry_without_id_keeps_record(self, entry: object) -> None:
        group = {**RELEASE_GROUP_RESPONSE, "releases": [entry]}
        client = FakeHttpClient({"/release-group/": group})

        record = MusicBrainzAPI(client).fetch_by_id(GROUP_ID)

        assert record.title == "The Dark Side of the Moon"
        assert record.label == ""
        assert record.duration == ""
        assert len(client.request_log) == 1

    def test_group_lookup_failure_raises(self) -> None:
        client = FakeHttpClient({"/release-group/": MetadataFetchError("HTTP 404", status_code=404)})
        with pytest.raises(ProviderError, match="404"):
            MusicBrainzAPI(client).fetch_by_id(GROUP_ID)

    def test_invalid_group_is_malformed(self) -> None:
        client = FakeHttpClient({"/release-group/": {"id": GROUP_ID}})
        with pytest.raises(MalformedResponseError):
            MusicBrainzAPI(client).fetch_by_id(GROUP_ID)
