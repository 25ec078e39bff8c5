# ABOUTME: MusicBrainz metadata provider for music release groups.
# ABOUTME: Fetch-by-id resolves the first release for label and duration, tolerating its failure.

import logging
from dataclasses import replace
from typing import Any
from urllib.parse import quote

from mediadb.metadata.config import ProviderSettings
from mediadb.metadata.errors import MalformedResponseError, SecondaryFetchError
from mediadb.metadata.http import HttpClient, MetadataFetchError
from mediadb.metadata.normalize import format_duration_ms, year_from_date
from mediadb.metadata.provider import request_json
from mediadb.metadata.types import MediaRecord, MediaType, MusicReleaseRecord

logger = logging.getLogger(__name__)

_MB_BASE = "https://musicbrainz.org/ws/2"
_COVER_ART_BASE = "https://coverartarchive.org/release-group"
_SEARCH_LIMIT = 20


def _names(entries: list[dict[str, Any]] | None) -> list[str]:
    return [entry["name"] for entry in entries or [] if entry.get("name")]


def parse_release_group(data: dict[str, Any], data_source: str) -> MusicReleaseRecord:
    """Map a release-group payload (search hit or lookup) to a MusicReleaseRecord.

    Label and duration live on individual releases, not on the group, so they
    are left empty here. Raises KeyError when id or title is missing.
    """
    group_id = data["id"]
    rating = (data.get("rating") or {}).get("value")

    return MusicReleaseRecord(
        id=group_id,
        data_source=data_source,
        title=data["title"],
        english_title=data["title"],
        year=year_from_date(data.get("first-release-date")),
        url=f"https://musicbrainz.org/release-group/{group_id}",
        image=f"{_COVER_ART_BASE}/{group_id}/front",
        artists=_names(data.get("artist-credit")),
        genres=_names(data.get("genres")),
        sub_type=data.get("primary-type") or "",
        # MusicBrainz rates 0-5; records use a 0-10 scale.
        rating=rating * 2 if rating else 0.0,
    )


def parse_release_details(release: dict[str, Any]) -> tuple[str, str]:
    """Extract (label, duration) from a release lookup with labels+recordings."""
    label = ""
    label_info = release.get("label-info") or []
    if label_info:
        label = ((label_info[0] or {}).get("label") or {}).get("name") or ""

    total_ms = sum(
        track.get("length") or 0
        for medium in release.get("media") or []
        for track in medium.get("tracks") or []
    )
    return label, format_duration_ms(total_ms)


class MusicBrainzAPI:
    """Music release provider backed by the MusicBrainz web service.

    MusicBrainz rejects anonymous clients, so every request carries a
    User-Agent naming the application and a contact.
    """

    def __init__(self, http_client: HttpClient, settings: ProviderSettings | None = None) -> None:
        self._http = http_client
        self._settings = settings or ProviderSettings()

    @property
    def name(self) -> str:
        return "MusicBrainz API"

    @property
    def description(self) -> str:
        return "Free API for music albums."

    @property
    def base_url(self) -> str:
        return "https://musicbrainz.org/"

    @property
    def covered_kinds(self) -> frozenset[MediaType]:
        return frozenset({MediaType.MUSIC_RELEASE})

    @property
    def _headers(self) -> dict[str, str]:
        return {"User-Agent": self._settings.user_agent}

    def search_by_title(self, query: str) -> list[MediaRecord]:
        logger.debug('api "%s" queried by title %r', self.name, query)
        data = request_json(
            self._http,
            self.name,
            f"{_MB_BASE}/release-group",
            params={"query": query, "limit": str(_SEARCH_LIMIT), "fmt": "json"},
            headers=self._headers,
        )

        records: list[MediaRecord] = []
        for group in data.get("release-groups") or []:
            try:
                records.append(parse_release_group(group, self.name))
            except (AttributeError, KeyError, TypeError) as exc:
                logger.debug("Skipping malformed release group from %s: %r", self.name, exc)
        return records

    def fetch_by_id(self, record_id: str) -> MediaRecord:
        """Fetch a release group with genres and rating, plus its first release.

        The release lookup only contributes label and duration. If it fails
        the record is returned with those two fields empty.
        """
        logger.debug('api "%s" queried by id %r', self.name, record_id)
        data = request_json(
            self._http,
            self.name,
            f"{_MB_BASE}/release-group/{quote(record_id, safe='')}",
            params={"inc": "artist-credits+ratings+genres+releases", "fmt": "json"},
            headers=self._headers,
        )
        try:
            record = parse_release_group(data, self.name)
        except (AttributeError, KeyError, TypeError) as exc:
            raise MalformedResponseError(
                self.name, f"{self.name} returned an invalid release group {record_id}: {exc!r}"
            ) from exc

        releases = data.get("releases") or []
        if not isinstance(releases, list) or not releases:
            return record

        try:
            label, duration = self._fetch_release_details(releases[0])
        except SecondaryFetchError as exc:
            logger.warning("Failed to fetch release info for %s: %s", record_id, exc)
            return record
        return replace(record, label=label, duration=duration)

    def _fetch_release_details(self, entry: Any) -> tuple[str, str]:
        release_id = entry.get("id") if isinstance(entry, dict) else None
        if not release_id:
            raise SecondaryFetchError(f"release entry has no id: {entry!r}")
        try:
            release = self._http.get(
                f"{_MB_BASE}/release/{quote(release_id, safe='')}",
                params={"inc": "labels+recordings", "fmt": "json"},
                headers=self._headers,
            )
            return parse_release_details(release)
        except (MetadataFetchError, AttributeError, KeyError, TypeError) as exc:
            raise SecondaryFetchError(f"release {release_id}: {exc}") from exc
