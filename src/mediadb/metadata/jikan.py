# ABOUTME: MyAnimeList metadata provider backed by the unofficial Jikan v4 REST API.
# ABOUTME: Maps Jikan anime payloads to AnimeRecords; honours the SFW filter setting.

import logging
from typing import Any
from urllib.parse import quote

from mediadb.metadata.config import ProviderSettings
from mediadb.metadata.errors import MalformedResponseError
from mediadb.metadata.http import HttpClient
from mediadb.metadata.normalize import ISO_FORMAT, format_date
from mediadb.metadata.provider import request_json
from mediadb.metadata.types import AnimeRecord, MediaRecord, MediaType

logger = logging.getLogger(__name__)

_JIKAN_BASE = "https://api.jikan.moe/v4"
_SEARCH_LIMIT = 20


def _names(entries: list[dict[str, Any]] | None) -> list[str]:
    return [entry["name"] for entry in entries or [] if entry.get("name")]


def _year(result: dict[str, Any]) -> str:
    """Explicit season year, falling back to the year the anime started airing."""
    year = result.get("year")
    if year is None:
        prop = (result.get("aired") or {}).get("prop") or {}
        year = (prop.get("from") or {}).get("year")
    return str(year) if year is not None else ""


def parse_anime(result: dict[str, Any], data_source: str, date_format: str) -> AnimeRecord:
    """Map one Jikan anime object to an AnimeRecord.

    Raises KeyError when the payload has no mal_id or title.
    """
    aired = result.get("aired") or {}
    jpg = (result.get("images") or {}).get("jpg") or {}
    score = result.get("score")

    return AnimeRecord(
        id=str(result["mal_id"]),
        data_source=data_source,
        title=result["title"],
        english_title=result.get("title_english") or result["title"],
        year=_year(result),
        url=result.get("url") or "",
        description=result.get("synopsis") or "",
        genres=_names(result.get("genres")),
        rating=str(score) if score is not None else "",
        episodes=result.get("episodes") or 0,
        status=result.get("status") or "",
        studios=_names(result.get("studios")),
        image_url=jpg.get("large_image_url") or jpg.get("image_url") or "",
        duration=result.get("duration") or "",
        aired_from=format_date(aired.get("from"), ISO_FORMAT, date_format),
        aired_to=format_date(aired.get("to"), ISO_FORMAT, date_format),
        airing=bool(result.get("airing")),
    )


class MALAPI:
    """Anime provider for MyAnimeList data served through Jikan.

    Jikan is slow and strictly rate limited (3 requests/second); no
    authentication is needed.
    """

    def __init__(self, http_client: HttpClient, settings: ProviderSettings | None = None) -> None:
        self._http = http_client
        self._settings = settings or ProviderSettings()

    @property
    def name(self) -> str:
        return "MALAPI"

    @property
    def description(self) -> str:
        return "A free API for Anime. Some results may take a long time to load."

    @property
    def base_url(self) -> str:
        return "https://jikan.moe/"

    @property
    def covered_kinds(self) -> frozenset[MediaType]:
        return frozenset({MediaType.ANIME})

    def search_by_title(self, query: str) -> list[MediaRecord]:
        logger.debug('api "%s" queried by title %r', self.name, query)
        params = {"q": query, "limit": str(_SEARCH_LIMIT)}
        if self._settings.sfw_filter:
            params["sfw"] = "true"
        data = request_json(self._http, self.name, f"{_JIKAN_BASE}/anime", params=params)

        records: list[MediaRecord] = []
        for result in data.get("data") or []:
            try:
                records.append(parse_anime(result, self.name, self._settings.date_format))
            except (AttributeError, KeyError, TypeError) as exc:
                logger.debug("Skipping malformed anime from %s: %r", self.name, exc)
        return records

    def fetch_by_id(self, record_id: str) -> MediaRecord:
        logger.debug('api "%s" queried by id %r', self.name, record_id)
        data = request_json(
            self._http, self.name, f"{_JIKAN_BASE}/anime/{quote(record_id, safe='')}/full"
        )
        result = data.get("data") if isinstance(data, dict) else None
        if not isinstance(result, dict):
            raise MalformedResponseError(self.name, f"{self.name} returned no data for {record_id}")
        try:
            return parse_anime(result, self.name, self._settings.date_format)
        except (AttributeError, KeyError, TypeError) as exc:
            raise MalformedResponseError(
                self.name, f"{self.name} returned an invalid anime for {record_id}: {exc!r}"
            ) from exc
