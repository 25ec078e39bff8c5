# ABOUTME: Steam metadata provider for games.
# ABOUTME: Searches the Steam community app index and fetches store app details by app id.

import logging
from typing import Any
from urllib.parse import quote

from mediadb.metadata.config import ProviderSettings
from mediadb.metadata.errors import MalformedResponseError, ProviderError
from mediadb.metadata.http import HttpClient
from mediadb.metadata.normalize import clean_html, parse_date, parse_float, year_from_date
from mediadb.metadata.provider import request_json
from mediadb.metadata.types import GameRecord, MediaRecord, MediaType

logger = logging.getLogger(__name__)

_SEARCH_BASE = "https://steamcommunity.com/actions/SearchApps"
_DETAILS_URL = "https://store.steampowered.com/api/appdetails"
_DATE_FORMAT = "%d %b, %Y"


def _store_url(app_id: str) -> str:
    return f"https://store.steampowered.com/app/{app_id}"


def parse_search_app(app: dict[str, Any], data_source: str) -> GameRecord:
    """Map one SearchApps hit; the index carries no release year."""
    app_id = str(app["appid"])
    return GameRecord(
        id=app_id,
        data_source=data_source,
        title=app["name"],
        english_title=app["name"],
        url=_store_url(app_id),
        image=app.get("logo") or "",
    )


def parse_app_details(details: dict[str, Any], data_source: str, date_format: str) -> GameRecord:
    """Map the ``data`` object of an appdetails response to a GameRecord."""
    app_id = str(details["steam_appid"])
    release = details.get("release_date") or {}
    raw_date = release.get("date")
    parsed = parse_date(raw_date, _DATE_FORMAT)
    # Steam also returns vague dates ("Q4 2024", "Coming soon"); keep their year if any.
    year = str(parsed.year) if parsed else year_from_date((raw_date or "")[-4:])

    return GameRecord(
        id=app_id,
        data_source=data_source,
        title=details["name"],
        english_title=details["name"],
        year=year,
        url=_store_url(app_id),
        developers=list(details.get("developers") or []),
        publishers=list(details.get("publishers") or []),
        genres=[genre["description"] for genre in details.get("genres") or []],
        online_rating=parse_float((details.get("metacritic") or {}).get("score")),
        image=details.get("header_image") or "",
        plot=clean_html(details.get("short_description")),
        released=not release.get("coming_soon", False),
        release_date=parsed.strftime(date_format) if parsed else "",
    )


class SteamAPI:
    """Game provider backed by the public Steam store endpoints."""

    def __init__(self, http_client: HttpClient, settings: ProviderSettings | None = None) -> None:
        self._http = http_client
        self._settings = settings or ProviderSettings()

    @property
    def name(self) -> str:
        return "SteamAPI"

    @property
    def description(self) -> str:
        return "A free API for all Steam games."

    @property
    def base_url(self) -> str:
        return "https://www.steampowered.com/"

    @property
    def covered_kinds(self) -> frozenset[MediaType]:
        return frozenset({MediaType.GAME})

    def search_by_title(self, query: str) -> list[MediaRecord]:
        logger.debug('api "%s" queried by title %r', self.name, query)
        data = request_json(self._http, self.name, f"{_SEARCH_BASE}/{quote(query, safe='')}")

        records: list[MediaRecord] = []
        for app in data or []:
            try:
                records.append(parse_search_app(app, self.name))
            except (AttributeError, KeyError, TypeError) as exc:
                logger.debug("Skipping malformed app from %s: %r", self.name, exc)
        return records

    def fetch_by_id(self, record_id: str) -> MediaRecord:
        """Fetch store details for one app id.

        The payload is keyed by app id: ``{"<id>": {"success": bool, "data": {...}}}``.
        """
        logger.debug('api "%s" queried by id %r', self.name, record_id)
        data = request_json(
            self._http, self.name, _DETAILS_URL, params={"appids": record_id, "l": "en"}
        )

        entry = data.get(str(record_id)) if isinstance(data, dict) else None
        if not isinstance(entry, dict):
            raise MalformedResponseError(self.name, f"{self.name} returned invalid data.")
        if entry.get("success") is False:
            raise ProviderError(self.name, f"Game not found with ID {record_id}")
        details = entry.get("data")
        if not isinstance(details, dict):
            raise MalformedResponseError(self.name, f"{self.name} returned invalid data.")

        try:
            return parse_app_details(details, self.name, self._settings.date_format)
        except (AttributeError, KeyError, TypeError) as exc:
            raise MalformedResponseError(
                self.name, f"{self.name} returned invalid data for {record_id}: {exc!r}"
            ) from exc
