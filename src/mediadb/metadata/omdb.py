# ABOUTME: OMDb metadata provider covering movies, series, and games.
# ABOUTME: Requires an API key; maps OMDb's flat "N/A"-padded payloads to typed records.

import logging
from typing import Any

from mediadb.metadata.config import ProviderSettings
from mediadb.metadata.errors import ConfigurationError, MalformedResponseError, ProviderError
from mediadb.metadata.http import HttpClient
from mediadb.metadata.normalize import (
    format_date,
    not_available,
    parse_float,
    parse_int,
    split_list,
)
from mediadb.metadata.provider import request_json
from mediadb.metadata.types import (
    GameRecord,
    MediaRecord,
    MediaType,
    MovieRecord,
    SeriesRecord,
)

logger = logging.getLogger(__name__)

_OMDB_BASE = "https://www.omdbapi.com/"
_DATE_FORMAT = "%d %b %Y"
_NOT_FOUND = "Movie not found!"

_TYPE_MAPPINGS: dict[str, MediaType] = {
    "movie": MediaType.MOVIE,
    "series": MediaType.SERIES,
    "game": MediaType.GAME,
}


def _imdb_url(imdb_id: str) -> str:
    return f"https://www.imdb.com/title/{imdb_id}/"


def parse_search_hit(hit: dict[str, Any], data_source: str) -> MediaRecord | None:
    """Map one entry of an OMDb ``Search`` list; unsupported types give None."""
    media_type = _TYPE_MAPPINGS.get(str(hit["Type"]).lower())
    if media_type is None:
        return None

    common = {
        "id": hit["imdbID"],
        "data_source": data_source,
        "title": hit["Title"],
        "english_title": hit["Title"],
        "year": not_available(hit.get("Year")),
        "url": _imdb_url(hit["imdbID"]),
        "image": not_available(hit.get("Poster")),
    }
    if media_type is MediaType.MOVIE:
        return MovieRecord(**common)
    if media_type is MediaType.SERIES:
        return SeriesRecord(**common)
    return GameRecord(**common)


def parse_title(result: dict[str, Any], data_source: str, date_format: str) -> MediaRecord:
    """Map an OMDb by-id payload to a detailed Movie, Series, or Game record.

    Raises:
        KeyError: If a required field is missing.
        ValueError: If the title type is not one we model.
    """
    raw_type = str(result["Type"]).lower()
    media_type = _TYPE_MAPPINGS.get(raw_type)
    if media_type is None:
        raise ValueError(f"{raw_type} is an unsupported type.")

    imdb_id = result["imdbID"]
    released = format_date(result.get("Released"), _DATE_FORMAT, date_format)
    common = {
        "id": imdb_id,
        "data_source": data_source,
        "title": result["Title"],
        "english_title": result["Title"],
        "year": not_available(result.get("Year")),
        "url": _imdb_url(imdb_id),
    }

    if media_type is MediaType.MOVIE:
        return MovieRecord(
            **common,
            plot=not_available(result.get("Plot")),
            genres=split_list(result.get("Genre")),
            director=split_list(result.get("Director")),
            writer=split_list(result.get("Writer")),
            studio=split_list(result.get("Production")),
            duration=not_available(result.get("Runtime")),
            online_rating=parse_float(result.get("imdbRating")),
            actors=split_list(result.get("Actors")),
            image=not_available(result.get("Poster")),
            released=True,
            premiere=released,
        )
    if media_type is MediaType.SERIES:
        return SeriesRecord(
            **common,
            plot=not_available(result.get("Plot")),
            genres=split_list(result.get("Genre")),
            writer=split_list(result.get("Writer")),
            seasons=parse_int(result.get("totalSeasons")),
            duration=not_available(result.get("Runtime")),
            online_rating=parse_float(result.get("imdbRating")),
            actors=split_list(result.get("Actors")),
            image=not_available(result.get("Poster")),
            released=True,
            aired_from=released,
        )
    return GameRecord(
        **common,
        genres=split_list(result.get("Genre")),
        online_rating=parse_float(result.get("imdbRating")),
        image=not_available(result.get("Poster")),
        plot=not_available(result.get("Plot")),
        released=True,
        release_date=released,
    )


class OMDbAPI:
    """Movie, series, and game provider backed by the OMDb API.

    OMDb answers HTTP 200 for most failures and signals them in the body
    with ``{"Response": "False", "Error": ...}``.
    """

    def __init__(self, http_client: HttpClient, settings: ProviderSettings | None = None) -> None:
        self._http = http_client
        self._settings = settings or ProviderSettings()

    @property
    def name(self) -> str:
        return "OMDbAPI"

    @property
    def description(self) -> str:
        return "A free API for Movies, Series and Games."

    @property
    def base_url(self) -> str:
        return _OMDB_BASE

    @property
    def covered_kinds(self) -> frozenset[MediaType]:
        return frozenset(_TYPE_MAPPINGS.values())

    def _api_key(self) -> str:
        if not self._settings.omdb_api_key:
            raise ConfigurationError(f"API key for {self.name} missing.")
        return self._settings.omdb_api_key

    def search_by_title(self, query: str) -> list[MediaRecord]:
        logger.debug('api "%s" queried by title %r', self.name, query)
        api_key = self._api_key()
        data = request_json(self._http, self.name, _OMDB_BASE, params={"s": query, "apikey": api_key})

        if data.get("Response") == "False":
            if data.get("Error") == _NOT_FOUND:
                return []
            raise ProviderError(self.name, f"Received error from {self.name}: {data.get('Error')}")

        records: list[MediaRecord] = []
        for hit in data.get("Search") or []:
            try:
                record = parse_search_hit(hit, self.name)
            except (AttributeError, KeyError, TypeError) as exc:
                logger.debug("Skipping malformed search hit from %s: %r", self.name, exc)
                continue
            if record is not None:
                records.append(record)
        return records

    def fetch_by_id(self, record_id: str) -> MediaRecord:
        logger.debug('api "%s" queried by id %r', self.name, record_id)
        api_key = self._api_key()
        result = request_json(
            self._http, self.name, _OMDB_BASE, params={"i": record_id, "apikey": api_key}
        )

        if not isinstance(result, dict):
            raise MalformedResponseError(self.name, f"{self.name} returned a non-object payload.")
        if result.get("Response") == "False":
            raise ProviderError(self.name, f"Received error from {self.name}: {result.get('Error')}")

        try:
            return parse_title(result, self.name, self._settings.date_format)
        except (KeyError, TypeError, ValueError) as exc:
            raise MalformedResponseError(
                self.name, f"{self.name} returned an invalid title for {record_id}: {exc}"
            ) from exc
