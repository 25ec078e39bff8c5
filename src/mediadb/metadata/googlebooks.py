# ABOUTME: Google Books metadata provider implementation.
# ABOUTME: Searches volumes by title, normalizes them to BookRecords, and groups editions.

import logging
from typing import Any
from urllib.parse import quote

from mediadb.metadata.config import ProviderSettings
from mediadb.metadata.editions import flatten_editions, group_editions
from mediadb.metadata.errors import MalformedResponseError
from mediadb.metadata.http import HttpClient
from mediadb.metadata.normalize import (
    best_image_url,
    clean_html,
    collapse_categories,
    find_identifier,
    year_from_date,
)
from mediadb.metadata.provider import request_json
from mediadb.metadata.types import BookRecord, MediaRecord, MediaType

logger = logging.getLogger(__name__)

_GB_BASE = "https://www.googleapis.com/books/v1"
_SEARCH_LIMIT = 20
_LANGUAGE = "en"


def _edition_info(info: dict[str, Any]) -> str:
    """Short human-readable edition description, e.g. "BOOK, Language: en, Pages: 412"."""
    parts: list[str] = []
    if info.get("printType"):
        parts.append(info["printType"])
    if info.get("language"):
        parts.append(f"Language: {info['language']}")
    if info.get("pageCount"):
        parts.append(f"Pages: {info['pageCount']}")
    return ", ".join(parts)


def _book_url(volume_id: str, title: str) -> str:
    return f"https://books.google.com/books?id={volume_id}&title={quote(title, safe='')}"


def parse_volume(data: dict[str, Any], data_source: str) -> BookRecord:
    """Map one Google Books volume resource to a BookRecord.

    Raises KeyError when the volume has no id, volumeInfo, or title.
    """
    volume_id = data["id"]
    info = data["volumeInfo"]
    base_title = info["title"]
    subtitle = info.get("subtitle")
    identifiers = info.get("industryIdentifiers")
    authors = info.get("authors") or []
    series_title = (info.get("seriesInfo") or {}).get("title")

    return BookRecord(
        id=volume_id,
        data_source=data_source,
        title=f"{base_title}: {subtitle}" if subtitle else base_title,
        english_title=base_title,
        year=year_from_date(info.get("publishedDate")),
        url=_book_url(volume_id, base_title),
        author=authors[0] if authors else "unknown",
        plot=clean_html(info.get("description")),
        pages=info.get("pageCount") or 0,
        image=best_image_url(info.get("imageLinks")),
        online_rating=info.get("averageRating") or 0.0,
        isbn=find_identifier(identifiers, "ISBN_10"),
        isbn13=find_identifier(identifiers, "ISBN_13"),
        genres=collapse_categories(info.get("categories")),
        publishers=[info["publisher"]] if info.get("publisher") else [],
        series=[series_title] if series_title else [],
        released=True,
        edition_info=_edition_info(info),
    )


def _is_english_book(info: dict[str, Any]) -> bool:
    if info.get("language") != _LANGUAGE:
        return False
    print_type = info.get("printType")
    return not print_type or print_type == "BOOK"


class GoogleBooksAPI:
    """Book provider backed by the Google Books volumes API.

    Search results are restricted to English printed books and regrouped so
    editions of the same work sit together, newest first.
    """

    def __init__(self, http_client: HttpClient, settings: ProviderSettings | None = None) -> None:
        self._http = http_client
        self._settings = settings or ProviderSettings()

    @property
    def name(self) -> str:
        return "GoogleBooksAPI"

    @property
    def description(self) -> str:
        return "Google Books API for searching books"

    @property
    def base_url(self) -> str:
        return _GB_BASE

    @property
    def covered_kinds(self) -> frozenset[MediaType]:
        return frozenset({MediaType.BOOK})

    def search_by_title(self, query: str) -> list[MediaRecord]:
        logger.debug('api "%s" queried by title %r', self.name, query)
        data = request_json(
            self._http,
            self.name,
            f"{_GB_BASE}/volumes",
            params={"q": query, "maxResults": str(_SEARCH_LIMIT), "langRestrict": _LANGUAGE},
        )

        records: list[MediaRecord] = []
        for item in data.get("items") or []:
            try:
                if not _is_english_book(item.get("volumeInfo") or {}):
                    continue
                records.append(parse_volume(item, self.name))
            except (AttributeError, KeyError, TypeError) as exc:
                logger.debug("Skipping malformed volume from %s: %r", self.name, exc)

        return flatten_editions(group_editions(records))

    def fetch_by_id(self, record_id: str) -> MediaRecord:
        logger.debug('api "%s" queried by id %r', self.name, record_id)
        data = request_json(
            self._http, self.name, f"{_GB_BASE}/volumes/{quote(record_id, safe='')}"
        )
        try:
            return parse_volume(data, self.name)
        except (AttributeError, KeyError, TypeError) as exc:
            raise MalformedResponseError(
                self.name, f"{self.name} returned an invalid volume for {record_id}: {exc!r}"
            ) from exc
