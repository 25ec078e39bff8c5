# ABOUTME: Open Library metadata provider implementation.
# ABOUTME: Searches openlibrary.org by title and fetches works by key, enriching descriptions.

import logging
import re
from dataclasses import replace

from mediadb.metadata.config import ProviderSettings
from mediadb.metadata.errors import MalformedResponseError, ProviderError, SecondaryFetchError
from mediadb.metadata.http import HttpClient, MetadataFetchError
from mediadb.metadata.openlibrary_parser import (
    SEARCH_FIELDS,
    parse_description,
    parse_search_doc,
)
from mediadb.metadata.provider import request_json
from mediadb.metadata.types import MediaRecord, MediaType

logger = logging.getLogger(__name__)

_OL_BASE = "https://openlibrary.org"

# Matches a colon followed by a space and remaining text (subtitle pattern).
_SUBTITLE_RE = re.compile(r"\s*:\s+.+$")


def _strip_subtitle(title: str) -> str | None:
    """Remove subtitle from a title string (text after ": ").

    Returns the stripped title, or None if no subtitle was found or
    stripping would produce an identical or empty string.
    """
    stripped = _SUBTITLE_RE.sub("", title).strip()
    if stripped and stripped != title.strip():
        return stripped
    return None


class OpenLibraryAPI:
    """Book provider backed by the Open Library search and works APIs.

    Uses dependency-injected HttpClient for testability.
    """

    def __init__(self, http_client: HttpClient, settings: ProviderSettings | None = None) -> None:
        self._http = http_client
        self._settings = settings or ProviderSettings()

    @property
    def name(self) -> str:
        return "OpenLibraryAPI"

    @property
    def description(self) -> str:
        return "A free API for books"

    @property
    def base_url(self) -> str:
        return _OL_BASE

    @property
    def covered_kinds(self) -> frozenset[MediaType]:
        return frozenset({MediaType.BOOK})

    def search_by_title(self, query: str) -> list[MediaRecord]:
        """Search Open Library by title.

        If the search returns no results and the title contains a subtitle
        (text after ": "), retries once with the subtitle stripped.
        """
        logger.debug('api "%s" queried by title %r', self.name, query)
        records = self._search_ol(query)
        if not records:
            stripped = _strip_subtitle(query)
            if stripped:
                records = self._search_ol(stripped)
        return records

    def _search_ol(self, title: str) -> list[MediaRecord]:
        data = request_json(
            self._http,
            self.name,
            f"{_OL_BASE}/search.json",
            params={"title": title, "fields": ",".join(SEARCH_FIELDS)},
        )

        records: list[MediaRecord] = []
        for doc in data.get("docs") or []:
            try:
                records.append(parse_search_doc(doc, self.name))
            except (AttributeError, KeyError, TypeError, ValueError) as exc:
                logger.debug("Skipping malformed doc from %s: %r", self.name, exc)
        return records

    def fetch_by_id(self, record_id: str) -> MediaRecord:
        """Fetch a work by its key (e.g. "/works/OL45804W").

        The search index carries almost everything; when it lacks a
        description, the works endpoint is asked for one. That second request
        is optional and its failure only leaves the plot empty.
        """
        logger.debug('api "%s" queried by id %r', self.name, record_id)
        data = request_json(
            self._http,
            self.name,
            f"{_OL_BASE}/search.json",
            params={"q": f"key:{record_id}", "fields": ",".join(SEARCH_FIELDS)},
        )

        docs = data.get("docs") if isinstance(data, dict) else None
        if docs is None:
            raise MalformedResponseError(self.name, f"{self.name} returned no docs list.")
        if not docs:
            raise ProviderError(self.name, f"Book not found with ID {record_id}")

        try:
            record = parse_search_doc(docs[0], self.name)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise MalformedResponseError(
                self.name, f"{self.name} returned an invalid doc for {record_id}: {exc!r}"
            ) from exc

        if record.plot:
            return record
        try:
            description = self._fetch_works_description(record.id)
        except SecondaryFetchError as exc:
            logger.warning("Failed to fetch works description for %s: %s", record.id, exc)
            return record
        return replace(record, plot=description) if description else record

    def _fetch_works_description(self, works_key: str) -> str | None:
        try:
            works_data = self._http.get(f"{_OL_BASE}{works_key}.json")
        except MetadataFetchError as exc:
            raise SecondaryFetchError(str(exc)) from exc
        if not isinstance(works_data, dict):
            raise SecondaryFetchError(f"Unexpected works payload for {works_key}")
        return parse_description(works_data)

