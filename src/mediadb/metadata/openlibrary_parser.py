# ABOUTME: Parsing functions for Open Library API JSON responses.
# ABOUTME: Converts OL search docs and works payloads into BookRecord fields.

from typing import Any

from mediadb.metadata.types import BookRecord

_OL_BASE = "https://openlibrary.org"
_COVERS_BASE_URL = "https://covers.openlibrary.org/b/olid"

# Fields requested from search.json; everything parse_search_doc reads.
SEARCH_FIELDS = (
    "title",
    "title_english",
    "first_publish_year",
    "key",
    "author_name",
    "isbn",
    "number_of_pages_median",
    "ratings_average",
    "cover_edition_key",
    "description",
    "subject",
    "publisher",
    "series",
)


def build_cover_url(edition_key: str, size: str = "L") -> str:
    """Build an Open Library cover image URL for an edition key.

    Args:
        edition_key: The OLID of the edition, e.g. "OL7353617M".
        size: Image size: "S" (small), "M" (medium), or "L" (large).
    """
    return f"{_COVERS_BASE_URL}/{edition_key}-{size}.jpg"


def _first_isbn(isbns: list[str], *, thirteen: bool) -> str:
    """First ISBN-13 (exactly 13 chars) or ISBN-10 (at most 10 chars) in the list."""
    for isbn in isbns:
        if (len(isbn) == 13) if thirteen else (len(isbn) <= 10):
            return isbn
    return ""


def parse_search_doc(doc: dict[str, Any], data_source: str) -> BookRecord:
    """Parse one doc of an Open Library search.json response into a BookRecord.

    Raises KeyError when the doc has no work key or title.
    """
    key = doc["key"]
    title = doc["title"]
    authors = doc.get("author_name") or []
    isbns = doc.get("isbn") or []
    year = doc.get("first_publish_year")
    cover_key = doc.get("cover_edition_key")

    return BookRecord(
        id=key,
        data_source=data_source,
        title=title,
        english_title=doc.get("title_english") or title,
        year=str(year) if year else "",
        url=f"{_OL_BASE}{key}",
        author=authors[0] if authors else "unknown",
        plot=parse_description(doc) or "",
        pages=doc.get("number_of_pages_median") or 0,
        image=build_cover_url(cover_key) if cover_key else "",
        online_rating=round(float(doc.get("ratings_average") or 0), 2),
        isbn=_first_isbn(isbns, thirteen=False),
        isbn13=_first_isbn(isbns, thirteen=True),
        genres=list(doc.get("subject") or []),
        publishers=list(doc.get("publisher") or []),
        series=list(doc.get("series") or []),
        released=True,
    )


def parse_description(data: dict[str, Any]) -> str | None:
    """Extract the description from an Open Library doc or Works response.

    Handles the OL quirk where description can be either a plain string
    or a dict with {"type": ..., "value": "actual text"}.
    """
    desc = data.get("description")
    if desc is None:
        return None
    if isinstance(desc, str):
        return desc
    if isinstance(desc, dict):
        return desc.get("value")
    return None
