# ABOUTME: Shared field normalization used by the provider mappers.
# ABOUTME: Category collapsing, image/identifier picking, date and year parsing, HTML cleaning.

from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime
from typing import Any

from bs4 import BeautifulSoup

# Preference order for image links, largest first (Google Books naming).
IMAGE_SIZE_ORDER = (
    "extraLarge",
    "large",
    "medium",
    "small",
    "thumbnail",
    "smallThumbnail",
)

ISO_FORMAT = "iso"

# OMDb fills every missing field with this placeholder.
_NOT_AVAILABLE = "N/A"


def collapse_categories(categories: Iterable[str] | None) -> list[str]:
    """Flatten slash-separated categories into distinct, most-specific tokens.

    Each entry is split on "/" and trimmed, exact duplicates are removed
    (first occurrence wins), then any token that is a case-insensitive
    substring of another distinct token is dropped in favour of the longer one.

        >>> collapse_categories(["Fiction", "Fiction/Fantasy", "Epic Fantasy"])
        ['Fiction', 'Epic Fantasy']
    """
    if not categories:
        return []

    tokens: list[str] = []
    for category in categories:
        for part in category.split("/"):
            part = part.strip()
            if part and part not in tokens:
                tokens.append(part)

    return [
        token
        for token in tokens
        if not any(
            other != token and token.lower() in other.lower() for other in tokens
        )
    ]


def force_https(url: str) -> str:
    """Upgrade an http:// URL to https://, leaving anything else untouched."""
    if url.startswith("http://"):
        return "https://" + url[len("http://") :]
    return url


def best_image_url(
    links: Mapping[str, str] | None, order: Sequence[str] = IMAGE_SIZE_ORDER
) -> str:
    """Pick the largest available image URL, forced to https.

    Returns an empty string when no candidate is present.
    """
    if not links:
        return ""
    for size in order:
        url = links.get(size)
        if url:
            return force_https(url)
    return ""


def find_identifier(
    identifiers: Iterable[Mapping[str, Any]] | None,
    type_code: str,
    *,
    type_key: str = "type",
    value_key: str = "identifier",
) -> str:
    """Return the value of the first identifier whose type matches ``type_code``."""
    for entry in identifiers or []:
        if entry.get(type_key) == type_code:
            return str(entry.get(value_key) or "")
    return ""


def year_from_date(value: Any) -> str:
    """Take the leading four characters of an ISO-like date as the year.

    Ints are accepted as-is; anything that does not yield four digits gives "".
    """
    if value is None or isinstance(value, bool):
        return ""
    year = str(value).strip()[:4]
    return year if len(year) == 4 and year.isdigit() else ""


def parse_date(value: Any, input_format: str) -> datetime | None:
    """Parse an upstream date string, returning None when it cannot be parsed."""
    if not value or not isinstance(value, str):
        return None
    value = value.strip()
    if not value or value == _NOT_AVAILABLE:
        return None
    try:
        if input_format == ISO_FORMAT:
            return datetime.fromisoformat(value)
        return datetime.strptime(value, input_format)
    except ValueError:
        return None


def format_date(value: Any, input_format: str, output_format: str) -> str:
    """Re-format an upstream date string; unparseable input yields ""."""
    parsed = parse_date(value, input_format)
    return parsed.strftime(output_format) if parsed else ""


def clean_html(text: str | None) -> str:
    """Strip markup from a description, keeping only the visible text."""
    if not text:
        return ""
    return BeautifulSoup(text, "html.parser").get_text().strip()


def not_available(value: Any) -> str:
    """Map missing values and OMDb's "N/A" placeholder to ""."""
    if value is None:
        return ""
    value = str(value)
    return "" if value == _NOT_AVAILABLE else value


def split_list(value: Any, sep: str = ", ") -> list[str]:
    """Split a joined credit string like "Jane Doe, John Roe" into names."""
    text = not_available(value)
    if not text:
        return []
    return [part.strip() for part in text.split(sep) if part.strip()]


def parse_float(value: Any) -> float:
    """Lenient float parsing for ratings; anything unparseable is 0.0."""
    try:
        return float(not_available(value) or 0)
    except (TypeError, ValueError):
        return 0.0


def parse_int(value: Any) -> int:
    """Lenient int parsing for counts; anything unparseable is 0."""
    try:
        return int(not_available(value) or 0)
    except (TypeError, ValueError):
        return 0


def format_duration_ms(total_ms: int | float) -> str:
    """Format a millisecond total as m:ss; non-positive totals give ""."""
    if total_ms <= 0:
        return ""
    minutes = int(total_ms // 60000)
    seconds = int((total_ms % 60000) // 1000)
    return f"{minutes}:{seconds:02d}"
