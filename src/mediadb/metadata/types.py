# ABOUTME: Canonical media record model: one frozen dataclass variant per media kind.
# ABOUTME: MediaRecord is the interchange format between providers, the router, and the host layer.

import math
import re
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, ClassVar

from mediadb.metadata.migration import migrate_object
from mediadb.metadata.normalize import parse_float

MEDIADB_TAG = "mediaDB"


class MediaType(str, Enum):
    """Discriminant for the record variants."""

    MOVIE = "movie"
    SERIES = "series"
    GAME = "game"
    MUSIC_RELEASE = "musicRelease"
    ANIME = "anime"
    MANGA = "manga"
    BOARD_GAME = "boardgame"
    BOOK = "book"
    WIKI = "wiki"


# User data is never filled by providers; records only carry the defaults.


@dataclass(frozen=True)
class ReadUserData:
    read: bool = False
    last_read: str = ""
    personal_rating: float = 0.0


@dataclass(frozen=True)
class WatchUserData:
    watched: bool = False
    last_watched: str = ""
    personal_rating: float = 0.0


@dataclass(frozen=True)
class PlayUserData:
    played: bool = False
    personal_rating: float = 0.0


@dataclass(frozen=True)
class RatingUserData:
    personal_rating: float = 0.0


@dataclass(frozen=True)
class MediaRecord:
    """Common header shared by every media kind.

    ``id`` together with ``data_source`` identifies the record at the provider
    that produced it, and is what fetch_by_id is called with later. ``year`` is
    a string because upstream years are frequently missing or unparseable.
    """

    kind: ClassVar[MediaType]

    id: str = ""
    data_source: str = ""
    title: str = ""
    english_title: str = ""
    year: str = ""
    url: str = ""

    def summary(self) -> str:
        """One-line description used when listing search results."""
        return f"{self.english_title or self.title} ({self.year})"

    def tags(self) -> list[str]:
        return [MEDIADB_TAG, self.kind.value]

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping with the discriminant first, suitable for serialization."""
        return {"kind": self.kind.value, **asdict(self)}


@dataclass(frozen=True)
class BookRecord(MediaRecord):
    kind: ClassVar[MediaType] = MediaType.BOOK

    author: str = ""
    plot: str = ""
    pages: int = 0
    image: str = ""
    online_rating: float = 0.0
    isbn: str = ""
    isbn13: str = ""
    genres: list[str] = field(default_factory=list)
    publishers: list[str] = field(default_factory=list)
    series: list[str] = field(default_factory=list)
    released: bool = False
    edition_info: str = ""
    user_data: ReadUserData = field(default_factory=ReadUserData)

    def summary(self) -> str:
        return f"by {self.author}" if self.author else ""


@dataclass(frozen=True)
class MovieRecord(MediaRecord):
    kind: ClassVar[MediaType] = MediaType.MOVIE

    plot: str = ""
    genres: list[str] = field(default_factory=list)
    director: list[str] = field(default_factory=list)
    writer: list[str] = field(default_factory=list)
    studio: list[str] = field(default_factory=list)
    duration: str = ""
    online_rating: float = 0.0
    actors: list[str] = field(default_factory=list)
    image: str = ""
    released: bool = False
    streaming_services: list[str] = field(default_factory=list)
    premiere: str = ""
    user_data: WatchUserData = field(default_factory=WatchUserData)

    def tags(self) -> list[str]:
        return [MEDIADB_TAG, "tv", "movie"]


@dataclass(frozen=True)
class SeriesRecord(MediaRecord):
    kind: ClassVar[MediaType] = MediaType.SERIES

    plot: str = ""
    genres: list[str] = field(default_factory=list)
    writer: list[str] = field(default_factory=list)
    studio: list[str] = field(default_factory=list)
    episodes: int = 0
    seasons: int = 0
    duration: str = ""
    online_rating: float = 0.0
    actors: list[str] = field(default_factory=list)
    image: str = ""
    released: bool = False
    streaming_services: list[str] = field(default_factory=list)
    airing: bool = False
    aired_from: str = ""
    aired_to: str = ""
    user_data: WatchUserData = field(default_factory=WatchUserData)

    def summary(self) -> str:
        season_info = f" ({self.seasons} seasons)" if self.seasons else ""
        duration_info = f" - {self.duration}" if self.duration else ""
        return f"({self.year}){season_info}{duration_info}"

    def tags(self) -> list[str]:
        return [MEDIADB_TAG, "tv", "series"]


@dataclass(frozen=True)
class GameRecord(MediaRecord):
    kind: ClassVar[MediaType] = MediaType.GAME

    developers: list[str] = field(default_factory=list)
    publishers: list[str] = field(default_factory=list)
    genres: list[str] = field(default_factory=list)
    online_rating: float = 0.0
    image: str = ""
    plot: str = ""
    series: list[str] = field(default_factory=list)
    released: bool = False
    release_date: str = ""
    user_data: PlayUserData = field(default_factory=PlayUserData)


@dataclass(frozen=True)
class MusicReleaseRecord(MediaRecord):
    kind: ClassVar[MediaType] = MediaType.MUSIC_RELEASE

    sub_type: str = ""
    genres: list[str] = field(default_factory=list)
    artists: list[str] = field(default_factory=list)
    image: str = ""
    rating: float = 0.0
    label: str = ""
    duration: str = ""
    user_data: RatingUserData = field(default_factory=RatingUserData)

    def summary(self) -> str:
        summary = f"{self.title} ({self.year})"
        if self.artists:
            summary += f" - {', '.join(self.artists)}"
        if self.label:
            summary += f" [{self.label}]"
        return summary

    def tags(self) -> list[str]:
        tags = [MEDIADB_TAG, "music"]
        if self.sub_type:
            tags.append(self.sub_type)
        return tags


@dataclass(frozen=True)
class AnimeRecord(MediaRecord):
    kind: ClassVar[MediaType] = MediaType.ANIME

    description: str = ""
    genres: list[str] = field(default_factory=list)
    rating: str = ""
    episodes: int = 0
    status: str = ""
    studios: list[str] = field(default_factory=list)
    image_url: str = ""
    duration: str = ""
    aired_from: str = ""
    aired_to: str = ""
    airing: bool = False
    user_data: WatchUserData = field(default_factory=WatchUserData)

    def summary(self) -> str:
        return ", ".join(self.genres)


@dataclass(frozen=True)
class MangaRecord(MediaRecord):
    kind: ClassVar[MediaType] = MediaType.MANGA

    sub_type: str = ""
    plot: str = ""
    alternate_titles: list[str] = field(default_factory=list)
    genres: list[str] = field(default_factory=list)
    authors: list[str] = field(default_factory=list)
    chapters: int = 0
    volumes: int = 0
    online_rating: float = 0.0
    image: str = ""
    released: bool = False
    status: str = ""
    publishers: list[str] = field(default_factory=list)
    published_from: str = ""
    published_to: str = ""
    user_data: ReadUserData = field(default_factory=ReadUserData)


@dataclass(frozen=True)
class BoardGameRecord(MediaRecord):
    kind: ClassVar[MediaType] = MediaType.BOARD_GAME

    genres: list[str] = field(default_factory=list)
    online_rating: float = 0.0
    complexity_rating: float = 0.0
    min_players: int = 0
    max_players: int = 0
    playtime: str = ""
    publishers: list[str] = field(default_factory=list)
    image: str = ""
    released: bool = False
    user_data: PlayUserData = field(default_factory=PlayUserData)


@dataclass(frozen=True)
class WikiRecord(MediaRecord):
    kind: ClassVar[MediaType] = MediaType.WIKI

    wiki_url: str = ""
    last_updated: str = ""
    length: int = 0
    article: str = ""
    user_data: RatingUserData = field(default_factory=RatingUserData)

    def summary(self) -> str:
        return self.title


RECORD_TYPES: dict[MediaType, type[MediaRecord]] = {
    MediaType.MOVIE: MovieRecord,
    MediaType.SERIES: SeriesRecord,
    MediaType.GAME: GameRecord,
    MediaType.MUSIC_RELEASE: MusicReleaseRecord,
    MediaType.ANIME: AnimeRecord,
    MediaType.MANGA: MangaRecord,
    MediaType.BOARD_GAME: BoardGameRecord,
    MediaType.BOOK: BookRecord,
    MediaType.WIKI: WikiRecord,
}

_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])([A-Z])")


def _snake_case(key: str) -> str:
    return _CAMEL_BOUNDARY_RE.sub(r"_\1", key).lower()


def _normalize_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    """Convert camelCase keys (as written by older front matter) to field names."""
    normalized: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, Mapping):
            value = _normalize_keys(value)
        normalized[_snake_case(str(key))] = value
    return normalized


_TRUE_STRINGS = frozenset({"true", "yes", "1"})


def _coerce(default: Any, value: Any) -> Any:
    """Bring a loaded value to the type of the field's default.

    Hand-edited front matter gives ints for years, strings for page counts,
    and single strings where a list belongs.
    """
    if isinstance(default, bool):
        if isinstance(value, str):
            return value.strip().lower() in _TRUE_STRINGS
        return bool(value)
    if isinstance(default, int):
        number = parse_float(value)
        return int(number) if math.isfinite(number) else 0
    if isinstance(default, float):
        number = parse_float(value)
        return number if math.isfinite(number) else 0.0
    if isinstance(default, str):
        return "" if value is None else str(value)
    if isinstance(default, list):
        if isinstance(value, (list, tuple)):
            return list(value)
        return [value] if isinstance(value, str) and value else []
    return value


def _coerce_fields(defaults: Mapping[str, Any], values: Mapping[str, Any]) -> dict[str, Any]:
    return {key: _coerce(defaults[key], value) for key, value in values.items()}


def record_from_dict(data: Mapping[str, Any], kind: MediaType | str | None = None) -> MediaRecord:
    """Rebuild a record from a serialized or legacy mapping.

    The kind comes from the ``kind`` argument, else from a ``kind`` or ``type``
    key in the data. Current defaults are applied first and every recognized
    field of the old data is overlaid on top (see migrate_object), then
    converted to the type of its default. Legacy shapes that stored user data
    fields at the top level are folded into ``user_data``.

    Raises:
        ValueError: If the kind is missing or unknown.
    """
    legacy = _normalize_keys(data) if isinstance(data, Mapping) else {}

    raw_kind = kind if kind is not None else legacy.get("kind", legacy.get("type"))
    try:
        media_type = MediaType(raw_kind)
    except ValueError:
        raise ValueError(f"Unknown media type: {raw_kind!r}") from None

    record_cls = RECORD_TYPES[media_type]
    template = record_cls()
    defaults = asdict(template)
    user_data_cls = type(template.user_data)  # type: ignore[attr-defined]

    if "user_data" not in legacy:
        legacy["user_data"] = migrate_object(defaults["user_data"], legacy)

    merged = migrate_object(defaults, legacy)
    user_data = merged.pop("user_data")
    if not isinstance(user_data, Mapping):
        user_data = defaults["user_data"]
    fields = _coerce_fields(defaults, merged)
    user_fields = _coerce_fields(defaults["user_data"], user_data)
    return record_cls(**fields, user_data=user_data_cls(**user_fields))
