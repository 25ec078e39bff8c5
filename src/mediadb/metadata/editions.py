# ABOUTME: Edition grouping for book search results.
# ABOUTME: Clusters editions of the same work by main title and orders each cluster newest-first.

from collections.abc import Iterable
from dataclasses import dataclass, field

from mediadb.metadata.types import MediaRecord


def main_title(title: str) -> str:
    """The title with any subtitle (text after the first colon) removed."""
    return title.split(":", 1)[0].strip()


def _year_key(record: MediaRecord) -> int:
    try:
        return int(record.year)
    except (TypeError, ValueError):
        return 0


@dataclass
class EditionGroup:
    """All search results sharing one main title."""

    main_title: str
    editions: list[MediaRecord] = field(default_factory=list)


def group_editions(records: Iterable[MediaRecord]) -> list[EditionGroup]:
    """Group records by main title, preserving the order groups first appear.

    Editions inside a group are sorted by numeric year, most recent first.
    Unparseable years count as year 0 and therefore sort last; ties keep
    their original relative order.
    """
    groups: dict[str, EditionGroup] = {}
    for record in records:
        key = main_title(record.title)
        if key not in groups:
            groups[key] = EditionGroup(main_title=key)
        groups[key].editions.append(record)

    for group in groups.values():
        group.editions.sort(key=_year_key, reverse=True)

    return list(groups.values())


def flatten_editions(groups: Iterable[EditionGroup]) -> list[MediaRecord]:
    """Concatenate grouped editions back into a single result list."""
    return [edition for group in groups for edition in group.editions]
