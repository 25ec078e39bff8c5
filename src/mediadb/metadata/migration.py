# ABOUTME: Default-then-overlay migration of previously serialized records.
# ABOUTME: Lets old saved data load into a newer record shape without losing known fields.

from collections.abc import Mapping
from typing import Any


def migrate_object(defaults: Mapping[str, Any], legacy: Any) -> dict[str, Any]:
    """Overlay recognized fields from ``legacy`` onto a copy of ``defaults``.

    Only keys present in ``defaults`` are considered, so fields unknown to the
    current shape are dropped and fields missing from the old shape keep their
    defaults. Nested mappings present on both sides are migrated recursively.
    Never raises and never mutates its inputs.
    """
    merged = dict(defaults)
    if not isinstance(legacy, Mapping):
        return merged

    for key, default in defaults.items():
        if key not in legacy:
            continue
        value = legacy[key]
        if isinstance(default, Mapping) and isinstance(value, Mapping):
            merged[key] = migrate_object(default, value)
        else:
            merged[key] = value
    return merged
