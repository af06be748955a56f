"""Typed access to frontmatter values.

Frontmatter is kept as the plain mapping YAML produces: strings, numbers,
booleans, ``None``, :class:`datetime.date` and :class:`datetime.datetime`.
The accessors below check the shape of a value before handing it out and
raise :class:`~backlinker.errors.MetadataTypeError` instead of returning
something of the wrong type.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any

from backlinker.errors import MetadataTypeError

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def as_datetime(value: Any, name: str | None = None) -> datetime:
    """Normalize a YAML date/timestamp to a timezone-aware datetime.

    Plain dates become midnight UTC and naive timestamps are read as UTC, so
    every value can be compared with every other.
    """
    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    raise MetadataTypeError(f"expected a date, got {type(value).__name__} {value!r}", name)


def get_datetime(meta: dict[str, Any], key: str = "date", name: str | None = None) -> datetime | None:
    """Return ``meta[key]`` as an aware datetime, or ``None`` when it is unset."""
    value = meta.get(key)
    if value is None:
        return None
    return as_datetime(value, name)


def get_str(meta: dict[str, Any], key: str, name: str | None = None) -> str | None:
    value = meta.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise MetadataTypeError(
            f"expected {key!r} to be a string, got {type(value).__name__} {value!r}", name
        )
    return value
