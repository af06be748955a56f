"""YAML frontmatter extraction and title/date normalization.

A frontmatter block is only recognized when the very first line of a note is
``---``; it runs until the next ``---`` line::

    ---
    title: My Note
    date: 2021-03-01
    ---
    Body text.

Date-named notes (``2021-03-01.md``) get their title and date from the
filename.  Other notes without a date inherit the most recent date of the
notes linking to them, which is why every date-named note must be adjusted
before any other note (see :mod:`backlinker.index`).
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

import yaml

from backlinker.errors import DateNameError, FrontmatterError, MetadataError, MetadataTypeError
from backlinker.metadata import EPOCH, as_datetime, get_str

if TYPE_CHECKING:
    from backlinker.note import NoteFile

log = logging.getLogger(__name__)

DELIMITER = "---"

# Date-named notes are stamped at 08:00 US Eastern (standard time)
DATE_NAME_TIME = (8, 0)
DATE_NAME_OFFSET = timezone(timedelta(hours=-5))


def _is_delimiter(line: str) -> bool:
    return line.rstrip(" \t\r") == DELIMITER


def extract_frontmatter(lines: list[str], name: str | None = None) -> tuple[dict[str, Any], list[str]]:
    """Split a note's *lines* into ``(metadata, body_lines)``.

    Without an opening delimiter on the first line the metadata is empty and
    every line, the first included, is part of the body.
    """
    if not lines or not _is_delimiter(lines[0]):
        return {}, list(lines)

    for end, line in enumerate(lines[1:], start=1):
        if _is_delimiter(line):
            break
    else:
        raise FrontmatterError("no closing '---' found for frontmatter", name)

    block = "\n".join(line.rstrip("\r") for line in lines[1:end])
    try:
        meta = yaml.safe_load(block) if block.strip() else None
    except yaml.YAMLError as exc:
        raise MetadataError(f"invalid frontmatter: {exc}", name) from exc
    if meta is None:
        meta = {}
    if not isinstance(meta, dict):
        raise MetadataError(f"frontmatter must be a mapping, got {type(meta).__name__}", name)
    return meta, lines[end + 1 :]


def date_from_name(stem: str, name: str | None = None) -> datetime:
    """Parse a ``YYYY-MM-DD`` stem into the fixed-time, fixed-offset timestamp."""
    try:
        day = datetime.strptime(stem, "%Y-%m-%d")
    except ValueError as exc:
        raise DateNameError(f"filename is not a valid date: {exc}", name) from exc
    hour, minute = DATE_NAME_TIME
    return day.replace(hour=hour, minute=minute, tzinfo=DATE_NAME_OFFSET)


def infer_date(note: "NoteFile") -> Any:
    """Return the latest ``date`` among the notes linking to *note*, or ``None``.

    The original value is returned (a date stays a date), chosen by comparing
    normalized timestamps.  Sources with a malformed date are skipped with a
    warning.
    """
    latest: datetime | None = None
    latest_value: Any = None
    for backlink in note.backlinks:
        source = backlink.source
        value = source.metadata.get("date")
        if value is None:
            continue
        try:
            when = as_datetime(value, source.original_name)
        except MetadataTypeError as exc:
            log.warning("Ignoring date while inferring %s: %s", note.original_name, exc)
            continue
        if latest is None or when >= latest:
            latest, latest_value = when, value
    if latest is not None and latest > EPOCH:
        return latest_value
    return None


def render_frontmatter(meta: dict[str, Any]) -> str:
    dumped = yaml.safe_dump(meta, default_flow_style=False, allow_unicode=True, sort_keys=True)
    return f"{DELIMITER}\n{dumped}{DELIMITER}\n"


def adjust_frontmatter(note: "NoteFile") -> str:
    """Normalize *note*'s title and date metadata and return the rendered block.

    Date inference reads the ``date`` of every backlink source, so all of
    those sources must already be adjusted when this runs for a
    non-date-named note.
    """
    meta = note.metadata
    name = note.original_name

    if note.is_date_named:
        if "title" not in meta:
            meta["title"] = note.stem
        if "date" not in meta:
            meta["date"] = date_from_name(note.stem, name)

    title = get_str(meta, "title", name)
    if title is not None:
        note.title = title
    else:
        meta["title"] = note.title

    if meta.get("date") is None:
        inferred = infer_date(note)
        if inferred is not None:
            log.debug("Inferred date %s for %s", inferred, name)
            meta["date"] = inferred

    return render_frontmatter(meta)
