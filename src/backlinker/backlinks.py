"""Backlinks section renderer.

Appends a ``## Backlinks`` section listing every note that links *to* the
current note, each with the paragraph the link appeared in.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from backlinker.errors import MetadataTypeError
from backlinker.metadata import get_datetime
from backlinker.rewrite import rewrite_line, site_link

if TYPE_CHECKING:
    from backlinker.note import Backlink, NoteFile
    from backlinker.resolver import NoteResolver

log = logging.getLogger(__name__)

HEADING = "## Backlinks"


def source_date(backlink: "Backlink") -> datetime | None:
    """Date of the linking note, or ``None`` when it has no usable date."""
    source = backlink.source
    try:
        return get_datetime(source.metadata, "date", source.original_name)
    except MetadataTypeError as exc:
        log.debug("Treating %s as undated: %s", source.original_name, exc)
        return None


def sort_backlinks(backlinks: list["Backlink"]) -> list["Backlink"]:
    """Order backlinks newest first, undated last, then by source title."""

    def _key(backlink: "Backlink") -> tuple[bool, float, str]:
        when = source_date(backlink)
        if when is None:
            return (True, 0.0, backlink.source.title)
        return (False, -when.timestamp(), backlink.source.title)

    return sorted(backlinks, key=_key)


def render_backlinks(note: "NoteFile", resolver: "NoteResolver") -> str:
    """Return the markdown backlinks section for *note* ("" if it has none)."""
    if not note.backlinks:
        return ""
    note.backlinks = sort_backlinks(note.backlinks)
    parts = [f"\n{HEADING}\n\n"]
    for backlink in note.backlinks:
        source = backlink.source
        context = rewrite_line(backlink.context, resolver)
        parts.append(f"- [{source.title}]({site_link(source.original_name)})\n    - {context}\n")
    return "".join(parts)
