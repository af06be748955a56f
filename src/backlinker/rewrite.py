"""Rewrite ``[[WikiLinks]]`` into site-relative markdown links.

The site generator publishes every note as a sibling directory named after
the lower-cased, hyphenated filename, so ``[[New Idea]]`` becomes
``[New Idea](./new-idea/)``.  Rewriting is a plain per-line pattern match;
only link discovery (:mod:`backlinker.parser`) needs the markdown parser.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

from backlinker.note import strip_extension
from backlinker.parser import WIKILINK_RE

if TYPE_CHECKING:
    from backlinker.resolver import NoteResolver


def site_link(filename: str) -> str:
    """``My Note.md`` -> ``./my-note/``"""
    name = strip_extension(filename).lower().replace(" ", "-")
    return f"./{name}/"


def rewrite_line(line: str, resolver: "NoteResolver") -> str:
    """Replace every wikilink on *line* with a markdown link to its note."""

    def _replace(match: re.Match[str]) -> str:
        text = match.group(1)
        target = resolver.resolve(text)
        return f"[{text}]({site_link(target.original_name)})"

    return WIKILINK_RE.sub(_replace, line)


def rewrite_lines(lines: Iterable[str], resolver: "NoteResolver") -> str:
    """Rewrite *lines* in order, each terminated by exactly one ``\\n``."""
    return "".join(rewrite_line(line.rstrip("\r\n"), resolver) + "\n" for line in lines)
