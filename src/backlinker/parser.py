"""WikiLink discovery with paragraph-level context.

Notes are parsed with :mod:`markdown_it` so that block structure is honoured:
``[[links]]`` inside fenced or indented code and inline code spans are not
links, and each link is reported together with the text of the block it
appears in.  Discovery happens in a custom inline rule (see
:func:`wikilink_plugin`) that emits a ``wikilink`` token for every occurrence.

Nothing here rewrites text; see :mod:`backlinker.rewrite`.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from markdown_it import MarkdownIt
from markdown_it.rules_inline import StateInline
from markdown_it.token import Token

if TYPE_CHECKING:
    from backlinker.note import NoteFile
    from backlinker.resolver import NoteResolver

log = logging.getLogger(__name__)

# [[Target]]: everything up to the first "]]", no nesting, single line
WIKILINK_RE = re.compile(r"\[\[([^\]\n]+)\]\]")
_LINE_BREAK_RE = re.compile(r"[ \t]*\n[ \t]*")


@dataclass
class WikiLinkOccurrence:
    text: str
    target: "NoteFile"
    context: str


def _wikilink_rule(state: StateInline, silent: bool) -> bool:
    if not state.src.startswith("[[", state.pos):
        return False
    match = WIKILINK_RE.match(state.src, state.pos, state.posMax)
    if match is None:
        return False
    if not silent:
        token = state.push("wikilink", "", 0)
        token.content = match.group(1)
    state.pos = match.end()
    return True


def wikilink_plugin(md: MarkdownIt) -> None:
    """markdown-it plugin recognising ``[[Target]]`` ahead of regular links."""
    md.inline.ruler.before("link", "wikilink", _wikilink_rule)


def make_parser() -> MarkdownIt:
    return MarkdownIt("commonmark").use(wikilink_plugin)


_parser = make_parser()


def block_context(src: str) -> str:
    """Flatten a block's inline source onto a single line."""
    return _LINE_BREAK_RE.sub(" ", src.strip())


def _wikilink_tokens(tokens: list[Token]) -> Iterator[Token]:
    # image alt text is parsed into the image token's own children
    for token in tokens:
        if token.type == "wikilink":
            yield token
        elif token.children:
            yield from _wikilink_tokens(token.children)


def find_wikilinks(text: str) -> list[tuple[str, str]]:
    """Return ``(link_text, context)`` for every link occurrence in *text*.

    The context is the source of the whole block holding the link, even when
    the link sits inside link text or image alt text.
    """
    found: list[tuple[str, str]] = []
    for block in _parser.parse(text):
        if block.type != "inline" or not block.children:
            continue
        context = block_context(block.content)
        found.extend((token.content, context) for token in _wikilink_tokens(block.children))
    return found


def extract_wikilinks(text: str, resolver: "NoteResolver") -> list[WikiLinkOccurrence]:
    """Find every link occurrence in *text* and resolve its target.

    Each occurrence is resolved separately, so a target linked twice yields
    two entries; unknown targets become stubs in *resolver*.
    """
    return [
        WikiLinkOccurrence(link, resolver.resolve(link), context)
        for link, context in find_wikilinks(text)
    ]


def collect_backlinks(note: "NoteFile", text: str, resolver: "NoteResolver") -> int:
    """Record a backlink from *note* on every note it links to; return the count."""
    occurrences = extract_wikilinks(text, resolver)
    for occ in occurrences:
        occ.target.add_backlink(note, occ.context)
        log.debug("%s -> %s", note.original_name, occ.target.original_name)
    return len(occurrences)
