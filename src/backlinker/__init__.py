"""Wikilink resolution and backlinks for a directory of markdown notes."""

from backlinker.backlinks import render_backlinks, sort_backlinks
from backlinker.frontmatter import adjust_frontmatter, extract_frontmatter
from backlinker.index import BacklinkIndex, process_backlinks
from backlinker.note import Backlink, NoteFile
from backlinker.parser import extract_wikilinks
from backlinker.resolver import NoteResolver, canonical_key
from backlinker.rewrite import rewrite_line

__all__ = [
    "Backlink",
    "BacklinkIndex",
    "NoteFile",
    "NoteResolver",
    "adjust_frontmatter",
    "canonical_key",
    "extract_frontmatter",
    "extract_wikilinks",
    "process_backlinks",
    "render_backlinks",
    "rewrite_line",
    "sort_backlinks",
]
