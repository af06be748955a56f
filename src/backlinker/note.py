"""Core NoteFile / Backlink dataclasses."""

from __future__ import annotations

import io
import re
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any

# 2021-03-01.md (the whole filename, nothing else)
_DATE_NAME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}\.md$")


def strip_extension(filename: str) -> str:
    """Drop the final extension from *filename* (``a.b.md`` -> ``a.b``)."""
    suffix = PurePath(filename).suffix
    return filename[: -len(suffix)] if suffix else filename


def is_date_name(filename: str) -> bool:
    return bool(_DATE_NAME_RE.match(filename))


@dataclass(eq=False)
class Backlink:
    """An inbound reference: *source* mentions the owning note in *context*."""

    source: "NoteFile" = field(repr=False)
    context: str


@dataclass(eq=False)
class NoteFile:
    """A single markdown note, either read from disk or synthesized as a stub."""

    key: str
    #: Original-case filename, used for output paths and links
    original_name: str
    title: str
    is_stub: bool = False
    is_date_named: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
    backlinks: list[Backlink] = field(default_factory=list, repr=False)
    #: Content lines left over once the frontmatter block has been removed
    body: list[str] = field(default_factory=list)
    output: io.StringIO = field(default_factory=io.StringIO, repr=False)

    @classmethod
    def create(cls, key: str, original_name: str, *, is_stub: bool = False) -> "NoteFile":
        return cls(
            key=key,
            original_name=original_name,
            title=strip_extension(original_name),
            is_stub=is_stub,
            is_date_named=is_date_name(original_name),
        )

    @property
    def stem(self) -> str:
        return strip_extension(self.original_name)

    def add_backlink(self, source: "NoteFile", context: str) -> Backlink:
        backlink = Backlink(source=source, context=context)
        self.backlinks.append(backlink)
        return backlink

    def rendered(self) -> str:
        """Return everything written to the output buffer so far."""
        return self.output.getvalue()
