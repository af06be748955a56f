"""NoteResolver: the canonical, case-insensitive note identity map."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from backlinker.errors import DuplicateNoteError
from backlinker.note import NoteFile

log = logging.getLogger(__name__)

EXTENSION = ".md"


def canonical_key(text: str) -> str:
    """Lower-case *text* and make sure it carries the ``.md`` extension."""
    key = text.lower()
    return key if key.endswith(EXTENSION) else key + EXTENSION


def with_extension(text: str) -> str:
    return text if text.lower().endswith(EXTENSION) else text + EXTENSION


class NoteResolver:
    """Maps link text and filenames to the single :class:`NoteFile` for each key.

    One resolver is shared by every stage of a run.  Resolving text that does
    not match any known note registers a stub for it, so the map only grows.
    """

    def __init__(self) -> None:
        self.notes: dict[str, NoteFile] = {}

    def __len__(self) -> int:
        return len(self.notes)

    def __contains__(self, text: str) -> bool:
        return canonical_key(text) in self.notes

    def __iter__(self) -> Iterator[NoteFile]:
        return iter(list(self.notes.values()))

    def keys(self) -> list[str]:
        """Snapshot of the current keys, safe to iterate while resolving."""
        return list(self.notes)

    def get(self, text: str) -> NoteFile | None:
        return self.notes.get(canonical_key(text))

    def add_file(self, filename: str) -> NoteFile:
        """Register a real note found on disk."""
        key = canonical_key(filename)
        existing = self.notes.get(key)
        if existing is not None:
            raise DuplicateNoteError(
                f"differs only by case from {existing.original_name!r}", filename
            )
        note = NoteFile.create(key, filename)
        self.notes[key] = note
        return note

    def resolve(self, link_text: str) -> NoteFile:
        """Return the note for *link_text*, creating a stub if it is unknown."""
        key = canonical_key(link_text)
        note = self.notes.get(key)
        if note is None:
            note = NoteFile.create(key, with_extension(link_text), is_stub=True)
            self.notes[key] = note
            log.debug("Created stub %s", note.original_name)
        return note
