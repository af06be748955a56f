"""BacklinkIndex: runs the whole notes directory through every processing stage."""

from __future__ import annotations

import logging
from pathlib import Path

from backlinker.backlinks import render_backlinks
from backlinker.frontmatter import adjust_frontmatter, extract_frontmatter
from backlinker.note import NoteFile
from backlinker.parser import collect_backlinks
from backlinker.resolver import EXTENSION, NoteResolver
from backlinker.rewrite import rewrite_lines

log = logging.getLogger(__name__)


def split_lines(text: str) -> list[str]:
    """Split *text* on ``\\n`` only; a trailing newline does not start a new line."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def read_lines(path: Path) -> list[str]:
    """Read *path* as lines; ``\\r`` before ``\\n`` is left for the rewriter to drop."""
    with open(path, encoding="utf-8", newline="") as fh:
        return split_lines(fh.read())


def list_markdown_files(source_dir: Path) -> list[str]:
    """Return the names of the ``.md`` files directly inside *source_dir*."""
    return sorted(
        path.name for path in Path(source_dir).iterdir() if path.suffix == EXTENSION and path.is_file()
    )


class BacklinkIndex:
    """Resolves links across a directory of notes and renders the rewritten files.

    Every stage completes for all notes before the next one starts:

    1. :meth:`build` lists the notes and collects backlinks from each real one.
    2. :meth:`generate` extracts frontmatter, adjusts it (date-named notes
       first), rewrites links and appends the backlinks section.
    3. :meth:`write` saves every note, stubs included.
    """

    def __init__(self, source_dir: Path) -> None:
        self.source_dir = Path(source_dir)
        self.resolver = NoteResolver()
        self._generated: set[str] = set()

    @property
    def notes(self) -> dict[str, NoteFile]:
        return self.resolver.notes

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    def build(self) -> None:
        """Register every note on disk and collect its outgoing links."""
        for filename in list_markdown_files(self.source_dir):
            self.resolver.add_file(filename)
        for key in self.resolver.keys():
            note = self.notes[key]
            if note.is_stub:
                continue
            path = self.source_dir / note.original_name
            log.info("Collecting backlinks from %s", path)
            collect_backlinks(note, path.read_text(encoding="utf-8"), self.resolver)

    # ------------------------------------------------------------------
    # Generate
    # ------------------------------------------------------------------

    def generate(self) -> None:
        """Render every note into its output buffer."""
        keys = self.resolver.keys()
        self._generate(keys)
        # Links only the line rewriter sees (e.g. inside code spans) can still
        # add stubs; they have no backlinks, so they are rendered on their own.
        while late := [key for key in self.resolver.keys() if key not in self._generated]:
            log.debug("Rendering %d late stub(s)", len(late))
            self._generate(late)

    def _generate(self, keys: list[str]) -> None:
        notes = [self.notes[key] for key in keys]
        for note in notes:
            self._extract(note)
        self._adjust_date_notes(notes)
        self._adjust_other_notes(notes)
        for note in notes:
            note.output.write(rewrite_lines(note.body, self.resolver))
        for note in notes:
            note.output.write(render_backlinks(note, self.resolver))
        self._generated.update(keys)

    def _extract(self, note: NoteFile) -> None:
        if note.is_stub:
            log.info("%s is a new file", note.original_name)
            lines: list[str] = []
        else:
            path = self.source_dir / note.original_name
            log.info("Reading %s", path)
            lines = read_lines(path)
        note.metadata, note.body = extract_frontmatter(lines, note.original_name)
        note.output.seek(0)
        note.output.truncate()

    def _adjust_date_notes(self, notes: list[NoteFile]) -> None:
        """Adjust date-named notes.

        Postcondition: every date-named note has its final ``date``.
        """
        for note in notes:
            if note.is_date_named:
                note.output.write(adjust_frontmatter(note))

    def _adjust_other_notes(self, notes: list[NoteFile]) -> None:
        """Adjust the remaining notes, inferring dates from their backlinks.

        Precondition: :meth:`_adjust_date_notes` has run for the same notes.
        """
        for note in notes:
            if not note.is_date_named:
                note.output.write(adjust_frontmatter(note))

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def write(self, dest_dir: Path) -> list[Path]:
        """Write every rendered note to *dest_dir* and return the written paths."""
        dest_dir = Path(dest_dir)
        dest_dir.mkdir(parents=True, exist_ok=True)
        written: list[Path] = []
        for note in self.resolver:
            path = dest_dir / note.original_name
            path.write_text(note.rendered(), encoding="utf-8", newline="\n")
            log.debug("Wrote %s", path)
            written.append(path)
        log.info("Wrote %d files to %s", len(written), dest_dir)
        return written


def process_backlinks(source_dir: Path, dest_dir: Path | None = None) -> BacklinkIndex:
    """Convert the notes in *source_dir* into cross-linked notes in *dest_dir*.

    *dest_dir* defaults to *source_dir*, rewriting the notes in place.
    """
    index = BacklinkIndex(source_dir)
    index.build()
    index.generate()
    index.write(dest_dir if dest_dir is not None else source_dir)
    return index
