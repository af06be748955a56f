"""Unit tests for backlinker.backlinks."""

from datetime import date

from backlinker.backlinks import HEADING, render_backlinks, sort_backlinks
from backlinker.resolver import NoteResolver


def _source(resolver: NoteResolver, name: str, day: date | None = None):
    note = resolver.add_file(name)
    if day is not None:
        note.metadata["date"] = day
    return note


# ---------------------------------------------------------------------------
# sort_backlinks
# ---------------------------------------------------------------------------


class TestSortBacklinks:
    def test_newest_first_then_undated(self):
        resolver = NoteResolver()
        target = resolver.resolve("Topic")
        for name, day in [
            ("Undated.md", None),
            ("Early.md", date(2021, 1, 5)),
            ("Late.md", date(2021, 1, 10)),
        ]:
            target.add_backlink(_source(resolver, name, day), f"[[Topic]] from {name}")
        ordered = [bl.source.original_name for bl in sort_backlinks(target.backlinks)]
        assert ordered == ["Late.md", "Early.md", "Undated.md"]

    def test_undated_sorted_by_title_case_sensitive(self):
        resolver = NoteResolver()
        target = resolver.resolve("Topic")
        for name in ["beta.md", "alpha.md", "Zeta.md"]:
            target.add_backlink(_source(resolver, name), "[[Topic]]")
        ordered = [bl.source.title for bl in sort_backlinks(target.backlinks)]
        assert ordered == ["Zeta", "alpha", "beta"]

    def test_equal_dates_sorted_by_title(self):
        resolver = NoteResolver()
        target = resolver.resolve("Topic")
        for name in ["b.md", "a.md"]:
            target.add_backlink(_source(resolver, name, date(2021, 1, 1)), "[[Topic]]")
        ordered = [bl.source.title for bl in sort_backlinks(target.backlinks)]
        assert ordered == ["a", "b"]

    def test_malformed_date_counts_as_undated(self):
        resolver = NoteResolver()
        target = resolver.resolve("Topic")
        target.add_backlink(_source(resolver, "a.md"), "[[Topic]]")
        odd = _source(resolver, "odd.md")
        odd.metadata["date"] = "next week"
        target.add_backlink(odd, "[[Topic]]")
        target.add_backlink(_source(resolver, "z.md", date(2020, 1, 1)), "[[Topic]]")
        ordered = [bl.source.title for bl in sort_backlinks(target.backlinks)]
        assert ordered == ["z", "a", "odd"]


# ---------------------------------------------------------------------------
# render_backlinks
# ---------------------------------------------------------------------------


class TestRenderBacklinks:
    def test_no_backlinks_renders_nothing(self):
        resolver = NoteResolver()
        assert render_backlinks(resolver.resolve("Lonely"), resolver) == ""

    def test_section_format(self):
        resolver = NoteResolver()
        zettel = _source(resolver, "Zettel.md")
        target = resolver.resolve("New Idea")
        target.add_backlink(zettel, "See [[New Idea]] for more.")
        assert render_backlinks(target, resolver) == (
            "\n## Backlinks\n\n"
            "- [Zettel](./zettel/)\n"
            "    - See [New Idea](./new-idea/) for more.\n"
        )

    def test_uses_adjusted_source_title(self):
        resolver = NoteResolver()
        source = _source(resolver, "zettel.md")
        source.title = "The Zettel"
        target = resolver.resolve("Topic")
        target.add_backlink(source, "[[Topic]]")
        assert "- [The Zettel](./zettel/)\n" in render_backlinks(target, resolver)

    def test_context_links_resolve_through_shared_resolver(self):
        resolver = NoteResolver()
        source = _source(resolver, "a.md")
        target = resolver.resolve("Topic")
        target.add_backlink(source, "[[Topic]] relates to [[Other Thing]]")
        rendered = render_backlinks(target, resolver)
        assert "    - [Topic](./topic/) relates to [Other Thing](./other-thing/)\n" in rendered
        assert resolver.notes["other thing.md"].is_stub

    def test_heading_appears_once(self):
        resolver = NoteResolver()
        target = resolver.resolve("Topic")
        for name in ["a.md", "b.md", "c.md"]:
            target.add_backlink(_source(resolver, name), "[[Topic]]")
        assert render_backlinks(target, resolver).count(HEADING) == 1
