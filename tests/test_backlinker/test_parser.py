"""Unit tests for backlinker.parser."""

import textwrap

from backlinker.note import NoteFile
from backlinker.parser import collect_backlinks, extract_wikilinks, find_wikilinks
from backlinker.resolver import NoteResolver

# ---------------------------------------------------------------------------
# find_wikilinks
# ---------------------------------------------------------------------------


class TestFindWikilinks:
    def test_single_link_with_context(self):
        assert find_wikilinks("See [[New Idea]] for more.") == [
            ("New Idea", "See [[New Idea]] for more."),
        ]

    def test_multiple_links_share_paragraph_context(self):
        found = find_wikilinks("[[A]] and [[B]]")
        assert found == [("A", "[[A]] and [[B]]"), ("B", "[[A]] and [[B]]")]

    def test_duplicates_are_kept(self):
        text = "First [[B]] here.\n\nSecond [[B]] there.\n"
        assert find_wikilinks(text) == [
            ("B", "First [[B]] here."),
            ("B", "Second [[B]] there."),
        ]

    def test_multi_line_paragraph_is_flattened(self):
        text = "Line one mentions [[A]]\nand line two continues.\n"
        assert find_wikilinks(text) == [("A", "Line one mentions [[A]] and line two continues.")]

    def test_heading_context(self):
        assert find_wikilinks("# About [[Topic]]\n") == [("Topic", "About [[Topic]]")]

    def test_list_item_context(self):
        text = textwrap.dedent("""\
            - item with [[X]]
            - another item
        """)
        assert find_wikilinks(text) == [("X", "item with [[X]]")]

    def test_links_in_image_alt_and_link_text_get_block_context(self):
        text = "![pic of [[A]]](x.png) and [see [[B]]](http://x)"
        assert find_wikilinks(text) == [("A", text), ("B", text)]

    def test_table_is_a_single_paragraph(self):
        text = textwrap.dedent("""\
            | a | [[X]] |
            |---|---|
            | b | c |
        """)
        assert find_wikilinks(text) == [("X", "| a | [[X]] | |---|---| | b | c |")]

    def test_fenced_code_is_ignored(self):
        text = textwrap.dedent("""\
            ```
            [[Hidden]]
            ```
            Shown [[Visible]].
        """)
        assert [link for link, _ in find_wikilinks(text)] == ["Visible"]

    def test_inline_code_is_ignored(self):
        assert find_wikilinks("Use `[[Hidden]]` here.") == []

    def test_no_links(self):
        assert find_wikilinks("Plain text, [not a wikilink](./x/).") == []

    def test_empty_and_unclosed_brackets(self):
        assert find_wikilinks("Nothing [[]] and [[open") == []


# ---------------------------------------------------------------------------
# extract_wikilinks / collect_backlinks
# ---------------------------------------------------------------------------


class TestExtractWikilinks:
    def test_targets_resolved_case_insensitively(self):
        resolver = NoteResolver()
        real = resolver.add_file("Topic.md")
        found = extract_wikilinks("[[topic]] then [[TOPIC]]", resolver)
        assert [occ.text for occ in found] == ["topic", "TOPIC"]
        assert all(occ.target is real for occ in found)

    def test_unknown_target_becomes_stub(self):
        resolver = NoteResolver()
        found = extract_wikilinks("See [[New Idea]].", resolver)
        assert found[0].target.is_stub
        assert "new idea.md" in resolver.notes


class TestCollectBacklinks:
    def test_each_occurrence_is_a_backlink(self):
        resolver = NoteResolver()
        source = resolver.add_file("A.md")
        target = resolver.add_file("B.md")
        count = collect_backlinks(source, "One [[B]].\n\nTwo [[b]].\n", resolver)
        assert count == 2
        assert [bl.context for bl in target.backlinks] == ["One [[B]].", "Two [[b]]."]
        assert all(bl.source is source for bl in target.backlinks)

    def test_source_gets_no_backlinks(self):
        resolver = NoteResolver()
        source = NoteFile.create("a.md", "A.md")
        collect_backlinks(source, "[[B]]", resolver)
        assert source.backlinks == []
