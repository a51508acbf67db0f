"""
Tests for CitationRewriter
"""

import pytest

from reflinks.citations.rewriter import CitationRewriter, merge_attributes, split_by_name
from reflinks.citations.scanner import list_citations


class TestMarkup:
    """Test generated markup."""

    def test_generate_attribute(self):
        """Test double quoting."""
        assert CitationRewriter.generate_attribute("name", "foo") == 'name="foo"'

    def test_generate_attribute_with_double_quote(self):
        """Test single quoting for values containing a double quote."""
        assert CitationRewriter.generate_attribute("name", 'a"b') == "name='a\"b'"

    def test_generate_attribute_with_both_quotes(self):
        """Test that a value with both quote characters stays one attribute."""
        attribute = CitationRewriter.generate_attribute("name", "o'neil \"jr\"")
        assert attribute == 'name="o\'neil &quot;jr&quot;"'
        assert list_citations(f"<ref {attribute}>u</ref>")[0].attributes == {
            "name": "o'neil &quot;jr&quot;"
        }

    def test_generate_citation(self):
        """Test a full named citation."""
        rewriter = CitationRewriter("")
        citation = rewriter.generate_citation("core", {"name": "x", "group": "g"})
        assert citation == '<ref name="x" group="g">core</ref>'

    def test_generate_stub(self):
        """Test a reference stub."""
        rewriter = CitationRewriter("")
        assert rewriter.generate_stub({"name": "x"}) == '<ref name="x" />'


class TestMergeAttributes:
    """Test attribute merging across duplicates."""

    def test_first_non_empty_value_wins(self):
        """Test merge priority."""
        markers = list_citations(
            '<ref name="">u</ref><ref name="second" group="a">u</ref><ref name="third" group="b">u</ref>'
        )
        assert merge_attributes(markers) == {"name": "second", "group": "a"}

    def test_no_attributes(self):
        """Test markers without attributes."""
        assert merge_attributes(list_citations("<ref>u</ref><ref>u</ref>")) == {}


class TestSplitByName:
    """Test splitting duplicate groups by existing names."""

    def test_all_unnamed(self):
        """Test that an unnamed group stays whole."""
        markers = list_citations("<ref>u</ref><ref>u</ref>")
        assert split_by_name(markers) == [markers]

    def test_distinct_names_split(self):
        """Test that members with different names are separated."""
        markers = list_citations('<ref name="a">u</ref><ref name="b">u</ref><ref name="a">u</ref>')
        groups = split_by_name(markers)
        assert [[m.index for m in group] for group in groups] == [[0, 2], [1]]

    def test_unnamed_join_first_named(self):
        """Test that unnamed members go with the first name in the document."""
        markers = list_citations('<ref>u</ref><ref name="b">u</ref><ref name="a">u</ref><ref>u</ref>')
        groups = split_by_name(markers)
        assert [[m.index for m in group] for group in groups] == [[0, 1, 3], [2]]

    def test_empty_name_counts_as_unnamed(self):
        """Test that name="" does not form its own subgroup."""
        markers = list_citations('<ref name="">u</ref><ref name="x">u</ref>')
        assert [[m.index for m in group] for group in split_by_name(markers)] == [[0, 1]]


class TestRewriting:
    """Test span-based rewriting."""

    def test_no_edits(self):
        """Test that an untouched buffer exports unchanged."""
        text = "Text<ref>http://a.test</ref>"
        assert CitationRewriter(text).export_wikitext() == text

    def test_rewrite_simple_keeps_tags(self):
        """Test that the simple case keeps the original start and end tags."""
        text = 'A<ref group="n">http://a.test</ref>B'
        marker = list_citations(text)[0]
        rewriter = CitationRewriter(text)
        rewriter.rewrite_simple(marker, "{{cite web}}")
        assert rewriter.export_wikitext() == 'A<ref group="n">{{cite web}}</ref>B'
        assert rewriter.is_rewritten(marker)

    def test_identical_markers_are_rewritten_individually(self):
        """Test that only the targeted marker changes when spans look alike."""
        text = "<ref>x</ref> and <ref>x</ref>"
        markers = list_citations(text)
        rewriter = CitationRewriter(text)
        rewriter.rewrite_simple(markers[1], "y")
        assert rewriter.export_wikitext() == "<ref>x</ref> and <ref>y</ref>"

    def test_edits_do_not_shift_other_markers(self):
        """Test that a longer replacement leaves later markers intact."""
        text = "<ref>a</ref>-<ref>b</ref>"
        markers = list_citations(text)
        rewriter = CitationRewriter(text)
        rewriter.rewrite_simple(markers[0], "a much longer citation")
        rewriter.rewrite_simple(markers[1], "B")
        assert rewriter.export_wikitext() == "<ref>a much longer citation</ref>-<ref>B</ref>"

    def test_marker_rewritten_once(self):
        """Test that a second edit of one marker is rejected."""
        text = "<ref>a</ref>"
        marker = list_citations(text)[0]
        rewriter = CitationRewriter(text)
        rewriter.rewrite_simple(marker, "b")
        with pytest.raises(ValueError):
            rewriter.rewrite_simple(marker, "c")

    def test_marker_from_other_text_rejected(self):
        """Test that a marker not matching the buffer is rejected."""
        marker = list_citations("<ref>a</ref>")[0]
        rewriter = CitationRewriter("no refs in here")
        with pytest.raises(ValueError):
            rewriter.rewrite_simple(marker, "b")

    def test_rewrite_duplicates(self):
        """Test one full citation plus stubs."""
        text = "<ref>u</ref> <ref>other</ref> <ref>u</ref> <ref>u</ref>"
        markers = list_citations(text)
        group = [markers[0], markers[2], markers[3]]
        rewriter = CitationRewriter(text)
        replacement = rewriter.rewrite_duplicates(group, "C", {"name": "n"})

        assert replacement == '<ref name="n">C</ref>'
        assert rewriter.export_wikitext() == (
            '<ref name="n">C</ref> <ref>other</ref> <ref name="n" /> <ref name="n" />'
        )
        assert all(rewriter.is_rewritten(m) for m in group)
        assert not rewriter.is_rewritten(markers[1])

    def test_rewrite_duplicates_orders_group(self):
        """Test that the earliest marker always gets the full citation."""
        text = "<ref>u</ref><ref>u</ref>"
        markers = list_citations(text)
        rewriter = CitationRewriter(text)
        rewriter.rewrite_duplicates(list(reversed(markers)), "C", {"name": "n"})
        assert rewriter.export_wikitext() == '<ref name="n">C</ref><ref name="n" />'
