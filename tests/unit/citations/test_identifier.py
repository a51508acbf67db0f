"""
Tests for reference name synthesis
"""

from reflinks.citations.duplicate_index import DuplicateIndex
from reflinks.citations.identifier import candidate_identifier, synthesize_identifier
from reflinks.citations.scanner import list_citations
from reflinks.models import Metadata


def _index(text: str = "") -> DuplicateIndex:
    return DuplicateIndex(list_citations(text))


class TestCandidateIdentifier:
    """Test candidate name derivation."""

    def test_from_author(self):
        """Test that author names lose whitespace and case."""
        metadata = Metadata(url="http://example.org", title="T", author="Jane  Doe")
        assert candidate_identifier(metadata) == "janedoe"

    def test_from_domain(self):
        """Test the base domain fallback."""
        metadata = Metadata(url="http://www.news.example.com/a", title="T")
        assert candidate_identifier(metadata) == "example.com"

    def test_blank_author_uses_domain(self):
        """Test that a whitespace-only author is ignored."""
        metadata = Metadata(url="https://www.bbc.co.uk/news", title="T", author="  ")
        assert candidate_identifier(metadata) == "bbc.co.uk"

    def test_quotes_stripped_from_author(self):
        """Test that quote and tag characters never reach the name."""
        metadata = Metadata(url="http://example.org", title="T", author="O'Neil \"Jr\" <b>")
        assert candidate_identifier(metadata) == "oneiljrb"


class TestSynthesizeIdentifier:
    """Test collision-free name synthesis."""

    def test_existing_name_reused(self):
        """Test that an existing name is kept verbatim."""
        metadata = Metadata(url="http://example.org", title="T", author="Jane Doe")
        index = _index()
        assert synthesize_identifier({"name": "Mine"}, metadata, index) == "Mine"
        assert not index.has_attribute("name", "janedoe")

    def test_empty_existing_name_ignored(self):
        """Test that an empty name is replaced."""
        metadata = Metadata(url="http://example.org", title="T", author="Jane Doe")
        assert synthesize_identifier({"name": ""}, metadata, _index()) == "janedoe"

    def test_collision_with_document(self):
        """Test suffixing when the document already uses the name."""
        metadata = Metadata(url="http://example.org", title="T")
        index = _index('<ref name="example.org">x</ref>')
        assert synthesize_identifier({}, metadata, index) == "example.org1"

    def test_lowest_unused_suffix(self):
        """Test that taken suffixes are skipped."""
        metadata = Metadata(url="http://example.org", title="T")
        index = _index('<ref name="example.org">x</ref><ref name="example.org1" />')
        assert synthesize_identifier({}, metadata, index) == "example.org2"

    def test_minted_names_are_reserved(self):
        """Test that later groups in the same pass get fresh names."""
        metadata = Metadata(url="http://example.org/a", title="T")
        index = _index()
        first = synthesize_identifier({}, metadata, index)
        second = synthesize_identifier({}, metadata, index)
        third = synthesize_identifier({}, metadata, index)
        assert [first, second, third] == ["example.org", "example.org1", "example.org2"]
