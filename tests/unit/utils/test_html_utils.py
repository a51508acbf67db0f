"""
Tests for HTML utilities
"""

from reflinks.utils.html_utils import clean_title, normalize_text, remove_html_tags


class TestHtmlUtils:
    """Test HTML cleaning helpers."""

    def test_remove_html_tags(self):
        assert remove_html_tags("<b>Bold</b>   text") == "Bold text"

    def test_normalize_text(self):
        assert normalize_text("&lt;i&gt;Title&lt;/i&gt; &amp; more") == "Title & more"


class TestCleanTitle:
    """Test site name stripping."""

    def test_suffix(self):
        assert clean_title("Budget approved - Example News", "Example News") == "Budget approved"

    def test_prefix(self):
        assert clean_title("Example News | Budget approved", "Example News") == "Budget approved"

    def test_title_is_site_name(self):
        assert clean_title("Example News", "Example News") == "Example News"

    def test_no_site_name(self):
        assert clean_title("Budget approved - Example News", None) == "Budget approved - Example News"
