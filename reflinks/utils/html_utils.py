"""
HTML Utilities

Cleaning of text scraped from web pages before it goes into a citation.
"""

import html
import re
from typing import Optional

_TAG_PATTERN = re.compile(r"<[^>]+>")
_WHITESPACE_PATTERN = re.compile(r"\s+")

_TITLE_SEPARATORS = (" - ", " | ", " – ", " — ", " :: ")


def remove_html_tags(text: Optional[str]) -> Optional[str]:
    """Drop markup and collapse runs of whitespace."""
    if not text:
        return text
    return _WHITESPACE_PATTERN.sub(" ", _TAG_PATTERN.sub("", text)).strip()


def normalize_text(text: Optional[str]) -> Optional[str]:
    """
    Turn a meta tag value or <title> into plain single-line text.

    Entities are decoded first, so escaped markup such as "&lt;i&gt;" is
    removed as well.

    Args:
        text: Raw text from the page

    Returns:
        Normalized text, or the input unchanged when it is empty
    """
    if not text:
        return text
    return remove_html_tags(html.unescape(text))


def clean_title(title: Optional[str], site_name: Optional[str]) -> Optional[str]:
    """
    Strip a trailing or leading site name from a page title.

    Example:
        clean_title("Budget approved - Example News", "Example News") -> "Budget approved"

    Args:
        title: Page title
        site_name: Name of the website

    Returns:
        Title without the site name, or the original title if stripping
        would leave nothing
    """
    if not title or not site_name:
        return title

    for separator in _TITLE_SEPARATORS:
        suffix = f"{separator}{site_name}"
        if title.endswith(suffix) and len(title) > len(suffix):
            return title[: -len(suffix)].strip()
        prefix = f"{site_name}{separator}"
        if title.startswith(prefix) and len(title) > len(prefix):
            return title[len(prefix) :].strip()
    return title
