"""
Reference Content Classifier

Decides whether the content of a <ref> marker is a bare link that can be
filled in, and extracts its URL.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..config.settings import ReflinksOptions
from ..utils.url_utils import is_valid_url

DEAD_LINK_PATTERN = re.compile(r"\{\{(Dead link|404|dl|dead|Broken link)", re.IGNORECASE)
CAPTIONED_BRACKET_PATTERN = re.compile(r"^\[(http[^\] ]+) ([^\]]+)\]$", re.IGNORECASE)
UNCAPTIONED_BRACKET_PATTERN = re.compile(r"^\[(http[^ ]+)\]$", re.IGNORECASE)
MINIMAL_TEMPLATE_PATTERN = re.compile(
    r"^\{\{cite web\s*\|\s*url=(http[^ \|]+)\s*\}\}$", re.IGNORECASE
)


class Shape(str, Enum):
    """Fixable reference shapes."""

    BARE_URL = "bare_url"
    CAPTIONED_BRACKET = "captioned_bracket"
    UNCAPTIONED_BRACKET = "uncaptioned_bracket"
    MINIMAL_TEMPLATE = "minimal_template"


@dataclass(frozen=True)
class ClassifiedReference:
    shape: Shape
    url: str
    caption: Optional[str] = None


def is_dead_link(content: str) -> bool:
    """Check for a dead link template inside reference content."""
    return bool(DEAD_LINK_PATTERN.search(content or ""))


def classify(
    content: str, options: Optional[ReflinksOptions] = None
) -> Optional[ClassifiedReference]:
    """
    Classify reference content.

    Shapes are tested in priority order and the first pattern that matches
    decides the outcome, even when its option disables it.

    Args:
        content: Interior text of a <ref> marker
        options: Options gating the bracket and template shapes

    Returns:
        ClassifiedReference, or None when the reference should be left alone
    """
    options = options or ReflinksOptions()
    if is_dead_link(content):
        return None

    core = (content or "").strip()

    if is_valid_url(core) and core.startswith("http"):
        return ClassifiedReference(Shape.BARE_URL, core)

    match = CAPTIONED_BRACKET_PATTERN.match(core)
    if match:
        if is_valid_url(match.group(1)) and not options.disable_captioned_bracket:
            return ClassifiedReference(Shape.CAPTIONED_BRACKET, match.group(1), match.group(2))
        return None

    match = UNCAPTIONED_BRACKET_PATTERN.match(core)
    if match:
        if is_valid_url(match.group(1)) and not options.disable_uncaptioned_bracket:
            return ClassifiedReference(Shape.UNCAPTIONED_BRACKET, match.group(1))
        return None

    match = MINIMAL_TEMPLATE_PATTERN.match(core)
    if match:
        if is_valid_url(match.group(1)) and not options.disable_minimal_template:
            return ClassifiedReference(Shape.MINIMAL_TEMPLATE, match.group(1))
        return None

    # Probably already filled in
    return None
