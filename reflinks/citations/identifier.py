"""
Reference Name Synthesizer

Chooses the name attribute shared by a group of merged duplicate references.
"""

import re
from typing import Mapping

from ..models import Metadata
from ..utils.url_utils import get_base_domain
from .duplicate_index import DuplicateIndex

NAME_ATTRIBUTE = "name"

# Whitespace, quotes and tag delimiters never go into a synthesized name
_UNSAFE_CHARACTERS = re.compile(r"[\s\"'<>/=]+")


def candidate_identifier(metadata: Metadata) -> str:
    """Base name derived from the author, falling back to the site's domain."""
    if metadata.author:
        name = _UNSAFE_CHARACTERS.sub("", metadata.author).lower()
        if name:
            return name
    return get_base_domain(metadata.url)


def synthesize_identifier(
    existing_attributes: Mapping[str, str],
    metadata: Metadata,
    index: DuplicateIndex,
) -> str:
    """
    Produce a document-unique reference name.

    An existing non-empty name is reused verbatim. Otherwise the candidate
    from candidate_identifier() gets the lowest integer suffix (1, 2, ...)
    that is not in use anywhere in the document.

    Args:
        existing_attributes: Attributes merged from the duplicate group
        metadata: Metadata for the referenced page
        index: Index of the document's markers

    Returns:
        Name attribute value
    """
    existing = existing_attributes.get(NAME_ATTRIBUTE)
    if existing:
        return existing

    name = candidate_identifier(metadata)
    if index.has_attribute(NAME_ATTRIBUTE, name):
        suffix = 1
        while index.has_attribute(NAME_ATTRIBUTE, f"{name}{suffix}"):
            suffix += 1
        name = f"{name}{suffix}"

    index.reserve_attribute(NAME_ATTRIBUTE, name)
    return name
