"""
Citation Rewriter

Holds the wikitext being fixed and applies replacements to scanned markers.

Edits are recorded per marker and applied from the end of the text towards
the start on export, so no replacement shifts the offsets of another marker
and markers with identical text are never confused with each other.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

from ..models import CitationMarker

logger = logging.getLogger(__name__)


def merge_attributes(markers: Iterable[CitationMarker]) -> Dict[str, str]:
    """
    Merge the attributes of several markers.

    The first non-empty value seen for a name wins, so a name a human already
    assigned to one of the duplicates is never replaced.
    """
    merged: Dict[str, str] = {}
    for marker in markers:
        for name, value in marker.attributes.items():
            if not merged.get(name):
                merged[name] = value
    return merged


def split_by_name(markers: Sequence[CitationMarker]) -> List[List[CitationMarker]]:
    """
    Split a duplicate group by the names its members already carry.

    Members sharing a name stay together. Unnamed members join the first
    named subgroup in document order, or form one subgroup when nobody has
    a name yet.

    Args:
        markers: Markers with identical content

    Returns:
        Subgroups ordered by their first member
    """
    ordered = sorted(markers, key=lambda m: m.index)
    named: Dict[str, List[CitationMarker]] = {}
    unnamed: List[CitationMarker] = []
    for marker in ordered:
        name = marker.attributes.get("name")
        if name:
            named.setdefault(name, []).append(marker)
        else:
            unnamed.append(marker)

    if not named:
        return [unnamed]

    subgroups = list(named.values())
    subgroups[0] = sorted(subgroups[0] + unnamed, key=lambda m: m.index)
    return sorted(subgroups, key=lambda group: group[0].index)


class CitationRewriter:
    """Applies citation replacements to a wikitext buffer."""

    def __init__(self, text: str):
        """
        Initialize rewriter.

        Args:
            text: Original wikitext the markers were scanned from
        """
        self.original = text
        self._edits: Dict[int, Tuple[int, int, str]] = {}

    @staticmethod
    def generate_attribute(name: str, value: str) -> str:
        """
        Render one attribute.

        Values containing " are quoted with '; values containing both quote
        characters get " encoded as &quot;.
        """
        if '"' in value and "'" in value:
            encoded = value.replace('"', "&quot;")
            return f'{name}="{encoded}"'
        if '"' in value:
            return f"{name}='{value}'"
        return f'{name}="{value}"'

    def generate_start_tag(self, attributes: Mapping[str, str]) -> str:
        rendered = " ".join(
            self.generate_attribute(name, value) for name, value in attributes.items()
        )
        return f"<ref {rendered}>" if rendered else "<ref>"

    def generate_citation(self, core: str, attributes: Mapping[str, str]) -> str:
        """Full named citation: <ref name="x">core</ref>."""
        return f"{self.generate_start_tag(attributes)}{core}</ref>"

    def generate_stub(self, attributes: Mapping[str, str]) -> str:
        """Reference stub: <ref name="x" />."""
        rendered = " ".join(
            self.generate_attribute(name, value) for name, value in attributes.items()
        )
        return f"<ref {rendered} />" if rendered else "<ref />"

    def is_rewritten(self, marker: CitationMarker) -> bool:
        return marker.index in self._edits

    def replace_marker(self, marker: CitationMarker, replacement: str) -> None:
        """
        Replace one marker's span with new text.

        Raises:
            ValueError: If the marker was already rewritten in this pass
        """
        if self.is_rewritten(marker):
            raise ValueError(f"Citation #{marker.index} has already been rewritten")
        start, end = marker.span
        if self.original[start:end] != marker.complete:
            raise ValueError(f"Citation #{marker.index} does not match the buffer")
        self._edits[marker.index] = (start, end, replacement)

    def rewrite_simple(self, marker: CitationMarker, core: str) -> str:
        """Keep the original surrounding tags and swap in the new citation."""
        replacement = f"{marker.start_tag}{core}{marker.end_tag}"
        self.replace_marker(marker, replacement)
        return replacement

    def rewrite_duplicates(
        self,
        group: Sequence[CitationMarker],
        core: str,
        attributes: Mapping[str, str],
    ) -> str:
        """
        Turn the first marker of a duplicate group into a full named citation
        and every other marker of the group into a stub.

        Args:
            group: Markers with identical content, in document order
            core: Formatted citation
            attributes: Attributes for the merged citation, including its name

        Returns:
            The full citation written over the first marker
        """
        ordered = sorted(group, key=lambda m: m.index)
        replacement = self.generate_citation(core, attributes)
        stub = self.generate_stub(attributes)

        self.replace_marker(ordered[0], replacement)
        for marker in ordered[1:]:
            if not self.is_rewritten(marker):
                self.replace_marker(marker, stub)

        logger.debug(f"Merged {len(ordered)} duplicate references into {stub}")
        return replacement

    def export_wikitext(self) -> str:
        """Wikitext with every recorded edit applied."""
        text = self.original
        for start, end, replacement in sorted(self._edits.values(), reverse=True):
            text = text[:start] + replacement + text[end:]
        return text
