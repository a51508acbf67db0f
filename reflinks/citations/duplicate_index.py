"""
Duplicate Citation Index

Snapshot of the markers scanned at the start of a fix pass, grouped by exact
content, with a registry of attribute values already in use.
"""

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Set, Tuple

from ..models import CitationMarker

logger = logging.getLogger(__name__)


class DuplicateIndex:
    """Groups citation markers by content and tracks attribute values."""

    def __init__(self, markers: Iterable[CitationMarker]):
        """
        Build the index.

        Args:
            markers: Every marker of the document, in document order
        """
        self.markers: List[CitationMarker] = list(markers)
        self._by_content: Dict[str, List[CitationMarker]] = defaultdict(list)
        self._attributes: Set[Tuple[str, str]] = set()
        self._reserved: Set[Tuple[str, str]] = set()

        for marker in self.markers:
            if not marker.is_self_closing:
                self._by_content[marker.content].append(marker)
            for name, value in marker.attributes.items():
                self._attributes.add((name, value))

    def has_duplicates(self, content: str) -> bool:
        """True if two or more paired markers have exactly this content."""
        return len(self._by_content.get(content, ())) > 1

    def group_by_content(self, content: str) -> List[CitationMarker]:
        """Markers with exactly this content, in document order."""
        return list(self._by_content.get(content, ()))

    def has_attribute(self, name: str, value: str) -> bool:
        """True if any marker carries name=value, or it was reserved this pass."""
        key = (name.lower(), value)
        return key in self._attributes or key in self._reserved

    def reserve_attribute(self, name: str, value: str) -> None:
        """Record a synthesized attribute value so it is not handed out twice."""
        logger.debug(f"Reserving attribute {name}={value}")
        self._reserved.add((name.lower(), value))
