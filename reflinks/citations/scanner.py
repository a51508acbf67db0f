"""
Citation Marker Scanner

Finds <ref> markers in wikitext, both paired (<ref>...</ref>) and
self-closing (<ref name="x" />), in document order.
"""

import re
from typing import Dict, Iterator, List

from ..models import CitationMarker

# The self-closing branch is tried first at every attribute length, so
# "<ref name=x />" never opens a paired marker.
_REF_PATTERN = re.compile(
    r"(?P<open><ref(?:\s[^>]*?)?)"
    r"(?:(?P<selfclose>\s*/>)|>(?P<content>.*?)(?P<end></ref\s*>))",
    re.IGNORECASE | re.DOTALL,
)

_ATTRIBUTE_PATTERN = re.compile(
    r"""([\w-]+)\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'/>]+))""",
)


def parse_attributes(start_tag: str) -> Dict[str, str]:
    """
    Parse the attributes of a <ref> start tag.

    Args:
        start_tag: Tag text such as '<ref name="foo" group=notes>'

    Returns:
        Ordered mapping of lower-cased attribute names to values
    """
    body = start_tag
    if body[:4].lower() == "<ref":
        body = body[4:]

    attributes: Dict[str, str] = {}
    for match in _ATTRIBUTE_PATTERN.finditer(body):
        name = match.group(1).lower()
        value = next((g for g in match.groups()[1:] if g is not None), "")
        attributes.setdefault(name, value.strip())
    return attributes


def scan_citations(text: str) -> Iterator[CitationMarker]:
    """
    Yield every citation marker in the text, in document order.

    The scan is lazy; calling it again on the same text yields the same markers.

    Args:
        text: Wikitext to scan

    Yields:
        CitationMarker for each <ref> tag
    """
    for index, match in enumerate(_REF_PATTERN.finditer(text or "")):
        complete = match.group(0)
        if match.group("selfclose") is not None:
            yield CitationMarker(
                complete=complete,
                start_tag=complete,
                end_tag="",
                content="",
                is_self_closing=True,
                attributes=parse_attributes(complete),
                span=match.span(),
                index=index,
            )
        else:
            start_tag = match.group("open") + ">"
            yield CitationMarker(
                complete=complete,
                start_tag=start_tag,
                end_tag=match.group("end"),
                content=match.group("content"),
                is_self_closing=False,
                attributes=parse_attributes(start_tag),
                span=match.span(),
                index=index,
            )


def list_citations(text: str) -> List[CitationMarker]:
    """Materialize scan_citations() into a list."""
    return list(scan_citations(text))
