"""
Spam Filter

Rejects URLs matching a spam blacklist. Patterns use the MediaWiki spam
blacklist syntax: one regular expression fragment per line, matched against
the host and path of the URL, with '#' starting a comment.
"""

import logging
import re
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)

# MediaWiki anchors blacklist entries after the scheme and an optional
# subdomain prefix
_URL_PREFIX = r"https?://+[a-z0-9_\-.]*"


def load_blacklist(text: str) -> List[str]:
    """
    Parse blacklist file content into pattern fragments.

    Args:
        text: Blacklist content

    Returns:
        Non-empty pattern fragments with comments removed
    """
    patterns = []
    for line in (text or "").splitlines():
        line = re.sub(r"(?<!\\)#.*$", "", line).strip()
        if line:
            patterns.append(line)
    return patterns


class SpamFilter:
    """Checks URLs against blacklist patterns."""

    def __init__(self, patterns: Optional[Iterable[str]] = None):
        self._patterns: List[re.Pattern] = []
        for pattern in patterns or []:
            self.add_pattern(pattern)

    def add_pattern(self, pattern: str) -> None:
        try:
            self._patterns.append(re.compile(_URL_PREFIX + pattern, re.IGNORECASE))
        except re.error as e:
            logger.warning(f"Ignoring invalid blacklist pattern {pattern!r}: {e}")

    def check(self, url: str) -> bool:
        """
        Check a URL.

        Returns:
            True if the URL is blacklisted
        """
        for pattern in self._patterns:
            if pattern.match(url):
                logger.debug(f"URL {url} matches blacklist pattern {pattern.pattern}")
                return True
        return False
