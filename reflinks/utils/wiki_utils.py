"""
Wikitext Utilities

Helpers for article-level wikitext handling: date style detection, removal
of bare-URL cleanup templates and MediaWiki timestamps.
"""

import re
from datetime import datetime, timezone
from typing import Optional

from ..models import DateFormat

_DATE_STYLE_PATTERNS = [
    (re.compile(r"\{\{\s*use (dmy|british) dates", re.IGNORECASE), DateFormat.DMY),
    (re.compile(r"\{\{\s*use (mdy|american) dates", re.IGNORECASE), DateFormat.MDY),
    (re.compile(r"\{\{\s*use ymd dates", re.IGNORECASE), DateFormat.ISO),
]

_BARE_URL_TAG_PATTERN = re.compile(
    r"\{\{\s*(?:bare urls?|bare|barelinks|bare links|bare references|barerefs"
    r"|cleanup-bare urls|cleanup-link rot|cleanup-linkrot|link ?rot)"
    r"\s*(?:\|[^{}]*)?\}\}[ \t]*\n?",
    re.IGNORECASE,
)


def detect_date_format(wikitext: str) -> DateFormat:
    """
    Detect the date style an article asks for.

    Args:
        wikitext: Article wikitext

    Returns:
        DateFormat from {{Use dmy dates}} / {{Use mdy dates}}, ISO otherwise
    """
    for pattern, date_format in _DATE_STYLE_PATTERNS:
        if pattern.search(wikitext or ""):
            return date_format
    return DateFormat.ISO


def remove_bare_url_tags(wikitext: str) -> str:
    """Remove {{Bare URLs}}-style cleanup templates."""
    return _BARE_URL_TAG_PATTERN.sub("", wikitext or "")


def generate_wiki_timestamp(moment: Optional[datetime] = None) -> str:
    """
    Format a moment as a MediaWiki timestamp (YYYYMMDDHHMMSS, UTC).

    Args:
        moment: Datetime to format; aware datetimes are converted to UTC.
            Defaults to now.
    """
    if moment is None:
        moment = datetime.now(timezone.utc)
    elif moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y%m%d%H%M%S")


def parse_wiki_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an API timestamp such as '2024-05-01T12:00:00Z'."""
    if not value:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%dT%H:%M:%SZ").replace(tzinfo=timezone.utc)
    except ValueError:
        return None
