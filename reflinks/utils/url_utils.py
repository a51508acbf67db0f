"""
URL Utilities

Validation and domain helpers for links found in references.
"""

import ipaddress
import re
from typing import Optional
from urllib.parse import urlparse

_URL_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://[^\s\[\]<>\"{}|\\^`]+$")
_HOST_LABEL_PATTERN = re.compile(r"^[A-Za-z0-9_](?:[A-Za-z0-9_-]*[A-Za-z0-9])?$")

# Second-level labels under country-code TLDs that are not registrable on
# their own (example.co.uk, example.com.au, ...)
_SECOND_LEVEL_LABELS = {
    "ac",
    "co",
    "com",
    "edu",
    "go",
    "gob",
    "gov",
    "mil",
    "ne",
    "net",
    "or",
    "org",
}


def is_valid_url(url: Optional[str]) -> bool:
    """
    Check whether a string is a syntactically valid absolute URL.

    Args:
        url: Candidate URL

    Returns:
        True if the URL has a scheme and a well-formed host
    """
    if not url or not url.isascii():
        return False
    if not _URL_PATTERN.match(url):
        return False

    try:
        parsed = urlparse(url)
        host = parsed.hostname
        parsed.port  # raises ValueError on a malformed port
    except ValueError:
        return False

    if not host:
        return False
    if _is_ip_address(host):
        return True
    return all(_HOST_LABEL_PATTERN.match(label) for label in host.rstrip(".").split("."))


def get_base_domain(url: str) -> str:
    """
    Get the registrable base domain of a URL.

    Examples:
        "http://www.news.example.com/a" -> "example.com"
        "https://www.bbc.co.uk/news"    -> "bbc.co.uk"

    Args:
        url: Absolute URL

    Returns:
        Base domain, the bare IP address for IP hosts, or "" if there is no host
    """
    try:
        host = (urlparse(url).hostname or "").lower().rstrip(".")
    except ValueError:
        return ""

    if not host or _is_ip_address(host):
        return host

    labels = host.split(".")
    if len(labels) >= 3 and len(labels[-1]) == 2 and labels[-2] in _SECOND_LEVEL_LABELS:
        return ".".join(labels[-3:])
    return ".".join(labels[-2:])


def _is_ip_address(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True
