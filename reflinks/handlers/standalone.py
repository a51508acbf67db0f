"""
Standalone Link Handler

Fetches a page and extracts citation metadata from its HTML head:
Open Graph tags, standard meta tags and the <title> element.
"""

import logging
import re
from datetime import date, datetime
from typing import Optional

import requests
from bs4 import BeautifulSoup

from ..exceptions import LinkHandlerError
from ..models import Metadata
from ..utils.html_utils import clean_title, normalize_text
from .spider import Spider

logger = logging.getLogger(__name__)

ERROR_UNKNOWN = 0
ERROR_FETCH = 1
ERROR_TIMEOUT = 2
ERROR_HTTP = 3
ERROR_NOT_HTML = 4

ERROR_DESCRIPTIONS = {
    ERROR_UNKNOWN: "Unknown error",
    ERROR_FETCH: "The page could not be fetched",
    ERROR_TIMEOUT: "The server took too long to respond",
    ERROR_HTTP: "The server returned an error status",
    ERROR_NOT_HTML: "The link does not point to an HTML page",
}

_DATE_PATTERN = re.compile(r"(\d{4})-(\d{1,2})-(\d{1,2})")


def parse_date(value: Optional[str]) -> Optional[date]:
    """
    Parse the date part of a meta tag value.

    Accepts ISO 8601 dates and datetimes as well as "YYYY/MM/DD".

    Returns:
        date, or None if no date can be read
    """
    if not value:
        return None
    value = value.strip().replace("/", "-")
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    match = _DATE_PATTERN.search(value)
    if match:
        try:
            return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
        except ValueError:
            return None
    return None


class StandaloneLinkHandler:
    """Retrieves metadata for arbitrary web pages."""

    def __init__(self, spider: Optional[Spider] = None):
        self.spider = spider or Spider()

    def get_metadata(self, url: str) -> Metadata:
        """
        Fetch a URL and extract metadata.

        Args:
            url: Page URL

        Returns:
            Metadata (title may be empty when the page has none)

        Raises:
            LinkHandlerError: If the page cannot be fetched or is not HTML
        """
        try:
            response = self.spider.get(url)
        except requests.Timeout as e:
            logger.warning(f"Timed out fetching {url}: {e}")
            raise LinkHandlerError("", ERROR_TIMEOUT) from e
        except requests.RequestException as e:
            logger.warning(f"Failed to fetch {url}: {e}")
            raise LinkHandlerError("", ERROR_FETCH) from e

        if response.status_code >= 400:
            raise LinkHandlerError(
                f"The server returned HTTP {response.status_code}", ERROR_HTTP
            )

        content_type = response.headers.get("Content-Type", "")
        if content_type and "html" not in content_type.lower():
            raise LinkHandlerError("", ERROR_NOT_HTML)

        metadata = self.parse_html(response.text, url)
        metadata.status_code = response.status_code
        return metadata

    def parse_html(self, html: str, url: str) -> Metadata:
        """Extract metadata from an HTML document."""
        soup = BeautifulSoup(html, "html.parser")

        title = self._meta(soup, prop="og:title")
        if not title and soup.title and soup.title.string:
            title = soup.title.string

        author = self._meta(soup, name="author") or self._meta(soup, prop="article:author")
        if author and author.startswith("http"):
            # article:author is often a profile URL
            author = None

        published = (
            self._meta(soup, prop="article:published_time")
            or self._meta(soup, name="date")
            or self._meta(soup, name="citation_publication_date")
        )

        work = normalize_text(self._meta(soup, prop="og:site_name")) or None

        return Metadata(
            url=url,
            title=clean_title(normalize_text(title), work) or "",
            author=normalize_text(author) or None,
            published_date=parse_date(published),
            work=work,
        )

    @staticmethod
    def _meta(soup: BeautifulSoup, name: Optional[str] = None, prop: Optional[str] = None) -> Optional[str]:
        attrs = {"name": name} if name else {"property": prop}
        tag = soup.find("meta", attrs=attrs)
        if tag is None:
            return None
        content = tag.get("content")
        return content.strip() if isinstance(content, str) and content.strip() else None

    def explain_error_code(self, code: int) -> str:
        """Human-readable description of an error code."""
        return ERROR_DESCRIPTIONS.get(code, ERROR_DESCRIPTIONS[ERROR_UNKNOWN])
