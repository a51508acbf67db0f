"""
Wiki Provider

Fetches article wikitext from MediaWiki sites through the action API.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

import requests

from .exceptions import WikiError
from .handlers.spider import Spider
from .utils.wiki_utils import parse_wiki_timestamp

logger = logging.getLogger(__name__)

_WIKI_CODE_PATTERN = re.compile(r"^[a-z][a-z0-9-]{1,15}$")


@dataclass
class PageSource:
    successful: bool
    wikitext: str = ""
    actual_name: str = ""
    timestamp: Optional[str] = None


class Wiki:
    """A single MediaWiki site."""

    def __init__(self, api: str, indexphp: str):
        self.api = api
        self.indexphp = indexphp

    def fetch_page(self, title: str, spider: Spider) -> PageSource:
        """
        Fetch the latest revision of a page, following redirects.

        Args:
            title: Page title
            spider: HTTP client

        Returns:
            PageSource; successful is False when the page does not exist

        Raises:
            WikiError: If the API cannot be reached or returns garbage
        """
        params = {
            "action": "query",
            "prop": "revisions",
            "rvprop": "content|timestamp",
            "rvslots": "main",
            "titles": title,
            "redirects": 1,
            "format": "json",
            "formatversion": 2,
        }
        try:
            response = spider.get(self.api, params=params)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise WikiError(f"Failed to query {self.api}: {e}") from e
        except ValueError as e:
            raise WikiError(f"Invalid API response from {self.api}: {e}") from e

        pages = data.get("query", {}).get("pages", [])
        if not pages:
            return PageSource(successful=False)

        page = pages[0]
        if page.get("missing") or page.get("invalid") or not page.get("revisions"):
            logger.info(f"Page not found: {title}")
            return PageSource(successful=False)

        revision = page["revisions"][0]
        slot = revision.get("slots", {}).get("main", {})
        timestamp = revision.get("timestamp")
        if parse_wiki_timestamp(timestamp) is None:
            timestamp = None
        return PageSource(
            successful=True,
            wikitext=slot.get("content", ""),
            actual_name=page.get("title", title),
            timestamp=timestamp,
        )


class WikiProvider:
    """Maps wiki codes to Wikipedia language editions."""

    def __init__(self, url_template: str = "https://{code}.wikipedia.org/w/"):
        self.url_template = url_template

    def get_wiki(self, code: Optional[str]) -> Optional[Wiki]:
        """
        Get a wiki by code.

        Args:
            code: Language code such as "en" or "simple"

        Returns:
            Wiki, or None for codes that are not well-formed
        """
        code = (code or "").strip().lower()
        if not _WIKI_CODE_PATTERN.match(code):
            return None
        base = self.url_template.format(code=code)
        return Wiki(api=f"{base}api.php", indexphp=f"{base}index.php")
