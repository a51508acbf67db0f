"""
Pytest configuration and fixtures.
"""

import logging
from datetime import date
from typing import Dict, List, Optional

import pytest

from reflinks.citations.generators import CiteTemplateGenerator, PlainCs1Generator
from reflinks.config.settings import ReflinksOptions
from reflinks.exceptions import LinkHandlerError
from reflinks.fixer import Reflinks
from reflinks.models import Metadata
from reflinks.spam_filter import SpamFilter

ACCESS_DATE = date(2024, 3, 5)


class FakeLinkHandler:
    """Link handler serving canned metadata and recording every lookup."""

    def __init__(
        self,
        metadata: Optional[Dict[str, Metadata]] = None,
        errors: Optional[Dict[str, LinkHandlerError]] = None,
    ):
        self.metadata = metadata or {}
        self.errors = errors or {}
        self.calls: List[str] = []

    def get_metadata(self, url: str) -> Metadata:
        self.calls.append(url)
        if url in self.errors:
            raise self.errors[url]
        if url in self.metadata:
            return self.metadata[url]
        return Metadata(url=url, title=f"Title of {url}")

    def explain_error_code(self, code: int) -> str:
        return f"Handler error {code}"


@pytest.fixture
def access_date() -> date:
    """Fixed access date so generated citations are stable."""
    return ACCESS_DATE


@pytest.fixture
def options() -> ReflinksOptions:
    """Default options."""
    return ReflinksOptions()


@pytest.fixture
def link_handler() -> FakeLinkHandler:
    """Fake link handler with no canned metadata."""
    return FakeLinkHandler()


@pytest.fixture
def cite_generator(options, access_date) -> CiteTemplateGenerator:
    """{{cite web}} generator with a fixed access date."""
    return CiteTemplateGenerator(options, access_date)


@pytest.fixture
def plain_generator(options, access_date) -> PlainCs1Generator:
    """Plain CS1 generator with a fixed access date."""
    return PlainCs1Generator(options, access_date)


@pytest.fixture
def make_fixer(access_date):
    """Factory building a Reflinks instance around a fake link handler."""

    def _make(
        handler: Optional[FakeLinkHandler] = None,
        options: Optional[ReflinksOptions] = None,
        spam_patterns: Optional[List[str]] = None,
        **kwargs,
    ) -> Reflinks:
        return Reflinks(
            options=options,
            link_handler=handler or FakeLinkHandler(),
            spam_filter=SpamFilter(spam_patterns or []),
            access_date=access_date,
            **kwargs,
        )

    return _make


@pytest.fixture
def handler_factory():
    """The FakeLinkHandler class, for tests that need canned metadata or errors."""
    return FakeLinkHandler


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging() so they do not outlive a test."""
    yield
    logger = logging.getLogger("reflinks")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
