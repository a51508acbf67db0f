"""
HTTP Spider

Thin requests session wrapper shared by the link handler and wiki provider.
"""

import logging
from typing import Any, Dict, Optional

import requests
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..config.settings import DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)


class Spider:
    """HTTP client with a fixed user agent and timeout."""

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 10.0,
        max_attempts: int = 2,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize spider.

        Args:
            user_agent: User-Agent header sent with every request
            timeout: Per-request timeout in seconds
            max_attempts: Attempts for requests failing with connection errors
            session: Optional pre-built session (mainly for tests)
        """
        self.user_agent = user_agent
        self.timeout = timeout
        self.max_attempts = max_attempts
        self._session = session

    def _get_session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update(
                {
                    "User-Agent": self.user_agent,
                    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                }
            )
        return self._session

    def get(self, url: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        """
        GET a URL, retrying connection errors only.

        Raises:
            requests.RequestException: If the request ultimately fails
        """

        @retry(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=0.5, max=4),
            retry=retry_if_exception_type(requests.ConnectionError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        def _get() -> requests.Response:
            return self._get_session().get(
                url, params=params, timeout=self.timeout, allow_redirects=True
            )

        return _get()

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None
