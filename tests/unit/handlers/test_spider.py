"""
Tests for the HTTP spider
"""

from unittest.mock import MagicMock

import pytest
import requests

from reflinks.handlers.spider import Spider


class TestSpider:
    """Test request handling and retries."""

    def test_get_passes_timeout(self):
        session = MagicMock()
        spider = Spider(timeout=3.5, session=session)
        spider.get("http://a.test", params={"q": "1"})
        session.get.assert_called_once_with(
            "http://a.test", params={"q": "1"}, timeout=3.5, allow_redirects=True
        )

    def test_retries_connection_errors(self):
        session = MagicMock()
        response = MagicMock()
        session.get.side_effect = [requests.ConnectionError("reset"), response]
        spider = Spider(max_attempts=2, session=session)
        assert spider.get("http://a.test") is response
        assert session.get.call_count == 2

    def test_gives_up_after_max_attempts(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("down")
        spider = Spider(max_attempts=1, session=session)
        with pytest.raises(requests.ConnectionError):
            spider.get("http://a.test")
        assert session.get.call_count == 1

    def test_timeouts_not_retried(self):
        session = MagicMock()
        session.get.side_effect = requests.Timeout("slow")
        spider = Spider(max_attempts=3, session=session)
        with pytest.raises(requests.Timeout):
            spider.get("http://a.test")
        assert session.get.call_count == 1

    def test_session_has_user_agent(self):
        spider = Spider(user_agent="TestAgent/1.0")
        session = spider._get_session()
        assert session.headers["User-Agent"] == "TestAgent/1.0"
        spider.close()
