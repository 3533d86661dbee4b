"""
Tests for the HTTP fetcher and the raw response model.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from cdcmeasles.data.fetch.http_fetcher import HttpFetcher, RawResponse


class TestRawResponse:
    """Test cases for RawResponse."""

    def test_ok_only_for_200(self):
        assert RawResponse(url="u", status_code=200, body=b"x").ok is True
        assert RawResponse(url="u", status_code=204, body=b"").ok is False
        assert RawResponse(url="u", status_code=500, body=b"x").ok is False

    @pytest.mark.parametrize("body", [b"", b"   ", b"\n\t\r\n", b"\xef\xbb\xbf  "])
    def test_blank_bodies(self, body):
        assert RawResponse(url="u", status_code=200, body=body).is_blank is True

    def test_text_decodes_utf8(self):
        response = RawResponse(url="u", status_code=200, body="Niño,1".encode())

        assert response.text == "Niño,1"
        assert response.is_blank is False

    def test_text_replaces_invalid_bytes(self):
        response = RawResponse(url="u", status_code=200, body=b"a\xffb")

        assert response.text == "a\ufffdb"


class TestHttpFetcher:
    """Test cases for HttpFetcher."""

    def test_get_returns_status_and_body(self, fetcher, requests_mock):
        url = "https://example.com/data.csv"
        requests_mock.get(url, text="a,b\n1,2\n", status_code=200)

        response = fetcher.get(url)

        assert response.url == url
        assert response.status_code == 200
        assert response.body == b"a,b\n1,2\n"

    def test_non_200_is_reported_not_raised(self, fetcher, requests_mock):
        url = "https://example.com/missing.csv"
        requests_mock.get(url, status_code=404, text="Not Found")

        response = fetcher.get(url)

        assert response.status_code == 404
        assert response.ok is False

    def test_transport_error_propagates(self, fetcher, requests_mock):
        url = "https://example.com/down"
        requests_mock.get(url, exc=requests.exceptions.ConnectTimeout)

        with pytest.raises(requests.RequestException):
            fetcher.get(url)

    def test_sends_user_agent_and_timeout(self):
        session = MagicMock()
        session.get.return_value.__enter__.return_value = MagicMock(
            status_code=200, content=b"x"
        )

        fetcher = HttpFetcher(session=session, timeout=7, user_agent="ua-test")
        fetcher.get("https://example.com/a")

        session.get.assert_called_once_with(
            "https://example.com/a", timeout=7, headers={"User-Agent": "ua-test"}
        )

    def test_defaults_from_settings(self, test_settings):
        with patch("cdcmeasles.data.fetch.http_fetcher.settings", test_settings):
            fetcher = HttpFetcher()

        assert fetcher.timeout == 5
        assert fetcher.headers["User-Agent"] == "cdcmeasles-tests"

    def test_owned_session_closed_on_exit(self):
        with patch(
            "cdcmeasles.data.fetch.http_fetcher.requests.Session"
        ) as mock_session_cls:
            with HttpFetcher():
                pass

        mock_session_cls.return_value.close.assert_called_once()

    def test_caller_session_left_open(self):
        session = MagicMock(spec=requests.Session)

        with HttpFetcher(session=session):
            pass

        session.close.assert_not_called()

    def test_repr(self):
        assert repr(HttpFetcher(timeout=3)) == "HttpFetcher(timeout=3)"
