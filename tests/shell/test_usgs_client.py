"""Tests for USGS client.

Uses the `responses` library to mock HTTP requests.
"""

from unittest.mock import MagicMock, PropertyMock

import pytest
import requests
import responses

from src.core.earthquake import EarthquakeRecord
from src.shell.usgs_client import FetchResult, USGSClient


TEST_URL = "https://earthquake.usgs.gov/fdsnws/event/1/query"

SAMPLE_BODY = (
    '{"type":"FeatureCollection","features":['
    '{"properties":{"mag":5.2,"place":"10km SW of Example",'
    '"time":1609459200000,"url":"https://example.com/1"}},'
    '{"properties":{"mag":3.1,"place":"Near Nowhere",'
    '"time":1609459300000,"url":"https://example.com/2"}}]}'
)


def make_session(response: MagicMock) -> MagicMock:
    """Build a session mock whose get() yields response as a context manager."""
    session = MagicMock()
    session.get.return_value.__enter__.return_value = response
    session.get.return_value.__exit__.return_value = False
    return session


class TestUSGSClientInit:
    """Tests for USGSClient initialization."""

    def test_default_timeouts(self):
        client = USGSClient()
        assert client.timeout == (15, 10)

    def test_custom_timeouts(self):
        client = USGSClient(connect_timeout=5, read_timeout=2)
        assert client.timeout == (5, 2)


class TestUSGSClientFetch:
    """Tests for USGSClient.fetch()."""

    @responses.activate
    def test_returns_body_on_200(self):
        responses.add(
            responses.GET,
            TEST_URL,
            body=SAMPLE_BODY,
            status=200,
            content_type="application/json",
        )

        result = USGSClient().fetch(TEST_URL)

        assert result == FetchResult(ok=True, body=SAMPLE_BODY, status_code=200)

    @responses.activate
    def test_404_returns_not_ok_and_empty_body(self):
        responses.add(responses.GET, TEST_URL, body="Not Found", status=404)

        result = USGSClient().fetch(TEST_URL)

        assert result.ok is False
        assert result.body == ""
        assert result.status_code == 404
        assert "404" in result.error

    @responses.activate
    def test_non_200_success_code_is_failure(self):
        responses.add(responses.GET, TEST_URL, body="", status=204)

        result = USGSClient().fetch(TEST_URL)

        assert result.ok is False
        assert result.body == ""

    @responses.activate
    def test_connection_error_returns_not_ok(self):
        responses.add(
            responses.GET,
            TEST_URL,
            body=requests.exceptions.ConnectionError("Connection refused"),
        )

        result = USGSClient().fetch(TEST_URL)

        assert result.ok is False
        assert result.body == ""
        assert result.status_code is None
        assert "Connection refused" in result.error

    @responses.activate
    def test_timeout_returns_not_ok(self):
        responses.add(
            responses.GET,
            TEST_URL,
            body=requests.exceptions.ReadTimeout("Read timed out"),
        )

        result = USGSClient().fetch(TEST_URL)

        assert result.ok is False
        assert result.body == ""

    @responses.activate
    def test_sends_get_without_body(self):
        responses.add(responses.GET, TEST_URL, body="{}", status=200)

        USGSClient().fetch(TEST_URL + "?format=geojson&limit=10")

        assert len(responses.calls) == 1
        request = responses.calls[0].request
        assert request.method == "GET"
        assert request.body is None
        assert "format=geojson" in request.url

    @responses.activate
    def test_decodes_utf8(self):
        body = '{"features":[],"title":"Ciudad de México"}'
        responses.add(responses.GET, TEST_URL, body=body.encode("utf-8"), status=200)

        result = USGSClient().fetch(TEST_URL)

        assert result.body == body

    @pytest.mark.parametrize("url", [
        "not a url",
        "",
        "ftp://example.com/x",
        "http://",
        "http://[::1",
        "http://example.com:abc/q",
    ])
    def test_malformed_url_returns_not_ok(self, url):
        """Malformed URLs never raise past the client."""
        session = MagicMock()

        result = USGSClient(session=session).fetch(url)

        assert result.ok is False
        assert result.body == ""
        session.get.assert_not_called()

    def test_requests_invalid_url_is_absorbed(self):
        session = MagicMock()
        session.get.side_effect = requests.exceptions.InvalidURL("bad host")

        result = USGSClient(session=session).fetch("https://exa mple.com")

        assert result.ok is False
        assert "bad host" in result.error

    def test_passes_connect_and_read_timeouts(self):
        response = MagicMock(status_code=200, content=b"{}")
        session = make_session(response)

        USGSClient(connect_timeout=15, read_timeout=10, session=session).fetch(TEST_URL)

        session.get.assert_called_once_with(TEST_URL, timeout=(15, 10))

    def test_releases_connection_on_success(self):
        response = MagicMock(status_code=200, content=b"{}")
        session = make_session(response)

        USGSClient(session=session).fetch(TEST_URL)

        assert session.get.return_value.__exit__.called

    def test_releases_connection_on_read_error(self):
        response = MagicMock(status_code=200)
        type(response).content = PropertyMock(
            side_effect=requests.exceptions.ChunkedEncodingError("connection broken")
        )
        session = make_session(response)

        result = USGSClient(session=session).fetch(TEST_URL)

        assert result.ok is False
        assert result.body == ""
        assert session.get.return_value.__exit__.called


class TestUSGSClientFetchEarthquakeData:
    """Tests for USGSClient.fetch_earthquake_data()."""

    @responses.activate
    def test_returns_parsed_records(self):
        responses.add(responses.GET, TEST_URL, body=SAMPLE_BODY, status=200)

        records = USGSClient().fetch_earthquake_data(TEST_URL)

        assert records == [
            EarthquakeRecord(5.2, "10km SW of Example", 1609459200000, "https://example.com/1"),
            EarthquakeRecord(3.1, "Near Nowhere", 1609459300000, "https://example.com/2"),
        ]

    @responses.activate
    def test_failure_returns_empty_list(self):
        responses.add(responses.GET, TEST_URL, status=500)

        assert USGSClient().fetch_earthquake_data(TEST_URL) == []

    @responses.activate
    def test_invalid_json_returns_empty_list(self):
        responses.add(responses.GET, TEST_URL, body="<html>oops</html>", status=200)

        assert USGSClient().fetch_earthquake_data(TEST_URL) == []

    def test_malformed_url_returns_empty_list(self):
        assert USGSClient().fetch_earthquake_data("not a url") == []


class TestUSGSClientClose:
    """Tests for USGSClient.close()."""

    def test_closes_session(self):
        session = MagicMock()
        USGSClient(session=session).close()
        session.close.assert_called_once()
