# ABOUTME: Unit tests for the catalog HTTP client abstraction.
# ABOUTME: Tests the HttpClient protocol, CatalogHttpClient, rate limiting, and error mapping.

import time

import httpx
import pytest

from myreads.catalog.http import CatalogHttpClient, HttpClient
from myreads.errors import UpstreamUnavailableError


class FakeTransport(httpx.BaseTransport):
    """Fake transport for httpx that returns canned responses."""

    def __init__(self, responses: list[httpx.Response] | None = None) -> None:
        self._responses = list(responses or [])
        self._call_count = 0
        self.requests: list[httpx.Request] = []

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self._call_count += 1
        self.requests.append(request)
        if self._responses:
            return self._responses.pop(0)
        return httpx.Response(200, json={"ok": True})

    @property
    def call_count(self) -> int:
        return self._call_count


class RaisingTransport(httpx.BaseTransport):
    """Transport that fails every request at the connection level."""

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)


class TestHttpClientProtocol:
    """Tests for HttpClient protocol compliance."""

    def test_catalog_client_satisfies_protocol(self) -> None:
        """CatalogHttpClient satisfies the HttpClient protocol."""
        client = CatalogHttpClient(min_request_interval=0.0)
        assert isinstance(client, HttpClient)


class TestCatalogHttpClient:
    """Tests for CatalogHttpClient concrete class."""

    def test_get_returns_json(self) -> None:
        """GET request returns parsed JSON response."""
        transport = FakeTransport()
        client = CatalogHttpClient(min_request_interval=0.0, transport=transport)
        result = client.get("https://example.com/api", params={"q": "test"})
        assert result == {"ok": True}
        assert transport.requests[0].url.params["q"] == "test"

    def test_user_agent_header(self) -> None:
        """Requests include the myreads User-Agent header."""
        client = CatalogHttpClient(min_request_interval=0.0, transport=FakeTransport())
        assert "myreads/" in client._client.headers["user-agent"]

    def test_rate_limiting_delays_requests(self) -> None:
        """Consecutive requests are delayed by min_request_interval."""
        transport = FakeTransport()
        interval = 0.15
        client = CatalogHttpClient(min_request_interval=interval, transport=transport)

        start = time.monotonic()
        client.get("https://example.com/1")
        client.get("https://example.com/2")
        elapsed = time.monotonic() - start

        assert elapsed >= interval
        assert transport.call_count == 2

    def test_404_raises_with_status_code(self) -> None:
        """Non-retryable statuses raise immediately and carry the status code."""
        transport = FakeTransport([httpx.Response(404, json={"error": "not found"})])
        client = CatalogHttpClient(min_request_interval=0.0, transport=transport)

        with pytest.raises(UpstreamUnavailableError, match="404") as exc_info:
            client.get("https://example.com/missing")
        assert exc_info.value.status_code == 404
        assert transport.call_count == 1

    def test_transport_error_raises_upstream_unavailable(self) -> None:
        """Connection failures surface as UpstreamUnavailableError without a status."""
        client = CatalogHttpClient(min_request_interval=0.0, transport=RaisingTransport())

        with pytest.raises(UpstreamUnavailableError, match="connection refused") as exc_info:
            client.get("https://example.com/api")
        assert exc_info.value.status_code is None

    def test_invalid_json_raises_upstream_unavailable(self) -> None:
        """A 200 with a non-JSON body is an upstream failure, not a crash."""
        transport = FakeTransport([httpx.Response(200, text="<html>oops</html>")])
        client = CatalogHttpClient(min_request_interval=0.0, transport=transport)

        with pytest.raises(UpstreamUnavailableError, match="Invalid JSON"):
            client.get("https://example.com/api")

    def test_retry_on_429(self) -> None:
        """Client retries on 429 status and succeeds on next attempt."""
        responses = [
            httpx.Response(429, json={"error": "rate limited"}),
            httpx.Response(200, json={"ok": True}),
        ]
        transport = FakeTransport(responses=responses)
        client = CatalogHttpClient(
            min_request_interval=0.0, transport=transport, retry_delay=0.01
        )

        result = client.get("https://example.com/api")
        assert result == {"ok": True}
        assert transport.call_count == 2

    def test_retry_exhausted_raises(self) -> None:
        """After max retries, raises UpstreamUnavailableError with the last status."""
        responses = [httpx.Response(503, json={"error": "backend error"})] * 4
        transport = FakeTransport(responses=responses)
        client = CatalogHttpClient(
            min_request_interval=0.0,
            transport=transport,
            max_retries=3,
            retry_delay=0.01,
        )

        with pytest.raises(UpstreamUnavailableError, match="503") as exc_info:
            client.get("https://example.com/api")
        assert exc_info.value.status_code == 503
        assert transport.call_count == 4  # 1 initial + 3 retries
