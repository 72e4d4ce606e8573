"""Tests for the httpx document fetcher."""

import asyncio

import httpx
import pytest
import pytest_asyncio

from truth_engine.domain.errors import FetchTimeoutError, HttpStatusError, NetworkError
from truth_engine.infrastructure.http.httpx_fetcher import BROWSER_USER_AGENT, FetcherConfig, HttpxFetcher

seen_requests = []


async def handler(request: httpx.Request) -> httpx.Response:
    seen_requests.append(request)
    path = request.url.path
    if path == "/ok":
        return httpx.Response(200, text="<html>hello</html>")
    if path == "/moved":
        return httpx.Response(301, headers={"Location": "https://example.com/ok"})
    if path == "/slow":
        await asyncio.sleep(1)
        return httpx.Response(200, text="late")
    if path == "/read-timeout":
        raise httpx.ReadTimeout("timed out", request=request)
    if path == "/refused":
        raise httpx.ConnectError("Connection refused", request=request)
    return httpx.Response(404, text="missing")


@pytest_asyncio.fixture
async def fetcher():
    seen_requests.clear()
    fetcher = HttpxFetcher(FetcherConfig(timeout_ms=2000), transport=httpx.MockTransport(handler))
    await fetcher.initialize()
    yield fetcher
    await fetcher.shutdown()


@pytest.mark.asyncio
async def test_fetch_returns_body_with_browser_headers(fetcher: HttpxFetcher):
    assert await fetcher.fetch("https://example.com/ok") == "<html>hello</html>"
    assert seen_requests[0].headers["User-Agent"] == BROWSER_USER_AGENT


@pytest.mark.asyncio
async def test_follows_redirects(fetcher: HttpxFetcher):
    assert await fetcher.fetch("https://example.com/moved") == "<html>hello</html>"


@pytest.mark.asyncio
async def test_non_2xx_status(fetcher: HttpxFetcher):
    with pytest.raises(HttpStatusError) as exc_info:
        await fetcher.fetch("https://example.com/missing")
    assert exc_info.value.status_code == 404
    assert str(exc_info.value) == "Status code 404"
    assert exc_info.value.url == "https://example.com/missing"


@pytest.mark.asyncio
async def test_hanging_request_is_cancelled(fetcher: HttpxFetcher):
    with pytest.raises(FetchTimeoutError) as exc_info:
        await fetcher.fetch("https://example.com/slow", timeout_ms=50)
    assert str(exc_info.value) == "Request timeout after 50ms"


@pytest.mark.asyncio
async def test_transport_timeout(fetcher: HttpxFetcher):
    with pytest.raises(FetchTimeoutError):
        await fetcher.fetch("https://example.com/read-timeout")


@pytest.mark.asyncio
async def test_connection_errors(fetcher: HttpxFetcher):
    with pytest.raises(NetworkError) as exc_info:
        await fetcher.fetch("https://example.com/refused")
    assert not isinstance(exc_info.value, (FetchTimeoutError, HttpStatusError))
    assert "Connection refused" in str(exc_info.value)


@pytest.mark.asyncio
async def test_fetch_initializes_lazily():
    fetcher = HttpxFetcher(transport=httpx.MockTransport(handler))
    try:
        assert await fetcher.fetch("https://example.com/ok") == "<html>hello</html>"
    finally:
        await fetcher.shutdown()
