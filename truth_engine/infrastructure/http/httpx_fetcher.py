"""httpx implementation of the document fetcher."""

import asyncio
import logging
from typing import Optional

import httpx
from pydantic import BaseModel, Field

from ...domain.errors import FetchTimeoutError, HttpStatusError, NetworkError

logger = logging.getLogger(__name__)

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class FetcherConfig(BaseModel):
    """Configuration for the httpx fetcher."""

    timeout_ms: int = Field(default=15000, ge=1, description="Default per-request timeout")
    user_agent: str = Field(default=BROWSER_USER_AGENT, description="User-Agent header sent with every request")
    max_redirects: int = Field(default=5, ge=0, description="Redirects followed before giving up")


class HttpxFetcher:
    """Fetches documents with a shared ``httpx.AsyncClient``.

    The whole request, redirects included, is bounded by the timeout;
    an expired request is cancelled and surfaces as ``FetchTimeoutError``.
    """

    def __init__(
        self,
        config: Optional[FetcherConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the fetcher.

        Args:
            config: Fetcher configuration
            transport: Custom httpx transport, mostly for tests
        """
        self._config = config or FetcherConfig()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def initialize(self) -> None:
        """Create the HTTP client."""
        if self._client is None:
            self._client = self._build_client()

    async def shutdown(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=self._transport,
            follow_redirects=True,
            max_redirects=self._config.max_redirects,
            headers={
                "User-Agent": self._config.user_agent,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": "en-US,en;q=0.9",
            },
        )

    async def fetch(self, url: str, timeout_ms: Optional[int] = None) -> str:
        """Fetch a document body.

        Args:
            url: Document URL
            timeout_ms: Request timeout, defaults to the configured one

        Returns:
            Response body as text

        Raises:
            FetchTimeoutError: If the request did not finish in time
            HttpStatusError: If the final response is not 2xx
            NetworkError: For any other transport failure
        """
        if self._client is None:
            await self.initialize()
        timeout_ms = timeout_ms or self._config.timeout_ms
        seconds = timeout_ms / 1000
        logger.debug(f"🌐 Fetching {url}")
        try:
            response = await asyncio.wait_for(
                self._client.get(url, timeout=seconds),
                timeout=seconds,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            raise FetchTimeoutError(url, timeout_ms)
        except httpx.InvalidURL as e:
            raise NetworkError(f"Invalid URL: {e}", url)
        except httpx.HTTPError as e:
            raise NetworkError(str(e) or type(e).__name__, url)

        if not 200 <= response.status_code < 300:
            raise HttpStatusError(url, response.status_code)
        return response.text
