"""Document fetcher interface."""

from typing import Optional, Protocol


class Fetcher(Protocol):
    """Retrieves a single remote document.

    Raises ``FetchTimeoutError``, ``HttpStatusError`` or ``NetworkError``.
    """

    async def fetch(self, url: str, timeout_ms: Optional[int] = None) -> str:
        """Return the response body of ``url`` as text."""
        ...
