"""
Common contract for page acquisition strategies.
"""
from typing import Optional

import httpx

from propscraper.models.listing import AcquiredPage

BROWSER_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}


class AttemptFailed(Exception):
    """One acquisition strategy could not produce a usable page."""

    def __init__(self, source: str, reason: str, status_code: Optional[int] = None):
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason
        self.status_code = status_code


class Acquirer:
    """
    One way of getting a listing page.

    Subclasses implement ``fetch``; the acquisition layer tries them in
    order and enforces ``timeout`` around each attempt.
    """

    name: str = "base"
    timeout: float = 8.0

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        # Injected in tests; None means a real network transport
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers=BROWSER_HEADERS,
            transport=self.transport,
        )

    async def fetch(self, url: str) -> AcquiredPage:
        """Return the page for ``url`` or raise ``AttemptFailed``."""
        raise NotImplementedError
