"""
Client for the optional local extraction service.

The service runs a real browser engine and answers with already extracted
listing data, so its payload skips the heuristic HTML extractors.
"""
from typing import Any, Dict, Optional

import httpx

from propscraper.adapters.base import Acquirer, AttemptFailed
from propscraper.config import config
from propscraper.models.listing import AcquiredPage

DEFAULT_TITLE = "Extracted Property"


class LocalExtractorAcquirer(Acquirer):
    """Ask the local extraction service for a pre-extracted listing."""

    name = "local_extractor"

    def __init__(
        self,
        endpoint: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(transport=transport)
        self.endpoint = endpoint or config.LOCAL_EXTRACTOR_URL
        self.timeout = config.LOCAL_EXTRACTOR_TIMEOUT if timeout is None else timeout

    async def fetch(self, url: str) -> AcquiredPage:
        async with self._client() as client:
            response = await client.get(self.endpoint, params={"url": url})

        if not response.is_success:
            raise AttemptFailed(self.name, f"HTTP {response.status_code}", response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            raise AttemptFailed(self.name, f"invalid JSON payload: {e}", response.status_code)
        if not isinstance(payload, dict):
            raise AttemptFailed(self.name, "payload is not an object", response.status_code)

        return self._to_page(url, payload)

    def _to_page(self, url: str, payload: Dict[str, Any]) -> AcquiredPage:
        images = payload.get("images") or []
        if not isinstance(images, list):
            images = []
        price = payload.get("price")
        return AcquiredPage(
            url=url,
            source=self.name,
            pre_extracted=True,
            title=str(payload.get("title") or DEFAULT_TITLE),
            body_text=str(payload.get("text") or ""),
            price=str(price) if price is not None else None,
            images=[str(i) for i in images if isinstance(i, str)],
        )
