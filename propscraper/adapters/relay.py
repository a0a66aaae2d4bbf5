"""
Public relay (CORS proxy) clients.

Each relay fetches the target page server-side and hands back its body.
They differ only in how the target URL is embedded in the request.
"""
from typing import List, Optional, Tuple
from urllib.parse import quote

import httpx

from propscraper.adapters.base import Acquirer, AttemptFailed
from propscraper.config import config
from propscraper.models.listing import AcquiredPage

# (name, template) in priority order; {url} receives the percent-encoded target
RELAY_PROVIDERS: Tuple[Tuple[str, str], ...] = (
    ("corsproxy", "https://corsproxy.io/?{url}"),
    ("codetabs", "https://api.codetabs.com/v1/proxy?quest={url}"),
    ("allorigins", "https://api.allorigins.win/raw?url={url}"),
)


def wrap_url(template: str, target: str) -> str:
    """Embed ``target`` into a relay URL template."""
    return template.format(url=quote(target, safe=""))


class RelayAcquirer(Acquirer):
    """Fetch raw HTML through one public relay."""

    def __init__(
        self,
        name: str,
        template: str,
        timeout: Optional[float] = None,
        min_length: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(transport=transport)
        self.name = name
        self.template = template
        self.timeout = config.RELAY_TIMEOUT if timeout is None else timeout
        self.min_length = config.MIN_HTML_LENGTH if min_length is None else min_length

    async def fetch(self, url: str) -> AcquiredPage:
        async with self._client() as client:
            response = await client.get(wrap_url(self.template, url))

        if not response.is_success:
            raise AttemptFailed(self.name, f"HTTP {response.status_code}", response.status_code)

        html = response.text
        # Blocked or empty pages come back tiny
        if len(html) <= self.min_length:
            raise AttemptFailed(
                self.name,
                f"response too short ({len(html)} chars)",
                response.status_code,
            )
        return AcquiredPage(url=url, source=self.name, html=html)


def default_relays(transport: Optional[httpx.AsyncBaseTransport] = None) -> List[RelayAcquirer]:
    """Build the relay chain in priority order."""
    return [
        RelayAcquirer(name, template, transport=transport)
        for name, template in RELAY_PROVIDERS
    ]
