"""
Acquisition Layer - obtains a listing page through an ordered fallback chain.

The local extraction service is tried first, then each public relay. Every
attempt carries its own timeout and is cancelled when it expires; the first
attempt that returns a usable page wins.
"""
import asyncio
from typing import List, Optional, Sequence

import httpx

from propscraper.adapters.base import Acquirer, AttemptFailed
from propscraper.adapters.local_extractor import LocalExtractorAcquirer
from propscraper.adapters.relay import default_relays
from propscraper.models.listing import AcquiredPage
from propscraper.utils.logger import LayerLogger


class AcquisitionFailure(Exception):
    """Every acquisition strategy was exhausted for a URL."""

    def __init__(self, url: str, last_error: Optional[str] = None):
        self.url = url
        self.last_error = last_error
        super().__init__(
            "Failed to fetch content. Listing sites often block cloud proxies; "
            "run the local extraction service for the best results. "
            f"Last error: {last_error or 'Blocked'}"
        )


def default_strategies(transport: Optional[httpx.AsyncBaseTransport] = None) -> List[Acquirer]:
    """Local extraction service first, then the relays in priority order."""
    return [LocalExtractorAcquirer(transport=transport), *default_relays(transport)]


class AcquisitionLayer:
    """Try each strategy in order until one produces a page."""

    def __init__(
        self,
        strategies: Optional[Sequence[Acquirer]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.logger = LayerLogger("acquisition_layer")
        self.strategies = list(strategies) if strategies is not None else default_strategies(transport)

    async def acquire(self, url: str) -> AcquiredPage:
        """
        Return the first usable page for ``url``.

        Raises:
            AcquisitionFailure: when every strategy failed or timed out
        """
        last_error: Optional[str] = None

        for index, strategy in enumerate(self.strategies):
            status_code = None
            try:
                page = await asyncio.wait_for(strategy.fetch(url), timeout=strategy.timeout)
            except asyncio.TimeoutError:
                reason = f"timed out after {strategy.timeout:g}s"
            except AttemptFailed as e:
                reason = e.reason
                status_code = e.status_code
            except httpx.HTTPError as e:
                reason = str(e) or type(e).__name__
            else:
                self.logger.log_attempt(url, strategy.name, "accepted")
                return page

            last_error = f"{strategy.name}: {reason}"
            self.logger.log_attempt(url, strategy.name, "rejected", status_code, reason=reason)

            if index + 1 < len(self.strategies):
                self.logger.log_fallback(
                    from_source=strategy.name,
                    to_source=self.strategies[index + 1].name,
                    reason=reason,
                    url=url,
                )

        self.logger.log_error(
            "All acquisition strategies exhausted",
            error_type="acquisition_failure",
            url=url,
            last_error=last_error,
        )
        raise AcquisitionFailure(url, last_error)
