"""Shared fixtures and fakes for the test suite."""
from types import SimpleNamespace
from typing import Callable, Dict, List

import httpx
import pytest

FILLER = "<p>" + ("Spacious family home close to schools and shops. " * 20) + "</p>"


def listing_html(body: str, title: str = "Listing") -> str:
    """A page long enough to pass the relay length check."""
    return f"<html><head><title>{title}</title></head><body>{body}{FILLER}</body></html>"


def route_transport(routes: Dict[str, Callable[[httpx.Request], httpx.Response]]) -> httpx.MockTransport:
    """MockTransport dispatching on request host; unknown hosts get a connection error."""

    def handler(request: httpx.Request) -> httpx.Response:
        route = routes.get(request.url.host)
        if route is None:
            raise httpx.ConnectError(f"no route to {request.url.host}", request=request)
        return route(request)

    return httpx.MockTransport(handler)


class FakeMessages:
    def __init__(self, text: str = "", error: Exception = None):
        self.text = text
        self.error = error
        self.calls: List[dict] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(content=[SimpleNamespace(type="text", text=self.text)])


class FakeAnthropic:
    """Stands in for anthropic.AsyncAnthropic."""

    def __init__(self, text: str = "", error: Exception = None):
        self.messages = FakeMessages(text=text, error=error)


@pytest.fixture
def fake_anthropic() -> FakeAnthropic:
    return FakeAnthropic(text="- 3 bedroom house\n- Cape Town")
