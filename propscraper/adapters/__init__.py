"""Adapters package initialization."""
from propscraper.adapters.base import Acquirer, AttemptFailed
from propscraper.adapters.local_extractor import LocalExtractorAcquirer
from propscraper.adapters.relay import RelayAcquirer, default_relays
from propscraper.adapters.claude_client import ClaudeClient

__all__ = [
    "Acquirer",
    "AttemptFailed",
    "LocalExtractorAcquirer",
    "RelayAcquirer",
    "default_relays",
    "ClaudeClient",
]
