"""
Summarization Layer - on-demand AI summary of a listing's text.
"""
from typing import Optional

from propscraper.adapters.claude_client import ClaudeClient
from propscraper.layers.session import SessionStore, record_summary
from propscraper.models.listing import SummaryEntry
from propscraper.utils.logger import LayerLogger


class SummarizationLayer:
    """
    Produces summaries and records them in the session, keyed by URL.

    Entries are never invalidated automatically; asking again overwrites.
    """

    def __init__(
        self,
        claude: Optional[ClaudeClient] = None,
        store: Optional[SessionStore] = None,
    ):
        self.logger = LayerLogger("summarization_layer")
        self.claude = claude or ClaudeClient()
        self.store = store or SessionStore()

    def is_available(self) -> bool:
        return self.claude.is_available()

    async def summarize(self, url: str, text: str) -> Optional[SummaryEntry]:
        """Summarize ``text`` for ``url``; returns None without calling out when text is empty."""
        if not text or not text.strip():
            self.logger.log_decision(
                decision="skip_summary",
                reason="no text to summarize",
                url=url,
            )
            return None

        summary = await self.claude.summarize_listing(text)
        entry = SummaryEntry(source_url=url, summary=summary)
        await self.store.apply(record_summary(entry))
        self.logger.log_action("summarize", "completed", url=url, summary_length=len(summary))
        return entry
