"""
Claude API client used to summarize listing text.

The client never raises: API, auth and network problems come back as a
fixed user-facing message.
"""
from typing import Any, Optional
import anthropic

from propscraper.config import config
from propscraper.utils.logger import LayerLogger


SUMMARY_PROMPT = """You are a real estate assistant. Please analyze the following scraped text from a property listing website.
Extract and summarize the following details in a clean, bulleted format:
- Property Type & Size (Bedrooms, etc)
- Location
- Key Features/Amenities
- Price (if available)
- Sentiment/Vibe (Luxury, fixer-upper, etc.)

Keep it concise (under 150 words).

Raw Text:
{text}
"""

EMPTY_SUMMARY = "No summary generated."
FAILED_SUMMARY = "Failed to generate summary. Please check your API key or try again."


class ClaudeClient:
    """
    Async Claude client for listing summaries.

    ``client`` may be injected (tests); otherwise one is built from
    CLAUDE_API_KEY. Without a key every call returns FAILED_SUMMARY.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        client: Any = None,
    ):
        self.logger = LayerLogger("claude_client")
        self.model = model or config.SUMMARY_MODEL
        api_key = api_key or config.CLAUDE_API_KEY

        if client is not None:
            self.client = client
        elif not api_key:
            self.logger.log_error("CLAUDE_API_KEY not found in environment", error_type="config")
            self.client = None
        else:
            self.client = anthropic.AsyncAnthropic(api_key=api_key)
            self.logger.log_action("init", "completed", model=self.model)

    def is_available(self) -> bool:
        """Check if Claude client is properly configured."""
        return self.client is not None

    async def summarize_listing(self, text: str) -> str:
        """Summarize scraped listing text into a short bulleted overview."""
        if not self.client:
            return FAILED_SUMMARY

        try:
            self.logger.log_action("summarize_listing", "started", input_length=len(text))

            response = await self.client.messages.create(
                model=self.model,
                max_tokens=config.SUMMARY_MAX_TOKENS,
                messages=[{
                    "role": "user",
                    "content": SUMMARY_PROMPT.format(text=text),
                }]
            )

            parts = [getattr(block, "text", "") for block in (response.content or [])]
            result = "".join(parts).strip()
            if not result:
                self.logger.log_action("summarize_listing", "rejected", reason="empty_response")
                return EMPTY_SUMMARY

            self.logger.log_action("summarize_listing", "success", output_length=len(result))
            return result

        except Exception as e:
            self.logger.log_error(f"Claude API error: {str(e)}", error_type="api_error")
            return FAILED_SUMMARY
