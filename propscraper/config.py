"""
Configuration management for the listing scraper.
Handles environment variables and application settings.
"""
import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Application configuration loaded from environment variables."""

    # Server settings
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "json")  # json or console

    # Local extraction service (optional, runs a real browser engine)
    LOCAL_EXTRACTOR_URL: str = os.getenv("LOCAL_EXTRACTOR_URL", "http://localhost:3001/scrape")
    LOCAL_EXTRACTOR_TIMEOUT: float = float(os.getenv("LOCAL_EXTRACTOR_TIMEOUT", "3"))

    # Relay chain
    RELAY_TIMEOUT: float = float(os.getenv("RELAY_TIMEOUT", "8"))
    MIN_HTML_LENGTH: int = int(os.getenv("MIN_HTML_LENGTH", "500"))

    # Image downloads go through a relay to dodge cross-origin blocks
    IMAGE_RELAY_TEMPLATE: str = os.getenv(
        "IMAGE_RELAY_TEMPLATE", "https://api.allorigins.win/raw?url={url}"
    )
    IMAGE_FETCH_TIMEOUT: float = float(os.getenv("IMAGE_FETCH_TIMEOUT", "20"))

    # Extraction
    BODY_TEXT_LIMIT: int = int(os.getenv("BODY_TEXT_LIMIT", "10000"))

    # Summarizer (loaded from environment, NEVER hardcoded)
    CLAUDE_API_KEY: Optional[str] = os.getenv("CLAUDE_API_KEY")
    SUMMARY_MODEL: str = os.getenv("SUMMARY_MODEL", "claude-3-5-haiku-20241022")
    SUMMARY_MAX_TOKENS: int = int(os.getenv("SUMMARY_MAX_TOKENS", "400"))

    # CLI archive output
    ARCHIVE_DIR: str = os.getenv("ARCHIVE_DIR", ".")

    @classmethod
    def is_summarizer_configured(cls) -> bool:
        """Check if the language model credential is present."""
        return bool(cls.CLAUDE_API_KEY)


config = Config()
