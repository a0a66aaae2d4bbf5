"""
Listing models for the scraper.
These are the contract between acquisition, extraction, the orchestrator
and the on-demand actions (archive download, summary).
"""
from typing import List, Optional
from enum import Enum
from urllib.parse import urlparse
from pydantic import BaseModel, ConfigDict, Field, model_validator


class StatusState(str, Enum):
    """Lifecycle of one submitted URL within a scrape run."""
    PENDING = "pending"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self in (StatusState.SUCCESS, StatusState.ERROR)


class ListingResult(BaseModel):
    """
    Everything extracted from one listing page.

    Immutable once created. A result carrying ``error`` has no images
    and no body text.
    """
    model_config = ConfigDict(frozen=True)

    source_url: str
    images: List[str] = Field(default_factory=list)
    title: str = "Untitled"
    body_text: str = ""
    price: Optional[str] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def check_invariants(self) -> "ListingResult":
        if self.error and (self.images or self.body_text):
            raise ValueError("a result with an error cannot carry images or body text")
        for image in self.images:
            parsed = urlparse(image)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise ValueError(f"image is not an absolute http(s) URL: {image!r}")
        return self

    @classmethod
    def failed(cls, source_url: str, error: str) -> "ListingResult":
        """Build the error-shaped result for a URL whose acquisition failed."""
        return cls(source_url=source_url, images=[], title="Error", body_text="", error=error)

    @property
    def ok(self) -> bool:
        return not self.error


class ProcessingStatus(BaseModel):
    """Per-URL progress indicator."""
    model_config = ConfigDict(frozen=True)

    source_url: str
    state: StatusState = StatusState.PENDING
    message: Optional[str] = None


class SummaryEntry(BaseModel):
    """Generated summary for a listing, keyed by source URL."""
    model_config = ConfigDict(frozen=True)

    source_url: str
    summary: str


class AcquiredPage(BaseModel):
    """
    Output of one acquisition strategy.

    Relays return raw ``html``; the local extraction service returns
    pre-extracted fields instead and sets ``pre_extracted``.
    """
    url: str
    source: str
    html: Optional[str] = None
    pre_extracted: bool = False
    title: Optional[str] = None
    body_text: Optional[str] = None
    price: Optional[str] = None
    images: List[str] = Field(default_factory=list)


class ListingArchive(BaseModel):
    """A zip archive of one listing's images, ready to be saved."""
    filename: str
    content: bytes
    image_names: List[str] = Field(default_factory=list)
    failed_urls: List[str] = Field(default_factory=list)

    @property
    def image_count(self) -> int:
        return len(self.image_names)
