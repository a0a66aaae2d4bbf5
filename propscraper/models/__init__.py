"""Models package initialization."""
from propscraper.models.listing import (
    AcquiredPage,
    ListingArchive,
    ListingResult,
    ProcessingStatus,
    StatusState,
    SummaryEntry,
)
from propscraper.models.session import ScrapeRun, SessionState

__all__ = [
    "AcquiredPage",
    "ListingArchive",
    "ListingResult",
    "ProcessingStatus",
    "StatusState",
    "SummaryEntry",
    "ScrapeRun",
    "SessionState",
]
