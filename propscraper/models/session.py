"""
Session state models.
The whole session is a single immutable value; changes produce a new value.
"""
from typing import Dict, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

from propscraper.models.listing import ListingResult, ProcessingStatus, StatusState, SummaryEntry


class ScrapeRun(BaseModel):
    """One submission of URLs and everything it produced."""
    model_config = ConfigDict(frozen=True)

    run_id: str
    statuses: Tuple[ProcessingStatus, ...] = ()
    results: Tuple[ListingResult, ...] = ()
    completed: bool = False

    @property
    def urls(self) -> List[str]:
        return [s.source_url for s in self.statuses]

    def status_for(self, url: str) -> Optional[ProcessingStatus]:
        for status in self.statuses:
            if status.source_url == url:
                return status
        return None

    def count(self, state: StatusState) -> int:
        return sum(1 for s in self.statuses if s.state == state)


class SessionState(BaseModel):
    """All runs and summaries currently held by the service."""
    model_config = ConfigDict(frozen=True)

    runs: Dict[str, ScrapeRun] = Field(default_factory=dict)
    summaries: Dict[str, SummaryEntry] = Field(default_factory=dict)
    latest_run_id: Optional[str] = None

    @property
    def latest_run(self) -> Optional[ScrapeRun]:
        if self.latest_run_id is None:
            return None
        return self.runs.get(self.latest_run_id)
