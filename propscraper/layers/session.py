"""
Session state channel.

State only changes through the pure transition functions below, applied one
at a time by ``SessionStore.apply``. Runs are keyed by run id, so two scrape
runs in flight at once each update only their own entry.
"""
import asyncio
from typing import Callable, Iterable, List, Optional

from propscraper.models.listing import ListingResult, ProcessingStatus, StatusState, SummaryEntry
from propscraper.models.session import ScrapeRun, SessionState
from propscraper.utils.logger import LayerLogger

Transition = Callable[[SessionState], SessionState]


def start_run(run_id: str, urls: Iterable[str]) -> Transition:
    """Register a run with one pending status per URL and make it the latest."""
    statuses = tuple(ProcessingStatus(source_url=url) for url in urls)

    def apply(state: SessionState) -> SessionState:
        run = ScrapeRun(run_id=run_id, statuses=statuses)
        return state.model_copy(update={
            "runs": {**state.runs, run_id: run},
            "latest_run_id": run_id,
        })

    return apply


def set_status(
    run_id: str,
    url: str,
    state_value: StatusState,
    message: Optional[str] = None,
) -> Transition:
    """Replace the status of ``url`` within run ``run_id``."""

    def apply(state: SessionState) -> SessionState:
        run = state.runs.get(run_id)
        if run is None:
            # Cleared while the run was still in flight
            return state
        statuses = tuple(
            ProcessingStatus(source_url=url, state=state_value, message=message)
            if s.source_url == url else s
            for s in run.statuses
        )
        return state.model_copy(update={
            "runs": {**state.runs, run_id: run.model_copy(update={"statuses": statuses})},
        })

    return apply


def complete_run(run_id: str, results: Iterable[ListingResult]) -> Transition:
    """Attach the aggregated results and mark the run completed."""
    results = tuple(results)

    def apply(state: SessionState) -> SessionState:
        run = state.runs.get(run_id)
        if run is None:
            return state
        done = run.model_copy(update={"results": results, "completed": True})
        return state.model_copy(update={"runs": {**state.runs, run_id: done}})

    return apply


def record_summary(entry: SummaryEntry) -> Transition:
    def apply(state: SessionState) -> SessionState:
        return state.model_copy(update={
            "summaries": {**state.summaries, entry.source_url: entry},
        })

    return apply


def clear_session() -> Transition:
    def apply(state: SessionState) -> SessionState:
        return SessionState()

    return apply


class SessionStore:
    """Holds the current SessionState and serializes every update."""

    def __init__(self, state: Optional[SessionState] = None):
        self.logger = LayerLogger("session_store")
        self._state = state or SessionState()
        self._lock = asyncio.Lock()

    @property
    def state(self) -> SessionState:
        return self._state

    async def apply(self, *transitions: Transition) -> SessionState:
        """Apply ``transitions`` in order as one atomic update."""
        async with self._lock:
            state = self._state
            for transition in transitions:
                state = transition(state)
            self._state = state
            return state

    def get_run(self, run_id: str) -> Optional[ScrapeRun]:
        return self._state.runs.get(run_id)

    def summaries(self) -> List[SummaryEntry]:
        return list(self._state.summaries.values())

    async def clear(self) -> SessionState:
        self.logger.log_action("clear_session", "completed", runs=len(self._state.runs))
        return await self.apply(clear_session())
