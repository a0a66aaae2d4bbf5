"""
Scrape Orchestrator - fans ingestion out over every submitted URL.

All URLs run concurrently and independently; one failure never affects the
others. Status transitions go through the session store as each URL settles,
and the aggregate is published once all of them have.
"""
import asyncio
import uuid
from typing import Iterable, Optional

from propscraper.layers.ingestion import IngestionLayer
from propscraper.layers.session import SessionStore, complete_run, set_status, start_run
from propscraper.models.listing import ListingResult, StatusState
from propscraper.models.session import ScrapeRun
from propscraper.utils.logger import LayerLogger

PROCESS_FAILED_MESSAGE = "Failed to process"


class ScrapeOrchestrator:
    """Runs one scrape per call and records its progress in a SessionStore."""

    def __init__(
        self,
        ingestion: Optional[IngestionLayer] = None,
        store: Optional[SessionStore] = None,
    ):
        self.logger = LayerLogger("orchestrator")
        self.ingestion = ingestion or IngestionLayer()
        self.store = store or SessionStore()

    async def run(self, urls: Iterable[str], run_id: Optional[str] = None) -> ScrapeRun:
        """
        Scrape every URL in ``urls`` (already validated) and return the finished run.

        Results keep submission order; URLs whose pipeline crashed have a
        status of ``error`` but no ListingResult.
        """
        urls = list(dict.fromkeys(urls))
        run_id = run_id or uuid.uuid4().hex[:12]

        await self.store.apply(start_run(run_id, urls))
        self.logger.log_action("scrape_run", "started", run_id=run_id, urls_count=len(urls))

        settled = await asyncio.gather(*(self._process(run_id, url) for url in urls))
        results = [r for r in settled if r is not None]

        state = await self.store.apply(complete_run(run_id, results))
        # The session may have been cleared mid-run; still hand back what was scraped
        run = state.runs.get(run_id) or ScrapeRun(
            run_id=run_id, results=tuple(results), completed=True
        )
        self.logger.log_action(
            "scrape_run",
            "completed",
            run_id=run_id,
            success=run.count(StatusState.SUCCESS),
            error=run.count(StatusState.ERROR),
            results_count=len(results),
        )
        return run

    async def _set_status(
        self,
        run_id: str,
        url: str,
        state: StatusState,
        message: Optional[str] = None,
    ) -> None:
        await self.store.apply(set_status(run_id, url, state, message))
        self.logger.log_status(run_id, url, state.value, message)

    async def _process(self, run_id: str, url: str) -> Optional[ListingResult]:
        await self._set_status(run_id, url, StatusState.LOADING)
        try:
            result = await self.ingestion.ingest(url)
        except Exception as e:
            self.logger.log_error(
                f"Unexpected failure while processing URL: {str(e)}",
                error_type="process_error",
                url=url,
                run_id=run_id,
            )
            await self._set_status(run_id, url, StatusState.ERROR, PROCESS_FAILED_MESSAGE)
            return None

        if result.error:
            await self._set_status(run_id, url, StatusState.ERROR, result.error)
        else:
            await self._set_status(run_id, url, StatusState.SUCCESS)
        return result
