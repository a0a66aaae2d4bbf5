import asyncio

import pytest

from propscraper.layers.orchestrator import PROCESS_FAILED_MESSAGE, ScrapeOrchestrator
from propscraper.layers.session import SessionStore
from propscraper.models.listing import ListingResult, StatusState
from propscraper.utils.logger import LayerLogger

URLS = [
    "https://site.example.com/listing/1",
    "https://site.example.com/listing/2",
    "https://site.example.com/listing/3",
]


class FakeIngestion:
    """Returns canned results after per-URL delays."""

    def __init__(self, failing: set, delays: dict = None, crashing: set = frozenset()):
        self.failing = failing
        self.crashing = crashing
        self.delays = delays or {}
        self.started = []

    async def ingest(self, url: str) -> ListingResult:
        self.started.append(url)
        await asyncio.sleep(self.delays.get(url, 0))
        if url in self.crashing:
            raise RuntimeError("boom")
        if url in self.failing:
            return ListingResult.failed(url, "Failed to fetch content. Last error: blocked")
        return ListingResult(
            source_url=url,
            images=[f"{url}/photo.jpg"],
            title="Listing",
            body_text="text",
        )


@pytest.mark.parametrize("delays", [
    {URLS[1]: 0.0, URLS[0]: 0.02, URLS[2]: 0.04},
    {URLS[1]: 0.04, URLS[0]: 0.02, URLS[2]: 0.0},
])
@pytest.mark.asyncio
async def test_one_failure_among_three(delays):
    store = SessionStore()
    orchestrator = ScrapeOrchestrator(ingestion=FakeIngestion({URLS[1]}, delays), store=store)

    run = await orchestrator.run(URLS)

    assert run.completed
    assert len([r for r in run.results if r.ok]) == 2
    assert run.count(StatusState.SUCCESS) == 2
    assert run.count(StatusState.ERROR) == 1
    assert run.status_for(URLS[1]).state == StatusState.ERROR
    assert "blocked" in run.status_for(URLS[1]).message
    assert run.status_for(URLS[0]).state == StatusState.SUCCESS
    assert run.status_for(URLS[2]).state == StatusState.SUCCESS
    assert [r.source_url for r in run.results] == URLS
    assert store.get_run(run.run_id) == run


@pytest.mark.asyncio
async def test_unexpected_crash_is_contained():
    orchestrator = ScrapeOrchestrator(ingestion=FakeIngestion(set(), crashing={URLS[0]}))
    run = await orchestrator.run(URLS)

    assert [r.source_url for r in run.results] == URLS[1:]
    status = run.status_for(URLS[0])
    assert status.state == StatusState.ERROR
    assert status.message == PROCESS_FAILED_MESSAGE


@pytest.mark.asyncio
async def test_urls_run_concurrently():
    ingestion = FakeIngestion(set(), {url: 0.2 for url in URLS})
    orchestrator = ScrapeOrchestrator(ingestion=ingestion)

    task = asyncio.create_task(orchestrator.run(URLS, run_id="r1"))
    await asyncio.sleep(0.05)

    assert sorted(ingestion.started) == sorted(URLS)
    in_flight = orchestrator.store.get_run("r1")
    assert in_flight is not None and not in_flight.completed
    assert in_flight.count(StatusState.LOADING) == 3
    await task


@pytest.mark.asyncio
async def test_status_set_matches_validated_input():
    orchestrator = ScrapeOrchestrator(ingestion=FakeIngestion(set()))
    run = await orchestrator.run(URLS + [URLS[0]])
    assert run.urls == URLS
    assert all(s.state.is_terminal for s in run.statuses)


@pytest.mark.asyncio
async def test_overlapping_runs_do_not_clobber_each_other():
    store = SessionStore()
    slow = ScrapeOrchestrator(ingestion=FakeIngestion(set(), {URLS[0]: 0.05}), store=store)
    fast = ScrapeOrchestrator(ingestion=FakeIngestion({URLS[2]}), store=store)

    first, second = await asyncio.gather(
        slow.run([URLS[0]], run_id="slow"),
        fast.run([URLS[2]], run_id="fast"),
    )

    assert store.get_run("slow").status_for(URLS[0]).state == StatusState.SUCCESS
    assert store.get_run("fast").status_for(URLS[2]).state == StatusState.ERROR
    assert store.get_run("slow").urls == [URLS[0]]
    assert store.get_run("fast").urls == [URLS[2]]


class RecordingLogger(LayerLogger):
    def __init__(self):
        super().__init__("orchestrator")
        self.transitions = []

    def log_status(self, run_id, url, state, message=None):
        self.transitions.append((url, state))


@pytest.mark.asyncio
async def test_every_status_transition_is_logged():
    orchestrator = ScrapeOrchestrator(ingestion=FakeIngestion({URLS[1]}, crashing={URLS[2]}))
    orchestrator.logger = RecordingLogger()

    await orchestrator.run(URLS)

    transitions = orchestrator.logger.transitions
    for url, final in ((URLS[0], "success"), (URLS[1], "error"), (URLS[2], "error")):
        assert [s for u, s in transitions if u == url] == ["loading", final]
