"""
Listing Scraper - FastAPI Application
Main entry point with REST API endpoints.
"""
from typing import List, Optional, Union

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel

from propscraper import __version__
from propscraper.config import config
from propscraper.utils.logger import get_logger, set_trace_id
from propscraper.utils.urls import parse_url_lines
from propscraper.layers.session import SessionStore
from propscraper.layers.ingestion import IngestionLayer
from propscraper.layers.orchestrator import ScrapeOrchestrator
from propscraper.layers.archive import ArchiveBuilder
from propscraper.layers.summarization import SummarizationLayer
from propscraper.models.listing import ListingResult, ProcessingStatus, SummaryEntry


# Initialize FastAPI app
app = FastAPI(
    title="Listing Scraper",
    description="Pulls photos, title, price and text from real-estate listing pages",
    version=__version__,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize layers
session_store = SessionStore()
orchestrator = ScrapeOrchestrator(ingestion=IngestionLayer(), store=session_store)
archive_builder = ArchiveBuilder()
summarization_layer = SummarizationLayer(store=session_store)

logger = get_logger("main")


# Request/Response models
class ScrapeRequest(BaseModel):
    """Newline separated text, or a list of URLs."""
    urls: Union[str, List[str]]


class RunResponse(BaseModel):
    run_id: str
    completed: bool
    statuses: List[ProcessingStatus]
    results: List[ListingResult]
    trace_id: Optional[str] = None


class SummarizeRequest(BaseModel):
    url: str
    text: str = ""


class SummaryResponse(BaseModel):
    url: str
    summary: str


# API Routes
@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": __version__,
        "summarizer_available": summarization_layer.is_available(),
    }


@app.post("/api/scrape", response_model=RunResponse)
async def scrape(request: ScrapeRequest):
    """
    Scrape every valid URL in the request.

    Invalid lines are dropped; each URL succeeds or fails on its own.
    """
    trace_id = set_trace_id()
    urls = parse_url_lines(request.urls)

    if not urls:
        raise HTTPException(status_code=400, detail="Please enter valid URLs.")

    logger.info("scrape_request", urls_count=len(urls), trace_id=trace_id)

    try:
        run = await orchestrator.run(urls)
    except Exception as e:
        logger.error("scrape_error", error=str(e))
        raise HTTPException(status_code=500, detail=str(e))

    return RunResponse(
        run_id=run.run_id,
        completed=run.completed,
        statuses=list(run.statuses),
        results=list(run.results),
        trace_id=trace_id,
    )


@app.get("/api/runs/{run_id}", response_model=RunResponse)
async def get_run(run_id: str):
    """Current statuses and results of a scrape run."""
    run = session_store.get_run(run_id)
    if run is None:
        raise HTTPException(status_code=404, detail=f"Unknown run: {run_id}")
    return RunResponse(
        run_id=run.run_id,
        completed=run.completed,
        statuses=list(run.statuses),
        results=list(run.results),
    )


@app.post("/api/summarize", response_model=SummaryResponse)
async def summarize(request: SummarizeRequest):
    """Generate and store an AI summary of a listing's text."""
    set_trace_id()
    entry = await summarization_layer.summarize(request.url, request.text)
    if entry is None:
        raise HTTPException(status_code=400, detail="No text to summarize.")
    return SummaryResponse(url=entry.source_url, summary=entry.summary)


@app.get("/api/summaries", response_model=List[SummaryEntry])
async def list_summaries():
    return session_store.summaries()


@app.post("/api/archive")
async def download_images(listing: ListingResult):
    """Zip a listing's images; the browser download is the save action."""
    trace_id = set_trace_id()
    logger.info("archive_request", url=listing.source_url, images_count=len(listing.images), trace_id=trace_id)

    archive = await archive_builder.build(listing)
    if archive is None:
        raise HTTPException(status_code=400, detail="Listing has no images.")

    return Response(
        content=archive.content,
        media_type="application/zip",
        headers={
            "Content-Disposition": f'attachment; filename="{archive.filename}"',
            "X-Images-Added": str(archive.image_count),
            "X-Images-Failed": str(len(archive.failed_urls)),
        },
    )


@app.delete("/api/session")
async def clear_session():
    """Drop all runs and summaries."""
    await session_store.clear()
    return {"status": "cleared"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.HOST, port=config.PORT)
