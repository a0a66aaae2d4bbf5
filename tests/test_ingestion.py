import pytest

from propscraper.adapters.base import Acquirer, AttemptFailed
from propscraper.layers.acquisition import AcquisitionLayer
from propscraper.layers.ingestion import IngestionLayer
from propscraper.models.listing import AcquiredPage

from tests.conftest import listing_html

URL = "https://www.property24.com/for-sale/listing/123"


class FixedAcquirer(Acquirer):
    name = "fixed"

    def __init__(self, page: AcquiredPage):
        super().__init__()
        self.page = page

    async def fetch(self, url: str) -> AcquiredPage:
        return self.page


class FailingAcquirer(Acquirer):
    name = "failing"

    async def fetch(self, url: str) -> AcquiredPage:
        raise AttemptFailed(self.name, "HTTP 403", 403)


def ingestion_for(*strategies) -> IngestionLayer:
    return IngestionLayer(acquisition=AcquisitionLayer(strategies=list(strategies)))


@pytest.mark.asyncio
async def test_relay_html_runs_heuristic_extraction():
    html = listing_html(
        """
        <header><img src="https://cdn.example.com/static/logo.png"></header>
        <h1>Family home</h1>
        <div class="p24_price">R 2 450 000</div>
        <script>var photos = ["https:\\/\\/images.prop24.com\\/1\\/a.jpg"];</script>
        <img src="//cdn.example.com/photos/b.jpg">
        <img src="https://www.facebook.com/tr.png">
        """,
        title="Family home for sale",
    )
    page = AcquiredPage(url=URL, source="fixed", html=html)
    result = await ingestion_for(FixedAcquirer(page)).ingest(URL)

    assert result.ok
    assert result.source_url == URL
    assert result.title == "Family home for sale"
    assert result.price == "R 2 450 000"
    assert result.images == [
        "https://images.prop24.com/1/a.jpg",
        "https://cdn.example.com/photos/b.jpg",
    ]
    assert "Family home" in result.body_text
    assert "photos" not in result.body_text


@pytest.mark.asyncio
async def test_pre_extracted_page_is_normalized_but_not_reparsed():
    page = AcquiredPage(
        url=URL,
        source="local_extractor",
        pre_extracted=True,
        title="Extracted Property",
        body_text="x" * 20000,
        price="R 1",
        images=["//images.prop24.com/2.jpg", "https://cdn.example.com/logo.png", "/rel/3.jpg"],
    )
    result = await ingestion_for(FixedAcquirer(page)).ingest(URL)

    assert result.images == [
        "https://images.prop24.com/2.jpg",
        "https://www.property24.com/rel/3.jpg",
    ]
    assert result.title == "Extracted Property"
    assert len(result.body_text) == 10000
    assert result.price == "R 1"


@pytest.mark.asyncio
async def test_acquisition_failure_becomes_error_result():
    result = await ingestion_for(FailingAcquirer()).ingest(URL)

    assert not result.ok
    assert result.error
    assert "failing: HTTP 403" in result.error
    assert result.images == []
    assert result.body_text == ""
    assert result.title == "Error"
