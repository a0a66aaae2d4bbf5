"""
Ingestion Layer - one listing URL in, one ListingResult out.

Acquires the page, runs the heuristic extractors on raw HTML, and pushes the
image candidates through the normalizer. Acquisition failures become an
error-shaped ListingResult here and never propagate further.
"""
from typing import Optional

from propscraper.config import config
from propscraper.extraction.images import extract_image_candidates
from propscraper.extraction.metadata import extract_metadata
from propscraper.extraction.normalizer import DEFAULT_RULES, FilterRules, clean_images
from propscraper.layers.acquisition import AcquisitionFailure, AcquisitionLayer
from propscraper.models.listing import AcquiredPage, ListingResult
from propscraper.utils.logger import LayerLogger


class IngestionLayer:
    """Acquisition plus extraction for a single listing URL."""

    def __init__(
        self,
        acquisition: Optional[AcquisitionLayer] = None,
        rules: FilterRules = DEFAULT_RULES,
        text_limit: Optional[int] = None,
    ):
        self.logger = LayerLogger("ingestion_layer")
        self.acquisition = acquisition or AcquisitionLayer()
        self.rules = rules
        self.text_limit = config.BODY_TEXT_LIMIT if text_limit is None else text_limit

    async def ingest(self, url: str) -> ListingResult:
        """Acquire and extract ``url``."""
        self.logger.log_action("ingestion", "started", url=url)

        try:
            page = await self.acquisition.acquire(url)
        except AcquisitionFailure as e:
            self.logger.log_action("ingestion", "failed", url=url, error=e.last_error)
            return ListingResult.failed(url, str(e))

        result = self.build_result(page)
        self.logger.log_action(
            "ingestion",
            "completed",
            url=url,
            source=page.source,
            images_count=len(result.images),
            body_length=len(result.body_text),
            has_price=bool(result.price),
        )
        return result

    def build_result(self, page: AcquiredPage) -> ListingResult:
        """Turn an acquired page into a ListingResult."""
        if page.pre_extracted:
            # The local service already ran a browser; only normalize its output
            self.logger.log_decision(
                decision="skip_heuristic_extraction",
                reason="page was pre-extracted by the local service",
                url=page.url,
            )
            return ListingResult(
                source_url=page.url,
                images=clean_images(page.images, page.url, self.rules),
                title=page.title or "Untitled",
                body_text=(page.body_text or "")[:self.text_limit],
                price=page.price,
            )

        html = page.html or ""
        candidates = extract_image_candidates(html, page.url)
        metadata = extract_metadata(html, self.text_limit)
        return ListingResult(
            source_url=page.url,
            images=clean_images(candidates, page.url, self.rules),
            title=metadata.title,
            body_text=metadata.body_text,
            price=metadata.price,
        )
