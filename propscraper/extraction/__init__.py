"""Extraction package initialization."""
from propscraper.extraction.images import extract_image_candidates
from propscraper.extraction.metadata import PageMetadata, extract_metadata
from propscraper.extraction.normalizer import DEFAULT_RULES, FilterRules, clean_images

__all__ = [
    "extract_image_candidates",
    "PageMetadata",
    "extract_metadata",
    "DEFAULT_RULES",
    "FilterRules",
    "clean_images",
]
