"""Layers package initialization."""
from propscraper.layers.acquisition import AcquisitionFailure, AcquisitionLayer
from propscraper.layers.ingestion import IngestionLayer
from propscraper.layers.session import SessionStore
from propscraper.layers.orchestrator import ScrapeOrchestrator
from propscraper.layers.archive import ArchiveBuilder, save_to_directory
from propscraper.layers.summarization import SummarizationLayer

__all__ = [
    "AcquisitionFailure",
    "AcquisitionLayer",
    "IngestionLayer",
    "SessionStore",
    "ScrapeOrchestrator",
    "ArchiveBuilder",
    "save_to_directory",
    "SummarizationLayer",
]
