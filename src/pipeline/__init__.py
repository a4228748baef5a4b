"""Pipeline orchestration for the PDF-to-narration ingestion flow."""

from src.pipeline.orchestrator import IngestionPipeline

__all__ = ["IngestionPipeline"]
