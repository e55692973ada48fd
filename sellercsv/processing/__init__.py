"""CSV reading, batch processing and the ingestion entry point."""

from sellercsv.processing.batch import (
    BatchOptions,
    BatchProcessor,
    ProcessingError,
    ProcessingProgress,
    ProcessingResult,
    ProcessingStatus,
)
from sellercsv.processing.ingest import IngestResult, parse_and_validate
from sellercsv.processing.reader import CsvReader, ReadProgress

__all__ = [
    "BatchOptions",
    "BatchProcessor",
    "CsvReader",
    "IngestResult",
    "ProcessingError",
    "ProcessingProgress",
    "ProcessingResult",
    "ProcessingStatus",
    "ReadProgress",
    "parse_and_validate",
]
