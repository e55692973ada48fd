"""Error-tolerant batch processing with progress tracking.

BatchProcessor runs a per-row validity check (a predicate, or a schema) over
rows and keeps going when individual rows fail: each failure is recorded as
a ProcessingError. Exceeding the memory threshold is different: it aborts
the batch with DataProcessingError and flips the status to ``error``.

Example:
    >>> processor = BatchProcessor(validate_row=lambda row: bool(row.get("SKU")))
    >>> progress = processor.process_batch(rows)
    >>> progress.status
    <ProcessingStatus.COMPLETED: 'completed'>
    >>> [e.row for e in processor.get_errors()]
    [2, 5]
"""

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

import psutil

from sellercsv.core.exceptions import AggregateError, DataProcessingError, ReaderError
from sellercsv.core.registry import get_schema
from sellercsv.core.schema import SchemaDefinition
from sellercsv.processing.reader import CsvReader, CsvSource, ReadProgress
from sellercsv.validation.result import Row
from sellercsv.validation.validator import CsvSchemaValidator

logger = logging.getLogger(__name__)

MEMORY_SAMPLE_INTERVAL = 100
"""Rows between memory samples."""

DEFAULT_MEMORY_THRESHOLD = 100 * 1024 * 1024


def _always_valid(row: Row) -> bool:
    return True


def process_memory_usage() -> int:
    """Return the resident set size of the current process in bytes."""
    return psutil.Process().memory_info().rss


class ProcessingStatus(Enum):
    """Lifecycle state of a batch."""

    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass
class BatchOptions:
    """Batch processor configuration.

    Attributes:
        batch_size: Rows per chunk when processing files
        memory_threshold: Bytes of memory growth that abort a batch
        retry_attempts: Retry budget for I/O collaborators; not used by the row loop
        cache_results: Keep valid (transformed) rows for ``get_results``
        validate_row: Row predicate; False or an exception marks the row failed
        schema: Validate rows against this schema instead of the predicate
        schema_key: Registry key resolved to ``schema`` when no schema is given
    """

    batch_size: int = 1000
    memory_threshold: int = DEFAULT_MEMORY_THRESHOLD
    retry_attempts: int = 3
    cache_results: bool = True
    validate_row: Callable[[Row], bool] = _always_valid
    schema: SchemaDefinition | None = None
    schema_key: str | None = None

    def __post_init__(self) -> None:
        if self.batch_size <= 0:
            msg = f"batch_size must be positive, got {self.batch_size}"
            raise ValueError(msg)
        if self.memory_threshold <= 0:
            msg = f"memory_threshold must be positive, got {self.memory_threshold}"
            raise ValueError(msg)


@dataclass
class ProcessingProgress:
    """Counters describing the current batch.

    Attributes:
        processed_rows: Rows that passed the validity check
        total_rows: Rows in the batch (or file so far)
        current_batch: Number of batches started
        error_count: Rows that failed the validity check
        memory_usage: Last memory sample in bytes (best effort)
        status: Lifecycle state
    """

    processed_rows: int = 0
    total_rows: int = 0
    current_batch: int = 0
    error_count: int = 0
    memory_usage: int = 0
    status: ProcessingStatus = ProcessingStatus.PROCESSING

    @property
    def fraction(self) -> float:
        """Share of rows handled so far, between 0 and 1."""
        if self.total_rows <= 0:
            return 1.0 if self.status is ProcessingStatus.COMPLETED else 0.0
        return min(1.0, (self.processed_rows + self.error_count) / self.total_rows)

    def to_dict(self) -> dict[str, Any]:
        return {
            "processed_rows": self.processed_rows,
            "total_rows": self.total_rows,
            "current_batch": self.current_batch,
            "error_count": self.error_count,
            "memory_usage": self.memory_usage,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class ProcessingError:
    """A row that failed its validity check.

    Attributes:
        row: 0-based index of the row in the batch (or file)
        error: Failure message
        data: The original row
    """

    row: int
    error: str
    data: Row | None = None


@dataclass
class ProcessingStats:
    total_processed: int
    error_count: int
    processing_time: float
    memory_peak: int


@dataclass
class ProcessingResult:
    """Outcome of processing a whole file."""

    data: list[Row] = field(default_factory=list)
    errors: list[ProcessingError] = field(default_factory=list)
    stats: ProcessingStats | None = None
    progress: ProcessingProgress | None = None


class BatchProcessor:
    """Row-by-row, error-tolerant processor with progress tracking.

    Each instance owns its progress record, error list and result cache.

    Attributes:
        options: Processor configuration (not changed by ``reset``)
    """

    def __init__(
        self,
        options: BatchOptions | None = None,
        memory_probe: Callable[[], int] = process_memory_usage,
        **overrides: Any,
    ):
        """Initialize batch processor.

        Args:
            options: Base configuration (defaults when omitted)
            memory_probe: Returns current memory usage in bytes
            **overrides: BatchOptions fields overriding ``options``

        Raises:
            KeyError: If ``schema_key`` does not name a registered schema
        """
        options = options or BatchOptions()
        self.options = replace(options, **overrides) if overrides else options
        self._memory_probe = memory_probe

        schema = self.options.schema
        if schema is None and self.options.schema_key is not None:
            schema = get_schema(self.options.schema_key)
        self._validator = CsvSchemaValidator(schema) if schema is not None else None

        self.reset()

    def reset(self) -> None:
        """Clear progress, errors and cached rows; keep the options."""
        self._progress = ProcessingProgress()
        self._errors: list[ProcessingError] = []
        self._results: list[Row] = []
        self._memory_baseline = self._memory_probe()
        self._memory_peak = 0

    def get_progress(self) -> ProcessingProgress:
        """Return a snapshot of the progress counters."""
        return replace(self._progress)

    def get_errors(self) -> list[ProcessingError]:
        """Return a snapshot of the recorded row errors."""
        return list(self._errors)

    def get_results(self) -> list[Row]:
        """Return the valid rows kept so far (empty unless ``cache_results``)."""
        return list(self._results)

    def process_batch(self, rows: Sequence[Row]) -> ProcessingProgress:
        """Check every row, recording failures without stopping.

        Counters other than ``total_rows`` accumulate across calls until
        ``reset``; ``total_rows`` is the size of the latest batch.

        Args:
            rows: Rows to process, in order

        Returns:
            Progress snapshot with status ``completed``

        Raises:
            DataProcessingError: If memory growth exceeds ``memory_threshold``
        """
        self._progress.total_rows = len(rows)
        self._progress.current_batch += 1
        self._progress.status = ProcessingStatus.PROCESSING

        self._run(rows, row_offset=0)

        self._progress.status = ProcessingStatus.COMPLETED
        logger.info(
            "Batch %d completed: %d processed, %d errors",
            self._progress.current_batch,
            self._progress.processed_rows,
            self._progress.error_count,
        )
        return self.get_progress()

    def process_file(
        self,
        source: CsvSource,
        on_progress: Callable[[ProcessingProgress], None] | None = None,
        on_read_progress: Callable[[ReadProgress], None] | None = None,
    ) -> ProcessingResult:
        """Stream a CSV file through the processor in ``batch_size`` chunks.

        Row indices in errors are relative to the whole file. Previous state
        is reset first.

        Args:
            source: Raw CSV bytes, or a path to a CSV file
            on_progress: Called with a progress snapshot after each chunk
            on_read_progress: Called with the approximate byte cursor

        Returns:
            ProcessingResult with kept rows, errors and stats

        Raises:
            ReaderError: If the CSV cannot be read
            DataProcessingError: If memory growth exceeds ``memory_threshold``
        """
        self.reset()
        started = time.perf_counter()
        reader = CsvReader(chunk_size=self.options.batch_size)
        row_offset = 0

        try:
            for chunk in reader.iter_chunks(source, on_progress=on_read_progress):
                self._progress.total_rows += len(chunk)
                self._progress.current_batch += 1
                self._run(chunk, row_offset=row_offset)
                row_offset += len(chunk)
                if on_progress is not None:
                    on_progress(self.get_progress())
        except ReaderError:
            self._progress.status = ProcessingStatus.ERROR
            raise

        self._progress.status = ProcessingStatus.COMPLETED
        if on_progress is not None:
            on_progress(self.get_progress())

        stats = ProcessingStats(
            total_processed=self._progress.processed_rows,
            error_count=len(self._errors),
            processing_time=time.perf_counter() - started,
            memory_peak=self._memory_peak,
        )
        logger.info(
            "Processed %d rows in %d batches (%d failed) in %.3fs",
            self._progress.total_rows,
            self._progress.current_batch,
            self._progress.error_count,
            stats.processing_time,
        )
        return ProcessingResult(
            data=self.get_results(),
            errors=self.get_errors(),
            stats=stats,
            progress=self.get_progress(),
        )

    def _run(self, rows: Sequence[Row], row_offset: int) -> None:
        for index, row in enumerate(rows):
            self._process_row(row, row_offset + index)
            if (index + 1) % MEMORY_SAMPLE_INTERVAL == 0:
                self._check_memory()

    def _process_row(self, row: Row, row_index: int) -> None:
        if self._validator is not None:
            try:
                (checked,) = self._validator.validate([row], start_row=row_index + 1)
            except AggregateError as e:
                for message in e.messages:
                    self._errors.append(ProcessingError(row_index, message, row))
                self._progress.error_count += 1
                return
            except Exception as e:
                self._record_failure(row_index, str(e) or type(e).__name__, row)
                return
        else:
            try:
                valid = self.options.validate_row(row)
            except Exception as e:
                self._record_failure(row_index, str(e) or type(e).__name__, row)
                return
            if not valid:
                self._record_failure(row_index, "Row validation failed", row)
                return
            checked = row

        self._progress.processed_rows += 1
        if self.options.cache_results:
            self._results.append(checked)

    def _record_failure(self, row_index: int, message: str, row: Row) -> None:
        self._errors.append(ProcessingError(row_index, message, row))
        self._progress.error_count += 1
        logger.debug("Row %d failed: %s", row_index, message)

    def _check_memory(self) -> None:
        usage = max(0, self._memory_probe() - self._memory_baseline)
        self._progress.memory_usage = usage
        self._memory_peak = max(self._memory_peak, usage)

        if usage > self.options.memory_threshold:
            self._progress.status = ProcessingStatus.ERROR
            logger.error(
                "Memory usage %d bytes exceeded threshold %d bytes; aborting batch",
                usage,
                self.options.memory_threshold,
            )
            raise DataProcessingError(
                "Memory threshold exceeded",
                memory_usage=usage,
                memory_threshold=self.options.memory_threshold,
                processed_rows=self._progress.processed_rows,
            )
