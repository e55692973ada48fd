"""Single ingestion entry point for uploaded CSV files.

Every tool that accepts a CSV upload goes through ``parse_and_validate``:
parse the bytes, validate the rows against a registered schema, and hand
back either the transformed rows or the AggregateError describing every
violation.

Example:
    >>> result = parse_and_validate(uploaded_bytes, "ACOS_SCHEMA")
    >>> if result.is_ok:
    ...     campaigns = result.rows
    ... else:
    ...     show(result.error.messages[:5], total=len(result.error.errors))
"""

import logging
from dataclasses import dataclass, field

from sellercsv.core.exceptions import AggregateError
from sellercsv.core.registry import find_schema
from sellercsv.processing.reader import CsvReader, CsvSource
from sellercsv.validation.report import ValidationReport
from sellercsv.validation.result import Row
from sellercsv.validation.validator import CsvSchemaValidator

logger = logging.getLogger(__name__)


@dataclass
class IngestResult:
    """Rows of a successfully validated file, or the error that rejected it.

    Attributes:
        schema_name: Name of the schema used
        headers: Header row of the file
        rows: Transformed rows (empty when validation failed)
        error: AggregateError with every violation, or None
        total_rows: Number of data rows read from the file
    """

    schema_name: str
    headers: list[str] = field(default_factory=list)
    rows: list[Row] = field(default_factory=list)
    error: AggregateError | None = None
    total_rows: int = 0

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> list[Row]:
        """Return the rows, raising the stored AggregateError if validation failed."""
        if self.error is not None:
            raise self.error
        return self.rows

    def report(self, source: str | None = None) -> ValidationReport:
        """Build a ValidationReport describing this result."""
        if self.error is None:
            return ValidationReport.from_rows(self.schema_name, self.rows, source=source)
        return ValidationReport.from_aggregate(
            self.schema_name, self.total_rows, self.error, source=source
        )


def parse_and_validate(file_bytes: CsvSource, schema_name: str) -> IngestResult:
    """Parse CSV input and validate it against a registered schema.

    Args:
        file_bytes: Raw CSV bytes (a path is accepted too)
        schema_name: Registry key or display name of the schema

    Returns:
        IngestResult holding the transformed rows or the validation error

    Raises:
        KeyError: If the schema is not registered
        ReaderError: If the CSV cannot be parsed
    """
    schema = find_schema(schema_name)
    headers, rows = CsvReader().read_rows(file_bytes)

    missing = schema.missing_headers(headers)
    if missing and rows:
        logger.info("%s upload is missing required columns: %s", schema.name, ", ".join(missing))

    try:
        validated = CsvSchemaValidator(schema).validate(rows)
    except AggregateError as e:
        return IngestResult(
            schema_name=schema.name, headers=headers, error=e, total_rows=len(rows)
        )

    return IngestResult(
        schema_name=schema.name, headers=headers, rows=validated, total_rows=len(rows)
    )
