"""Schema validation and batch processing for Amazon seller CSV reports.

Example:
    >>> from sellercsv import CsvSchemaValidator, get_schema
    >>> validator = CsvSchemaValidator(get_schema("ACOS_SCHEMA"))
    >>> rows = validator.validate(parsed_rows)
"""

from sellercsv.core.exceptions import (
    AggregateError,
    DataProcessingError,
    ReaderError,
    SellerCsvError,
    ValidationError,
)
from sellercsv.core.registry import SCHEMA_REGISTRY, get_schema, validate_schema_key
from sellercsv.core.schema import (
    ColumnDefinition,
    ColumnTransform,
    DataType,
    SchemaDefinition,
    ValidationRule,
)
from sellercsv.processing import BatchOptions, BatchProcessor, parse_and_validate
from sellercsv.validation import CsvSchemaValidator, ValidationReport

__version__ = "0.1.0"

__all__ = [
    "SCHEMA_REGISTRY",
    "AggregateError",
    "BatchOptions",
    "BatchProcessor",
    "ColumnDefinition",
    "ColumnTransform",
    "CsvSchemaValidator",
    "DataProcessingError",
    "DataType",
    "ReaderError",
    "SchemaDefinition",
    "SellerCsvError",
    "ValidationError",
    "ValidationReport",
    "ValidationRule",
    "get_schema",
    "parse_and_validate",
    "validate_schema_key",
]
