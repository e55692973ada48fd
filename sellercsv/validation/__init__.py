"""Row validation for seller CSV reports.

Validates parsed rows against a SchemaDefinition, collecting every violation
before failing, and renders the outcome as a ValidationReport.
"""

from sellercsv.validation.business import (
    validate_campaign_data,
    validate_competitor_prices,
    validate_product_pricing_data,
    validate_trend_data,
)
from sellercsv.validation.report import ValidationReport
from sellercsv.validation.result import FieldResult, Row, Value
from sellercsv.validation.validator import CsvSchemaValidator, check_data_type, is_empty

__all__ = [
    "CsvSchemaValidator",
    "FieldResult",
    "Row",
    "ValidationReport",
    "Value",
    "check_data_type",
    "is_empty",
    "validate_campaign_data",
    "validate_competitor_prices",
    "validate_product_pricing_data",
    "validate_trend_data",
]
