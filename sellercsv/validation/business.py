"""Record validators for calculator inputs.

The ACoS, inventory and pricing calculators take single records entered by
hand rather than uploaded files. These helpers describe those records as
schemas and run them through CsvSchemaValidator, so manual input and CSV
uploads share one set of validation semantics. Failures are raised as the
domain errors the calculators expect.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from sellercsv.core.exceptions import (
    AggregateError,
    InventoryOptimizationError,
    PricingOptimizationError,
    ValidationError,
)
from sellercsv.core.schema import ColumnDefinition, DataType, SchemaDefinition, ValidationRule
from sellercsv.validation.validator import CsvSchemaValidator

_IS_NUMBER = ValidationRule(
    lambda value: isinstance(value, (int, float)) and not isinstance(value, bool),
    "Value must be a number",
)


def _number(required: bool = True, **bounds: float) -> ColumnDefinition:
    return ColumnDefinition(DataType.NUMBER, required=required, rules=(_IS_NUMBER,), **bounds)


def _choice(*values: str) -> ColumnDefinition:
    return ColumnDefinition(DataType.STRING, allowed_values=values)


CAMPAIGN_DATA_SCHEMA = SchemaDefinition(
    name="Campaign Data",
    version="1.0.0",
    description="Manually entered advertising campaign figures",
    columns={
        "campaign": ColumnDefinition(DataType.STRING, required=True),
        "ad_spend": _number(min=0),
        "sales": _number(min=0),
        "impressions": _number(required=False, min=0),
        "clicks": _number(required=False, min=0),
    },
)

TREND_DATA_SCHEMA = SchemaDefinition(
    name="Trend Data",
    version="1.0.0",
    description="Prior-period and market figures for trend analysis",
    columns={
        "previous_period_sales": _number(min=0),
        "previous_period_ad_spend": _number(min=0),
        "industry_average_ctr": _number(required=False, min=0, max=100),
        "industry_average_conversion": _number(required=False, min=0, max=100),
        "seasonality_factor": _number(required=False, min=0.1, max=10),
        "market_trend": _choice("rising", "stable", "declining"),
        "competition_level": _choice("low", "medium", "high"),
    },
)

PRODUCT_PRICING_SCHEMA = SchemaDefinition(
    name="Product Pricing",
    version="1.0.0",
    description="Cost and margin inputs for the pricing optimizer",
    columns={
        "cost": _number(min=0),
        "target_margin": _number(min=0),
        "seasonality_factor": _number(required=False, min=0.1, max=10),
        "market_strategy": _choice("premium", "competitive", "economy"),
    },
)


def _validate_record(schema: SchemaDefinition, data: Any) -> dict[str, Any]:
    if not isinstance(data, Mapping):
        error = ValidationError(f"Expected a mapping, got {type(data).__name__}")
        raise AggregateError([error])
    (record,) = CsvSchemaValidator(schema).validate([dict(data)])
    return {key: value for key, value in record.items() if value is not None}


def validate_campaign_data(data: Any) -> dict[str, Any]:
    """Validate campaign figures.

    Raises:
        InventoryOptimizationError: With every violation in ``details``
    """
    try:
        return _validate_record(CAMPAIGN_DATA_SCHEMA, data)
    except AggregateError as e:
        raise InventoryOptimizationError("Invalid campaign data", details=e.messages) from e


def validate_trend_data(data: Any) -> dict[str, Any]:
    """Validate trend figures.

    Raises:
        InventoryOptimizationError: With every violation in ``details``
    """
    try:
        return _validate_record(TREND_DATA_SCHEMA, data)
    except AggregateError as e:
        raise InventoryOptimizationError("Invalid trend data", details=e.messages) from e


def validate_product_pricing_data(data: Any) -> dict[str, Any]:
    """Validate pricing optimizer inputs.

    Raises:
        PricingOptimizationError: With every violation in ``details``
    """
    try:
        return _validate_record(PRODUCT_PRICING_SCHEMA, data)
    except AggregateError as e:
        raise PricingOptimizationError(
            "Invalid product pricing data", details=e.messages
        ) from e


def validate_competitor_prices(prices: Any) -> list[float]:
    """Validate a list of competitor prices.

    Raises:
        PricingOptimizationError: If the list is empty or holds anything other
                                  than non-negative numbers
    """
    if not isinstance(prices, Sequence) or isinstance(prices, str) or not prices:
        raise PricingOptimizationError("Competitor prices must be a non-empty array")

    if not all(
        isinstance(p, (int, float)) and not isinstance(p, bool) and p >= 0 for p in prices
    ):
        raise PricingOptimizationError(
            "All competitor prices must be non-negative numbers",
            historical_data=[p for p in prices if isinstance(p, (int, float))],
        )

    return list(prices)
