"""Registry of the CSV schemas supported by sellercsv.

The registry is a read-only mapping from schema key to SchemaDefinition,
built once at import time. Supporting a new report type means adding one
schema definition and one entry to ``SCHEMA_REGISTRY``.

Example:
    >>> from sellercsv.core.registry import get_schema, validate_schema_key
    >>> validate_schema_key("ACOS_SCHEMA")
    True
    >>> get_schema("ACOS_SCHEMA").name
    'ACOS Report Schema'
"""

from types import MappingProxyType

from sellercsv.core.schema import (
    ColumnDefinition,
    DataType,
    SchemaDefinition,
    ValidationRule,
)
from sellercsv.core.transforms import CURRENCY_TO_NUMBER, PERCENT_TO_NUMBER

_ISO_DATE = r"^\d{4}-\d{2}-\d{2}$"
_DIGITS = r"^\d+$"
_ASIN = r"^[A-Z0-9]{10}$"

ACOS_SCHEMA = SchemaDefinition(
    name="ACOS Report Schema",
    version="1.0.0",
    description="Schema for validating ACOS (Advertising Cost of Sales) report data",
    strict_mode=True,
    columns={
        "Campaign Name": ColumnDefinition(
            DataType.STRING, required=True, description="Name of the advertising campaign"
        ),
        "Ad Group": ColumnDefinition(
            DataType.STRING, required=True, description="Name of the ad group"
        ),
        "Impressions": ColumnDefinition(
            DataType.NUMBER,
            required=True,
            min=0,
            format=_DIGITS,
            description="Number of ad impressions",
        ),
        "Clicks": ColumnDefinition(
            DataType.NUMBER,
            required=True,
            min=0,
            format=_DIGITS,
            description="Number of ad clicks",
        ),
        "CTR": ColumnDefinition(
            DataType.NUMBER,
            required=True,
            min=0,
            max=100,
            transforms=(PERCENT_TO_NUMBER,),
            description="Click-through rate percentage",
        ),
        "CPC": ColumnDefinition(
            DataType.NUMBER,
            required=True,
            min=0,
            transforms=(CURRENCY_TO_NUMBER,),
            description="Cost per click",
        ),
        "Spend": ColumnDefinition(
            DataType.NUMBER,
            required=True,
            min=0,
            transforms=(CURRENCY_TO_NUMBER,),
            description="Total ad spend",
        ),
        "Sales": ColumnDefinition(
            DataType.NUMBER,
            required=True,
            min=0,
            transforms=(CURRENCY_TO_NUMBER,),
            description="Total sales amount",
        ),
        "ACOS": ColumnDefinition(
            DataType.NUMBER,
            required=True,
            min=0,
            transforms=(PERCENT_TO_NUMBER,),
            description="Advertising Cost of Sales percentage",
        ),
        "Date": ColumnDefinition(
            DataType.DATE, required=True, format=_ISO_DATE, description="Report date"
        ),
    },
)

PRODUCT_LISTING_SCHEMA = SchemaDefinition(
    name="Product Listing Schema",
    version="1.0.0",
    description="Schema for validating product listing data",
    strict_mode=True,
    columns={
        "ASIN": ColumnDefinition(
            DataType.STRING,
            required=True,
            format=_ASIN,
            description="Amazon Standard Identification Number",
        ),
        "Title": ColumnDefinition(
            DataType.STRING,
            required=True,
            rules=(
                ValidationRule(
                    lambda value: len(str(value)) <= 200,
                    "Title must not exceed 200 characters",
                ),
            ),
            description="Product title",
        ),
        "Price": ColumnDefinition(
            DataType.NUMBER,
            required=True,
            min=0,
            transforms=(CURRENCY_TO_NUMBER,),
            description="Product price",
        ),
        "Category": ColumnDefinition(
            DataType.STRING, required=True, description="Product category"
        ),
        "Rating": ColumnDefinition(
            DataType.NUMBER, required=True, min=1, max=5, description="Product rating"
        ),
        "Review Count": ColumnDefinition(
            DataType.NUMBER, required=True, min=0, description="Number of product reviews"
        ),
        "Stock Status": ColumnDefinition(
            DataType.STRING,
            required=True,
            allowed_values=("In Stock", "Out of Stock", "Limited Stock"),
            description="Product stock status",
        ),
    },
)

FBA_INVENTORY_SCHEMA = SchemaDefinition(
    name="FBA Inventory Schema",
    version="1.0.0",
    description="Schema for validating Fulfillment by Amazon inventory exports",
    columns={
        "SKU": ColumnDefinition(
            DataType.STRING,
            required=True,
            format=r"^[A-Z0-9-]{1,40}$",
            description="Seller stock keeping unit",
        ),
        "FNSKU": ColumnDefinition(
            DataType.STRING,
            format=_ASIN,
            description="Fulfillment network SKU",
        ),
        "Quantity": ColumnDefinition(
            DataType.NUMBER, required=True, min=0, description="Units on hand"
        ),
        "Condition": ColumnDefinition(
            DataType.STRING,
            allowed_values=("NEW", "REFURBISHED", "USED"),
            description="Item condition",
        ),
    },
)

PRODUCT_RESEARCH_SCHEMA = SchemaDefinition(
    name="Product Research Schema",
    version="1.0.0",
    description="Schema for validating product research exports used by the sales estimator",
    columns={
        "asin": ColumnDefinition(
            DataType.STRING, required=True, format=_ASIN, description="Product ASIN"
        ),
        "price": ColumnDefinition(
            DataType.NUMBER,
            required=True,
            min=0,
            transforms=(CURRENCY_TO_NUMBER,),
            description="Listing price",
        ),
        "reviews": ColumnDefinition(
            DataType.NUMBER,
            required=True,
            min=0,
            format=_DIGITS,
            description="Review count",
        ),
        "rating": ColumnDefinition(
            DataType.NUMBER, required=True, min=0, max=5, description="Average rating"
        ),
        "conversion_rate": ColumnDefinition(
            DataType.NUMBER,
            required=True,
            min=0,
            max=100,
            transforms=(PERCENT_TO_NUMBER,),
            description="Conversion rate percentage",
        ),
        "click_through_rate": ColumnDefinition(
            DataType.NUMBER,
            required=True,
            min=0,
            max=100,
            transforms=(PERCENT_TO_NUMBER,),
            description="Click-through rate percentage",
        ),
        "brands": ColumnDefinition(
            DataType.STRING, required=True, description="Competing brands"
        ),
        "keywords": ColumnDefinition(
            DataType.STRING, required=True, description="Target keywords"
        ),
        "niche": ColumnDefinition(DataType.STRING, required=True, description="Product niche"),
    },
)

SCHEMA_REGISTRY = MappingProxyType(
    {
        "ACOS_SCHEMA": ACOS_SCHEMA,
        "PRODUCT_LISTING_SCHEMA": PRODUCT_LISTING_SCHEMA,
        "FBA_INVENTORY_SCHEMA": FBA_INVENTORY_SCHEMA,
        "PRODUCT_RESEARCH_SCHEMA": PRODUCT_RESEARCH_SCHEMA,
    }
)


def get_schema(key: str) -> SchemaDefinition:
    """Get a schema by registry key.

    Args:
        key: Registry key (e.g. "ACOS_SCHEMA")

    Returns:
        The registered SchemaDefinition

    Raises:
        KeyError: If the key is not registered, with a message listing the
                 available keys
    """
    if key not in SCHEMA_REGISTRY:
        available = ", ".join(sorted(SCHEMA_REGISTRY))
        raise KeyError(f"Unknown schema '{key}'. Available: {available}")
    return SCHEMA_REGISTRY[key]


def validate_schema_key(key: str) -> bool:
    """Return True if ``key`` names a registered schema."""
    return key in SCHEMA_REGISTRY


def find_schema(name_or_key: str) -> SchemaDefinition:
    """Resolve a schema from either its registry key or its display name.

    Raises:
        KeyError: If neither a key nor a schema name matches
    """
    if name_or_key in SCHEMA_REGISTRY:
        return SCHEMA_REGISTRY[name_or_key]
    for schema in SCHEMA_REGISTRY.values():
        if schema.name == name_or_key:
            return schema
    return get_schema(name_or_key)


def list_schemas() -> dict[str, str]:
    """Return registry keys mapped to schema descriptions, sorted by key."""
    return {key: SCHEMA_REGISTRY[key].description for key in sorted(SCHEMA_REGISTRY)}
