"""Shared test fixtures and Hypothesis configuration for sellercsv tests."""

import pytest
from hypothesis import settings

from sellercsv.core.schema import ColumnDefinition, DataType, SchemaDefinition
from sellercsv.core.transforms import PERCENT_TO_NUMBER, TO_NUMBER

settings.register_profile("sellercsv", max_examples=100, deadline=None)
settings.load_profile("sellercsv")


ACOS_HEADER = "Campaign Name,Ad Group,Impressions,Clicks,CTR,CPC,Spend,Sales,ACOS,Date"


@pytest.fixture
def mini_acos_schema() -> SchemaDefinition:
    """Three-column ACoS-like schema used by the scenario tests."""
    return SchemaDefinition(
        name="Mini ACOS",
        version="1.0.0",
        description="Impressions, CTR and Date only",
        columns={
            "Impressions": ColumnDefinition(
                DataType.NUMBER, required=True, min=0, transforms=(TO_NUMBER,)
            ),
            "CTR": ColumnDefinition(
                DataType.NUMBER, required=True, min=0, max=100, transforms=(PERCENT_TO_NUMBER,)
            ),
            "Date": ColumnDefinition(
                DataType.DATE, required=True, format=r"^\d{4}-\d{2}-\d{2}$"
            ),
        },
    )


@pytest.fixture
def valid_acos_row() -> dict[str, str]:
    """A complete, valid ACOS report row as read from CSV."""
    return {
        "Campaign Name": "Test Campaign",
        "Ad Group": "Test Group",
        "Impressions": "1000",
        "Clicks": "50",
        "CTR": "5%",
        "CPC": "$0.50",
        "Spend": "$25.00",
        "Sales": "$100.00",
        "ACOS": "25%",
        "Date": "2024-01-15",
    }


@pytest.fixture
def acos_csv_bytes() -> bytes:
    """Three-row ACOS export with one invalid row (row 2)."""
    lines = [
        ACOS_HEADER,
        "Spring Sale,Group A,1000,50,5%,$0.50,$25.00,$100.00,25%,2024-01-15",
        "Spring Sale,Group B,-10,5,150%,$0.50,$2.50,$10.00,25%,2024-01-15",
        "Brand Terms,Group C,2000,80,4%,$1.10,$88.00,$400.00,22%,2024-01-16",
    ]
    return ("\n".join(lines) + "\n").encode()


@pytest.fixture
def no_memory_growth():
    """Memory probe that always reports the same usage."""
    return lambda: 0
