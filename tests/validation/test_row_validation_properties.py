"""Property-based tests for CsvSchemaValidator.

Properties:
- Completeness: every missing required value is reported with its column and row
- All-or-nothing: any violation makes validate raise
- Order preservation: valid input yields one output row per input row, in order
- Strict mode: undeclared columns are always reported
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from sellercsv.core.exceptions import AggregateError
from sellercsv.core.schema import ColumnDefinition, DataType, SchemaDefinition
from sellercsv.core.transforms import CURRENCY_TO_NUMBER
from sellercsv.validation.validator import CsvSchemaValidator

INVENTORY_SCHEMA = SchemaDefinition(
    name="Inventory",
    version="1.0.0",
    description="SKU, quantity and price",
    strict_mode=True,
    columns={
        "SKU": ColumnDefinition(DataType.STRING, required=True),
        "Quantity": ColumnDefinition(DataType.NUMBER, required=True, min=0),
        "Price": ColumnDefinition(
            DataType.NUMBER, required=True, min=0, transforms=(CURRENCY_TO_NUMBER,)
        ),
    },
)

COLUMNS = INVENTORY_SCHEMA.column_names()


@st.composite
def valid_row(draw: st.DrawFn) -> dict[str, str]:
    """Generate a row that satisfies INVENTORY_SCHEMA."""
    dollars = draw(st.integers(min_value=0, max_value=99_999))
    cents = draw(st.integers(min_value=0, max_value=99))
    sku_chars = st.characters(whitelist_categories=("Lu", "Nd"), whitelist_characters="-")
    return {
        "SKU": draw(st.text(alphabet=sku_chars, min_size=1, max_size=12)),
        "Quantity": str(draw(st.integers(min_value=0, max_value=100_000))),
        "Price": f"${dollars}.{cents:02d}",
    }


valid_rows = st.lists(valid_row(), min_size=1, max_size=20)


@given(rows=valid_rows)
def test_property_order_preservation(rows) -> None:
    """Valid input of N rows yields N output rows, each matching its input row."""
    result = CsvSchemaValidator(INVENTORY_SCHEMA).validate(rows)

    assert len(result) == len(rows)
    for original, output in zip(rows, result):
        assert output["SKU"] == original["SKU"]
        assert output["Quantity"] == original["Quantity"]
        assert output["Price"] == pytest.approx(float(original["Price"].lstrip("$")))


@given(
    rows=valid_rows,
    data=st.data(),
    blank=st.sampled_from([None, ""]),
)
def test_property_missing_required_values_are_reported(rows, data, blank) -> None:
    """Every blanked required cell produces a violation naming its column and row."""
    row_index = data.draw(st.integers(min_value=0, max_value=len(rows) - 1))
    column = data.draw(st.sampled_from(COLUMNS))
    rows[row_index] = dict(rows[row_index], **{column: blank})

    with pytest.raises(AggregateError) as exc_info:
        CsvSchemaValidator(INVENTORY_SCHEMA).validate(rows)

    row_number = row_index + 1
    assert any(
        error.field == column
        and error.row == row_number
        and column in error.message
        and f"row {row_number}" in error.message
        for error in exc_info.value.errors
    )


@given(
    rows=valid_rows,
    data=st.data(),
    bad_value=st.sampled_from(["-1", "abc", "", "$-3.00"]),
)
def test_property_all_or_nothing(rows, data, bad_value) -> None:
    """A single bad cell anywhere means validate never returns."""
    row_index = data.draw(st.integers(min_value=0, max_value=len(rows) - 1))
    column = data.draw(st.sampled_from(["Quantity", "Price"]))
    rows[row_index] = dict(rows[row_index], **{column: bad_value})

    validator = CsvSchemaValidator(INVENTORY_SCHEMA)
    with pytest.raises(AggregateError) as exc_info:
        validator.validate(rows)
    assert exc_info.value.errors == validator.get_validation_errors()


@given(
    rows=valid_rows,
    extra=st.text(min_size=1, max_size=15).filter(lambda name: name not in COLUMNS),
)
def test_property_strict_mode_rejects_unknown_columns(rows, extra) -> None:
    """An undeclared column is reported for every row that carries it."""
    rows = [dict(row, **{extra: "x"}) for row in rows]

    with pytest.raises(AggregateError) as exc_info:
        CsvSchemaValidator(INVENTORY_SCHEMA).validate(rows)

    unexpected = [e for e in exc_info.value.errors if e.field == extra]
    assert len(unexpected) == len(rows)
    assert all(f"'{extra}'" in e.message for e in unexpected)
