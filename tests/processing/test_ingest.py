"""Tests for the parse_and_validate ingestion entry point."""

import pytest

from sellercsv.core.exceptions import AggregateError, ReaderError
from sellercsv.processing.ingest import parse_and_validate

LISTING_CSV = (
    b"ASIN,Title,Price,Category,Rating,Review Count,Stock Status\n"
    b"B01ABCDEFG,Steel Water Bottle,$19.99,Kitchen,4.6,1520,In Stock\n"
    b'B02ABCDEFG,"Mug, blue",$9.50,Kitchen,4.1,88,Limited Stock\n'
)


class TestParseAndValidate:
    def test_valid_upload(self) -> None:
        result = parse_and_validate(LISTING_CSV, "PRODUCT_LISTING_SCHEMA")

        assert result.is_ok
        assert result.schema_name == "Product Listing Schema"
        assert result.total_rows == 2
        assert [row["Price"] for row in result.unwrap()] == [19.99, 9.5]
        assert result.headers[0] == "ASIN"

    def test_schema_display_name(self) -> None:
        result = parse_and_validate(LISTING_CSV, "Product Listing Schema")
        assert result.is_ok

    def test_invalid_upload_returns_error(self, acos_csv_bytes) -> None:
        result = parse_and_validate(acos_csv_bytes, "ACOS_SCHEMA")

        assert not result.is_ok
        assert result.rows == []
        assert result.total_rows == 3
        assert all(error.row == 2 for error in result.error.errors)
        with pytest.raises(AggregateError):
            result.unwrap()

    def test_report(self, acos_csv_bytes) -> None:
        report = parse_and_validate(acos_csv_bytes, "ACOS_SCHEMA").report(source="acos.csv")

        assert report.source == "acos.csv"
        assert report.failed_rows == 1
        assert report.summary().startswith("ACOS Report Schema: 3 rows, ")

    def test_missing_columns_are_reported_per_row(self) -> None:
        result = parse_and_validate(b"ASIN,Title\nB01ABCDEFG,Bottle\n", "PRODUCT_LISTING_SCHEMA")
        assert "Missing required value for Price at row 1" in result.error.messages

    def test_path_input(self, tmp_path) -> None:
        path = tmp_path / "listing.csv"
        path.write_bytes(LISTING_CSV)
        assert parse_and_validate(path, "PRODUCT_LISTING_SCHEMA").is_ok

    def test_unknown_schema(self) -> None:
        with pytest.raises(KeyError, match="Unknown schema"):
            parse_and_validate(LISTING_CSV, "SALES_SCHEMA")

    def test_unparseable_input(self) -> None:
        with pytest.raises(ReaderError):
            parse_and_validate(b"a,b\n1,2,3,4\n", "PRODUCT_LISTING_SCHEMA")

    def test_header_only_upload_is_valid(self) -> None:
        result = parse_and_validate(
            b"ASIN,Title,Price,Category,Rating,Review Count,Stock Status\n",
            "PRODUCT_LISTING_SCHEMA",
        )
        assert result.is_ok
        assert result.rows == []
