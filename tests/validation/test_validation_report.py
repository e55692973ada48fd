"""Tests for ValidationReport aggregation and formatting."""

import json
from datetime import datetime

from hypothesis import given
from hypothesis import strategies as st

from sellercsv.core.exceptions import AggregateError, ValidationError
from sellercsv.validation.report import ValidationReport


def _aggregate(count: int, rows_per_error: int = 1) -> AggregateError:
    return AggregateError(
        [
            ValidationError(f"violation {i}", field="CTR", row=i // rows_per_error + 1)
            for i in range(count)
        ]
    )


class TestValidationReport:
    """Test report construction and formatting."""

    def test_passing_report(self) -> None:
        report = ValidationReport.from_rows("ACOS Report Schema", [{}, {}], source="a.csv")
        assert report.is_valid()
        assert report.total_rows == 2
        assert report.summary() == "ACOS Report Schema: 2 rows, all valid"
        assert report.format() == report.summary()

    def test_from_aggregate_counts_failed_rows(self) -> None:
        report = ValidationReport.from_aggregate("ACOS Report Schema", 10, _aggregate(6, 2))
        assert not report.is_valid()
        assert report.failed_rows == 3
        assert report.summary() == "ACOS Report Schema: 10 rows, 6 violations in 3 rows"

    def test_format_truncates(self) -> None:
        report = ValidationReport.from_aggregate("S", 20, _aggregate(8))
        lines = report.format(limit=5).splitlines()

        assert lines[0] == "S: 20 rows, 8 violations in 8 rows"
        assert lines[1:6] == [f"  - violation {i}" for i in range(5)]
        assert lines[6] == "  ... and 3 more"

    def test_format_without_limit(self) -> None:
        report = ValidationReport.from_aggregate("S", 3, _aggregate(3))
        assert "... and" not in report.format(limit=None)
        assert report.format(limit=None).count("  - violation") == 3

    def test_json_round_trip(self) -> None:
        report = ValidationReport.from_aggregate(
            "S", 4, _aggregate(2), source="upload.csv"
        )
        data = json.loads(json.dumps(report.to_json()))

        assert data["summary"] == {
            "total_rows": 4,
            "failed_rows": 2,
            "error_count": 2,
            "is_valid": False,
        }
        restored = ValidationReport.from_json(data)
        assert restored == report

    def test_timestamp_defaults_to_now(self) -> None:
        before = datetime.now()
        report = ValidationReport("S", 0)
        assert report.timestamp >= before


@given(
    count=st.integers(min_value=1, max_value=40),
    limit=st.integers(min_value=0, max_value=40),
)
def test_property_format_shows_at_most_limit_messages(count, limit) -> None:
    """Formatting lists min(count, limit) messages and mentions the rest."""
    text = ValidationReport.from_aggregate("S", count, _aggregate(count)).format(limit=limit)

    assert text.count("  - violation") == min(count, limit)
    if count > limit:
        assert text.endswith(f"... and {count - limit} more")
    else:
        assert "... and" not in text
