"""ValidationReport for presenting validation outcomes.

A report summarizes one validation pass over an uploaded file. User-facing
output shows only the first few violation messages plus a total count, so
the report carries every message and truncates at formatting time.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sellercsv.core.exceptions import AggregateError


@dataclass
class ValidationReport:
    """Summary of a validation pass.

    Attributes:
        schema_name: Name of the schema the file was validated against
        total_rows: Number of data rows in the file
        errors: Every violation message, in encounter order
        timestamp: When validation was performed
        source: Optional file name or other origin description

    Example:
        >>> report = ValidationReport.from_aggregate("ACOS Report Schema", 10, error)
        >>> print(report.summary())
        ACOS Report Schema: 10 rows, 3 violations in 2 rows
    """

    schema_name: str
    total_rows: int
    errors: list[str] = field(default_factory=list)
    timestamp: datetime = field(default_factory=datetime.now)
    source: str | None = None
    failed_rows: int = 0

    @classmethod
    def from_rows(
        cls, schema_name: str, rows: list[dict[str, Any]], source: str | None = None
    ) -> "ValidationReport":
        """Build a passing report for successfully validated rows."""
        return cls(schema_name=schema_name, total_rows=len(rows), source=source)

    @classmethod
    def from_aggregate(
        cls,
        schema_name: str,
        total_rows: int,
        error: AggregateError,
        source: str | None = None,
    ) -> "ValidationReport":
        """Build a failing report from the AggregateError of a validation pass."""
        rows = {getattr(e, "row", None) for e in error.errors} - {None}
        return cls(
            schema_name=schema_name,
            total_rows=total_rows,
            errors=error.messages,
            source=source,
            failed_rows=len(rows),
        )

    def is_valid(self) -> bool:
        """True when no violations were recorded."""
        return not self.errors

    def summary(self) -> str:
        """Return a one-line summary."""
        if self.is_valid():
            return f"{self.schema_name}: {self.total_rows} rows, all valid"
        return (
            f"{self.schema_name}: {self.total_rows} rows, "
            f"{len(self.errors)} violations in {self.failed_rows} rows"
        )

    def format(self, limit: int | None = 5) -> str:
        """Format the report as human-readable text.

        Args:
            limit: Maximum number of messages to list, None for all

        Returns:
            Summary line followed by the (truncated) violation messages
        """
        lines = [self.summary()]
        shown = self.errors if limit is None else self.errors[:limit]
        lines.extend(f"  - {message}" for message in shown)

        hidden = len(self.errors) - len(shown)
        if hidden > 0:
            lines.append(f"  ... and {hidden} more")

        return "\n".join(lines)

    def to_json(self) -> dict[str, Any]:
        """Export report as a JSON-serializable dictionary."""
        return {
            "schema": self.schema_name,
            "source": self.source,
            "timestamp": self.timestamp.isoformat(),
            "summary": {
                "total_rows": self.total_rows,
                "failed_rows": self.failed_rows,
                "error_count": len(self.errors),
                "is_valid": self.is_valid(),
            },
            "errors": list(self.errors),
        }

    @staticmethod
    def from_json(data: dict[str, Any]) -> "ValidationReport":
        """Reconstruct a report from ``to_json`` output."""
        summary = data["summary"]
        return ValidationReport(
            schema_name=data["schema"],
            total_rows=summary["total_rows"],
            errors=list(data["errors"]),
            timestamp=datetime.fromisoformat(data["timestamp"]),
            source=data.get("source"),
            failed_rows=summary.get("failed_rows", 0),
        )
