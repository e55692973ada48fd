"""Per-field validation outcome.

Validating one cell either yields a value or one or more violation messages.
FieldResult models that outcome explicitly so that bad input data, the
common case for uploaded reports, flows through ordinary return values and
is reduced into the row's violation list by the validator.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

Value = str | int | float | bool | date | datetime | None
"""Cell value after transformation."""

Row = dict[str, Any]
"""A CSV record keyed by header text."""


@dataclass
class FieldResult:
    """Outcome of validating one column of one row.

    Attributes:
        value: The (possibly transformed) value to store in the output row
        violations: Violation messages, in the order they were detected
        halted: True when a check stopped further checks on this field
    """

    value: Value
    violations: list[str] = field(default_factory=list)
    halted: bool = False

    @property
    def is_ok(self) -> bool:
        """True when no violations were recorded."""
        return not self.violations

    def add(self, message: str) -> "FieldResult":
        """Record a violation and keep checking."""
        self.violations.append(message)
        return self

    def halt(self, message: str) -> "FieldResult":
        """Record a violation that stops the remaining checks."""
        self.violations.append(message)
        self.halted = True
        return self

    @classmethod
    def ok(cls, value: Value) -> "FieldResult":
        return cls(value=value)

    @classmethod
    def failed(cls, value: Value, message: str) -> "FieldResult":
        return cls(value=value, violations=[message], halted=True)
