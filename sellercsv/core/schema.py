"""Declarative CSV schema model.

A schema describes the tabular shape expected from an uploaded report: a
named, versioned set of column definitions keyed by the exact (case-sensitive)
header text. Each column carries a data type, a required flag, and optional
format pattern, numeric bounds, allowed values, custom rules and value
transforms.

Schemas are configuration: they are built once and never mutated.

Example:
    >>> schema = SchemaDefinition(
    ...     name="Mini Report",
    ...     version="1.0.0",
    ...     description="Two-column example",
    ...     columns={
    ...         "Clicks": ColumnDefinition(DataType.NUMBER, required=True, min=0),
    ...         "Date": ColumnDefinition(DataType.DATE, format=r"^\\d{4}-\\d{2}-\\d{2}$"),
    ...     },
    ... )
    >>> schema.required_columns()
    ['Clicks']
"""

import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any


class DataType(Enum):
    """Column data types understood by the validator."""

    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class ValidationRule:
    """Domain-specific check that is not expressible with the built-in options.

    Attributes:
        predicate: Called with the (transformed) value; False is a violation
        message: Message prefix used when the predicate fails
    """

    predicate: Callable[[Any], bool]
    message: str


@dataclass(frozen=True)
class ColumnTransform:
    """Pure value rewrite applied before validation.

    Attributes:
        func: Receives the previous step's output and returns the new value
        description: Human-readable description for documentation output
    """

    func: Callable[[Any], Any]
    description: str = ""

    def __call__(self, value: Any) -> Any:
        return self.func(value)


@dataclass(frozen=True)
class ColumnDefinition:
    """Expected shape of a single CSV column.

    Transforms run before every other check and compose left to right. Bounds
    apply to the numeric interpretation of the transformed value and only for
    NUMBER columns.

    Attributes:
        data_type: Expected type of the value
        required: Whether an absent or empty value is a violation
        format: Pattern the stringified value must match (str is compiled)
        min: Inclusive lower bound for NUMBER columns
        max: Inclusive upper bound for NUMBER columns
        allowed_values: Permitted stringified values
        rules: Custom rules evaluated in order
        transforms: Transforms applied in order
        description: Human-readable column description
    """

    data_type: DataType
    required: bool = False
    format: re.Pattern[str] | str | None = None
    min: float | None = None
    max: float | None = None
    allowed_values: tuple[str, ...] | None = None
    rules: tuple[ValidationRule, ...] = ()
    transforms: tuple[ColumnTransform, ...] = ()
    description: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.data_type, str):
            object.__setattr__(self, "data_type", DataType(self.data_type))
        if isinstance(self.format, str):
            object.__setattr__(self, "format", re.compile(self.format))
        if self.allowed_values is not None:
            object.__setattr__(self, "allowed_values", tuple(self.allowed_values))
        object.__setattr__(self, "rules", tuple(self.rules))
        object.__setattr__(self, "transforms", tuple(self.transforms))
        if self.min is not None and self.max is not None and self.min > self.max:
            msg = f"min ({self.min}) must not exceed max ({self.max})"
            raise ValueError(msg)

    def describe(self) -> dict[str, Any]:
        """Return a plain dictionary describing the column."""
        info: dict[str, Any] = {
            "data_type": self.data_type.value,
            "required": self.required,
        }
        if self.format is not None:
            info["format"] = self.format.pattern
        if self.min is not None:
            info["min"] = self.min
        if self.max is not None:
            info["max"] = self.max
        if self.allowed_values is not None:
            info["allowed_values"] = list(self.allowed_values)
        if self.rules:
            info["rules"] = [rule.message for rule in self.rules]
        if self.transforms:
            info["transforms"] = [t.description for t in self.transforms]
        if self.description:
            info["description"] = self.description
        return info


@dataclass(frozen=True)
class SchemaDefinition:
    """Named, versioned collection of column definitions.

    Attributes:
        name: Human-readable schema name (e.g. "ACOS Report Schema")
        version: Schema version string
        description: What kind of report the schema describes
        columns: Column name to definition; wrapped read-only on construction
        strict_mode: When True, columns not declared here are violations
    """

    name: str
    version: str
    description: str
    columns: Mapping[str, ColumnDefinition] = field(default_factory=dict)
    strict_mode: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", MappingProxyType(dict(self.columns)))

    def column_names(self) -> list[str]:
        """Return the declared column names in declaration order."""
        return list(self.columns)

    def required_columns(self) -> list[str]:
        """Return the names of required columns in declaration order."""
        return [name for name, definition in self.columns.items() if definition.required]

    def missing_headers(self, headers: Iterable[str]) -> list[str]:
        """Return required columns that do not appear in a header row.

        Args:
            headers: Header strings as read from the CSV file

        Returns:
            Missing required column names (empty list when all are present)
        """
        present = set(headers)
        return [name for name in self.required_columns() if name not in present]

    def unexpected_headers(self, headers: Iterable[str]) -> list[str]:
        """Return header strings that are not declared by this schema."""
        return [header for header in headers if header not in self.columns]

    def describe(self) -> dict[str, Any]:
        """Return a plain dictionary describing the schema."""
        return {
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "strict_mode": self.strict_mode,
            "columns": {name: d.describe() for name, d in self.columns.items()},
        }
