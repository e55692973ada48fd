"""Schema-driven CSV row validator.

CsvSchemaValidator checks parsed CSV records against a SchemaDefinition. It
applies each column's transforms, then its type, format, bounds,
allowed-value and custom-rule checks, and collects every violation instead
of stopping at the first one. Validation is all-or-nothing: either every row
is returned transformed, or a single AggregateError carrying every violation
is raised.

Example:
    >>> from sellercsv.core.registry import get_schema
    >>> validator = CsvSchemaValidator(get_schema("PRODUCT_LISTING_SCHEMA"))
    >>> try:
    ...     rows = validator.validate(parsed_rows)
    ... except AggregateError as e:
    ...     for message in e.messages[:5]:
    ...         print(message)
"""

import logging
import re
from collections.abc import Sequence
from datetime import date
from typing import Any

from dateutil import parser as date_parser

from sellercsv.core.exceptions import AggregateError, ValidationError
from sellercsv.core.schema import ColumnDefinition, DataType, SchemaDefinition
from sellercsv.core.transforms import is_finite_number, to_number
from sellercsv.validation.result import FieldResult, Row

logger = logging.getLogger(__name__)

_BOOLEAN_LITERALS = frozenset({"true", "false", "0", "1"})


def is_empty(value: Any) -> bool:
    """Return True for values treated as absent (None or empty string)."""
    return value is None or (isinstance(value, str) and value == "")


def _is_date(value: Any) -> bool:
    if isinstance(value, date):
        return True
    try:
        date_parser.parse(str(value))
    except (ValueError, OverflowError):
        return False
    return True


def check_data_type(value: Any, data_type: DataType) -> bool:
    """Return True if ``value`` is acceptable for ``data_type``.

    Strings accept anything non-empty, numbers must coerce to a finite value,
    dates must be parseable, and booleans must be a bool or one of
    "true", "false", "0", "1" in any case.
    """
    if data_type is DataType.STRING:
        return True
    if data_type is DataType.NUMBER:
        return is_finite_number(value)
    if data_type is DataType.DATE:
        return _is_date(value)
    if data_type is DataType.BOOLEAN:
        return isinstance(value, bool) or str(value).lower() in _BOOLEAN_LITERALS
    return False


def _format_bound(bound: float) -> str:
    return str(int(bound)) if float(bound).is_integer() else str(bound)


def _matches_format(pattern: re.Pattern[str], text: str) -> bool:
    # "$" also matches just before a trailing newline
    match = pattern.search(text)
    if match is None:
        return False
    at_newline = text.endswith("\n") and match.end() == len(text) - 1
    return not (at_newline and pattern.pattern.endswith("$"))


class CsvSchemaValidator:
    """Validates and transforms CSV records against a schema.

    Each instance owns its own error list; two validators can be used on
    different inputs independently.

    Attributes:
        schema: Schema the rows are checked against
    """

    def __init__(self, schema: SchemaDefinition):
        """Initialize validator.

        Args:
            schema: Schema to validate against
        """
        self.schema = schema
        self._errors: list[ValidationError] = []

    def validate(self, rows: Sequence[Row], start_row: int = 1) -> list[Row]:
        """Validate and transform rows.

        Args:
            rows: Parsed CSV records keyed by header text
            start_row: Row number reported for the first record, so callers
                      validating a slice of a file keep file-relative numbers

        Returns:
            Transformed rows, same length and order as the input

        Raises:
            ValidationError: If the schema defines no columns
            AggregateError: If any violation was found; ``errors`` lists them
                           in row-then-column order
        """
        self._errors = []

        if not self.schema.columns:
            raise ValidationError("Invalid schema: no columns defined", schema=self.schema.name)

        transformed = [
            self._validate_row(row, row_number)
            for row_number, row in enumerate(rows, start=start_row)
        ]

        logger.debug(
            "Validated %d rows against %s: %d violations",
            len(rows),
            self.schema.name,
            len(self._errors),
        )

        if self._errors:
            logger.warning(
                "%s validation failed with %d violations", self.schema.name, len(self._errors)
            )
            raise AggregateError(self._errors, "CSV validation failed", schema=self.schema.name)

        return transformed

    def get_validation_errors(self) -> list[ValidationError]:
        """Return a copy of the violations found by the last ``validate`` call."""
        return list(self._errors)

    def _validate_row(self, row: Row, row_number: int) -> Row:
        if self.schema.strict_mode:
            for column in row:
                if column not in self.schema.columns:
                    self._errors.append(
                        ValidationError(
                            f"Unexpected column '{column}' at row {row_number} in strict mode",
                            field=column,
                            row=row_number,
                        )
                    )

        output: Row = {}
        for column, definition in self.schema.columns.items():
            result = self._validate_field(row.get(column), column, definition, row_number)
            self._errors.extend(
                ValidationError(message, field=column, row=row_number)
                for message in result.violations
            )
            output[column] = result.value
        return output

    def _validate_field(
        self, value: Any, column: str, definition: ColumnDefinition, row_number: int
    ) -> FieldResult:
        where = f"for {column} at row {row_number}"

        if is_empty(value):
            if definition.required:
                return FieldResult.failed(value, f"Missing required value {where}")
            return FieldResult.ok(value)

        result = self._apply_transforms(value, definition, where)
        if result.halted:
            return result
        value = result.value

        if not check_data_type(value, definition.data_type):
            return result.halt(f"Invalid {definition.data_type.value} format {where}")

        if definition.format is not None and not _matches_format(definition.format, str(value)):
            result.add(f"Format mismatch {where}")

        if definition.data_type is DataType.NUMBER:
            number = to_number(value)
            if definition.min is not None and number < definition.min:
                result.add(
                    f"{column} value too low at row {row_number} "
                    f"(min {_format_bound(definition.min)})"
                )
            if definition.max is not None and number > definition.max:
                result.add(
                    f"{column} value too high at row {row_number} "
                    f"(max {_format_bound(definition.max)})"
                )

        if definition.allowed_values is not None and str(value) not in definition.allowed_values:
            result.add(f"Invalid value {where}")

        for rule in definition.rules:
            try:
                passed = rule.predicate(value)
            except Exception as e:
                result.add(f"Rule failed {where}: {str(e) or type(e).__name__}")
                continue
            if not passed:
                result.add(f"{rule.message} {where}")

        return result

    @staticmethod
    def _apply_transforms(value: Any, definition: ColumnDefinition, where: str) -> FieldResult:
        for transform in definition.transforms:
            # Transforms are caller-supplied; a failure is a violation on this cell only
            try:
                value = transform(value)
            except Exception as e:
                return FieldResult.failed(value, f"Transform failed {where}: {e}")
        return FieldResult.ok(value)
