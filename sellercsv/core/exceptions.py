"""Custom exception classes for sellercsv error handling.

This module defines the exception hierarchy for CSV ingestion:
- ValidationError: A single field-level violation (or a schema setup error)
- AggregateError: Every violation found during one validation pass
- ReaderError: CSV bytes or files that cannot be parsed
- DataProcessingError: Fatal batch processing failures
- SecurityError, RateLimitError, AuthenticationError, AmazonAPIError,
  InventoryOptimizationError, PricingOptimizationError: domain failures
  raised by business-rule validators and API collaborators

All exceptions inherit from SellerCsvError and carry a stable ``error_code``
so that callers can map them to user-facing messages.
"""

from collections.abc import Sequence
from typing import Any


class SellerCsvError(Exception):
    """Base exception for all sellercsv errors.

    Attributes:
        error_code: Stable string code identifying the error kind
        message: Human-readable error description
        context: Structured payload (field names, row numbers, values, ...)
    """

    error_code = "GEN_001"

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error description
            context: Optional dictionary of contextual information
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return a formatted error message with context."""
        if not self.context:
            return self.message

        context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"{self.message} [{context_str}]"


def _build_context(extra_context: dict[str, Any], **known: Any) -> dict[str, Any]:
    context = {key: value for key, value in known.items() if value is not None}
    context.update(extra_context)
    return context


class ValidationError(SellerCsvError):
    """Exception describing a field-level validation violation.

    Violations are collected by the validator rather than raised one by one;
    they surface to callers inside an AggregateError. A ValidationError is
    raised directly only for schema configuration problems.

    Context typically includes:
        - field: Column name the violation refers to
        - row: 1-based row number
    """

    error_code = "VAL_001"

    def __init__(
        self,
        message: str,
        field: str | None = None,
        row: int | None = None,
        **extra_context: Any,
    ) -> None:
        """Initialize validation error with violation details.

        Args:
            message: Human-readable error description
            field: Name of the column that failed validation
            row: 1-based row number of the offending record
            **extra_context: Additional context information
        """
        self.field = field
        self.row = row
        super().__init__(message, _build_context(extra_context, field=field, row=row))


class AggregateError(SellerCsvError):
    """Exception wrapping every violation found during one validation pass.

    The ``errors`` list preserves encounter order (row, then column) and is
    never empty.

    Example:
        >>> try:
        ...     validator.validate(rows)
        ... except AggregateError as e:
        ...     for error in e.errors[:5]:
        ...         print(error.message)
    """

    error_code = "AGG_001"

    def __init__(
        self,
        errors: Sequence[Exception],
        message: str = "CSV validation failed",
        **extra_context: Any,
    ) -> None:
        """Initialize aggregate error.

        Args:
            errors: Non-empty sequence of collected errors
            message: Human-readable summary
            **extra_context: Additional context information

        Raises:
            ValueError: If errors is empty
        """
        if not errors:
            msg = "AggregateError requires at least one error"
            raise ValueError(msg)

        self.errors = list(errors)
        super().__init__(message, _build_context(extra_context))

    def __str__(self) -> str:
        """Return the summary message with the number of wrapped errors."""
        return f"{super().__str__()} ({len(self.errors)} errors)"

    @property
    def messages(self) -> list[str]:
        """Messages of the wrapped errors, in order."""
        return [getattr(error, "message", str(error)) for error in self.errors]


class ReaderError(SellerCsvError):
    """Exception raised when CSV input cannot be parsed.

    Context typically includes:
        - file_path: Path to the input file (when reading from disk)
        - reason: Specific reason for the parsing failure
    """

    error_code = "READ_001"

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        reason: str | None = None,
        **extra_context: Any,
    ) -> None:
        super().__init__(
            message, _build_context(extra_context, file_path=file_path, reason=reason)
        )


class DataProcessingError(SellerCsvError):
    """Exception raised when a batch must be aborted.

    Row-level problems never raise this error; it signals operational
    failures such as the memory threshold being exceeded.
    """

    error_code = "DATA_001"

    def __init__(
        self,
        message: str,
        data: dict[str, Any] | None = None,
        **extra_context: Any,
    ) -> None:
        self.data = data
        super().__init__(message, _build_context(extra_context))


class SecurityError(SellerCsvError):
    """Exception raised for rejected or unsafe input."""

    error_code = "SEC_001"

    def __init__(
        self, message: str, security_type: str | None = None, **extra_context: Any
    ) -> None:
        self.security_type = security_type
        super().__init__(
            message, _build_context(extra_context, security_type=security_type)
        )


class RateLimitError(SellerCsvError):
    """Exception raised when a collaborator reports too many requests."""

    error_code = "RATE_001"

    def __init__(
        self, message: str, retry_after: float | None = None, **extra_context: Any
    ) -> None:
        self.retry_after = retry_after
        super().__init__(message, _build_context(extra_context, retry_after=retry_after))


class AuthenticationError(SellerCsvError):
    """Exception raised when credentials are missing or rejected."""

    error_code = "AUTH_001"


class AmazonAPIError(SellerCsvError):
    """Exception raised when an Amazon API call fails."""

    error_code = "API_001"

    def __init__(
        self, message: str, status_code: int | None = None, **extra_context: Any
    ) -> None:
        self.status_code = status_code
        super().__init__(message, _build_context(extra_context, status_code=status_code))


class InventoryOptimizationError(SellerCsvError):
    """Exception raised when campaign or trend data is invalid.

    ``details`` holds the individual violation messages.
    """

    error_code = "INVENTORY_001"

    def __init__(
        self, message: str, details: Sequence[str] = (), **extra_context: Any
    ) -> None:
        self.details = list(details)
        super().__init__(message, _build_context(extra_context))


class PricingOptimizationError(SellerCsvError):
    """Exception raised when pricing input is invalid."""

    error_code = "PRICING_002"

    def __init__(
        self,
        message: str,
        historical_data: Sequence[float] | None = None,
        details: Sequence[str] = (),
        **extra_context: Any,
    ) -> None:
        self.historical_data = list(historical_data) if historical_data is not None else None
        self.details = list(details)
        super().__init__(message, _build_context(extra_context))
