"""Exit code constants for CLI commands.

Exit codes:
    0: SUCCESS - Operation completed successfully
    1: UNEXPECTED_ERROR - Unexpected/unhandled exception
    2: VALIDATION_ERROR - Rows violate the schema
    3: READER_ERROR - Input file missing or not parseable as CSV
    4: PROCESSING_ERROR - Batch aborted (memory threshold exceeded)
    6: CONFIG_ERROR - Configuration file, argument or unknown schema
"""


class ExitCode:
    """Standard exit codes for CLI commands.

    Example:
        >>> import sys
        >>> from sellercsv.cli.exit_codes import ExitCode
        >>> sys.exit(ExitCode.VALIDATION_ERROR)
    """

    SUCCESS = 0
    """Operation completed successfully."""

    UNEXPECTED_ERROR = 1
    """Unexpected or unhandled exception occurred."""

    VALIDATION_ERROR = 2
    """One or more rows violate the schema."""

    READER_ERROR = 3
    """Input file reading or parsing failed."""

    PROCESSING_ERROR = 4
    """Batch processing was aborted."""

    CONFIG_ERROR = 6
    """Configuration file or argument error."""
