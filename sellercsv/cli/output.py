"""Output formatting, progress indicators and logging setup for the CLI.

This module provides:
- ProgressIndicator: TTY-aware progress indicators for long operations
- handle_error: Formatted error messages with code, context and optional stack traces
- configure_logging: Root logger setup from --log-level / --log-file
"""

import logging
import sys
import traceback
from pathlib import Path
from typing import TextIO

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVELS = ("debug", "info", "warning", "error")


class ProgressIndicator:
    """Simple progress indicator for CLI operations.

    Progress messages go to stderr and are disabled when the stream is not a
    TTY, so redirected output stays clean.

    Example:
        progress = ProgressIndicator(enabled=not quiet)
        progress.start("Processing report.csv")
        progress.update(0.5)
        progress.success("Processed 1000 rows")
    """

    def __init__(self, enabled: bool = True, stream: TextIO = sys.stderr):
        """Initialize progress indicator.

        Args:
            enabled: Whether progress indicators are enabled (default True)
            stream: Output stream for progress messages (default sys.stderr)
        """
        self.enabled = enabled and stream.isatty()
        self.stream = stream
        self._label = ""

    def start(self, message: str) -> None:
        """Display start message with ellipsis."""
        self._label = message
        if self.enabled:
            self.stream.write(f"{message}... ")
            self.stream.flush()

    def update(self, fraction: float) -> None:
        """Redraw the current line with a percentage."""
        if self.enabled:
            self.stream.write(f"\r{self._label}... {fraction * 100:5.1f}% ")
            self.stream.flush()

    def success(self, message: str) -> None:
        """Display success message with checkmark."""
        if self.enabled:
            self.stream.write("✓\n")
        print(message)

    def error(self, message: str) -> None:
        """Display error message with cross symbol."""
        if self.enabled:
            self.stream.write("✗\n")
        print(f"Error: {message}", file=sys.stderr)


def handle_error(error: Exception, verbose: bool = False) -> None:
    """Format and display an error with its code and context.

    Args:
        error: Exception to display
        verbose: Whether to show the stack trace (default False)
    """
    code = getattr(error, "error_code", None)
    prefix = f"Error [{code}]" if code else "Error"
    print(f"{prefix}: {error}", file=sys.stderr)

    context = getattr(error, "context", None)
    if context:
        print("Context:", file=sys.stderr)
        for key, value in context.items():
            print(f"  {key}: {value}", file=sys.stderr)

    if verbose:
        print("\nStack trace:", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)


def configure_logging(level: str = "warning", log_file: Path | None = None) -> None:
    """Configure the root logger for a CLI run.

    Args:
        level: One of debug, info, warning, error
        log_file: Optional file receiving log records instead of stderr

    Raises:
        ValueError: If the level is not recognized
    """
    if level.lower() not in LOG_LEVELS:
        msg = f"Invalid log level '{level}'. Choose from: {', '.join(LOG_LEVELS)}"
        raise ValueError(msg)

    handler: logging.Handler
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logging.basicConfig(level=level.upper(), handlers=[handler], force=True)
