"""CLI command implementations.

This module implements the sellercsv commands:
- validate: Validate a CSV file against a registered schema
- process: Run a CSV file through the batch processor with progress output
- inspect: Show headers, row count and matching schemas of a CSV file
- list_schemas / describe_schema: Explore the schema registry
- check_config: Validate configuration files

Each command returns an exit code, so commands can be called directly from
tests as well as through the Cyclopts app.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Annotated, Any

from cyclopts import Parameter

from sellercsv.cli.config import ConfigError, load_config, merge_config, validate_config
from sellercsv.cli.exit_codes import ExitCode
from sellercsv.cli.output import ProgressIndicator, configure_logging, handle_error
from sellercsv.core import registry
from sellercsv.core.exceptions import DataProcessingError, ReaderError
from sellercsv.core.registry import SCHEMA_REGISTRY, find_schema
from sellercsv.processing.batch import BatchOptions, BatchProcessor
from sellercsv.processing.ingest import parse_and_validate
from sellercsv.processing.reader import CsvReader

logger = logging.getLogger(__name__)

DEFAULT_ERROR_LIMIT = 5


def _load_settings(
    config: Path | None, log_file: Path | None = None, **overrides: Any
) -> dict[str, Any]:
    settings: dict[str, Any] = load_config(config) if config else {}
    settings = merge_config(settings, **overrides)
    errors = validate_config(settings)
    if errors:
        raise ConfigError("; ".join(errors))
    configure_logging(settings.get("log_level", "warning"), log_file)
    return settings


def _require_columns(columns: list[str]):
    def validate_row(row: dict[str, Any]) -> bool:
        missing = [c for c in columns if row.get(c) in (None, "")]
        if missing:
            raise ValueError(f"Missing required columns: {', '.join(missing)}")
        return True

    return validate_row


def validate(
    input_path: Annotated[Path, Parameter(help="CSV file to validate")],
    schema: Annotated[str | None, Parameter(help="Schema key or name (see list-schemas)")] = None,
    limit: Annotated[int | None, Parameter(help="Number of violations to show")] = None,
    as_json: Annotated[bool, Parameter(name="--json", help="Print the report as JSON")] = False,
    config: Annotated[Path | None, Parameter(help="Configuration file path")] = None,
    log_level: Annotated[str | None, Parameter(help="debug, info, warning or error")] = None,
    verbose: Annotated[bool, Parameter(help="Show detailed error information")] = False,
) -> int:
    """Validate a CSV file against a registered schema.

    Prints a success line with the row count, or the first few violations
    and the total count.

    Returns:
        Exit code (0 valid, 2 violations, 3 unreadable file, 6 configuration)
    """
    try:
        settings = _load_settings(
            config, schema=schema, error_limit=limit, log_level=log_level
        )
        schema_name = settings.get("schema")
        if not schema_name:
            print("Error: No schema given. Use --schema or a config file.", file=sys.stderr)
            return ExitCode.CONFIG_ERROR

        logger.info("Validating %s against %s", input_path, schema_name)
        result = parse_and_validate(input_path, schema_name)
        report = result.report(source=input_path.name)

        if as_json:
            print(json.dumps(report.to_json(), indent=2))
        elif result.is_ok:
            print(f"✓ Validation successful: {result.total_rows} rows ({result.schema_name})")
        else:
            print("✗ Validation failed:", file=sys.stderr)
            limit = settings.get("error_limit", DEFAULT_ERROR_LIMIT)
            print(report.format(limit=limit), file=sys.stderr)

        return ExitCode.SUCCESS if result.is_ok else ExitCode.VALIDATION_ERROR

    except ConfigError as e:
        handle_error(e, verbose=verbose)
        return ExitCode.CONFIG_ERROR
    except KeyError as e:
        print(f"Error: {e.args[0]}", file=sys.stderr)
        return ExitCode.CONFIG_ERROR
    except ReaderError as e:
        handle_error(e, verbose=verbose)
        return ExitCode.READER_ERROR
    except Exception as e:
        handle_error(e, verbose=verbose)
        return ExitCode.UNEXPECTED_ERROR


def process(
    input_path: Annotated[Path, Parameter(help="CSV file to process")],
    schema: Annotated[str | None, Parameter(help="Schema key or name")] = None,
    require: Annotated[
        list[str] | None, Parameter(help="Column that must be non-empty (repeatable)")
    ] = None,
    batch_size: Annotated[int | None, Parameter(help="Rows per batch")] = None,
    memory_threshold: Annotated[int | None, Parameter(help="Memory growth limit in bytes")] = None,
    limit: Annotated[int | None, Parameter(help="Number of row errors to show")] = None,
    config: Annotated[Path | None, Parameter(help="Configuration file path")] = None,
    quiet: Annotated[bool, Parameter(help="Suppress progress output")] = False,
    verbose: Annotated[bool, Parameter(help="Show detailed error information")] = False,
    log_level: Annotated[str | None, Parameter(help="debug, info, warning or error")] = None,
    log_file: Annotated[Path | None, Parameter(help="Log file path")] = None,
) -> int:
    """Process a CSV file in batches, tolerating bad rows.

    Rows are checked against the schema when one is given, otherwise against
    the --require columns. Failing rows are counted and listed; processing
    continues past them.

    Returns:
        Exit code (0 no row errors, 2 row errors, 3 unreadable file,
        4 batch aborted, 6 configuration)
    """
    try:
        settings = _load_settings(
            config,
            log_file=log_file,
            schema=schema,
            batch_size=batch_size,
            memory_threshold=memory_threshold,
            error_limit=limit,
            log_level=log_level,
        )

        options = BatchOptions(
            batch_size=settings.get("batch_size", BatchOptions.batch_size),
            memory_threshold=settings.get("memory_threshold", BatchOptions.memory_threshold),
        )
        if settings.get("schema"):
            options.schema = find_schema(settings["schema"])
        elif require:
            options.validate_row = _require_columns(require)

        processor = BatchProcessor(options)
        logger.info("Processing %s in batches of %d", input_path, options.batch_size)
        progress = ProgressIndicator(enabled=not quiet)
        progress.start(f"Processing {input_path.name}")

        result = processor.process_file(
            input_path, on_progress=lambda p: progress.update(p.fraction)
        )
        final = result.progress
        progress.success(
            f"Processed {final.total_rows} rows in {final.current_batch} batches: "
            f"{final.processed_rows} valid, {final.error_count} failed"
        )

        if result.errors:
            error_limit = settings.get("error_limit", DEFAULT_ERROR_LIMIT)
            print("\nRow errors:", file=sys.stderr)
            for error in result.errors[:error_limit]:
                print(f"  row {error.row}: {error.error}", file=sys.stderr)
            hidden = len(result.errors) - error_limit
            if hidden > 0:
                print(f"  ... and {hidden} more", file=sys.stderr)
            return ExitCode.VALIDATION_ERROR

        return ExitCode.SUCCESS

    except ConfigError as e:
        handle_error(e, verbose=verbose)
        return ExitCode.CONFIG_ERROR
    except KeyError as e:
        print(f"Error: {e.args[0]}", file=sys.stderr)
        return ExitCode.CONFIG_ERROR
    except ReaderError as e:
        handle_error(e, verbose=verbose)
        return ExitCode.READER_ERROR
    except DataProcessingError as e:
        handle_error(e, verbose=verbose)
        return ExitCode.PROCESSING_ERROR
    except Exception as e:
        handle_error(e, verbose=verbose)
        return ExitCode.UNEXPECTED_ERROR


def inspect(
    input_path: Annotated[Path, Parameter(help="CSV file to inspect")],
    sample: Annotated[int | None, Parameter(help="Show first N rows")] = None,
) -> int:
    """Display headers, row count and matching schemas of a CSV file.

    Returns:
        Exit code (0 for success, 3 for unreadable files)
    """
    try:
        df = CsvReader().read(input_path)

        print(f"File: {input_path}")
        print(f"Rows: {df.height}")
        print("\nColumns:")
        for column in df.columns:
            print(f"  {column}")

        print("\nSchemas:")
        for key, schema in sorted(SCHEMA_REGISTRY.items()):
            missing = schema.missing_headers(df.columns)
            extra = schema.unexpected_headers(df.columns) if schema.strict_mode else []
            if missing:
                status = f"missing {', '.join(missing)}"
            elif extra:
                status = f"extra columns {', '.join(extra)} (strict)"
            else:
                status = "all required columns present"
            print(f"  {key:25} {status}")

        if sample:
            print(f"\nSample ({sample} rows):")
            print(df.head(sample))

        return ExitCode.SUCCESS

    except ReaderError as e:
        handle_error(e, verbose=False)
        return ExitCode.READER_ERROR
    except Exception as e:
        handle_error(e, verbose=False)
        return ExitCode.UNEXPECTED_ERROR


def list_schemas() -> int:
    """List registered schemas with descriptions.

    Returns:
        Exit code (always 0)
    """
    print("Available schemas:")
    for key, description in registry.list_schemas().items():
        print(f"  {key:25} {description}")
    return ExitCode.SUCCESS


def describe_schema(
    key: Annotated[str, Parameter(help="Schema key or name")],
    as_json: Annotated[bool, Parameter(name="--json", help="Print the schema as JSON")] = False,
) -> int:
    """Show the columns and rules of a schema.

    Returns:
        Exit code (0 for success, 6 for unknown schemas)
    """
    try:
        schema = find_schema(key)
    except KeyError as e:
        print(f"Error: {e.args[0]}", file=sys.stderr)
        return ExitCode.CONFIG_ERROR

    info = schema.describe()
    if as_json:
        print(json.dumps(info, indent=2))
        return ExitCode.SUCCESS

    mode = "strict" if schema.strict_mode else "lenient"
    print(f"{schema.name} v{schema.version} ({mode})")
    print(schema.description)
    print("\nColumns:")
    for name, column in info["columns"].items():
        marker = "required" if column["required"] else "optional"
        details = [
            f"{option}={column[option]}"
            for option in ("format", "min", "max", "allowed_values")
            if option in column
        ]
        suffix = f" {' '.join(details)}" if details else ""
        print(f"  {name:20} {column['data_type']:8} {marker}{suffix}")
    return ExitCode.SUCCESS


def check_config(
    config_path: Annotated[Path, Parameter(help="Configuration file path")],
) -> int:
    """Validate a configuration file.

    Returns:
        Exit code (0 for valid config, 6 for invalid config)
    """
    try:
        config = load_config(config_path)
        errors = validate_config(config)

        if errors:
            print("✗ Configuration validation failed:", file=sys.stderr)
            for error in errors:
                print(f"  {error}", file=sys.stderr)
            return ExitCode.CONFIG_ERROR

        print("✓ Configuration is valid")
        for key in sorted(config):
            print(f"  {key}: {config[key]}")
        return ExitCode.SUCCESS

    except ConfigError as e:
        print("✗ Configuration error:", file=sys.stderr)
        print(f"  {e}", file=sys.stderr)
        return ExitCode.CONFIG_ERROR
    except Exception as e:
        handle_error(e, verbose=False)
        return ExitCode.UNEXPECTED_ERROR
