"""Configuration file loading and validation.

This module handles loading configuration from JSON and YAML files, merging
CLI arguments with file-based configuration (CLI takes precedence), and
checking that the configuration refers to a registered schema and uses
sensible sizes.

Configuration files can specify:
- schema: Registry key or display name of the schema to validate against
- batch_size: Rows per chunk for the process command
- memory_threshold: Bytes of memory growth that abort processing
- error_limit: Number of violation messages printed by validate
- log_level: debug, info, warning or error

Example (YAML):
    schema: ACOS_SCHEMA
    batch_size: 500
    error_limit: 10
"""

import json
from pathlib import Path
from typing import Any

import yaml

from sellercsv.cli.output import LOG_LEVELS
from sellercsv.core.registry import find_schema

KNOWN_KEYS = frozenset({"schema", "batch_size", "memory_threshold", "error_limit", "log_level"})
_POSITIVE_INT_KEYS = ("batch_size", "memory_threshold", "error_limit")


class ConfigError(Exception):
    """Configuration file error.

    Raised when configuration files cannot be loaded or parsed.
    """


def load_config(path: Path) -> dict[str, Any]:
    """Load configuration from a JSON or YAML file.

    The format is chosen by extension (.json, .yaml, .yml); other extensions
    are tried as JSON first, then YAML.

    Args:
        path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        ConfigError: If the file is missing, unparsable or not a mapping
    """
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        content = path.read_text()
    except OSError as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    try:
        if path.suffix == ".json":
            config = json.loads(content)
        elif path.suffix in (".yaml", ".yml"):
            config = yaml.safe_load(content)
        else:
            try:
                config = json.loads(content)
            except json.JSONDecodeError:
                config = yaml.safe_load(content)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"Configuration in {path} must be a mapping, got {type(config).__name__}"
        )
    return config


def merge_config(base: dict[str, Any], **overrides: Any) -> dict[str, Any]:
    """Merge CLI arguments into base configuration.

    Only non-None overrides are applied, so file values are used when an
    argument was not given.

    Example:
        >>> merge_config({"schema": "ACOS_SCHEMA", "batch_size": 500}, batch_size=None)
        {'schema': 'ACOS_SCHEMA', 'batch_size': 500}
    """
    merged = base.copy()
    for key, value in overrides.items():
        if value is not None:
            merged[key] = value
    return merged


def validate_config(config: dict[str, Any]) -> list[str]:
    """Validate configuration values.

    Checks that the schema is registered, that sizes are positive integers,
    that the log level is known and that no unknown keys are present.

    Returns:
        List of validation error messages (empty list if valid)
    """
    errors = []

    unknown = sorted(set(config) - KNOWN_KEYS)
    if unknown:
        errors.append(f"Unknown configuration keys: {', '.join(unknown)}")

    if "schema" in config:
        try:
            find_schema(str(config["schema"]))
        except KeyError as e:
            errors.append(e.args[0])

    for key in _POSITIVE_INT_KEYS:
        if key in config:
            value = config[key]
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                errors.append(f"'{key}' must be a positive integer, got {value!r}")

    if "log_level" in config and str(config["log_level"]).lower() not in LOG_LEVELS:
        errors.append(
            f"Invalid log_level '{config['log_level']}'. Choose from: {', '.join(LOG_LEVELS)}"
        )

    return errors
