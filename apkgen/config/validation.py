"""
Configuration validation module.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from apkgen.infrastructure.workspace.layout import SUBSTITUTION_TARGETS


@dataclass
class ValidationResult:
    """Result of a configuration validation."""

    is_valid: bool
    message: str


KNOWN_KEYS = [
    "TEMP_ROOT",
    "STAGING_ROOT",
    "TEMPLATE_DIR",
    "BUILD_COMMAND",
    "BUILD_TIMEOUT",
    "REPLACE_ALL_OCCURRENCES",
    "WORKSPACE_MAX_AGE_HOURS",
    "HOST",
    "PORT",
    "CORS_ORIGINS",
    "LOG_LEVEL",
    "LOG_FILE",
]


def validate_template_dir(path: str) -> ValidationResult:
    """Validate that the template project directory exists."""
    template = Path(path)
    if not template.is_dir():
        return ValidationResult(False, f"Template directory does not exist: {template}")
    missing = [rel for rel in SUBSTITUTION_TARGETS if not (template / rel).is_file()]
    if missing:
        return ValidationResult(False, f"Template is missing: {', '.join(missing)}")
    return ValidationResult(True, "Valid template directory")


def validate_positive_number(value: str, key: str) -> ValidationResult:
    """Validate a strictly positive numeric setting."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return ValidationResult(False, f"{key} must be a number")
    if number <= 0:
        return ValidationResult(False, f"{key} must be greater than zero")
    return ValidationResult(True, f"Valid {key}")


def validate_port(value: str) -> ValidationResult:
    """Validate the listening port."""
    try:
        port = int(value)
    except (TypeError, ValueError):
        return ValidationResult(False, "PORT must be an integer")
    if not 0 < port < 65536:
        return ValidationResult(False, "PORT must be between 1 and 65535")
    return ValidationResult(True, "Valid port")


def validate_bool(value: str, key: str) -> ValidationResult:
    """Validate a boolean flag."""
    if value.strip().lower() in ("1", "0", "true", "false", "yes", "no", "on", "off"):
        return ValidationResult(True, f"Valid {key}")
    return ValidationResult(False, f"{key} must be true or false")


def validate_log_level(level: str) -> ValidationResult:
    """Validate log level."""
    valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if level.upper() in valid_levels:
        return ValidationResult(True, "Valid log level")
    return ValidationResult(
        False, f"Invalid log level. Must be one of: {', '.join(valid_levels)}"
    )


def validate_log_file(path: str) -> ValidationResult:
    """Validate log file path."""
    log_dir = Path(path).parent
    if not log_dir.exists():
        return ValidationResult(False, f"Log directory does not exist: {log_dir}")
    return ValidationResult(True, "Valid log file path")


def validate_config(config: Dict[str, Optional[str]]) -> Dict[str, ValidationResult]:
    """Validate all configuration settings.

    Unset keys (``None``) are skipped; unknown keys are reported as invalid.
    """
    results = {}

    for key, value in config.items():
        if value is None:
            continue
        if key not in KNOWN_KEYS:
            results[key] = ValidationResult(False, f"Invalid configuration key: {key}")
        elif key == "TEMPLATE_DIR":
            results[key] = validate_template_dir(value)
        elif key in ("BUILD_TIMEOUT", "WORKSPACE_MAX_AGE_HOURS"):
            results[key] = validate_positive_number(value, key)
        elif key == "PORT":
            results[key] = validate_port(value)
        elif key == "REPLACE_ALL_OCCURRENCES":
            results[key] = validate_bool(value, key)
        elif key == "LOG_LEVEL":
            results[key] = validate_log_level(value)
        elif key == "LOG_FILE":
            results[key] = validate_log_file(value)

    return results
