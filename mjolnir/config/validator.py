"""
Configuration Validation
========================

Type-shape check of a parsed configuration file against the schema.

Only shapes are checked (a string where a number is expected, a scalar where
a section is expected, ...). Values themselves are never range-checked.

Levels:
1. OFF: no check at all
2. PERMISSIVE: findings are logged, the file's values are used unchanged
3. STRICT: any type error aborts loading with ConfigValidationError
"""

import logging
import os
import typing
from collections.abc import Mapping
from dataclasses import dataclass, field, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Union

from .errors import ConfigValidationError, InvalidValidationLevelError
from .schema import MjolnirConfig, schema_fields

logger = logging.getLogger(__name__)

VALIDATION_ENV = "MJOLNIR_CONFIG_VALIDATION"
# Populated by the service after startup, never from the file
RUNTIME_KEY = "RUNTIME"


class ValidationLevel(Enum):
    """Configuration validation strictness levels."""
    OFF = "off"
    PERMISSIVE = "permissive"   # Log but allow mismatched values
    STRICT = "strict"           # Reject mismatched configurations


@dataclass
class ValidationReport:
    """Outcome of one validation pass."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def resolve_validation_level(
    level: Optional[Union[str, ValidationLevel]] = None,
    env: Optional[Mapping] = None,
) -> ValidationLevel:
    """
    Pick the validation level from the argument, else the environment.

    Args:
        level: Explicit level or its name
        env: Environment mapping (defaults to ``os.environ``)

    Returns:
        ValidationLevel, PERMISSIVE when nothing is configured
    """
    if isinstance(level, ValidationLevel):
        return level
    if level is None:
        env = os.environ if env is None else env
        level = env.get(VALIDATION_ENV) or ValidationLevel.PERMISSIVE.value
    try:
        return ValidationLevel(str(level).strip().lower())
    except ValueError:
        choices = ", ".join(item.value for item in ValidationLevel)
        raise InvalidValidationLevelError(f"Invalid validation level: {level}. Must be one of: {choices}") from None


def check_overrides(parsed: Mapping) -> ValidationReport:
    """Collect shape findings for a parsed file without logging or raising."""
    report = ValidationReport()
    _check_section(MjolnirConfig, parsed, (), report, top_level=True)
    return report


def validate_overrides(
    parsed: Mapping,
    level: ValidationLevel = ValidationLevel.PERMISSIVE,
    path: Optional[Union[str, Path]] = None,
) -> ValidationReport:
    """
    Check the top-level mapping read from a configuration file.

    Args:
        parsed: Mapping produced by the YAML parser
        level: Validation strictness
        path: File the mapping came from, used in messages

    Returns:
        ValidationReport with the errors and warnings found
    """
    if level is ValidationLevel.OFF:
        return ValidationReport()

    report = check_overrides(parsed)

    source = path if path is not None else "<config>"
    for warning in report.warnings:
        logger.warning(f"{source}: {warning}")
    for error in report.errors:
        logger.error(f"{source}: {error}")

    if report.errors and level is ValidationLevel.STRICT:
        raise ConfigValidationError(report.errors, path)

    if report.errors:
        logger.warning(
            f"Configuration has {len(report.errors)} type errors; "
            f"continuing because validation is {level.value}"
        )
    return report


def _check_section(schema_cls, data: Mapping, prefix, report: ValidationReport, top_level: bool = False):
    known = dict(schema_fields(schema_cls))

    for key in data:
        if top_level and key == RUNTIME_KEY:
            # Dropped by the loader, which reports it
            continue
        if key not in known:
            report.warnings.append(f"Unknown configuration key '{_dotted(prefix, key)}'")

    if not top_level:
        missing = [key for key in known if key not in data]
        if missing:
            report.warnings.append(
                f"Section '{_dotted(prefix)}' does not set {', '.join(missing)}; "
                f"defaults are not merged into overridden sections"
            )

    for key, value in data.items():
        if key in known:
            _check_value(known[key].type, value, prefix + (str(key),), report)


def _check_value(expected, value: Any, path, report: ValidationReport):
    name = _dotted(path)

    if is_dataclass(expected):
        if isinstance(value, Mapping):
            _check_section(expected, value, path, report)
        else:
            report.errors.append(f"'{name}' must be a mapping, got {_describe(value)}")
        return

    if typing.get_origin(expected) in (list, tuple):
        if not isinstance(value, list):
            report.errors.append(f"'{name}' must be a list, got {_describe(value)}")
            return
        item_type = typing.get_args(expected)[0]
        for index, item in enumerate(value):
            if not _matches(item_type, item):
                report.errors.append(
                    f"'{name}[{index}]' must be {_type_name(item_type)}, got {_describe(item)}"
                )
        return

    if not _matches(expected, value):
        report.errors.append(f"'{name}' must be {_type_name(expected)}, got {_describe(value)}")


def _matches(expected, value: Any) -> bool:
    if expected is bool:
        return isinstance(value, bool)
    if expected in (int, float):
        # YAML numbers; booleans are ints in Python but not here
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    return isinstance(value, expected)


def _type_name(expected) -> str:
    if expected is bool:
        return "a boolean"
    if expected in (int, float):
        return "a number"
    if expected is str:
        return "a string"
    return expected.__name__


def _describe(value: Any) -> str:
    if value is None:
        return "null"
    return f"{type(value).__name__} {value!r}"


def _dotted(prefix, key=None) -> str:
    parts = list(prefix) + ([str(key)] if key is not None else [])
    return ".".join(parts)
