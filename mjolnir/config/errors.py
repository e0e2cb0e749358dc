"""Exceptions raised while loading the configuration file."""

from pathlib import Path
from typing import List, Optional, Union


class ConfigError(Exception):
    """Base class for configuration failures; always names the file."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            message = f"{message} ({self.path})"
        super().__init__(message)


class MissingConfigFileError(ConfigError, FileNotFoundError):
    """The configuration file does not exist or cannot be read."""


class ConfigParseError(ConfigError, ValueError):
    """The configuration file is not valid YAML, or not a mapping."""


class ConfigValidationError(ConfigError, ValueError):
    """Strict validation found values of the wrong shape."""

    def __init__(self, problems: List[str], path: Optional[Union[str, Path]] = None):
        self.problems = list(problems)
        message = f"Configuration validation failed with {len(self.problems)} errors: " + "; ".join(self.problems)
        super().__init__(message, path)


class InvalidValidationLevelError(ConfigError, ValueError):
    """The requested validation level is not one of off, permissive, strict."""
