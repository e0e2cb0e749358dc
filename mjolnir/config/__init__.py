"""Configuration package.

Provides the option schema with its defaults and the loader that overlays the
environment-selected YAML file onto them.
"""
from .errors import (  # noqa: F401
    ConfigError,
    ConfigParseError,
    ConfigValidationError,
    InvalidValidationLevelError,
    MissingConfigFileError,
)
from .frozen import FrozenMapping, LoadedConfig  # noqa: F401
from .loader import ConfigLoader, load, resolve_config_path  # noqa: F401
from .schema import DEFAULTS, MjolnirConfig, default_config  # noqa: F401
from .validator import ValidationLevel  # noqa: F401
