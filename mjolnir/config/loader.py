#!/usr/bin/env python3
"""ConfigLoader used by the service at startup.

Resolves the configuration file from the environment:
- Directory: `MJOLNIR_CONFIG_DIR`, else `NODE_CONFIG_DIR`, else `./config`
- File: `<name>.yaml` where name is `MJOLNIR_ENV`, else `NODE_ENV`, else `default`

Loads the YAML safely and overlays its top-level keys onto the defaults.
The overlay is shallow: a section present in the file replaces the whole
default section, nested keys included.

Unlike a missing optional asset, a missing or malformed file here is fatal:
the errors propagate to the caller and abort startup.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from .errors import ConfigParseError, MissingConfigFileError
from .frozen import LoadedConfig, freeze
from .schema import default_config
from .validator import RUNTIME_KEY, ValidationLevel, resolve_validation_level, validate_overrides

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = ("MJOLNIR_CONFIG_DIR", "NODE_CONFIG_DIR")
CONFIG_NAME_ENV = ("MJOLNIR_ENV", "NODE_ENV")
DEFAULT_CONFIG_DIR = "./config"
DEFAULT_CONFIG_NAME = "default"
CONFIG_SUFFIX = ".yaml"


def _first_env(env: Mapping[str, str], names, fallback: str) -> str:
    # Empty values count as unset
    for name in names:
        value = env.get(name)
        if value:
            return value
    return fallback


def resolve_config_path(env: Optional[Mapping[str, str]] = None) -> Path:
    """
    Build the configuration file path from environment variables.

    Args:
        env: Environment mapping (defaults to ``os.environ``)

    Returns:
        ``<directory>/<name>.yaml``, relative paths left relative to the CWD
    """
    env = os.environ if env is None else env
    config_dir = _first_env(env, CONFIG_DIR_ENV, DEFAULT_CONFIG_DIR)
    config_name = _first_env(env, CONFIG_NAME_ENV, DEFAULT_CONFIG_NAME)
    return Path(config_dir) / f"{config_name}{CONFIG_SUFFIX}"


def read_config_file(path: Union[str, os.PathLike]) -> Dict[str, Any]:
    """
    Read and parse a YAML configuration file.

    Args:
        path: File to read

    Returns:
        Top-level mapping; an empty document gives an empty dict

    Raises:
        MissingConfigFileError: file absent or unreadable
        ConfigParseError: invalid YAML, or a top level that is not a mapping
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError as e:
        logger.error(f"Configuration file not found: {path}")
        raise MissingConfigFileError("Configuration file not found", path) from e
    except OSError as e:
        logger.error(f"Configuration file not readable: {path}: {e}")
        raise MissingConfigFileError(f"Configuration file not readable: {e.strerror or e}", path) from e
    except UnicodeDecodeError as e:
        logger.error(f"Configuration file is not UTF-8 text: {path}: {e}")
        raise ConfigParseError(f"Configuration file is not UTF-8 text: {e.reason}", path) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse configuration from {path}: {e}")
        raise ConfigParseError(f"Invalid YAML{_mark(e)}: {_problem(e)}", path) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.error(f"Configuration in {path} is a {type(data).__name__}, not a mapping")
        raise ConfigParseError(
            f"Top level of the configuration must be a mapping, got {type(data).__name__}", path
        )
    return data


def shallow_merge(defaults: Mapping[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Overlay ``overrides`` onto ``defaults`` one level deep."""
    return {**defaults, **overrides}


def _mark(error: yaml.YAMLError) -> str:
    mark = getattr(error, "problem_mark", None)
    if mark is None:
        return ""
    return f" at line {mark.line + 1}, column {mark.column + 1}"


def _problem(error: yaml.YAMLError) -> str:
    return getattr(error, "problem", None) or str(error)


class ConfigLoader:
    """Loads the environment-selected configuration file once."""

    def __init__(
        self,
        config_path: Optional[Union[str, os.PathLike]] = None,
        env: Optional[Mapping[str, str]] = None,
        validation: Optional[Union[str, ValidationLevel]] = None,
    ):
        env = os.environ if env is None else env
        if config_path is None:
            config_path = resolve_config_path(env)

        self.path = Path(config_path)
        self.validation = resolve_validation_level(validation, env)
        self.raw: Dict[str, Any] = {}
        self.config: LoadedConfig = self._load()

    # ------------------------------------------------------------------
    def _load(self) -> LoadedConfig:
        logger.info(f"Loading configuration from {self.path}")
        self.raw = read_config_file(self.path)
        validate_overrides(self.raw, self.validation, self.path)

        merged = shallow_merge(default_config(), self.raw)
        if RUNTIME_KEY in merged:
            logger.warning(f"Ignoring '{RUNTIME_KEY}' in {self.path}; runtime state cannot be set from a file")
            del merged[RUNTIME_KEY]
        if self.raw:
            logger.debug(f"Configuration overrides: {sorted(map(str, self.raw))}")
        else:
            logger.debug("Configuration file sets no keys; using defaults")
        return freeze(merged)

    # ------------------------------------------------------------------
    def get(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    # Attribute-style access convenience
    def __getattr__(self, item: str) -> Any:  # pragma: no cover - convenience
        if item.startswith("_") or item in ("config", "raw", "path", "validation"):
            raise AttributeError(item)
        return getattr(self.config, item)


def load(
    env: Optional[Mapping[str, str]] = None,
    validation: Optional[Union[str, ValidationLevel]] = None,
) -> LoadedConfig:
    """
    Produce the effective configuration for this process run.

    Args:
        env: Environment mapping (defaults to ``os.environ``)
        validation: Validation level, else ``MJOLNIR_CONFIG_VALIDATION``

    Returns:
        LoadedConfig with every top-level option populated
    """
    return ConfigLoader(env=env, validation=validation).config


__all__ = ["ConfigLoader", "load", "read_config_file", "resolve_config_path", "shallow_merge"]
