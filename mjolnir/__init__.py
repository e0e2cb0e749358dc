"""
Mjolnir - Matrix Moderation Service
===================================

Configuration core of the moderation service.

Modules:
- config: Option schema, defaults and the environment-selected YAML loader
- runtime: Runtime-only state and the service context passed to subsystems
- utils: Logging setup
"""

__version__ = "1.0.0"
__author__ = "Mjolnir Team"

from .config import LoadedConfig, load
from .runtime import RuntimeState, ServiceContext
from .utils.logger import setup_logging

__all__ = [
    "LoadedConfig",
    "load",
    "RuntimeState",
    "ServiceContext",
    "setup_logging",
]
