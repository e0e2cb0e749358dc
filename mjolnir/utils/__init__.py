"""
Utilities Module
================

Contains utility functions and helper classes.
"""

from .logger import setup_logging, resolve_log_level

__all__ = [
    'setup_logging',
    'resolve_log_level',
]
