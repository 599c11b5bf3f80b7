"""
Configuration management for ddexport.

This module handles loading and validating export settings.
"""

from ddexport.config.settings import (
    ConfigurationError,
    ExportConfig,
    Settings,
    load_config,
)

__all__ = [
    "Settings",
    "ExportConfig",
    "load_config",
    "ConfigurationError",
]
