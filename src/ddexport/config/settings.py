"""
Configuration settings management for ddexport.

This module handles loading and validating export settings from YAML
files with support for environment variable overrides.

Configuration is loaded from ~/.ddexport/config.yaml by default, with the
path overridable via the DDEXPORT_CONFIG environment variable.

Datadog keys are never read from this file; they come from
the command line or DATADOG_API_KEY / DATADOG_APP_KEY.
"""

import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

# Default configuration directory
DEFAULT_CONFIG_DIR = Path.home() / ".ddexport"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"

OUTPUT_FORMATS = ("json", "yaml")


@dataclass
class ExportConfig:
    """Resource export settings."""

    output_dir: str = "generated"
    output_format: str = "json"
    page_size: int = 100
    # Resource kinds exported when none are given on the command line
    resources: list[str] = field(default_factory=list)
    # Per-kind id filters, e.g. {"monitor": ["123", "456"]}
    filters: dict[str, list[str]] = field(default_factory=dict)


@dataclass
class Settings:
    """
    Complete ddexport configuration settings.

    Settings are loaded from a YAML configuration file and can be
    overridden by environment variables prefixed with DDEXPORT_.

    Attributes:
        log_level: Logging verbosity (DEBUG, INFO, WARNING, ERROR).
        api_url: Default custom Datadog endpoint ("" for the default host).
        export: Resource export settings.
    """

    log_level: str = "INFO"
    api_url: str = ""

    export: ExportConfig = field(default_factory=ExportConfig)


class ConfigurationError(Exception):
    """Raised when configuration is invalid or cannot be loaded."""

    pass


def get_config_path() -> Path:
    """
    Get the configuration file path.

    Returns the path from DDEXPORT_CONFIG environment variable if set,
    otherwise returns the default path (~/.ddexport/config.yaml).
    """
    env_path = os.environ.get("DDEXPORT_CONFIG")
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_FILE


def load_config(config_path: Path | None = None) -> Settings:
    """
    Load configuration from YAML file.

    Reads configuration from the specified path (or default if not provided),
    applies environment variable overrides, and validates the configuration.

    Args:
        config_path: Optional path to configuration file. If not provided,
                    uses DDEXPORT_CONFIG environment variable or default path.

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If the configuration file cannot be read or
                          contains invalid settings.
    """
    if config_path is None:
        config_path = get_config_path()

    settings = Settings()

    if config_path.exists():
        try:
            with open(config_path) as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in config file: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read config file: {e}") from e

        if not isinstance(config_data, dict):
            raise ConfigurationError("Config file must contain a mapping")
        settings = _apply_config_data(settings, config_data)

    settings = _apply_environment_overrides(settings)

    _validate_config(settings)

    return settings


def _apply_config_data(settings: Settings, data: dict[str, Any]) -> Settings:
    """Apply configuration data from parsed YAML to settings."""
    ddexport_data = data.get("ddexport") or {}

    if "log_level" in ddexport_data:
        settings.log_level = str(ddexport_data["log_level"]).upper()

    datadog = data.get("datadog") or {}
    if "api_url" in datadog:
        settings.api_url = str(datadog["api_url"] or "")

    export = data.get("export") or {}
    if "output_dir" in export:
        settings.export.output_dir = str(export["output_dir"])
    if "format" in export:
        settings.export.output_format = str(export["format"]).lower()
    if "page_size" in export:
        try:
            settings.export.page_size = int(export["page_size"])
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid page_size: {export['page_size']}") from e
    if "resources" in export:
        settings.export.resources = [str(r) for r in export["resources"] or []]
    if "filters" in export:
        settings.export.filters = {
            str(kind): [str(i) for i in ids or []]
            for kind, ids in (export["filters"] or {}).items()
        }

    return settings


def _apply_environment_overrides(settings: Settings) -> Settings:
    """Apply environment variable overrides to settings."""
    env_map: dict[str, tuple[str, Callable[[str], Any]]] = {
        "DDEXPORT_LOG_LEVEL": ("log_level", lambda x: x.upper()),
        "DDEXPORT_OUTPUT_DIR": ("export.output_dir", str),
        "DDEXPORT_FORMAT": ("export.output_format", lambda x: x.lower()),
        "DDEXPORT_PAGE_SIZE": ("export.page_size", int),
        "DDEXPORT_RESOURCES": ("export.resources", _split_kinds),
    }

    for env_var, (attr_path, converter) in env_map.items():
        value = os.environ.get(env_var)
        if value is not None:
            try:
                converted = converter(value)
            except ValueError as e:
                raise ConfigurationError(f"Invalid value for {env_var}: {value}") from e
            _set_nested_attr(settings, attr_path, converted)

    return settings


def _split_kinds(value: str) -> list[str]:
    """Split a comma-separated kind list, dropping empty entries."""
    return [kind.strip() for kind in value.split(",") if kind.strip()]


def _set_nested_attr(obj: Any, path: str, value: Any) -> None:
    """Set a nested attribute on an object using dot notation."""
    parts = path.split(".")
    for part in parts[:-1]:
        obj = getattr(obj, part)
    setattr(obj, parts[-1], value)


def _validate_config(settings: Settings) -> None:
    """
    Validate configuration settings.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if settings.log_level not in valid_log_levels:
        raise ConfigurationError(
            f"Invalid log_level: {settings.log_level}. "
            f"Must be one of: {', '.join(sorted(valid_log_levels))}"
        )

    if settings.export.output_format not in OUTPUT_FORMATS:
        raise ConfigurationError(
            f"Invalid format: {settings.export.output_format}. "
            f"Must be one of: {', '.join(OUTPUT_FORMATS)}"
        )

    if settings.export.page_size < 1:
        raise ConfigurationError("page_size must be at least 1")
