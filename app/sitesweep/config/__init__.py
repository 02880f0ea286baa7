"""Configuration module.

This module provides the sitesweep.toml models and the functions to
load, save and resolve them.
"""

from sitesweep.config.loader import (
    CONFIG_FILENAME,
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    config_exists,
    destination_path,
    get_config_path,
    load_config,
    public_root_path,
    require_config,
    save_config,
)
from sitesweep.config.models import ServeSection, SiteSection, SweepConfig

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "ConfigValidationError",
    "ServeSection",
    "SiteSection",
    "SweepConfig",
    "config_exists",
    "destination_path",
    "get_config_path",
    "load_config",
    "public_root_path",
    "require_config",
    "save_config",
]
