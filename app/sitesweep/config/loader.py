"""Configuration file I/O operations.

This module provides functions for loading and saving sitesweep.toml
with validation using Pydantic models, and for resolving the
configured directories relative to the configuration file.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile

import tomli_w
from pydantic import ValidationError

from sitesweep.config.models import SweepConfig

CONFIG_FILENAME = "sitesweep.toml"

# Environment variable overriding the config file location
CONFIG_ENV_VAR = "SITESWEEP_CONFIG"


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the configuration file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the configuration file cannot be parsed."""


class ConfigValidationError(ConfigError):
    """Raised when configuration content is invalid."""


def get_config_path() -> Path:
    """Get the default configuration file path.

    Returns:
        Path from SITESWEEP_CONFIG if set, otherwise ./sitesweep.toml.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return Path.cwd() / CONFIG_FILENAME


def config_exists(path: Path | None = None) -> bool:
    """Check if a configuration file exists."""
    return (path or get_config_path()).exists()


def load_config(path: Path | None = None) -> SweepConfig:
    """Load and validate a configuration file.

    Args:
        path: Path to the config file. If None, uses the default path.

    Returns:
        Validated SweepConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigValidationError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return SweepConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid config content: {e}") from e


def save_config(config: SweepConfig, path: Path | None = None) -> Path:
    """Save a configuration to a TOML file.

    The file is written to a temporary file in the same directory and
    moved into place with os.replace().

    Args:
        config: The SweepConfig object to save.
        path: Destination path. If None, uses the default path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json", exclude_none=True)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def destination_path(config: SweepConfig, config_path: Path) -> Path:
    """Resolve the site destination relative to the config file."""
    return (config_path.parent / config.site.destination).resolve()


def public_root_path(config: SweepConfig, config_path: Path) -> Path:
    """Resolve the public root, falling back to the site destination."""
    if config.serve.public_root is None:
        return destination_path(config, config_path)
    return (config_path.parent / config.serve.public_root).resolve()


def require_config(config_path: Path | None = None) -> SweepConfig:
    """Load configuration or exit with helpful error message.

    Args:
        config_path: Optional custom config path.

    Returns:
        Loaded and validated SweepConfig.

    Raises:
        typer.Exit: If the config cannot be loaded.
    """
    import typer

    from sitesweep.utils.formatting import print_error, print_info

    path = config_path or get_config_path()
    try:
        return load_config(path)
    except ConfigNotFoundError as e:
        print_error(f"Config not found: {path}")
        print_info("Run 'sitesweep init' to create a default configuration.")
        raise typer.Exit(code=1) from e
    except ConfigError as e:
        print_error(f"Failed to load config: {e}")
        raise typer.Exit(code=1) from e
