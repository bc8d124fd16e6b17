"""Configuration loading for fifocalc.

Settings live in ``~/.config/fifocalc/config.toml``. A missing or
unreadable file falls back to defaults.
"""

import logging
from pathlib import Path
from typing import Optional

import toml
from pydantic import BaseModel, Field, ValidationError

from fifocalc.constants import DELIMITER
from fifocalc.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "fifocalc"
CONFIG_PATH = CONFIG_DIR / "config.toml"


class InputSettings(BaseModel):
    path: str = Field(default="trades.csv", description="Default trade file")
    delimiter: str = Field(default=DELIMITER, min_length=1, max_length=1)


class OutputSettings(BaseModel):
    path: str = Field(default="fifo_results.txt", description="Default report file")


class LoggingSettings(BaseModel):
    level: str = Field(default="WARNING", description="Log level name")


class Settings(BaseModel):
    """Application settings."""

    input: InputSettings = Field(default_factory=InputSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def load_config(config_path: Optional[Path] = None) -> Settings:
    """Load settings from a TOML file.

    Args:
        config_path: Config file to read. Defaults to CONFIG_PATH.

    Returns:
        Settings, with defaults for anything not configured.
    """
    path = config_path or CONFIG_PATH

    if not path.exists():
        return Settings()

    try:
        return Settings.model_validate(toml.load(path))
    except (OSError, toml.TomlDecodeError, ValidationError) as e:
        logger.warning("Ignoring invalid config %s: %s", path, e)
        return Settings()


def create_template_config(config_path: Optional[Path] = None) -> Path:
    """Write a template configuration file.

    Returns:
        Path of the written file.

    Raises:
        ConfigError: If the file cannot be written.
    """
    path = config_path or CONFIG_PATH

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            toml.dump(Settings().model_dump(), f)
    except OSError as e:
        raise ConfigError(f"Could not write config {path}: {e}") from e

    return path
