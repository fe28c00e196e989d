"""Configuration management for the todo shell."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import click
import yaml


logger = logging.getLogger(__name__)

APP_NAME = "todo-shell"


def get_app_dir() -> Path:
    """Per-user application data directory for this platform."""
    return Path(click.get_app_dir(APP_NAME))


@dataclass
class ConfigModel:
    """Configuration model for the todo shell."""

    # Where todo files live
    data_dir: str = ""
    filename: Optional[str] = None  # None means the backend's default name

    # Storage backend: json, yaml or memory
    backend: str = "json"

    # UI
    use_emoji: bool = True

    # Logging
    log_level: str = "WARNING"

    def __post_init__(self):
        if not self.data_dir:
            self.data_dir = str(get_app_dir())
        self.data_dir = os.path.expanduser(self.data_dir)

        if not isinstance(self.use_emoji, bool):
            raise ValueError(f"use_emoji must be true or false, got {self.use_emoji!r}")

        if not isinstance(self.log_level, str) or not isinstance(
            logging.getLevelName(self.log_level.upper()), int
        ):
            raise ValueError(f"Unknown log_level {self.log_level!r}")
        self.log_level = self.log_level.upper()

    @property
    def storage_path(self) -> Optional[Path]:
        """Path of the todo file, or None for the in-memory backend."""
        if self.backend == "memory":
            return None
        filename = self.filename or f"todos.{self.backend}"
        return Path(self.data_dir) / filename

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        data = {
            "data_dir": self.data_dir,
            "filename": self.filename,
            "backend": self.backend,
            "use_emoji": self.use_emoji,
            "log_level": self.log_level,
        }
        return yaml.dump(data, default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ConfigModel":
        """Deserialize config from YAML, ignoring unknown keys."""
        data = yaml.safe_load(yaml_str) or {}
        if not isinstance(data, dict):
            raise ValueError("Configuration file must contain a mapping")

        known = {name for name in cls.__dataclass_fields__}
        return cls(**{key: value for key, value in data.items() if key in known})


def get_config_path() -> Path:
    """Get the default config file path."""
    return get_app_dir() / "config.yaml"


def load_config(config_path: Optional[Path] = None) -> ConfigModel:
    """Load configuration from file, falling back to defaults."""
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        logger.debug(f"No configuration at {config_path}, using defaults")
        return ConfigModel()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = ConfigModel.from_yaml(f.read())
        logger.debug(f"Loaded configuration from {config_path}")
        return config
    except Exception as e:
        logger.warning(f"Failed to load config from {config_path}: {e}; using defaults")
        return ConfigModel()


def save_config(config: ConfigModel, config_path: Optional[Path] = None) -> None:
    """Save configuration to file."""
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        f.write(config.to_yaml())
    logger.debug(f"Configuration saved to {config_path}")
