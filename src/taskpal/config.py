"""Configuration management for taskpal."""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional
import yaml

from .utils.datetime import DEFAULT_DATE_DISPLAY_FORMAT


logger = logging.getLogger(__name__)


@dataclass
class ConfigModel:
    """Global configuration model for taskpal."""

    # File paths
    data_dir: str = "~/.taskpal"
    tasks_file: str = "tasks.md"
    backup_dir: str = "~/.taskpal/backups"

    # Display preferences
    date_display_format: str = DEFAULT_DATE_DISPLAY_FORMAT
    no_color: bool = False
    show_banner: bool = True
    prompt: str = "> "

    # Diagnostics
    log_level: str = "WARNING"

    def __post_init__(self):
        """Reset values of the wrong type to their defaults and expand user paths."""
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, type(f.default)):
                logger.warning(
                    f"Invalid value {value!r} for {f.name}; using default {f.default!r}"
                )
                setattr(self, f.name, f.default)

        self.data_dir = os.path.expanduser(self.data_dir)
        self.backup_dir = os.path.expanduser(self.backup_dir)

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        data = {
            "data_dir": self.data_dir,
            "tasks_file": self.tasks_file,
            "backup_dir": self.backup_dir,
            "date_display_format": self.date_display_format,
            "no_color": self.no_color,
            "show_banner": self.show_banner,
            "prompt": self.prompt,
            "log_level": self.log_level,
        }
        return yaml.dump(data, default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ConfigModel":
        """Deserialize config from YAML, ignoring keys we do not know."""
        data = yaml.safe_load(yaml_str) or {}
        if not isinstance(data, dict):
            raise ValueError("Configuration must be a YAML mapping")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {', '.join(unknown)}")

        return cls(**{key: value for key, value in data.items() if key in known})

    def get_tasks_path(self) -> Path:
        """Get the task list file path."""
        return Path(self.data_dir) / self.tasks_file

    def get_config_path(self) -> Path:
        """Get the config file path."""
        return Path(self.data_dir) / "config.yaml"

    def get_backup_path(self, timestamp: Optional[str] = None) -> Path:
        """Get backup directory path."""
        if timestamp:
            return Path(self.backup_dir) / timestamp
        return Path(self.backup_dir)


class Config:
    """Configuration manager for taskpal."""

    _instance: Optional[ConfigModel] = None

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> ConfigModel:
        """Load configuration from file or create default."""
        if cls._instance is not None:
            return cls._instance

        config = ConfigModel()

        if config_path is None:
            config_path = config.get_config_path()

        if config_path.exists():
            try:
                with open(config_path, 'r', encoding="utf-8") as f:
                    yaml_content = f.read()
                config = ConfigModel.from_yaml(yaml_content)
                logger.debug(f"Loaded configuration from {config_path}")
            except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config from {config_path}: {e}. Using default configuration.")
        else:
            # Create default config file
            cls.save(config, config_path)

        cls._instance = config
        return config

    @classmethod
    def save(cls, config: ConfigModel, config_path: Optional[Path] = None) -> None:
        """Save configuration to file."""
        if config_path is None:
            config_path = config.get_config_path()

        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(config_path, 'w', encoding="utf-8") as f:
                f.write(config.to_yaml())
            logger.info(f"Configuration saved to {config_path}")
        except OSError as e:
            logger.error(f"Failed to save config to {config_path}: {e}")

    @classmethod
    def get(cls) -> ConfigModel:
        """Get the current configuration instance."""
        if cls._instance is None:
            cls._instance = cls.load()
        return cls._instance

    @classmethod
    def reload(cls, config_path: Optional[Path] = None) -> ConfigModel:
        """Reload configuration from file."""
        cls._instance = None
        return cls.load(config_path)

    @classmethod
    def reset(cls) -> None:
        """Forget the cached configuration (useful for testing)."""
        cls._instance = None


def get_config() -> ConfigModel:
    """Get the current configuration."""
    return Config.get()


def load_config(config_path: Optional[Path] = None) -> ConfigModel:
    """Load configuration from file."""
    return Config.load(config_path)


def save_config(config: ConfigModel, config_path: Optional[Path] = None) -> None:
    """Save configuration to file."""
    Config.save(config, config_path)
