"""Configuration management for the antd-theme engine."""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Mapping, Optional

import yaml

from .theme_engine.motion import TransitionConfig
from .theme_engine.registry import ThemeContext, ThemeRegistry

logger = logging.getLogger(__name__)

ENV_DATA_DIR = "ANTD_THEME_DATA_DIR"
ENV_DEFAULT_THEME = "ANTD_THEME_DEFAULT"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class EngineConfig:
    """Global configuration model for the theme engine."""

    # Prefix for variables of user-defined color configs
    css_var_prefix: str = "custom"

    # Theme selection
    default_theme: str = "light"
    auto_theme: bool = False
    transition_duration: int = 300  # ms

    # File paths
    data_dir: str = "~/.antd_theme"
    themes_dir: Optional[str] = None  # defaults to <data_dir>/themes

    log_level: str = "WARNING"

    def __post_init__(self):
        """Normalize paths and validate values."""
        self.data_dir = os.path.expanduser(self.data_dir)
        if self.themes_dir:
            self.themes_dir = os.path.expanduser(self.themes_dir)

        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level {self.log_level!r} (expected one of {', '.join(LOG_LEVELS)})")
        if self.transition_duration < 0:
            raise ValueError(f"Transition duration must be non-negative, got {self.transition_duration}")
        if not self.css_var_prefix or self.css_var_prefix.startswith("-"):
            raise ValueError(f"Invalid CSS variable prefix: {self.css_var_prefix!r}")

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        data = {
            "css_var_prefix": self.css_var_prefix,
            "default_theme": self.default_theme,
            "auto_theme": self.auto_theme,
            "transition_duration": self.transition_duration,
            "data_dir": self.data_dir,
            "themes_dir": self.themes_dir,
            "log_level": self.log_level,
        }
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "EngineConfig":
        """Deserialize config from YAML, ignoring unknown keys."""
        data = yaml.safe_load(yaml_str) or {}
        if not isinstance(data, dict):
            raise ValueError("Configuration must be a YAML mapping")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(unknown)}")

        return cls(**{k: v for k, v in data.items() if k in known})

    def apply_env_overrides(self, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        """Apply ANTD_THEME_DATA_DIR / ANTD_THEME_DEFAULT in place."""
        environ = os.environ if environ is None else environ

        data_dir = environ.get(ENV_DATA_DIR)
        if data_dir:
            self.data_dir = os.path.expanduser(data_dir)
            logger.debug(f"Data directory overridden from environment: {self.data_dir}")

        default_theme = environ.get(ENV_DEFAULT_THEME)
        if default_theme:
            self.default_theme = default_theme
            logger.debug(f"Default theme overridden from environment: {default_theme}")

        return self

    def get_config_path(self) -> Path:
        return Path(self.data_dir) / "config.yaml"

    def get_themes_dir(self) -> Path:
        if self.themes_dir:
            return Path(self.themes_dir)
        return Path(self.data_dir) / "themes"

    def transition_config(self) -> TransitionConfig:
        return TransitionConfig(duration_ms=self.transition_duration)

    def create_registry(self) -> ThemeRegistry:
        return ThemeRegistry(self.get_themes_dir())

    def create_context(self, registry: Optional[ThemeRegistry] = None) -> ThemeContext:
        """Build a ThemeContext with this config's default theme and transition."""
        registry = registry or self.create_registry()
        return registry.create_context(
            current=self.default_theme,
            auto_theme=self.auto_theme,
            transition_config=self.transition_config(),
        )


def default_config_path() -> Path:
    data_dir = os.environ.get(ENV_DATA_DIR) or EngineConfig.data_dir
    return Path(os.path.expanduser(data_dir)) / "config.yaml"


def load_config(config_path: Optional[Path] = None) -> EngineConfig:
    """Load configuration from file, falling back to defaults.

    Environment overrides are applied last.

    Raises:
        ValueError: If the file exists but cannot be parsed
    """
    config_path = Path(config_path) if config_path else default_config_path()

    if config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config = EngineConfig.from_yaml(f.read())
            logger.debug(f"Loaded configuration from {config_path}")
        except (yaml.YAMLError, TypeError, ValueError) as e:
            logger.error(f"Failed to load config from {config_path}: {e}")
            raise ValueError(f"Failed to load config from {config_path}: {e}")
    else:
        config = EngineConfig()
        logger.debug(f"No configuration at {config_path}; using defaults")

    return config.apply_env_overrides()


def save_config(config: EngineConfig, config_path: Optional[Path] = None) -> Path:
    """Save configuration to file."""
    config_path = Path(config_path) if config_path else config.get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(config_path, 'w', encoding='utf-8') as f:
            f.write(config.to_yaml())
    except OSError as e:
        logger.error(f"Failed to save config to {config_path}: {e}")
        raise ValueError(f"Failed to save config to {config_path}: {e}")

    logger.info(f"Configuration saved to {config_path}")
    return config_path
