"""
Configuration management for pydecomp.

This module provides:
- DecompConfig: Typed configuration dataclass
- ConfigManager: Defaults, YAML file and environment variable layering
- create_default_config: Default configuration dictionary
- load_config: Load configuration from YAML files
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from pydecomp.const import DEFAULT_LOG_LEVEL, DEFAULT_SAMPLE_POINTS, DEFAULT_SINGULAR_TOLERANCE
from pydecomp.exceptions import ConfigNotFoundError, ConfigValidationError
from pydecomp.logging import LOG_DEBUG, setup_logging


VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class EllipsoidConfig:
    """Ellipsoid construction settings."""

    # Reciprocal condition number below which C counts as singular.
    singular_tolerance: float = DEFAULT_SINGULAR_TOLERANCE

    def validate(self) -> None:
        if not 0 < self.singular_tolerance < 1:
            raise ConfigValidationError(
                "ellipsoid.singular_tolerance", "must be in (0, 1)", self.singular_tolerance
            )


@dataclass
class SamplingConfig:
    """Contour sampling settings."""

    num_points: int = DEFAULT_SAMPLE_POINTS

    def validate(self) -> None:
        if isinstance(self.num_points, bool) or not isinstance(self.num_points, int) or self.num_points < 1:
            raise ConfigValidationError("sampling.num_points", "must be an integer >= 1", self.num_points)


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = DEFAULT_LOG_LEVEL

    def validate(self) -> None:
        if str(self.level).upper() not in VALID_LOG_LEVELS:
            raise ConfigValidationError(
                "logging.level", f"must be one of {sorted(VALID_LOG_LEVELS)}", self.level
            )


@dataclass
class DecompConfig:
    """Complete pydecomp configuration."""

    ellipsoid: EllipsoidConfig = field(default_factory=EllipsoidConfig)
    sampling: SamplingConfig = field(default_factory=SamplingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> None:
        """Validate all configuration settings."""
        self.ellipsoid.validate()
        self.sampling.validate()
        self.logging.validate()

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return {
            "ellipsoid": {
                "singular_tolerance": self.ellipsoid.singular_tolerance,
            },
            "sampling": {
                "num_points": self.sampling.num_points,
            },
            "logging": {
                "level": self.logging.level,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DecompConfig":
        """Create DecompConfig from dictionary."""
        ellipsoid_data = data.get("ellipsoid", {})
        sampling_data = data.get("sampling", {})
        logging_data = data.get("logging", {})

        return cls(
            ellipsoid=EllipsoidConfig(
                singular_tolerance=ellipsoid_data.get("singular_tolerance", DEFAULT_SINGULAR_TOLERANCE),
            ),
            sampling=SamplingConfig(
                num_points=sampling_data.get("num_points", DEFAULT_SAMPLE_POINTS),
            ),
            logging=LoggingConfig(
                level=logging_data.get("level", DEFAULT_LOG_LEVEL),
            ),
        )


# =============================================================================
# Configuration Manager
# =============================================================================


class ConfigManager:
    """Central configuration management with environment variable support.

    Environment variables take precedence over config files.
    Config files take precedence over defaults.

    Environment variable format: PYDECOMP_<SECTION>__<KEY>
    Example: PYDECOMP_SAMPLING__NUM_POINTS=36
    """

    ENV_PREFIX = "PYDECOMP"
    ENV_SEPARATOR = "__"

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional path to YAML configuration file.
        """
        self._config: Optional[DecompConfig] = None
        self._config_path = Path(config_path) if config_path else None
        self._raw_config: Dict[str, Any] = {}

    def load(self, validate: bool = True) -> DecompConfig:
        """Load and return configuration.

        Args:
            validate: Whether to validate configuration after loading.

        Returns:
            Loaded DecompConfig instance.
        """
        self._raw_config = create_default_config()

        if self._config_path:
            self._load_from_file(self._config_path)

        self._load_from_env()

        self._config = DecompConfig.from_dict(self._raw_config)

        if validate:
            self._config.validate()

        return self._config

    def _load_from_file(self, path: Path) -> None:
        """Load configuration from YAML file."""
        if not path.exists():
            raise ConfigNotFoundError(str(path))

        with open(path, "r") as f:
            file_config = yaml.safe_load(f)

        if file_config:
            LOG_DEBUG(f"Loaded configuration from {path}")
            self._deep_update(self._raw_config, file_config)

    def _load_from_env(self) -> None:
        """Load configuration from environment variables."""
        prefix = f"{self.ENV_PREFIX}_"
        for key, value in os.environ.items():
            if not key.startswith(prefix):
                continue
            config_key = key[len(prefix):].lower()
            # PYDECOMP_LOG_LEVEL and friends belong to the logging module
            if self.ENV_SEPARATOR not in config_key:
                continue
            self._set_nested_value(config_key, value)

    def _set_nested_value(self, key: str, value: str) -> None:
        """Set a nested configuration value from environment variable."""
        parts = key.split(self.ENV_SEPARATOR)
        target = self._raw_config

        for part in parts[:-1]:
            if not isinstance(target.get(part), dict):
                target[part] = {}
            target = target[part]

        target[parts[-1]] = self._parse_value(value)

    @staticmethod
    def _parse_value(value: str) -> Any:
        """Parse string value to appropriate Python type."""
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

    @staticmethod
    def _deep_update(base: dict, update: dict) -> dict:
        """Deep merge update into base dictionary."""
        for key, value in update.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                ConfigManager._deep_update(base[key], value)
            else:
                base[key] = value
        return base

    @property
    def config(self) -> DecompConfig:
        """Get current configuration (loads if not already loaded)."""
        if self._config is None:
            self.load()
        return self._config

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by dotted key path.

        Args:
            key: Dotted key path (e.g., "sampling.num_points").
            default: Default value if key not found.

        Returns:
            Configuration value or default.
        """
        if self._config is None:
            self.load()

        value = self._raw_config
        for part in key.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default

        return value


# =============================================================================
# Factory Functions
# =============================================================================


def create_default_config() -> Dict[str, Any]:
    """Create default configuration dictionary."""
    return {
        "ellipsoid": {
            "singular_tolerance": DEFAULT_SINGULAR_TOLERANCE,
        },
        "sampling": {
            "num_points": DEFAULT_SAMPLE_POINTS,
        },
        "logging": {
            "level": DEFAULT_LOG_LEVEL,
        },
    }


def load_config(path: Union[str, Path], validate: bool = True) -> Dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        path: Path to YAML configuration file.
        validate: Whether to validate configuration.

    Returns:
        Configuration dictionary.
    """
    manager = ConfigManager(path)
    config = manager.load(validate=validate)
    return config.to_dict()


# Global configuration instance
_global_config: Optional[ConfigManager] = None


def get_config() -> ConfigManager:
    """Get global configuration manager instance."""
    global _global_config
    if _global_config is None:
        _global_config = ConfigManager()
    return _global_config


def init_config(path: Optional[Union[str, Path]] = None) -> ConfigManager:
    """Initialize global configuration from file and apply its log level.

    Args:
        path: Optional path to configuration file.

    Returns:
        Initialized ConfigManager instance.
    """
    global _global_config
    _global_config = ConfigManager(path)
    config = _global_config.load()
    setup_logging(level=config.logging.level, force=True)
    return _global_config
