"""
Application configuration loaded from an optional JSON file.

Command-line flags override values read here; constants provide the
defaults for anything the file leaves out.
"""

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional
from .constants import (
    DEFAULT_CONFIG_FILE,
    DEFAULT_INTERVAL,
    DEFAULT_MAX_RESULTS,
    DEFAULT_MAX_WORKERS,
)
from .logging_config import get_logger

logger = get_logger(__name__)


class ConfigFileError(ValueError):
    """Raised when the configuration file is unreadable or invalid."""
    pass


@dataclass
class AppConfig:
    """Settings shared by the command-line commands."""
    max_results: int = DEFAULT_MAX_RESULTS
    interval: int = DEFAULT_INTERVAL
    max_workers: int = DEFAULT_MAX_WORKERS
    log_file: Optional[Path] = None

    _POSITIVE_INT_KEYS = ('max_results', 'interval', 'max_workers')

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AppConfig':
        """
        Build a configuration from a parsed JSON object.

        Unknown keys are logged and ignored.

        Raises:
            ConfigFileError: If a value has the wrong type or is not positive
        """
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}

        for key, value in data.items():
            if key not in known:
                logger.warning(f"Ignoring unknown configuration key: {key}")
                continue
            if key in cls._POSITIVE_INT_KEYS:
                if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                    raise ConfigFileError(f"'{key}' must be a positive integer, got {value!r}")
                values[key] = value
            elif key == 'log_file':
                if value is not None and not isinstance(value, str):
                    raise ConfigFileError(f"'log_file' must be a path string, got {value!r}")
                values[key] = Path(value) if value else None

        return cls(**values)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> 'AppConfig':
        """
        Load configuration from a JSON file.

        Without an explicit path, vidsearch.json in the current directory is
        used when it exists; otherwise defaults are returned.

        Args:
            config_path: Explicit configuration file

        Returns:
            AppConfig instance

        Raises:
            ConfigFileError: If the file cannot be read or parsed
        """
        if config_path is None:
            default_path = Path(DEFAULT_CONFIG_FILE)
            if not default_path.is_file():
                return cls()
            config_path = default_path

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigFileError(f"Cannot load configuration {config_path}: {e}")

        if not isinstance(data, dict):
            raise ConfigFileError(f"Configuration {config_path} must contain a JSON object")

        logger.debug(f"Loaded configuration from {config_path}")
        return cls.from_dict(data)
