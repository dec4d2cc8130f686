"""
User configuration management for Photo Fingerprint.

Supports configuration from multiple sources (in order of priority):
1. Command-line arguments (highest priority)
2. Environment variables
3. User config file (~/.photofingerprint/config.json)
4. Default values from config.py (lowest priority)

Configuration file location: ~/.photofingerprint/config.json

Example config.json:
{
    "default_threads": 8,
    "default_fuzz": 10,
    "low_distortion_threshold": 100,
    "high_distortion_threshold": 1000,
    "poll_interval": 1.0,
    "max_image_pixels": 500000000
}
"""

import json
import os
from pathlib import Path
from typing import Any, Optional
import logging

from .config import (
    DEFAULT_FUZZ,
    LOW_DISTORTION_THRESHOLD,
    HIGH_DISTORTION_THRESHOLD,
    POLL_INTERVAL,
    MAX_IMAGE_PIXELS,
    default_thread_count,
)

logger = logging.getLogger(__name__)


class UserConfig:
    """
    Manages user configuration from file and environment variables.

    Attributes are lazy-loaded and cached for performance.
    """

    _instance: Optional['UserConfig'] = None
    _config_data: Optional[dict] = None

    def __new__(cls):
        """Singleton pattern to ensure one config instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def config_dir(self) -> Path:
        """Get the configuration directory path."""
        env_dir = os.getenv('PHOTOFINGERPRINT_CONFIG_DIR')
        if env_dir:
            return Path(env_dir)

        return Path.home() / '.photofingerprint'

    @property
    def config_file_path(self) -> Path:
        """Get the configuration file path."""
        return self.config_dir / 'config.json'

    def _load_config_file(self) -> dict:
        """Load configuration from JSON file."""
        if not self.config_file_path.exists():
            return {}

        try:
            with open(self.config_file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
                logger.debug(f"Loaded configuration from {self.config_file_path}")
                return data
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load config file {self.config_file_path}: {e}")
            return {}

    def _get_config_data(self) -> dict:
        """Get cached config data (lazy loading)."""
        if self._config_data is None:
            self._config_data = self._load_config_file()
        return self._config_data

    def reload(self):
        """Reload configuration from file."""
        self._config_data = None

    def get(self, key: str, default: Any = None, env_var: Optional[str] = None) -> Any:
        """
        Get a configuration value with priority:
        1. Environment variable (if env_var specified)
        2. Config file
        3. Default value

        Args:
            key: Configuration key
            default: Default value if not found
            env_var: Optional environment variable name to check

        Returns:
            Configuration value
        """
        if env_var:
            env_value = os.getenv(env_var)
            if env_value is not None:
                # Numbers come through as JSON
                try:
                    return json.loads(env_value)
                except (json.JSONDecodeError, TypeError):
                    return env_value

        config_data = self._get_config_data()
        if key in config_data:
            return config_data[key]

        return default

    @property
    def default_threads(self) -> int:
        """Number of worker threads (defaults to hardware concurrency)."""
        return self.get(
            'default_threads',
            default=default_thread_count(),
            env_var='PHOTOFINGERPRINT_THREADS'
        )

    @property
    def default_fuzz(self) -> int:
        """Fuzz tolerance applied before distortion scoring."""
        return self.get(
            'default_fuzz',
            default=DEFAULT_FUZZ,
            env_var='PHOTOFINGERPRINT_FUZZ'
        )

    @property
    def low_distortion_threshold(self) -> int:
        """Scores below this are reported as identical."""
        return self.get(
            'low_distortion_threshold',
            default=LOW_DISTORTION_THRESHOLD,
            env_var='PHOTOFINGERPRINT_LOW_THRESHOLD'
        )

    @property
    def high_distortion_threshold(self) -> int:
        """Scores below this (and above the low one) are reported as similar."""
        return self.get(
            'high_distortion_threshold',
            default=HIGH_DISTORTION_THRESHOLD,
            env_var='PHOTOFINGERPRINT_HIGH_THRESHOLD'
        )

    @property
    def poll_interval(self) -> float:
        """Seconds an idle worker waits before asking the walker again."""
        return self.get(
            'poll_interval',
            default=POLL_INTERVAL,
            env_var='PHOTOFINGERPRINT_POLL_INTERVAL'
        )

    @property
    def max_image_pixels(self) -> int:
        """Maximum image size in pixels (decompression bomb limit)."""
        return self.get(
            'max_image_pixels',
            default=MAX_IMAGE_PIXELS,
            env_var='PHOTOFINGERPRINT_MAX_PIXELS'
        )

    def create_example_config(self):
        """Create an example configuration file."""
        self.config_dir.mkdir(parents=True, exist_ok=True)

        example_config = {
            "_comment": "Photo Fingerprint User Configuration",
            "default_threads": default_thread_count(),
            "default_fuzz": DEFAULT_FUZZ,
            "low_distortion_threshold": LOW_DISTORTION_THRESHOLD,
            "high_distortion_threshold": HIGH_DISTORTION_THRESHOLD,
            "poll_interval": POLL_INTERVAL,
            "max_image_pixels": MAX_IMAGE_PIXELS,
        }

        try:
            with open(self.config_file_path, 'w', encoding='utf-8') as f:
                json.dump(example_config, f, indent=2)
            logger.info(f"Created example config file at {self.config_file_path}")
            return True
        except OSError as e:
            logger.error(f"Failed to create example config: {e}")
            return False


# Global instance
_user_config = UserConfig()


def get_user_config() -> UserConfig:
    """Get the global UserConfig instance."""
    return _user_config
