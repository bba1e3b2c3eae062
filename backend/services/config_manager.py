"""
Configuration Manager - Handle diff backend settings persistence
"""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "SEQDIFF_CONFIG_DIR"


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """Manage configuration persistence"""

    _instance = None
    _config_file = None

    def __init__(self):
        # 1st: environment variable, 2nd: ~/.seqdiff
        config_dir = os.environ.get(CONFIG_DIR_ENV) or os.path.expanduser("~/.seqdiff")

        try:
            config_path = Path(config_dir)
            config_path.mkdir(parents=True, exist_ok=True)
            self._config_file = config_path / "config.json"
        except OSError as e:
            logger.warning("Cannot write to %s: %s", config_dir, e)
            self._config_file = None

        # Fallback: system temp directory
        if not self._config_file:
            tmp_dir = Path(tempfile.gettempdir()) / "seqdiff"
            tmp_dir.mkdir(parents=True, exist_ok=True)
            self._config_file = tmp_dir / "config.json"
            logger.warning("Using temporary config path: %s", self._config_file)

        self._config = self._load_config()

    @classmethod
    def get_instance(cls) -> "ConfigManager":
        """Get singleton instance"""
        if cls._instance is None:
            cls._instance = ConfigManager()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the singleton so the next get_instance() re-reads the environment"""
        cls._instance = None

    @property
    def config_file(self) -> Path:
        return self._config_file

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from file, filling gaps from defaults"""
        if not self._config_file.exists():
            return self._default_config()

        try:
            with open(self._config_file) as f:
                stored = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Error loading config %s: %s", self._config_file, e)
            return self._default_config()

        if not isinstance(stored, dict):
            logger.warning("Ignoring non-object config in %s", self._config_file)
            return self._default_config()

        return _deep_merge(self._default_config(), stored)

    def _default_config(self) -> dict[str, Any]:
        """Get default configuration"""
        return {
            "diff": {
                "ignoreWhitespace": False,
                "ignoreCase": False,
                "trimLines": False,
                "contextLines": 3,
                "maxCells": 25_000_000,  # LCS table cells; 0 disables the guard
            },
            "server": {"host": "127.0.0.1", "port": 8000},
        }

    def get_config(self) -> dict[str, Any]:
        """Get current configuration"""
        # Reload config from file to ensure we have the latest
        self._config = self._load_config()
        return copy.deepcopy(self._config)

    def save_config(self, config: dict[str, Any]):
        """Save configuration to file"""
        self._config = _deep_merge(self._config, config)

        self._config_file.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(self._config_file, "w") as f:
                json.dump(self._config, f, indent=2)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def get(self, key: str, default=None):
        """Get specific config value"""
        return self._config.get(key, default)
