"""
Application settings for the VRF sizing tool.

Settings are read from a JSON file merged over built-in defaults. The file path
comes from the VRF_SIZING_SETTINGS environment variable, or settings.json in the
working directory.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR = "VRF_SIZING_SETTINGS"
DEFAULT_SETTINGS_FILE = "settings.json"


class AppSettings:
    """Application settings manager with optional persistent storage."""

    def __init__(self, settings_file: Optional[str] = None, load: bool = True):
        """
        Initialize settings manager.

        Args:
            settings_file: Path to settings JSON file (environment/default when None)
            load: Read the file immediately
        """
        self.settings_file = settings_file or os.environ.get(SETTINGS_ENV_VAR, DEFAULT_SETTINGS_FILE)
        self._settings = self._load_default_settings()
        if load:
            self.load()

    def _load_default_settings(self) -> Dict[str, Any]:
        """
        Load default application settings.

        Returns:
            Dictionary with default settings
        """
        return {
            # External data sources; None means the packaged built-in tables
            "catalog_path": None,
            "factors_path": None,
            "product_family": "vrf",
            "default_brand": "samsung",
            "default_orientation": "vertical",
            # Highest diversity percentage a brand accepts
            "brand_factor_ceilings": {"daikin": 130},
            # Diversity tier only valid on one orientation
            "reserved_diversity_percent": 145,
            "reserved_orientation": "horizontal",
            "log_level": "INFO",
            "log_dir": None,
        }

    def load(self) -> bool:
        """
        Load settings from file.

        Returns:
            True if loaded successfully, False if using defaults
        """
        try:
            if os.path.exists(self.settings_file):
                with open(self.settings_file, "r", encoding="utf-8") as f:
                    file_settings = json.load(f)
                if not isinstance(file_settings, dict):
                    raise ValueError("settings file must contain a JSON object")
                self._settings.update(file_settings)
                logger.info(f"Settings loaded from {self.settings_file}")
                return True
            logger.info("Settings file not found, using defaults")
            return False
        except (OSError, ValueError) as e:
            logger.error(f"Error loading settings: {e}")
            return False

    def save(self) -> bool:
        """
        Save settings to file.

        Returns:
            True if saved successfully, False otherwise
        """
        try:
            with open(self.settings_file, "w", encoding="utf-8") as f:
                json.dump(self._settings, f, indent=2, ensure_ascii=False)
            logger.info(f"Settings saved to {self.settings_file}")
            return True
        except OSError as e:
            logger.error(f"Error saving settings: {e}")
            return False

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get setting value.

        Args:
            key: Setting key
            default: Default value if key not found

        Returns:
            Setting value or default
        """
        return self._settings.get(key, default)

    def set(self, key: str, value: Any, auto_save: bool = False) -> None:
        """
        Set setting value.

        Args:
            key: Setting key
            value: Setting value
            auto_save: Write the settings file immediately
        """
        self._settings[key] = value
        if auto_save:
            self.save()

    def get_all(self) -> Dict[str, Any]:
        """Get a copy of all settings."""
        return self._settings.copy()

    def reset_to_defaults(self) -> None:
        """Reset all settings to defaults (in memory only)."""
        self._settings = self._load_default_settings()
        logger.info("Settings reset to defaults")


_settings: Optional[AppSettings] = None


def get_settings() -> AppSettings:
    """
    Get the global AppSettings instance, loading it on first use.

    Returns:
        AppSettings instance
    """
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings
