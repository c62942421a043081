"""
Settings for the VATSIM status file parser.
These are configurable parameters that can be changed by the user.
"""

import os
import json
import logging
from pathlib import Path
from typing import Dict, Any, Tuple
from .constants import (
    DEFAULT_ENCODING,
    DEFAULT_TOP_AIRPORTS,
    LOWEST_SUPPORTED_FORMAT_VERSION,
    HIGHEST_SUPPORTED_FORMAT_VERSION,
)

logger = logging.getLogger("vatsim_status.settings")


class Settings:
    """
    Application settings that can be loaded from and saved to a configuration file.
    Uses a singleton pattern to ensure only one settings instance exists.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(Settings, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._settings = self._defaults()

        self.config_dir = Path(self._get_config_dir())
        self.config_file = self.config_dir / "settings.json"
        self._load_settings()

        self._initialized = True

    @staticmethod
    def _defaults() -> Dict[str, Any]:
        return {
            # Input decoding
            "default_encoding": DEFAULT_ENCODING,

            # Format checks
            "min_supported_format_version": LOWEST_SUPPORTED_FORMAT_VERSION,
            "max_supported_format_version": HIGHEST_SUPPORTED_FORMAT_VERSION,

            # Output
            "show_faults": False,
            "top_airports": DEFAULT_TOP_AIRPORTS,
            "log_level": "INFO",
        }

    @staticmethod
    def _get_config_dir() -> str:
        """Get the configuration directory for the application"""
        if os.name == 'nt':  # Windows
            return os.path.join(os.environ.get('APPDATA', ''), 'VatsimStatus')

        home_dir = os.path.expanduser("~")
        return os.path.join(home_dir, '.config', 'vatsim-status')

    def _load_settings(self) -> None:
        """Load settings from the configuration file"""
        if not self.config_file.exists():
            logger.debug("No settings file found, using defaults")
            return

        try:
            with open(self.config_file, 'r') as f:
                loaded_settings = json.load(f)
            self._settings.update(loaded_settings)
            logger.info(f"Settings loaded from {self.config_file}")
        except (OSError, ValueError) as e:
            logger.error(f"Error loading settings: {e}")

    def reload(self) -> None:
        """Discard current values and read the configuration file again"""
        self._settings = self._defaults()
        self._load_settings()

    def save_settings(self) -> bool:
        """Save current settings to the configuration file"""
        try:
            os.makedirs(self.config_dir, exist_ok=True)
            with open(self.config_file, 'w') as f:
                json.dump(self._settings, f, indent=4)
            logger.info(f"Settings saved to {self.config_file}")
            return True
        except OSError as e:
            logger.error(f"Error saving settings: {e}")
            return False

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value by key"""
        return self._settings.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a setting value by key"""
        self._settings[key] = value

    def get_all(self) -> Dict[str, Any]:
        """Get all settings as a dictionary"""
        return self._settings.copy()

    def supported_format_versions(self) -> Tuple[int, int]:
        """Get the configured (lowest, highest) supported format versions"""
        return (
            int(self.get("min_supported_format_version", LOWEST_SUPPORTED_FORMAT_VERSION)),
            int(self.get("max_supported_format_version", HIGHEST_SUPPORTED_FORMAT_VERSION)),
        )

    def reset_to_defaults(self) -> None:
        """Reset all settings to their default values"""
        self._settings = self._defaults()
        self.save_settings()
        logger.info("Settings reset to defaults")


# Create a global settings instance
settings = Settings()
