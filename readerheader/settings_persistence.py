"""Settings persistence for reader header preferences.

This module provides persistent storage for the header mode and layout
settings. Each setting lives under its own named key in a JSON file stored
in an OS-appropriate location, so it survives application restarts.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

logger = logging.getLogger(__name__)


class SettingsPersistence:
    """Manages persistent storage of reader settings.

    Settings are stored in a JSON file in the user's config directory as a
    flat mapping from setting key to value. Every write goes straight to
    disk; there is no batching.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        """Initialize settings persistence.

        Args:
            config_dir: Directory holding the settings file. Defaults to the
                platform config directory for readerheader.
        """
        if config_dir is None:
            config_dir = Path(platformdirs.user_config_dir("readerheader", "readerheader"))
        self._config_dir = Path(config_dir)
        self._settings_file = self._config_dir / "settings.json"
        self._settings_cache: Optional[Dict[str, Any]] = None

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def _ensure_config_dir(self) -> None:
        """Ensure the config directory exists."""
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except (OSError, PermissionError) as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")

    def _load_all_settings(self) -> Dict[str, Any]:
        """Load all settings from disk.

        Returns:
            Dictionary mapping setting keys to values.
            Returns empty dict if file doesn't exist or can't be read.
        """
        if self._settings_cache is not None:
            return self._settings_cache

        if not self._settings_file.exists():
            self._settings_cache = {}
            return self._settings_cache

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)

            if not isinstance(data, dict):
                logger.warning("Settings file has invalid format (not a dict), ignoring")
                self._settings_cache = {}
                return self._settings_cache

            self._settings_cache = data
            return self._settings_cache

        except (json.JSONDecodeError, OSError, PermissionError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            self._settings_cache = {}
            return self._settings_cache

    def _save_all_settings(self, settings: Dict[str, Any]) -> bool:
        """Save all settings to disk atomically.

        Args:
            settings: Dictionary mapping setting keys to values.

        Returns:
            True if save was successful, False otherwise.
        """
        self._ensure_config_dir()

        # Temp file + rename so a crash never leaves a truncated file
        temp_file = self._settings_file.with_suffix('.tmp')

        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(settings, f, indent=2, ensure_ascii=False)

            temp_file.replace(self._settings_file)

            self._settings_cache = settings
            return True

        except (OSError, PermissionError, TypeError, ValueError) as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False

    def read_setting(self, key: str, default: Any = None) -> Any:
        """Read a single setting.

        Args:
            key: Setting key name.
            default: Value returned when the key has never been saved.

        Returns:
            The stored value, or default.
        """
        return self._load_all_settings().get(key, default)

    def is_true(self, key: str) -> bool:
        """Return True only if the stored value is the boolean True."""
        return self.read_setting(key) is True

    def save_setting(self, key: str, value: Any) -> bool:
        """Save a single setting and write it to disk immediately.

        Args:
            key: Setting key name.
            value: JSON-serializable value.

        Returns:
            True if save was successful, False otherwise.
        """
        all_settings = dict(self._load_all_settings())
        all_settings[key] = value
        return self._save_all_settings(all_settings)

    def clear_cache(self) -> None:
        """Clear the in-memory cache of settings."""
        self._settings_cache = None


# Global instance
_persistence: Optional[SettingsPersistence] = None


def get_persistence() -> SettingsPersistence:
    """Get the global settings persistence instance.

    Returns:
        The singleton SettingsPersistence instance.
    """
    global _persistence
    if _persistence is None:
        _persistence = SettingsPersistence()
    return _persistence
