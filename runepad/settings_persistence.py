"""Per-document settings that survive restarts.

Settings live in a JSON file in the OS-appropriate config directory,
keyed by the absolute path of the document they belong to.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)


class SettingsPersistence:
    """Loads and saves per-document settings such as the zoom level."""

    def __init__(self, config_dir: Optional[Path] = None):
        if config_dir is None:
            config_dir = Path(platformdirs.user_config_dir("runepad"))
        self._config_dir = Path(config_dir)
        self._settings_file = self._config_dir / "settings.json"
        self._settings_cache: Optional[Dict[str, Dict[str, Any]]] = None

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def _ensure_config_dir(self) -> None:
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")

    def _load_all_settings(self) -> Dict[str, Dict[str, Any]]:
        """Load all settings from disk, or an empty dict if unreadable."""
        if self._settings_cache is not None:
            return self._settings_cache

        if not self._settings_file.exists():
            self._settings_cache = {}
            return self._settings_cache

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            self._settings_cache = {}
            return self._settings_cache

        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            data = {}
        self._settings_cache = data
        return self._settings_cache

    def _save_all_settings(self, settings: Dict[str, Dict[str, Any]]) -> bool:
        """Write all settings atomically (temp file + rename)."""
        self._ensure_config_dir()
        temp_file = self._settings_file.with_suffix('.tmp')
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(settings, f, indent=2)
            temp_file.replace(self._settings_file)
        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                temp_file.unlink(missing_ok=True)
            except OSError as cleanup_error:
                logger.debug(f"Could not remove {temp_file}: {cleanup_error}")
            return False
        self._settings_cache = settings
        return True

    def load_settings(self, document_path: Optional[str]) -> Dict[str, Any]:
        """Settings stored for a document; empty if none or no path."""
        if document_path is None:
            return {}
        abs_path = os.path.abspath(document_path)
        doc_settings = self._load_all_settings().get(abs_path, {})
        if not isinstance(doc_settings, dict):
            logger.warning(f"Settings for {abs_path} are not a dict, ignoring")
            return {}
        return doc_settings.copy()

    def save_settings(self, document_path: Optional[str], settings: Dict[str, Any]) -> bool:
        if document_path is None:
            return False
        abs_path = os.path.abspath(document_path)
        all_settings = dict(self._load_all_settings())
        all_settings[abs_path] = settings
        return self._save_all_settings(all_settings)

    @staticmethod
    def validate_setting(key: str, value: Any) -> bool:
        """Check a setting value before applying it.

        Unknown keys are accepted so newer settings files still load.
        """
        if value is None:
            return True
        if key == 'zoom':
            return (isinstance(value, (int, float)) and not isinstance(value, bool)
                    and value >= EditorConstants.MIN_ZOOM)
        return True

    def load_zoom(self, document_path: Optional[str]) -> Optional[float]:
        """Stored zoom for a document, or None if absent or invalid."""
        zoom = self.load_settings(document_path).get('zoom')
        if zoom is None or not self.validate_setting('zoom', zoom):
            return None
        return float(zoom)

    def save_zoom(self, document_path: Optional[str], zoom: float) -> bool:
        settings = self.load_settings(document_path)
        settings['zoom'] = zoom
        return self.save_settings(document_path, settings)

    def clear_cache(self) -> None:
        self._settings_cache = None


# Global instance
_persistence: Optional[SettingsPersistence] = None


def get_persistence() -> SettingsPersistence:
    """Get the global settings persistence instance."""
    global _persistence
    if _persistence is None:
        _persistence = SettingsPersistence()
    return _persistence
