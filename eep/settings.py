"""User settings persistence.

Settings live in a JSON file in the OS-appropriate config directory and
survive application restarts. Missing or malformed entries fall back to the
defaults; problems are logged, never raised.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants
from .model import BackspaceMode

logger = logging.getLogger(__name__)

APP_NAME = "eep"


@dataclass
class EditorSettings:
    """User-tunable editor behavior."""
    backspace_mode: str = BackspaceMode.SIMPLE.value
    show_line_numbers: bool = True
    tab_width: int = EditorConstants.TAB_WIDTH
    scroll_step: int = EditorConstants.SCROLL_STEP
    mouse_capture: bool = True

    @property
    def backspace(self) -> BackspaceMode:
        return BackspaceMode(self.backspace_mode)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditorSettings":
        """Build settings from a dict, keeping defaults for invalid or unknown keys."""
        settings = cls()
        known = {f.name for f in fields(cls)}
        for key, value in data.items():
            if key not in known:
                logger.warning(f"Ignoring unknown setting {key!r}")
                continue
            if not validate_setting(key, value):
                logger.warning(f"Ignoring invalid value {value!r} for setting {key!r}")
                continue
            setattr(settings, key, value)
        return settings

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def validate_setting(key: str, value: Any) -> bool:
    """Validate a setting value.

    Args:
        key: Setting key name.
        value: Setting value to validate.

    Returns:
        True if setting is valid, False otherwise.
    """
    if key == 'backspace_mode':
        return value in {mode.value for mode in BackspaceMode}

    # Boolean settings
    if key in ('show_line_numbers', 'mouse_capture'):
        return isinstance(value, bool)

    # Integer settings; bool is an int subclass and is rejected
    if key == 'tab_width':
        return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 16
    if key == 'scroll_step':
        return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 50

    return False


class SettingsStore:
    """Loads and saves EditorSettings as JSON in the user's config directory."""

    def __init__(self, config_dir: Optional[Path] = None):
        """Initialize settings persistence."""
        self._config_dir = Path(config_dir) if config_dir else Path(platformdirs.user_config_dir(APP_NAME))
        self._settings_file = self._config_dir / "settings.json"

    @property
    def path(self) -> Path:
        return self._settings_file

    def _ensure_config_dir(self) -> None:
        """Ensure the config directory exists."""
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")

    def load(self) -> EditorSettings:
        """Load settings from disk.

        Returns:
            The stored settings, or defaults if the file doesn't exist or
            can't be read.
        """
        if not self._settings_file.exists():
            return EditorSettings()

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            return EditorSettings()

        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            return EditorSettings()

        return EditorSettings.from_dict(data)

    def save(self, settings: EditorSettings) -> bool:
        """Save settings to disk atomically.

        Returns:
            True if save was successful, False otherwise.
        """
        self._ensure_config_dir()

        temp_file = self._settings_file.with_suffix(EditorConstants.ATOMIC_SAVE_SUFFIX)
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(settings.to_dict(), f, indent=2)
            temp_file.replace(self._settings_file)
            return True
        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                logger.debug(f"Could not remove {temp_file}")
            return False
