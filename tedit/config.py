"""Editor configuration.

Command-line values are merged with a JSON settings file stored in an
OS-appropriate config directory. A missing or damaged settings file never
stops the editor; the defaults are used and a warning is logged.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS: Dict[str, Any] = {
    "tab_size": EditorConstants.DEFAULT_TAB_SIZE,
}


def default_config_path() -> Path:
    """Location of the settings file when --config is not given."""
    return Path(platformdirs.user_config_dir(EditorConstants.APP_NAME)) / EditorConstants.CONFIG_FILE_NAME


def validate_setting(key: str, value: Any) -> bool:
    """Validate a setting value.

    Unknown settings are accepted so newer files still load.
    """
    if key == 'tab_size':
        # bool is an int subclass; reject true/false explicitly
        if isinstance(value, bool) or not isinstance(value, int):
            return False
        return 1 <= value <= EditorConstants.MAX_TAB_SIZE
    return True


def load_settings(path: Union[str, Path]) -> Dict[str, Any]:
    """Load the settings file, keeping only valid values.

    Returns:
        Dictionary of settings; empty if the file is missing or unreadable.
    """
    path = Path(path)
    if not path.exists():
        return {}
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not load settings from {path}: {e}")
        return {}

    if not isinstance(data, dict):
        logger.warning("Settings file has invalid format (not a dict), ignoring")
        return {}

    settings = {}
    for key, value in data.items():
        if validate_setting(key, value):
            settings[key] = value
        else:
            logger.warning(f"Ignoring invalid setting {key}={value!r} in {path}")
    return settings


def write_default_config(path: Union[str, Path]) -> Path:
    """Write the default settings to ``path`` atomically.

    Creates parent directories as needed. Raises OSError on failure.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_filename = None
    try:
        with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8', dir=path.parent,
                                         suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                                         delete=False) as temp_file:
            temp_filename = temp_file.name
            json.dump(DEFAULT_SETTINGS, temp_file, indent=2)
            temp_file.write("\n")
        os.replace(temp_filename, path)
    except OSError:
        if temp_filename and os.path.exists(temp_filename):
            try:
                os.remove(temp_filename)
            except OSError:
                pass
        raise
    return path


@dataclass
class Config:
    """Resolved configuration shared by the input and render threads."""
    file: Optional[Path] = None
    config_path: Path = field(default_factory=default_config_path)
    tab_size: int = EditorConstants.DEFAULT_TAB_SIZE

    @classmethod
    def resolve(cls, file: Optional[Union[str, Path]] = None,
                config_path: Optional[Union[str, Path]] = None) -> "Config":
        """Merge the edited file from the command line with the settings file."""
        config_path = Path(config_path) if config_path is not None else default_config_path()
        settings = {**DEFAULT_SETTINGS, **load_settings(config_path)}
        return cls(
            file=Path(file) if file is not None else None,
            config_path=config_path,
            tab_size=settings["tab_size"],
        )
