"""Settings file helpers.

Settings live in ~/.local/share/playlite/settings.json as a flat JSON object.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from .paths import SETTINGS_PATH

logger = logging.getLogger(__name__)

RAWG_API_KEY_SETTING = "rawg_api_key"


def load_settings(path: str = SETTINGS_PATH) -> Dict[str, Any]:
    """Load settings. Returns {} when the file is missing or unreadable."""
    try:
        if os.path.exists(path):
            with open(path, 'r') as f:
                data = json.load(f)
            if isinstance(data, dict):
                return data
            logger.warning(f"[Settings] Ignoring non-object settings file {path}")
    except (json.JSONDecodeError, OSError) as e:
        logger.error(f"[Settings] Error loading settings: {e}")
    return {}


def save_settings(settings: Dict[str, Any], path: str = SETTINGS_PATH) -> bool:
    """Save settings to file"""
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, 'w') as f:
            json.dump(settings, f, indent=2)
        return True
    except (OSError, TypeError) as e:
        logger.error(f"[Settings] Error saving settings: {e}")
        return False


def get_setting(name: str, default: Any = None, path: str = SETTINGS_PATH) -> Any:
    return load_settings(path).get(name, default)


def set_setting(name: str, value: Any, path: str = SETTINGS_PATH) -> bool:
    settings = load_settings(path)
    settings[name] = value
    saved = save_settings(settings, path)
    if saved:
        logger.info(f"[Settings] Saved setting '{name}'")
    return saved


def get_rawg_api_key(path: str = SETTINGS_PATH) -> Optional[str]:
    """Get the configured RAWG key. Blank keys count as not configured."""
    key = get_setting(RAWG_API_KEY_SETTING, path=path)
    if not key or not str(key).strip():
        return None
    return str(key).strip()


def set_rawg_api_key(api_key: Optional[str], path: str = SETTINGS_PATH) -> bool:
    value = api_key.strip() if api_key else None
    return set_setting(RAWG_API_KEY_SETTING, value or None, path=path)
