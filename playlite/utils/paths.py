"""Playlite file path constants and utilities."""

import os


# Playlite data directory (PLAYLITE_DATA_DIR relocates it, e.g. for portable installs)
PLAYLITE_DATA_DIR = os.environ.get(
    "PLAYLITE_DATA_DIR", os.path.expanduser("~/.local/share/playlite")
)

LIBRARY_FILE = "library.json"
SETTINGS_FILE = "settings.json"
KV_STORE_FILE = ".settings.dat.json"
LOG_FILE_NAME = "playlite.log"

# Data files
LIBRARY_PATH = os.path.join(PLAYLITE_DATA_DIR, LIBRARY_FILE)
SETTINGS_PATH = os.path.join(PLAYLITE_DATA_DIR, SETTINGS_FILE)
KV_STORE_PATH = os.path.join(PLAYLITE_DATA_DIR, KV_STORE_FILE)
LOG_FILE = os.path.join(PLAYLITE_DATA_DIR, LOG_FILE_NAME)


def ensure_data_dir(data_dir: str = PLAYLITE_DATA_DIR) -> None:
    """Ensure the Playlite data directory exists."""
    os.makedirs(data_dir, exist_ok=True)
