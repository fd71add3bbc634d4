# Utils package
from .normalize import normalize, parse_genres
from .paths import (
    ensure_data_dir,
    PLAYLITE_DATA_DIR,
    LIBRARY_PATH,
    SETTINGS_PATH,
    KV_STORE_PATH,
    LOG_FILE,
)

__all__ = [
    'normalize',
    'parse_genres',
    'ensure_data_dir',
    'PLAYLITE_DATA_DIR',
    'LIBRARY_PATH',
    'SETTINGS_PATH',
    'KV_STORE_PATH',
    'LOG_FILE',
]
