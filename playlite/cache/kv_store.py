"""Key/value store backed by a single JSON file.

Holds small pieces of UI state (the play queue) keyed by a fixed identifier.
Every save rewrites the whole file.
"""

import json
import logging
import os
from typing import Any, Dict

from ..errors import PersistenceError
from ..utils.paths import KV_STORE_PATH

logger = logging.getLogger(__name__)


class KeyValueStore:
    """JSON file key/value store"""

    def __init__(self, path: str = KV_STORE_PATH):
        self.path = path

    def _read(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, 'r') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object in {self.path}")
        return data

    def load(self, key: str, default: Any = None) -> Any:
        """Get the value stored under key, or default."""
        try:
            return self._read().get(key, default)
        except (OSError, ValueError) as e:
            logger.error(f"[KVStore] Error loading '{key}' from {self.path}: {e}")
            return default

    def save(self, key: str, value: Any) -> None:
        """Store value under key. Raises PersistenceError on failure."""
        try:
            try:
                data = self._read()
            except ValueError as e:
                logger.warning(f"[KVStore] Replacing unreadable store {self.path}: {e}")
                data = {}
            data[key] = value
            os.makedirs(os.path.dirname(self.path) or '.', exist_ok=True)
            tmp_path = f"{self.path}.tmp"
            with open(tmp_path, 'w') as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
            logger.debug(f"[KVStore] Saved '{key}' to {self.path}")
        except (OSError, TypeError) as e:
            raise PersistenceError(f"Could not save '{key}': {e}") from e


class MemoryKeyValueStore:
    """In-process store with the KeyValueStore interface"""

    def __init__(self, initial: Dict[str, Any] = None):
        self.data: Dict[str, Any] = dict(initial or {})

    def load(self, key: str, default: Any = None) -> Any:
        value = self.data.get(key, default)
        return list(value) if isinstance(value, list) else value

    def save(self, key: str, value: Any) -> None:
        self.data[key] = list(value) if isinstance(value, list) else value
