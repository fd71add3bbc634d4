"""
Library store with JSON storage.

Holds the user's owned games keyed by id. Every mutation writes the whole
file through, so the store on disk always matches memory.
"""
import json
import os
import logging
from dataclasses import replace
from typing import Dict, Optional, List, Iterable

from ..errors import PersistenceError
from ..models import LibraryGame
from ..utils.paths import LIBRARY_PATH

logger = logging.getLogger(__name__)


class LibraryStore:
    """
    Manages the owned-games library.

    This layer only ever reads games; CRUD lives here so the intelligence
    services can be handed a plain `get_games` callable.
    """

    def __init__(self, path: str = LIBRARY_PATH):
        self.path = path
        self._data: Dict[str, LibraryGame] = {}
        self._load()

    def _load(self):
        """Load library from disk"""
        if not os.path.exists(self.path):
            return
        try:
            with open(self.path, 'r') as f:
                data = json.load(f)
            for entry in data.get('games', []):
                try:
                    game = LibraryGame.from_dict(entry)
                except (KeyError, TypeError, ValueError) as e:
                    logger.warning(f"[Library] Skipping malformed entry {entry!r}: {e}")
                    continue
                self._data[game.id] = game
            logger.info(f"[Library] Loaded {len(self._data)} games from {self.path}")
        except (OSError, ValueError, AttributeError) as e:
            logger.error(f"[Library] Failed to load library: {e}")
            self._data = {}

    def _save(self):
        """Persist library to disk"""
        try:
            os.makedirs(os.path.dirname(self.path) or '.', exist_ok=True)
            tmp_path = f"{self.path}.tmp"
            with open(tmp_path, 'w') as f:
                json.dump({'games': [g.to_dict() for g in self._data.values()]}, f, indent=2)
            os.replace(tmp_path, self.path)
            logger.debug(f"[Library] Saved {len(self._data)} games")
        except OSError as e:
            logger.error(f"[Library] Failed to save: {e}")
            raise PersistenceError(f"Could not save library: {e}") from e

    def get_games(self) -> List[LibraryGame]:
        """All games in insertion order"""
        return list(self._data.values())

    def get_game(self, game_id: str) -> Optional[LibraryGame]:
        return self._data.get(game_id)

    def _commit(self, previous: Dict[str, LibraryGame]):
        """Save, restoring `previous` in memory if the write fails"""
        try:
            self._save()
        except PersistenceError:
            self._data = previous
            raise

    def add_game(self, game: LibraryGame) -> LibraryGame:
        """Add a game; an existing id is overwritten"""
        previous = dict(self._data)
        self._data[game.id] = game
        self._commit(previous)
        logger.info(f"[Library] Added {game.id}: {game.name}")
        return game

    def update_game(self, game: LibraryGame) -> bool:
        if game.id not in self._data:
            return False
        previous = dict(self._data)
        self._data[game.id] = game
        self._commit(previous)
        logger.info(f"[Library] Updated {game.id}")
        return True

    def delete_game(self, game_id: str) -> bool:
        if game_id not in self._data:
            return False
        previous = dict(self._data)
        del self._data[game_id]
        self._commit(previous)
        logger.info(f"[Library] Removed {game_id}")
        return True

    def toggle_favorite(self, game_id: str) -> Optional[bool]:
        """Flip the favorite flag. Returns the new value, or None if unknown."""
        game = self._data.get(game_id)
        if game is None:
            return None
        previous = dict(self._data)
        # entries are shared with callers, so swap in a copy instead of mutating
        self._data[game_id] = replace(game, favorite=not game.favorite)
        self._commit(previous)
        return self._data[game_id].favorite

    def import_games(self, games: Iterable[LibraryGame]) -> int:
        """Bulk upsert (e.g. a backup restore or store import). One write."""
        previous = dict(self._data)
        count = 0
        for game in games:
            self._data[game.id] = game
            count += 1
        if count:
            self._commit(previous)
        logger.info(f"[Library] Imported {count} games")
        return count

    def count(self) -> int:
        return len(self._data)
