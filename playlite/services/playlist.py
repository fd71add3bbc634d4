"""
PlaylistQueue - the user's ordered "play next" queue.

Responsibilities:
- Keep an ordered list of library game ids, each id at most once
- Write the whole list through to the key/value store after every mutation
- Materialize the queue into LibraryGame objects for display, skipping ids
  whose game no longer exists

Persistence is optimistic: if a save fails the error is logged and the
in-memory queue stays authoritative for the rest of the session.
"""

import logging
from typing import Callable, List, Optional

from ..constants import PLAYLIST_STORE_KEY
from ..errors import PersistenceError
from ..models import LibraryGame

logger = logging.getLogger(__name__)

LibraryProvider = Callable[[], List[LibraryGame]]


class PlaylistQueue:
    """Ordered, persisted queue of library game ids."""

    def __init__(self, store, key: str = PLAYLIST_STORE_KEY, library: Optional[LibraryProvider] = None):
        """
        Args:
            store: Object with load(key, default) and save(key, value)
            key: Storage key for the id list
            library: Optional callable returning the current library; when
                given, ids of deleted games are pruned on the next mutation
        """
        self.store = store
        self.key = key
        self.library = library
        self._ids: List[str] = self._load()

    def _load(self) -> List[str]:
        try:
            saved = self.store.load(self.key, None)
        except Exception as e:
            logger.error(f"[Playlist] Error loading queue: {e}")
            return []
        if not saved:
            return []
        if not isinstance(saved, list):
            logger.warning(f"[Playlist] Ignoring malformed queue of type {type(saved).__name__}")
            return []

        ids: List[str] = []
        for game_id in saved:
            game_id = str(game_id)
            if game_id not in ids:
                ids.append(game_id)
        logger.info(f"[Playlist] Loaded {len(ids)} queued games")
        return ids

    def _persist(self) -> bool:
        try:
            self.store.save(self.key, list(self._ids))
            return True
        except PersistenceError as e:
            logger.error(f"[Playlist] Failed to save queue, keeping in-memory state: {e}")
            return False

    def _prune(self) -> bool:
        """Drop ids whose game left the library. Returns True if any were dropped."""
        if self.library is None:
            return False
        existing = {game.id for game in self.library()}
        kept = [game_id for game_id in self._ids if game_id in existing]
        if len(kept) != len(self._ids):
            logger.info(f"[Playlist] Pruned {len(self._ids) - len(kept)} missing games from queue")
            self._ids = kept
            return True
        return False

    @property
    def ids(self) -> List[str]:
        return list(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def contains(self, game_id: str) -> bool:
        return game_id in self._ids

    def _unchanged(self, pruned: bool) -> bool:
        """No-op exit of a mutation; a prune still has to reach the store."""
        if pruned:
            self._persist()
        return False

    def add(self, game_id: str) -> bool:
        """Append a game unless it is already queued. Returns True if added."""
        pruned = self._prune()
        if game_id in self._ids:
            return self._unchanged(pruned)
        self._ids.append(game_id)
        self._persist()
        logger.info(f"[Playlist] Added {game_id} at position {len(self._ids) - 1}")
        return True

    def remove(self, game_id: str) -> bool:
        pruned = self._prune()
        if game_id not in self._ids:
            return self._unchanged(pruned)
        self._ids.remove(game_id)
        self._persist()
        logger.info(f"[Playlist] Removed {game_id}")
        return True

    def move_up(self, index: int) -> bool:
        """Swap with the previous entry; no-op for the first entry."""
        pruned = self._prune()
        if index <= 0 or index >= len(self._ids):
            return self._unchanged(pruned)
        self._ids[index - 1], self._ids[index] = self._ids[index], self._ids[index - 1]
        self._persist()
        return True

    def move_down(self, index: int) -> bool:
        """Swap with the next entry; no-op for the last entry."""
        pruned = self._prune()
        if index < 0 or index >= len(self._ids) - 1:
            return self._unchanged(pruned)
        self._ids[index + 1], self._ids[index] = self._ids[index], self._ids[index + 1]
        self._persist()
        return True

    def reorder(self, from_index: int, to_index: int) -> bool:
        """Move one entry to an arbitrary position (drag and drop).

        The entry is removed first and reinserted at to_index of the shortened
        list, so [a, b, c, d] with reorder(0, 2) gives [b, c, a, d].
        """
        pruned = self._prune()
        if from_index < 0 or from_index >= len(self._ids):
            logger.debug(f"[Playlist] Ignoring reorder from out-of-range index {from_index}")
            return self._unchanged(pruned)
        to_index = max(0, min(to_index, len(self._ids) - 1))
        if from_index == to_index:
            return self._unchanged(pruned)
        game_id = self._ids.pop(from_index)
        self._ids.insert(to_index, game_id)
        self._persist()
        logger.debug(f"[Playlist] Moved {game_id} from {from_index} to {to_index}")
        return True

    def clear(self) -> None:
        self._ids = []
        self._persist()
        logger.info("[Playlist] Cleared queue")

    def materialize(self, games: Optional[List[LibraryGame]] = None) -> List[LibraryGame]:
        """Queued games in order. Missing games are skipped, not unqueued."""
        if games is None:
            games = self.library() if self.library is not None else []
        by_id = {game.id: game for game in games}
        return [by_id[game_id] for game_id in self._ids if game_id in by_id]
