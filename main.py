import os
import sys
import logging
from typing import List, Dict, Any, Optional

# Add plugin directory to Python path for local imports
PLAYLITE_PLUGIN_DIR = os.environ.get("PLAYLITE_PLUGIN_DIR")
if PLAYLITE_PLUGIN_DIR:
    sys.path.insert(0, PLAYLITE_PLUGIN_DIR)

from playlite.cache import KeyValueStore
from playlite.catalog import RawgClient
from playlite.constants import ALL_GENRES
from playlite.errors import PlayliteError
from playlite.models import LibraryGame, GenreProfile
from playlite.registry import LibraryStore
from playlite.services import CatalogService, PlaylistQueue, build_profile
from playlite.services import catalog_filter, ranking
from playlite.utils.log import setup_logging
from playlite.utils.paths import (
    PLAYLITE_DATA_DIR,
    LIBRARY_FILE,
    SETTINGS_FILE,
    KV_STORE_FILE,
    LOG_FILE_NAME,
    ensure_data_dir,
)
from playlite.utils import settings as settings_util

logger = logging.getLogger("playlite")


def _error(e: Exception) -> Dict[str, Any]:
    """Failure dict for the frontend"""
    if isinstance(e, PlayliteError):
        return e.to_dict()
    return {'success': False, 'error': str(e)}


def _invalid_index(value: Any) -> Dict[str, Any]:
    logger.error(f"[Playlist] Invalid queue index: {value!r}")
    return {'success': False, 'error': 'errors.invalidIndex'}


class Plugin:
    """Main Playlite backend class.

    Public coroutines return a dict with 'success'. Bad payloads, bad queue
    indices, catalog failures and storage failures are reported in that dict
    with an i18n error key instead of being raised.
    """

    def __init__(self, data_dir: Optional[str] = None, rawg_client: Optional[RawgClient] = None):
        self.data_dir = data_dir or PLAYLITE_DATA_DIR
        self._rawg_client = rawg_client

    async def _main(self, configure_logging: bool = True):
        ensure_data_dir(self.data_dir)
        if configure_logging:
            setup_logging(log_file=os.path.join(self.data_dir, LOG_FILE_NAME))

        logger.info(f"[INIT] Starting Playlite backend (data dir: {self.data_dir})")

        self.settings_path = os.path.join(self.data_dir, SETTINGS_FILE)
        self.library = LibraryStore(os.path.join(self.data_dir, LIBRARY_FILE))
        self.kv_store = KeyValueStore(os.path.join(self.data_dir, KV_STORE_FILE))
        self.playlist = PlaylistQueue(self.kv_store, library=self.library.get_games)

        self.rawg = self._rawg_client or RawgClient()
        self.catalog = CatalogService(
            self.rawg,
            api_key_provider=lambda: settings_util.get_rawg_api_key(self.settings_path),
        )

        logger.info(f"[INIT] Ready: {self.library.count()} games, {len(self.playlist)} queued")

    async def _unload(self):
        logger.info("[INIT] Unloading Playlite backend")
        await self.rawg.close()

    def _profile(self) -> GenreProfile:
        return build_profile(self.library.get_games())

    # ============== LIBRARY API ==============

    async def get_library(self) -> Dict[str, Any]:
        games = []
        for game in self.library.get_games():
            entry = game.to_dict()
            entry['in_playlist'] = self.playlist.contains(game.id)
            games.append(entry)
        return {'success': True, 'games': games}

    async def add_game(self, game: Dict[str, Any]) -> Dict[str, Any]:
        try:
            added = self.library.add_game(LibraryGame.from_dict(game))
            return {'success': True, 'game': added.to_dict()}
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"[Library] Invalid game payload: {e}")
            return {'success': False, 'error': 'errors.invalidGame', 'message': str(e)}
        except PlayliteError as e:
            return _error(e)

    async def update_game(self, game: Dict[str, Any]) -> Dict[str, Any]:
        try:
            if not self.library.update_game(LibraryGame.from_dict(game)):
                return {'success': False, 'error': 'errors.gameNotFound'}
            return {'success': True}
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"[Library] Invalid game payload: {e}")
            return {'success': False, 'error': 'errors.invalidGame', 'message': str(e)}
        except PlayliteError as e:
            return _error(e)

    async def delete_game(self, game_id: str) -> Dict[str, Any]:
        try:
            return {'success': self.library.delete_game(game_id)}
        except PlayliteError as e:
            return _error(e)

    async def toggle_favorite(self, game_id: str) -> Dict[str, Any]:
        try:
            favorite = self.library.toggle_favorite(game_id)
        except PlayliteError as e:
            return _error(e)
        if favorite is None:
            return {'success': False, 'error': 'errors.gameNotFound'}
        return {'success': True, 'favorite': favorite}

    async def import_games(self, games: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Bulk import; owned titles changed, so cached catalogs are stale."""
        try:
            parsed = [LibraryGame.from_dict(g) for g in games]
            count = self.library.import_games(parsed)
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"[Library] Invalid import payload: {e}")
            return {'success': False, 'error': 'errors.invalidGame', 'message': str(e)}
        except PlayliteError as e:
            return _error(e)
        self.catalog.invalidate()
        return {'success': True, 'imported': count}

    async def get_siblings(self, game_id: str) -> Dict[str, Any]:
        game = self.library.get_game(game_id)
        if game is None:
            return {'success': False, 'error': 'errors.gameNotFound'}
        return {'success': True, 'siblings': catalog_filter.find_siblings(game, self.library.get_games())}

    # ============== RECOMMENDATION API ==============

    async def get_user_profile(self) -> Dict[str, Any]:
        return {'success': True, 'profile': self._profile().to_dict()}

    async def get_home(self) -> Dict[str, Any]:
        games = self.library.get_games()
        profile = build_profile(games) if games else None
        view = ranking.home_view(games, profile)
        return {
            'success': True,
            'stats': view['stats'],
            'continue_playing': [g.to_dict() for g in view['continue_playing']],
            'backlog_recommendations': [g.to_dict() for g in view['backlog_recommendations']],
            'most_played': [g.to_dict() for g in view['most_played']],
            'top_genres': [{'name': name, 'count': count} for name, count in view['top_genres']],
        }

    async def get_trending(self, genre: str = ALL_GENRES, retry: bool = False) -> Dict[str, Any]:
        try:
            view = await self.catalog.trending_view(
                self.library.get_games(), self._profile(), genre_filter=genre, retry=retry
            )
        except PlayliteError as e:
            return _error(e)
        return {'success': True, **view}

    async def get_upcoming(self, retry: bool = False) -> Dict[str, Any]:
        try:
            games = await self.catalog.upcoming_view(self._profile(), retry=retry)
        except PlayliteError as e:
            return _error(e)
        return {'success': True, 'games': games}

    async def get_recommended(self, genre: str = ALL_GENRES, limit: Optional[int] = None) -> Dict[str, Any]:
        try:
            games = await self.catalog.recommended(
                self.library.get_games(), self._profile(), genre_filter=genre, limit=limit
            )
        except PlayliteError as e:
            return _error(e)
        return {'success': True, 'games': games}

    async def get_catalog_status(self) -> Dict[str, Any]:
        return {'success': True, **self.catalog.status()}

    # ============== PLAYLIST API ==============

    async def get_playlist(self) -> Dict[str, Any]:
        return {
            'success': True,
            'games': [g.to_dict() for g in self.playlist.materialize()],
        }

    async def add_to_playlist(self, game_id: str) -> Dict[str, Any]:
        if self.library.get_game(game_id) is None:
            return {'success': False, 'error': 'errors.gameNotFound'}
        return {'success': True, 'changed': self.playlist.add(game_id)}

    async def remove_from_playlist(self, game_id: str) -> Dict[str, Any]:
        return {'success': True, 'changed': self.playlist.remove(game_id)}

    async def move_up(self, index: int) -> Dict[str, Any]:
        try:
            index = int(index)
        except (TypeError, ValueError):
            return _invalid_index(index)
        return {'success': True, 'changed': self.playlist.move_up(index)}

    async def move_down(self, index: int) -> Dict[str, Any]:
        try:
            index = int(index)
        except (TypeError, ValueError):
            return _invalid_index(index)
        return {'success': True, 'changed': self.playlist.move_down(index)}

    async def reorder_playlist(self, from_index: int, to_index: int) -> Dict[str, Any]:
        try:
            from_index, to_index = int(from_index), int(to_index)
        except (TypeError, ValueError):
            return _invalid_index((from_index, to_index))
        return {'success': True, 'changed': self.playlist.reorder(from_index, to_index)}

    async def get_playlist_suggestions(self) -> Dict[str, Any]:
        games = self.library.get_games()
        suggestions = ranking.playlist_suggestions(games, self.playlist.ids, build_profile(games))
        return {'success': True, 'games': [g.to_dict() for g in suggestions]}

    # ============== SETTINGS API ==============

    async def set_rawg_api_key(self, api_key: str) -> Dict[str, Any]:
        """Save the RAWG key; cached lists were fetched with the old one."""
        if not settings_util.set_rawg_api_key(api_key, self.settings_path):
            return {'success': False, 'error': 'errors.persistenceFailed'}
        self.catalog.invalidate()
        return {'success': True}

    async def get_rawg_status(self) -> Dict[str, Any]:
        return {
            'success': True,
            'has_api_key': settings_util.get_rawg_api_key(self.settings_path) is not None,
        }
