"""Catalog cache.

Holds the last successfully fetched catalog page so the RAWG endpoint is hit
at most once per EMPTY -> POPULATED transition, no matter how many views ask
for the data.

States:
    EMPTY      no data (never fetched, invalidated, or the last fetch failed)
    POPULATED  a non-empty list of CatalogGame plus the genres seen in it

Concurrent get() calls while EMPTY share a single in-flight fetch task.
"""

import asyncio
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from ..errors import CatalogError, TransportError
from ..models import CatalogGame

logger = logging.getLogger(__name__)

Fetcher = Callable[[], Awaitable[List[CatalogGame]]]


class CacheState(Enum):
    EMPTY = "empty"
    POPULATED = "populated"


class CatalogCache:
    """Two-state catalog cache with single-flight fetching."""

    def __init__(self, fetcher: Fetcher, name: str = "catalog"):
        """
        Args:
            fetcher: Async callable returning the catalog list. Expected to
                raise CatalogError subclasses on failure.
            name: Label used in log messages
        """
        self._fetcher = fetcher
        self.name = name
        self._state = CacheState.EMPTY
        self._games: Tuple[CatalogGame, ...] = ()
        self._genres: Tuple[str, ...] = ()
        self._inflight: Optional[asyncio.Task] = None
        # Bumped on every invalidation so a fetch started before it is not stored
        self._generation = 0
        self.last_error: Optional[CatalogError] = None
        self.fetch_count = 0

    @property
    def state(self) -> CacheState:
        return self._state

    @property
    def is_fetching(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    @property
    def games(self) -> List[CatalogGame]:
        """Cached games without triggering a fetch ([] while EMPTY)."""
        return list(self._games)

    @property
    def genres(self) -> List[str]:
        """Sorted unique genre labels of the unfiltered cached catalog."""
        return list(self._genres)

    async def get(self) -> List[CatalogGame]:
        """Return the catalog, fetching only when EMPTY.

        Raises:
            CatalogError: The fetch failed; the cache stays EMPTY.
        """
        if self._state is CacheState.POPULATED:
            logger.debug(f"[Catalog] Serving {self.name} from cache ({len(self._games)} games)")
            return list(self._games)

        if self._inflight is None or self._inflight.done():
            self._inflight = asyncio.ensure_future(self._fetch(self._generation))

        # shield() so one cancelled waiter does not cancel the shared fetch
        return list(await asyncio.shield(self._inflight))

    async def retry(self) -> List[CatalogGame]:
        """Drop whatever is cached (and the last error) and fetch again.

        A retry while a fetch is outstanding joins that fetch instead.
        """
        if self.is_fetching:
            logger.info(f"[Catalog] {self.name} fetch already in progress, joining it")
            return list(await asyncio.shield(self._inflight))
        logger.info(f"[Catalog] Retrying {self.name} fetch")
        self.invalidate()
        return await self.get()

    def invalidate(self) -> None:
        """Clear cached data; the next get() fetches again."""
        if self._state is CacheState.POPULATED:
            logger.info(f"[Catalog] Invalidated {self.name} cache ({len(self._games)} games)")
        self._generation += 1
        self._state = CacheState.EMPTY
        self._games = ()
        self._genres = ()
        self._inflight = None
        self.last_error = None

    async def _fetch(self, generation: int) -> Tuple[CatalogGame, ...]:
        self.fetch_count += 1
        logger.info(f"[Catalog] Fetching {self.name} (attempt {self.fetch_count})")
        try:
            result = await self._fetcher()
        except CatalogError as e:
            self._record_failure(generation, e)
            raise
        except Exception as e:
            error = TransportError(str(e))
            self._record_failure(generation, error)
            raise error from e

        games = tuple(result or ())
        if generation != self._generation:
            logger.info(f"[Catalog] Discarding {self.name} result fetched before invalidation")
            return games

        self.last_error = None
        if not games:
            logger.warning(f"[Catalog] {self.name} fetch returned no games; cache stays empty")
            return games

        self._games = games
        self._genres = tuple(sorted({genre for game in games for genre in game.genres}))
        self._state = CacheState.POPULATED
        logger.info(f"[Catalog] Cached {len(games)} {self.name} games, {len(self._genres)} genres")
        return games

    def _record_failure(self, generation: int, error: CatalogError) -> None:
        logger.error(f"[Catalog] {self.name} fetch failed: {error.code}: {error.message}")
        if generation == self._generation:
            self.last_error = error

    def snapshot(self) -> Dict[str, Any]:
        """Diagnostic view of the cache state."""
        return {
            'name': self.name,
            'state': self._state.value,
            'size': len(self._games),
            'genres': len(self._genres),
            'fetching': self.is_fetching,
            'fetch_count': self.fetch_count,
            'last_error': self.last_error.code if self.last_error else None,
        }
