"""
CatalogService - trending and upcoming catalog views.

Responsibilities:
- Resolve the RAWG API key from settings at fetch time
- Own one CatalogCache per catalog list (trending, upcoming)
- Build the views the frontend shows: catalog minus owned games, genre
  filter options, affinity ranking and top-pick flags
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from ..cache.catalog_cache import CatalogCache
from ..constants import (
    ALL_GENRES,
    TRENDING_GRID_COUNT,
    TRENDING_HERO_COUNT,
)
from ..models import CatalogGame, GenreProfile, LibraryGame
from . import affinity, catalog_filter, ranking

logger = logging.getLogger(__name__)


def _entry(game: CatalogGame, score: float, flagged: bool) -> Dict[str, Any]:
    data = game.to_dict()
    data['affinity'] = score
    data['recommended'] = flagged
    return data


class CatalogService:
    """Service for cached catalog lists and their library-aware views."""

    def __init__(self, rawg_client, api_key_provider: Callable[[], Optional[str]]):
        """
        Args:
            rawg_client: RawgClient (or anything with get_trending/get_upcoming)
            api_key_provider: Callable returning the configured key or None
        """
        self.rawg = rawg_client
        self.api_key_provider = api_key_provider
        self.trending = CatalogCache(self._fetch_trending, name="trending")
        self.upcoming = CatalogCache(self._fetch_upcoming, name="upcoming")

    async def _fetch_trending(self) -> List[CatalogGame]:
        return await self.rawg.get_trending(self.api_key_provider())

    async def _fetch_upcoming(self) -> List[CatalogGame]:
        return await self.rawg.get_upcoming(self.api_key_provider())

    def invalidate(self) -> None:
        """Drop both lists, e.g. after the library or the API key changed."""
        logger.info("[CatalogService] Invalidating catalog caches")
        self.trending.invalidate()
        self.upcoming.invalidate()

    async def trending_view(
        self,
        owned: List[LibraryGame],
        profile: Optional[GenreProfile],
        genre_filter: str = ALL_GENRES,
        retry: bool = False,
    ) -> Dict[str, Any]:
        """Trending page: hero carousel, affinity-ranked grid and filter menu.

        Raises:
            CatalogError: The trending fetch failed.
        """
        catalog = await (self.trending.retry() if retry else self.trending.get())
        available = catalog_filter.visible(catalog, owned, genre_filter)

        hero = available[:TRENDING_HERO_COUNT]
        grid = available[TRENDING_HERO_COUNT:TRENDING_HERO_COUNT + TRENDING_GRID_COUNT]
        if profile is not None:
            grid = ranking.rank_catalog(grid, profile)

        return {
            'hero': [g.to_dict() for g in hero],
            'games': [_entry(*e) for e in ranking.annotate(grid, profile, affinity.is_recommended)],
            'genres': self.trending.genres,
            'selected_genre': genre_filter,
            'total': len(available),
        }

    async def upcoming_view(self, profile: Optional[GenreProfile], retry: bool = False) -> List[Dict[str, Any]]:
        """Upcoming releases in catalog order, flagged when they match the profile."""
        catalog = await (self.upcoming.retry() if retry else self.upcoming.get())
        return [_entry(*e) for e in ranking.annotate(catalog, profile, affinity.is_upcoming_match)]

    async def recommended(
        self,
        owned: List[LibraryGame],
        profile: Optional[GenreProfile],
        genre_filter: str = ALL_GENRES,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """All unowned trending games ranked by affinity."""
        catalog = await self.trending.get()
        ranked = ranking.rank_catalog(catalog_filter.visible(catalog, owned, genre_filter), profile, limit)
        return [_entry(*e) for e in ranking.annotate(ranked, profile, affinity.is_recommended)]

    def status(self) -> Dict[str, Any]:
        return {
            'trending': self.trending.snapshot(),
            'upcoming': self.upcoming.snapshot(),
        }
