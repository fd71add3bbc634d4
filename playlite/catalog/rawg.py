"""RAWG.io catalog client.

Fetches the trending and upcoming lists shown next to the user's library.
Reference: https://api.rawg.io/docs/#operation/games_list
"""
import asyncio
import logging
import ssl
from datetime import date
from typing import Any, Dict, List, Optional

import aiohttp
import certifi

from ..constants import (
    RAWG_API_URL,
    RAWG_TIMEOUT,
    RAWG_TRENDING_PAGE_SIZE,
    RAWG_UPCOMING_PAGE_SIZE,
)
from ..errors import MissingCredentialError, TransportError, UnauthorizedError
from ..models import CatalogGame

logger = logging.getLogger(__name__)


def trending_date_range(today: Optional[date] = None) -> str:
    """Releases from the start of last year to the end of this year."""
    today = today or date.today()
    return f"{today.year - 1}-01-01,{today.year}-12-31"


def upcoming_date_range(today: Optional[date] = None) -> str:
    """Releases from today to the end of next year."""
    today = today or date.today()
    return f"{today.isoformat()},{today.year + 1}-12-31"


class RawgClient:
    """Async client for the RAWG games list endpoint."""

    def __init__(self, base_url: str = RAWG_API_URL, timeout: float = RAWG_TIMEOUT):
        self.base_url = base_url
        self.timeout = timeout
        self.session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self.session is None or self.session.closed:
            ssl_context = ssl.create_default_context(cafile=certifi.where())
            connector = aiohttp.TCPConnector(ssl=ssl_context, limit_per_host=5)
            self.session = aiohttp.ClientSession(
                connector=connector,
                headers={"User-Agent": "Playlite/1.0"}
            )
        return self.session

    async def close(self) -> None:
        if self.session is not None and not self.session.closed:
            await self.session.close()
        self.session = None

    async def get_trending(self, api_key: Optional[str]) -> List[CatalogGame]:
        """Most added recent releases (last year through this year)."""
        return await self._list_games(api_key, {
            'dates': trending_date_range(),
            'ordering': '-added',
            'page_size': RAWG_TRENDING_PAGE_SIZE,
        }, label="trending")

    async def get_upcoming(self, api_key: Optional[str]) -> List[CatalogGame]:
        """Most added unreleased games (today through next year)."""
        return await self._list_games(api_key, {
            'dates': upcoming_date_range(),
            'ordering': '-added',
            'page_size': RAWG_UPCOMING_PAGE_SIZE,
        }, label="upcoming")

    async def _list_games(self, api_key: Optional[str], params: Dict[str, Any], label: str) -> List[CatalogGame]:
        """Call /games and parse `results`.

        Raises:
            MissingCredentialError: No key configured
            UnauthorizedError: Key rejected (401/403)
            TransportError: Any other failure, raw message preserved
        """
        if not api_key or not api_key.strip():
            raise MissingCredentialError("RAWG API key is not configured")

        query = {'key': api_key.strip()}
        query.update({k: str(v) for k, v in params.items()})

        session = await self._get_session()
        try:
            async with session.get(
                self.base_url,
                params=query,
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            ) as resp:
                if resp.status in (401, 403):
                    raise UnauthorizedError(f"RAWG rejected the API key (HTTP {resp.status})", status=resp.status)
                if resp.status != 200:
                    body = await resp.text()
                    raise TransportError(f"RAWG {label} request failed: HTTP {resp.status} {body[:200]}", status=resp.status)
                data = await resp.json(content_type=None)
        except asyncio.TimeoutError as e:
            raise TransportError(f"RAWG {label} request timed out after {self.timeout}s") from e
        except aiohttp.ClientError as e:
            raise TransportError(f"RAWG {label} request failed: {e}") from e
        except ValueError as e:
            raise TransportError(f"RAWG {label} response is not JSON: {e}") from e

        try:
            games = [CatalogGame.from_rawg(item) for item in data.get('results', [])]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise TransportError(f"Malformed RAWG {label} response: {e}") from e

        logger.info(f"[RAWG] Got {len(games)} {label} games")
        return games
