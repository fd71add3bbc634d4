"""Catalog dedup and genre filtering against the user's library."""

from typing import Dict, Iterable, List

from ..constants import ALL_GENRES, DEFAULT_PLATFORM
from ..models import CatalogGame, LibraryGame
from ..utils.normalize import normalize


def owned_keys(owned: Iterable[LibraryGame]) -> set:
    return {normalize(game.name) for game in owned}


def visible(
    catalog: Iterable[CatalogGame],
    owned: Iterable[LibraryGame],
    genre_filter: str = ALL_GENRES,
) -> List[CatalogGame]:
    """Catalog entries the user does not own, optionally narrowed to one genre.

    Ownership is decided by normalized title. The genre match is exact and
    case-sensitive, as labels come straight from the catalog.
    """
    keys = owned_keys(owned)
    available = [game for game in catalog if normalize(game.name) not in keys]
    if genre_filter == ALL_GENRES:
        return available
    return [game for game in available if genre_filter in game.genres]


def genre_options(catalog: Iterable[CatalogGame]) -> List[str]:
    """Filter menu entries, taken from the unfiltered catalog."""
    return sorted({genre for game in catalog for genre in game.genres})


def find_siblings(game: LibraryGame, library: Iterable[LibraryGame]) -> List[Dict[str, str]]:
    """Same title owned on other platforms."""
    key = normalize(game.name)
    return [
        {'id': other.id, 'platform': other.platform or DEFAULT_PLATFORM}
        for other in library
        if other.id != game.id and normalize(other.name) == key
    ]
