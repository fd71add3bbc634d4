"""
Recommendation ranking and home dashboard views.

All functions are pure and never raise: an absent profile scores everything
0 (keeping input order), empty input gives empty output. Sorting is stable,
so equal scores keep their library/catalog order.
"""

from collections import Counter
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, TypeVar

from ..constants import (
    BACKLOG_LIMIT,
    CONTINUE_PLAYING_LIMIT,
    CONTINUE_PLAYING_MAX_PLAYTIME,
    MOST_PLAYED_LIMIT,
    PLACEHOLDER_GENRES,
    SUGGESTION_LIMIT,
    SUGGESTION_MAX_PLAYTIME,
    TOP_GENRES_LIMIT,
)
from ..models import CatalogGame, GenreProfile, LibraryGame
from ..utils.normalize import parse_genres
from . import affinity

T = TypeVar('T')


def _rank(items: Iterable[T], scores: Sequence[float], limit: Optional[int]) -> List[T]:
    ranked = [item for _, item in sorted(zip(scores, items), key=lambda pair: -pair[0])]
    return ranked if limit is None else ranked[:limit]


def rank_library(games: Iterable[LibraryGame], profile: Optional[GenreProfile],
                 limit: Optional[int] = None) -> List[LibraryGame]:
    games = list(games)
    scores = [affinity.score_library_game(profile, g) for g in games]
    return _rank(games, scores, limit)


def rank_backlog(games: Iterable[LibraryGame], profile: Optional[GenreProfile],
                 limit: Optional[int] = None) -> List[LibraryGame]:
    """Unplayed owned games, best genre match first."""
    return rank_library([g for g in games if g.playtime == 0], profile, limit)


def rank_catalog(candidates: Iterable[CatalogGame], profile: Optional[GenreProfile],
                 limit: Optional[int] = None) -> List[CatalogGame]:
    """Catalog games (already deduped/filtered), best genre match first."""
    candidates = list(candidates)
    scores = [affinity.score(profile, g.genres) for g in candidates]
    return _rank(candidates, scores, limit)


def annotate(games: Iterable[CatalogGame], profile: Optional[GenreProfile],
             is_flagged: Callable[[float], bool]) -> List[Tuple[CatalogGame, float, bool]]:
    """(game, affinity, flagged) for each game; is_flagged decides the flag."""
    result = []
    for game in games:
        value = affinity.score(profile, game.genres)
        result.append((game, value, is_flagged(value)))
    return result


def continue_playing(games: Iterable[LibraryGame]) -> List[LibraryGame]:
    """Started but barely played games, most played first."""
    started = [g for g in games if 0 < g.playtime < CONTINUE_PLAYING_MAX_PLAYTIME]
    started.sort(key=lambda g: -g.playtime)
    return started[:CONTINUE_PLAYING_LIMIT]


def most_played(games: Iterable[LibraryGame]) -> List[LibraryGame]:
    return sorted(games, key=lambda g: -g.playtime)[:MOST_PLAYED_LIMIT]


def playlist_suggestions(games: Iterable[LibraryGame], queued_ids: Iterable[str],
                         profile: Optional[GenreProfile]) -> List[LibraryGame]:
    """Games worth queueing: not queued yet and under an hour played."""
    queued = set(queued_ids)
    candidates = [g for g in games if g.id not in queued and g.playtime < SUGGESTION_MAX_PLAYTIME]
    return rank_library(candidates, profile, SUGGESTION_LIMIT)


def library_stats(games: Iterable[LibraryGame]) -> Dict[str, int]:
    games = list(games)
    return {
        'total_games': len(games),
        'total_playtime': sum(g.playtime for g in games),
        'total_favorites': sum(1 for g in games if g.favorite),
    }


def top_genres(games: Iterable[LibraryGame]) -> List[Tuple[str, int]]:
    """Most common genres in the library by number of games."""
    counts = Counter()
    for game in games:
        for genre in parse_genres(game.genre):
            if genre not in PLACEHOLDER_GENRES:
                counts[genre] += 1
    return counts.most_common(TOP_GENRES_LIMIT)


def home_view(games: Iterable[LibraryGame], profile: Optional[GenreProfile]) -> Dict[str, Any]:
    games = list(games)
    # No backlog picks until a profile exists
    backlog = rank_backlog(games, profile, BACKLOG_LIMIT) if profile is not None else []
    return {
        'stats': library_stats(games),
        'continue_playing': continue_playing(games),
        'backlog_recommendations': backlog,
        'most_played': most_played(games),
        'top_genres': top_genres(games),
    }
