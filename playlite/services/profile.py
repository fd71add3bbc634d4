"""
Genre profile builder.

Turns the library's play history into a GenreProfile:

- 2 points per hour played, counting at most 100 hours per game
- 50 points if the game is a favorite
- 10 points per rating star

Each game's points are added to every genre the game lists. The placeholder
"Unknown" genre is ignored.
"""

import logging
from typing import Dict, Iterable, List, Tuple

from ..constants import (
    MAX_COUNTED_HOURS,
    PLACEHOLDER_GENRES,
    WEIGHT_FAVORITE,
    WEIGHT_PLAYTIME_HOUR,
    WEIGHT_RATING_STAR,
)
from ..models import GenreProfile, GenreScore, LibraryGame
from ..utils.normalize import parse_genres

logger = logging.getLogger(__name__)


def game_weight(game: LibraryGame) -> float:
    """Points a single game contributes to each of its genres."""
    hours = min(game.playtime / 60.0, MAX_COUNTED_HOURS)
    weight = hours * WEIGHT_PLAYTIME_HOUR
    if game.favorite:
        weight += WEIGHT_FAVORITE
    if game.rating is not None:
        weight += game.rating * WEIGHT_RATING_STAR
    return weight


def build_profile(games: Iterable[LibraryGame]) -> GenreProfile:
    games = list(games)
    totals: Dict[str, Tuple[float, int]] = {}
    total_playtime = 0

    for game in games:
        total_playtime += game.playtime
        weight = game_weight(game)
        for genre in parse_genres(game.genre):
            if genre in PLACEHOLDER_GENRES:
                continue
            points, count = totals.get(genre, (0.0, 0))
            totals[genre] = (points + weight, count + 1)

    top_genres: List[GenreScore] = [
        GenreScore(name=name, score=points, game_count=count)
        for name, (points, count) in totals.items()
    ]
    top_genres.sort(key=lambda g: (-g.score, g.name))

    logger.debug(f"[Profile] Built profile from {len(games)} games, {len(top_genres)} genres")
    return GenreProfile(
        top_genres=tuple(top_genres),
        total_playtime=total_playtime,
        total_games=len(games),
    )
