"""Genre affinity scoring.

A title's affinity is the sum of the profile scores of its genres. Genre
labels are matched case-insensitively and otherwise taken as-is.
"""

from typing import Iterable, Optional

from ..constants import TOP_PICK_THRESHOLD, UPCOMING_MATCH_THRESHOLD
from ..models import GenreProfile, LibraryGame
from ..utils.normalize import parse_genres


def score(profile: Optional[GenreProfile], genres: Iterable[str]) -> float:
    """Affinity of a genre list against a profile (0 without a profile)."""
    if profile is None or not genres:
        return 0.0

    total = 0.0
    for genre in genres:
        entry = profile.score_for(genre)
        if entry is not None:
            total += entry.score
    return total


def score_library_game(profile: Optional[GenreProfile], game: LibraryGame) -> float:
    return score(profile, parse_genres(game.genre))


def is_recommended(affinity: float) -> bool:
    """Top pick while browsing the catalog."""
    return affinity > TOP_PICK_THRESHOLD


def is_upcoming_match(affinity: float) -> bool:
    """Upcoming titles have sparser genre data, so the bar is lower."""
    return affinity > UPCOMING_MATCH_THRESHOLD
