from __future__ import annotations

from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from playlite.models import CatalogGame, GenreProfile, GenreScore, LibraryGame


def make_game(game_id, name=None, genre=None, playtime=0, **kwargs) -> LibraryGame:
    return LibraryGame(id=game_id, name=name or f"Game {game_id}", genre=genre, playtime=playtime, **kwargs)


def make_catalog_game(game_id, name, genres=()) -> CatalogGame:
    return CatalogGame(id=game_id, name=name, genres=tuple(genres))


@pytest.fixture
def profile() -> GenreProfile:
    """RPG-heavy profile with a mixed-case entry."""
    return GenreProfile(
        top_genres=(
            GenreScore(name="RPG", score=120.0, game_count=3),
            GenreScore(name="Action", score=40.0, game_count=2),
            GenreScore(name="puzzle", score=5.0, game_count=1),
        ),
        total_playtime=6000,
        total_games=6,
    )
