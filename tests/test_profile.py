from __future__ import annotations

import pytest

from playlite.services.profile import build_profile, game_weight

from conftest import make_game


def test_game_weight_combines_playtime_favorite_and_rating() -> None:
    game = make_game("1", playtime=600, favorite=True, rating=4)
    # 10h * 2 + 50 + 4 * 10
    assert game_weight(game) == pytest.approx(110.0)


def test_game_weight_caps_counted_hours() -> None:
    assert game_weight(make_game("1", playtime=60 * 500)) == pytest.approx(200.0)


def test_build_profile_spreads_score_over_genres() -> None:
    games = [
        make_game("1", genre="RPG, Action", playtime=120),
        make_game("2", genre="RPG", favorite=True),
        make_game("3", genre="Unknown", playtime=6000),
    ]
    profile = build_profile(games)

    names = [g.name for g in profile.top_genres]
    assert names == ["RPG", "Action"]
    rpg = profile.score_for("rpg")
    assert rpg.score == pytest.approx(54.0)
    assert rpg.game_count == 2
    assert profile.total_playtime == 6120
    assert profile.total_games == 3


def test_build_profile_of_empty_library() -> None:
    profile = build_profile([])
    assert profile.top_genres == ()
    assert profile.total_games == 0


def test_profile_round_trips_through_dict() -> None:
    profile = build_profile([make_game("1", genre="Indie", rating=5)])
    assert type(profile).from_dict(profile.to_dict()) == profile
