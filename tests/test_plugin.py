"""
Basic tests for the Plugin facade to ensure the API wiring works.
"""
import pytest
import pytest_asyncio
from unittest.mock import AsyncMock, Mock

from main import Plugin
from playlite.errors import TransportError, UnauthorizedError

from conftest import make_catalog_game

LIBRARY = [
    {'id': '1', 'name': 'The Witcher 3', 'genre': 'RPG, Action', 'playtime': 3000, 'favorite': True, 'rating': 5},
    {'id': '2', 'name': 'Dark Souls', 'genre': 'RPG', 'playtime': 0},
    {'id': '3', 'name': 'Forza Horizon 5', 'genre': 'Racing', 'playtime': 0},
    {'id': '4', 'name': 'Hades', 'genre': 'Action', 'playtime': 30},
]

TRENDING = [
    make_catalog_game(10, "the-witcher-3", ["RPG"]),
    make_catalog_game(11, "Elden Ring", ["RPG", "Action"]),
    make_catalog_game(12, "Gran Turismo 7", ["Racing"]),
]


@pytest.fixture
def mock_rawg():
    return Mock(
        get_trending=AsyncMock(return_value=TRENDING),
        get_upcoming=AsyncMock(return_value=TRENDING[1:]),
        close=AsyncMock(),
    )


@pytest_asyncio.fixture
async def plugin(tmp_path, mock_rawg):
    plugin = Plugin(data_dir=str(tmp_path), rawg_client=mock_rawg)
    await plugin._main(configure_logging=False)
    await plugin.import_games(LIBRARY)
    await plugin.set_rawg_api_key("key")
    yield plugin
    await plugin._unload()


@pytest.mark.asyncio
async def test_profile_reflects_library(plugin):
    result = await plugin.get_user_profile()

    assert result['success'] is True
    top = result['profile']['top_genres']
    # Hades' half hour tips Action just past RPG
    assert [g['name'] for g in top] == ['Action', 'RPG', 'Racing']
    assert top[1]['score'] == 200.0
    assert result['profile']['total_games'] == 4


@pytest.mark.asyncio
async def test_home_ranks_backlog_by_affinity(plugin):
    result = await plugin.get_home()

    assert [g['id'] for g in result['backlog_recommendations']] == ['2', '3']
    assert [g['id'] for g in result['continue_playing']] == ['4']
    assert result['most_played'][0]['id'] == '1'
    assert result['stats']['total_favorites'] == 1


@pytest.mark.asyncio
async def test_trending_hides_owned_games(plugin):
    result = await plugin.get_trending()

    assert result['success'] is True
    assert [g['name'] for g in result['hero']] == ["Elden Ring", "Gran Turismo 7"]
    assert result['genres'] == ["Action", "RPG", "Racing"]


@pytest.mark.asyncio
async def test_trending_error_is_reported_not_raised(tmp_path):
    rawg = Mock(get_trending=AsyncMock(side_effect=UnauthorizedError("nope")), close=AsyncMock())
    plugin = Plugin(data_dir=str(tmp_path), rawg_client=rawg)
    await plugin._main(configure_logging=False)

    result = await plugin.get_trending()

    assert result == {'success': False, 'error': 'errors.rawgKeyInvalid', 'message': 'nope'}


@pytest.mark.asyncio
async def test_retry_after_transport_error(tmp_path):
    rawg = Mock(
        get_trending=AsyncMock(side_effect=[TransportError("timeout"), TRENDING]),
        close=AsyncMock(),
    )
    plugin = Plugin(data_dir=str(tmp_path), rawg_client=rawg)
    await plugin._main(configure_logging=False)

    assert (await plugin.get_trending())['error'] == 'errors.catalogFetchFailed'
    assert (await plugin.get_trending(retry=True))['success'] is True


@pytest.mark.asyncio
async def test_import_invalidates_catalog_cache(plugin, mock_rawg):
    await plugin.get_trending()
    await plugin.get_trending()
    assert mock_rawg.get_trending.await_count == 1

    await plugin.import_games([{'id': '9', 'name': 'Elden Ring', 'genre': 'RPG'}])
    result = await plugin.get_trending()

    assert mock_rawg.get_trending.await_count == 2
    assert [g['name'] for g in result['hero']] == ["Gran Turismo 7"]


@pytest.mark.asyncio
async def test_upcoming_flags_matches(plugin):
    result = await plugin.get_upcoming()
    assert [(g['name'], g['recommended']) for g in result['games']] == [
        ("Elden Ring", True),
        ("Gran Turismo 7", False),
    ]


@pytest.mark.asyncio
async def test_playlist_round_trip(plugin):
    for game_id in ('1', '2', '3'):
        await plugin.add_to_playlist(game_id)
    await plugin.reorder_playlist(0, 2)

    result = await plugin.get_playlist()
    assert [g['id'] for g in result['games']] == ['2', '3', '1']

    missing = await plugin.add_to_playlist('nope')
    assert missing['error'] == 'errors.gameNotFound'


@pytest.mark.asyncio
async def test_deleted_game_hidden_from_playlist(plugin):
    await plugin.add_to_playlist('2')
    await plugin.add_to_playlist('3')
    await plugin.delete_game('2')

    result = await plugin.get_playlist()

    assert [g['id'] for g in result['games']] == ['3']
    assert plugin.playlist.ids == ['2', '3']


@pytest.mark.asyncio
async def test_playlist_persists_across_restart(plugin, tmp_path, mock_rawg):
    await plugin.add_to_playlist('3')
    await plugin.add_to_playlist('2')

    restarted = Plugin(data_dir=str(tmp_path), rawg_client=mock_rawg)
    await restarted._main(configure_logging=False)

    assert restarted.playlist.ids == ['3', '2']


@pytest.mark.asyncio
async def test_playlist_suggestions_exclude_queued(plugin):
    await plugin.add_to_playlist('2')
    result = await plugin.get_playlist_suggestions()
    assert [g['id'] for g in result['games']] == ['4', '3']


@pytest.mark.asyncio
async def test_siblings_use_normalized_names(plugin):
    await plugin.add_game({'id': '5', 'name': 'the witcher 3', 'platform': 'Switch'})
    result = await plugin.get_siblings('1')
    assert result['siblings'] == [{'id': '5', 'platform': 'Switch'}]


@pytest.mark.asyncio
async def test_setting_api_key_invalidates_cache(plugin, mock_rawg):
    await plugin.get_trending()
    await plugin.set_rawg_api_key("other")
    await plugin.get_trending()

    assert mock_rawg.get_trending.await_count == 2
    assert (await plugin.get_rawg_status())['has_api_key'] is True


@pytest.mark.asyncio
async def test_invalid_game_payload(plugin):
    result = await plugin.add_game({'name': 'no id'})
    assert result['success'] is False
    assert result['error'] == 'errors.invalidGame'


@pytest.mark.asyncio
async def test_non_object_entries_are_invalid_games(plugin):
    result = await plugin.import_games(["not a game"])
    assert result['error'] == 'errors.invalidGame'

    result = await plugin.add_game(None)
    assert result['error'] == 'errors.invalidGame'


@pytest.mark.asyncio
async def test_non_integer_queue_index_is_reported(plugin):
    await plugin.add_to_playlist('1')
    await plugin.add_to_playlist('2')

    assert (await plugin.move_up(None))['error'] == 'errors.invalidIndex'
    assert (await plugin.move_down('first'))['error'] == 'errors.invalidIndex'
    assert (await plugin.reorder_playlist(0, [1]))['error'] == 'errors.invalidIndex'
    assert (await plugin.reorder_playlist('1', '0'))['changed'] is True


@pytest.mark.asyncio
async def test_library_marks_queued_games(plugin):
    await plugin.add_to_playlist('2')

    result = await plugin.get_library()

    flags = {g['id']: g['in_playlist'] for g in result['games']}
    assert flags == {'1': False, '2': True, '3': False, '4': False}
