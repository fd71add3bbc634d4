from __future__ import annotations

import json
from pathlib import Path

import pytest
from unittest.mock import patch

from playlite.cache import KeyValueStore
from playlite.errors import PersistenceError
from playlite.registry import LibraryStore
from playlite.utils import settings

from conftest import make_game


def test_kv_store_missing_file_returns_default(tmp_path: Path) -> None:
    store = KeyValueStore(str(tmp_path / "missing.json"))
    assert store.load("queue") is None
    assert store.load("queue", []) == []


def test_kv_store_save_keeps_other_keys(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    store = KeyValueStore(str(path))
    store.save("theme", "dark")
    store.save("queue", ["a", "b"])

    assert store.load("theme") == "dark"
    assert json.loads(path.read_text()) == {"theme": "dark", "queue": ["a", "b"]}


def test_kv_store_corrupt_file_loads_default(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    path.write_text("{not json")
    assert KeyValueStore(str(path)).load("queue", []) == []


def test_kv_store_unwritable_path_raises_persistence_error(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("")
    store = KeyValueStore(str(blocker / "store.json"))
    with pytest.raises(PersistenceError):
        store.save("queue", ["a"])


def test_library_store_crud(tmp_path: Path) -> None:
    path = str(tmp_path / "library.json")
    library = LibraryStore(path)
    library.add_game(make_game("1", name="Hades", genre="Action", playtime=90))
    library.add_game(make_game("2", name="Celeste"))

    assert library.toggle_favorite("1") is True
    assert library.toggle_favorite("missing") is None
    assert library.delete_game("2") is True
    assert library.delete_game("2") is False

    reloaded = LibraryStore(path)
    assert [g.id for g in reloaded.get_games()] == ["1"]
    assert reloaded.get_game("1").favorite is True
    assert reloaded.get_game("1").playtime == 90


def test_library_store_update_requires_existing_game(tmp_path: Path) -> None:
    library = LibraryStore(str(tmp_path / "library.json"))
    assert library.update_game(make_game("1")) is False
    library.add_game(make_game("1"))
    assert library.update_game(make_game("1", name="Renamed")) is True
    assert library.get_game("1").name == "Renamed"


def test_library_store_import_upserts(tmp_path: Path) -> None:
    library = LibraryStore(str(tmp_path / "library.json"))
    library.add_game(make_game("1", name="Old"))
    count = library.import_games([make_game("1", name="New"), make_game("2")])
    assert count == 2
    assert library.count() == 2
    assert library.get_game("1").name == "New"


def test_library_store_failed_save_restores_memory(tmp_path: Path) -> None:
    library = LibraryStore(str(tmp_path / "library.json"))
    library.add_game(make_game("1", name="Hades"))

    with patch.object(library, "_save", side_effect=PersistenceError("disk full")):
        with pytest.raises(PersistenceError):
            library.toggle_favorite("1")
        with pytest.raises(PersistenceError):
            library.add_game(make_game("2"))
        with pytest.raises(PersistenceError):
            library.delete_game("1")
        with pytest.raises(PersistenceError):
            library.update_game(make_game("1", name="Renamed"))

    assert [g.id for g in library.get_games()] == ["1"]
    assert library.get_game("1").favorite is False
    assert library.get_game("1").name == "Hades"


def test_library_store_skips_malformed_entries(tmp_path: Path) -> None:
    path = tmp_path / "library.json"
    path.write_text(json.dumps({"games": [{"name": "no id"}, {"id": "1", "name": "ok"}]}))
    assert [g.id for g in LibraryStore(str(path)).get_games()] == ["1"]


def test_rawg_api_key_setting(tmp_path: Path) -> None:
    path = str(tmp_path / "settings.json")
    assert settings.get_rawg_api_key(path) is None

    assert settings.set_rawg_api_key("  abc123 ", path) is True
    assert settings.get_rawg_api_key(path) == "abc123"

    settings.set_rawg_api_key("   ", path)
    assert settings.get_rawg_api_key(path) is None


def test_settings_keep_unrelated_values(tmp_path: Path) -> None:
    path = str(tmp_path / "settings.json")
    settings.set_setting("language", "pt-BR", path)
    settings.set_rawg_api_key("key", path)
    assert settings.load_settings(path) == {"language": "pt-BR", "rawg_api_key": "key"}
