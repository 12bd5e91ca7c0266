from __future__ import annotations

import asyncio
import json

import pytest

from app.core.collection import COLLECTION_KEY, THEME_KEY, CollectionStore
from app.core.errors import PersistenceError, ValidationError
from app.models.game_entry import GameDraft, GameStatus, ThemeMode

from conftest import FakeStorage


def _loaded(storage: FakeStorage) -> CollectionStore:
    store = CollectionStore(storage)
    asyncio.run(store.load())
    return store


def _add(store: CollectionStore, title: str, platform: str = "PC", **kwargs):
    return asyncio.run(store.add(GameDraft(title=title, platform=platform, **kwargs)))


def test_load_without_stored_data_is_empty(storage: FakeStorage) -> None:
    store = _loaded(storage)
    assert store.is_loaded
    assert store.entries == ()


def test_load_corrupted_json_is_empty() -> None:
    store = _loaded(FakeStorage({COLLECTION_KEY: "[{broken"}))
    assert store.entries == ()


def test_load_read_failure_is_empty(storage: FakeStorage) -> None:
    storage.fail_reads = True
    store = _loaded(storage)
    assert store.entries == ()
    assert store.is_loaded


@pytest.mark.parametrize("title, platform", [("", "PC"), ("Chess", ""), ("", "")])
def test_add_requires_title_and_platform(storage: FakeStorage, title: str, platform: str) -> None:
    store = _loaded(storage)
    _add(store, "Existing")
    writes_before = list(storage.writes)

    with pytest.raises(ValidationError):
        _add(store, title, platform)

    assert [e.title for e in store.entries] == ["Existing"]
    assert storage.writes == writes_before


def test_add_assigns_unique_ids_and_added_date(storage: FakeStorage) -> None:
    store = _loaded(storage)
    for i in range(25):
        _add(store, f"Game {i}")

    ids = [e.id for e in store.entries]
    assert len(set(ids)) == len(ids)
    assert all(e.added_date.endswith("Z") for e in store.entries)
    assert [e.title for e in store.entries] == [f"Game {i}" for i in range(25)]


def test_add_persists_full_collection(storage: FakeStorage) -> None:
    store = _loaded(storage)
    _add(store, "Zelda", "Switch", genre="Action", status="playing")
    _add(store, "Chess")

    key, value = storage.writes[-1]
    assert key == COLLECTION_KEY
    stored = json.loads(value)
    assert [g["title"] for g in stored] == ["Zelda", "Chess"]
    assert stored[0]["status"] == "playing"
    assert stored[0]["purchaseDate"] == ""


def test_remove_unknown_id_is_noop(storage: FakeStorage) -> None:
    store = _loaded(storage)
    entry = _add(store, "Chess")
    writes_before = len(storage.writes)

    assert asyncio.run(store.remove(entry.id + 1)) is False
    assert store.entries == (entry,)
    assert len(storage.writes) == writes_before


def test_remove_existing_entry(storage: FakeStorage) -> None:
    store = _loaded(storage)
    first = _add(store, "Zelda", "Switch")
    second = _add(store, "Chess")

    assert asyncio.run(store.remove(first.id)) is True
    assert store.entries == (second,)
    assert json.loads(storage.data[COLLECTION_KEY])[0]["id"] == second.id


def test_update_status_changes_only_status(storage: FakeStorage) -> None:
    store = _loaded(storage)
    entry = _add(store, "Zelda", "Switch", genre="Action", notes="TOTK", purchase_date="2023-05-12")

    updated = asyncio.run(store.update_status(entry.id, "completed"))

    assert updated is not None
    assert updated.status is GameStatus.COMPLETED
    before, after = entry.to_dict(), store.get(entry.id).to_dict()
    assert {k: v for k, v in after.items() if k != "status"} == {
        k: v for k, v in before.items() if k != "status"
    }
    assert json.loads(storage.data[COLLECTION_KEY])[0]["status"] == "completed"


def test_update_status_unknown_id_is_noop(storage: FakeStorage) -> None:
    store = _loaded(storage)
    entry = _add(store, "Chess")
    assert asyncio.run(store.update_status(entry.id + 1, "playing")) is None
    assert store.get(entry.id).status is GameStatus.UNPLAYED


def test_update_status_rejects_unknown_status(storage: FakeStorage) -> None:
    store = _loaded(storage)
    entry = _add(store, "Chess")
    with pytest.raises(ValidationError):
        asyncio.run(store.update_status(entry.id, "abandoned"))
    assert store.get(entry.id).status is GameStatus.UNPLAYED


def test_write_failure_raises_without_rollback(storage: FakeStorage) -> None:
    store = _loaded(storage)
    kept = _add(store, "Chess")
    storage.fail_writes = True

    with pytest.raises(PersistenceError) as exc:
        _add(store, "Zelda", "Switch")
    assert exc.value.key == COLLECTION_KEY
    assert [e.title for e in store.entries] == ["Chess", "Zelda"]

    with pytest.raises(PersistenceError):
        asyncio.run(store.remove(kept.id))
    assert [e.title for e in store.entries] == ["Zelda"]


def test_refused_write_is_a_persistence_error(storage: FakeStorage) -> None:
    store = _loaded(storage)
    storage.refuse_writes = True
    with pytest.raises(PersistenceError):
        _add(store, "Chess")
    assert len(store) == 1


def test_save_then_load_round_trip(storage: FakeStorage) -> None:
    store = _loaded(storage)
    _add(store, "Zelda", "Switch", genre="Action", status="playing")
    _add(store, "Chess", genre="Board", purchase_date="2020-01-01", notes="gift")

    reloaded = _loaded(storage)
    assert reloaded.entries == store.entries


def test_theme_defaults_to_light(storage: FakeStorage) -> None:
    store = CollectionStore(storage)
    assert asyncio.run(store.load_theme()) is ThemeMode.LIGHT


def test_unrecognized_theme_value_is_light() -> None:
    store = CollectionStore(FakeStorage({THEME_KEY: "midnight"}))
    assert asyncio.run(store.load_theme()) is ThemeMode.LIGHT


def test_set_theme_persists(storage: FakeStorage) -> None:
    store = CollectionStore(storage)
    assert asyncio.run(store.set_theme("dark")) is True
    assert storage.data[THEME_KEY] == "dark"

    reloaded = CollectionStore(storage)
    assert asyncio.run(reloaded.load_theme()) is ThemeMode.DARK


def test_set_theme_failure_keeps_new_theme(storage: FakeStorage) -> None:
    store = CollectionStore(storage)
    storage.fail_writes = True
    assert asyncio.run(store.set_theme(ThemeMode.DARK)) is False
    assert store.theme is ThemeMode.DARK


def test_set_theme_rejects_unknown_mode(storage: FakeStorage) -> None:
    store = CollectionStore(storage)
    with pytest.raises(ValidationError):
        asyncio.run(store.set_theme("sepia"))
    assert store.theme is ThemeMode.LIGHT


def test_toggle_theme(storage: FakeStorage) -> None:
    store = CollectionStore(storage)
    asyncio.run(store.toggle_theme())
    assert store.theme is ThemeMode.DARK
    asyncio.run(store.toggle_theme())
    assert store.theme is ThemeMode.LIGHT
    assert storage.data[THEME_KEY] == "light"


def test_listeners_are_notified_until_unsubscribed(storage: FakeStorage) -> None:
    store = _loaded(storage)
    calls: list[int] = []
    unsubscribe = store.subscribe(lambda: calls.append(len(store)))

    entry = _add(store, "Chess")
    asyncio.run(store.update_status(entry.id, "playing"))
    assert calls == [1, 1]

    unsubscribe()
    asyncio.run(store.remove(entry.id))
    assert calls == [1, 1]


def test_deeply_nested_stored_collection_loads_empty() -> None:
    store = _loaded(FakeStorage({COLLECTION_KEY: "[" * 100000}))
    assert store.entries == ()
    assert store.is_loaded


class _BrokenStorage(FakeStorage):
    async def get(self, key: str) -> str | None:
        raise RuntimeError("adapter crashed")


def test_any_read_failure_degrades_to_defaults() -> None:
    store = CollectionStore(_BrokenStorage())
    asyncio.run(store.load())
    assert store.entries == ()
    assert asyncio.run(store.load_theme()) is ThemeMode.LIGHT
