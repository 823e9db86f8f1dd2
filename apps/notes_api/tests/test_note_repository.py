"""Тесты репозитория заметок."""

# --- Imports ---
from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from apps.notes_api.config import STORAGE_KEY, THEME_KEY, UNTITLED
from apps.notes_api.services.errors import KeyValueStoreError, StorageReadError, StorageWriteError
from apps.notes_api.services.kv_store import InMemoryKeyValueStore
from apps.notes_api.services.note_repository import NoteRepository

BLUE = "#3f51b5"
RED = "#e91e63"


# --- Основные блоки ---
class FakeClock:
    def __init__(self, step: timedelta = timedelta(seconds=1)) -> None:
        self.now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        self.step = step

    def __call__(self) -> datetime:
        self.now += self.step
        return self.now


class FlakyStore(InMemoryKeyValueStore):
    def __init__(self, initial=None) -> None:
        super().__init__(initial)
        self.fail_get = False
        self.fail_set = False
        self.set_calls = 0

    async def get(self, keys):
        if self.fail_get:
            raise KeyValueStoreError("disk unavailable")
        return await super().get(keys)

    async def set(self, entries):
        self.set_calls += 1
        if self.fail_set:
            raise KeyValueStoreError("quota exceeded")
        await super().set(entries)


def _repo(store=None, clock=None) -> NoteRepository:
    return NoteRepository(store if store is not None else FlakyStore(), clock=clock or FakeClock())


def test_groceries_and_todo_scenario() -> None:
    async def scenario() -> None:
        repo = _repo()
        await repo.init()
        a = await repo.create("Groceries", "Milk, eggs", BLUE)
        b = await repo.create("Todo", "Call mom", RED)
        assert [n.id for n in repo.list()] == [b.id, a.id]

        a2 = await repo.update(a.id, "Groceries", "Milk", BLUE)
        assert a2 is not None
        assert [n.id for n in repo.list()] == [b.id, a.id]
        assert a2.content == "Milk"
        assert a2.created_at == a.created_at
        assert datetime.fromisoformat(a2.updated_at) > datetime.fromisoformat(a.updated_at)

        assert repo.search("milk") == [a2]

        assert await repo.delete(b.id) is True
        assert repo.list() == [a2]
        assert await repo.delete(b.id) is False
        assert repo.list() == [a2]

    asyncio.run(scenario())


def test_create_defaults_title_and_color() -> None:
    async def scenario() -> None:
        repo = _repo()
        note = await repo.create("", "", None)
        assert note.title == UNTITLED
        assert note.content == ""
        assert note.color == BLUE
        assert note.created_at == note.updated_at

        spaced = await repo.create("   ", "body")
        assert spaced.title == UNTITLED

    asyncio.run(scenario())


def test_create_rejects_color_outside_palette() -> None:
    async def scenario() -> None:
        store = FlakyStore()
        repo = _repo(store)
        with pytest.raises(ValueError):
            await repo.create("x", "y", "#123456")
        assert store.set_calls == 0

    asyncio.run(scenario())


def test_ids_stay_unique_when_clock_does_not_advance() -> None:
    async def scenario() -> None:
        repo = _repo(clock=FakeClock(step=timedelta(0)))
        created = [await repo.create(f"n{i}", "") for i in range(5)]
        await repo.delete(created[2].id)
        created.append(await repo.create("again", ""))
        ids = [note.id for note in repo.list()]
        assert len(ids) == len(set(ids)) == 5

    asyncio.run(scenario())


def test_search_is_case_insensitive_and_keeps_order() -> None:
    async def scenario() -> None:
        repo = _repo()
        first = await repo.create("Shopping LIST", "")
        second = await repo.create("Ideas", "a list of things")
        await repo.create("Other", "nothing here")

        assert repo.search("list") == [second, first]
        assert repo.search("") == repo.list()
        assert repo.search("   ") == repo.list()
        assert repo.search("absent") == []

    asyncio.run(scenario())


def test_load_round_trips_after_mutations() -> None:
    async def scenario() -> None:
        store = FlakyStore()
        repo = _repo(store)
        note = await repo.create("Title", "Body", RED)
        await repo.update(note.id, "Title 2", "Body 2", BLUE)
        await repo.create("Second", "")
        cached = repo.list()

        assert await repo.load() == cached
        other = NoteRepository(store)
        assert await other.load() == cached

    asyncio.run(scenario())


def test_persisted_layout_uses_camel_case_records() -> None:
    async def scenario() -> None:
        store = FlakyStore()
        repo = _repo(store)
        note = await repo.create("Title", "Body", RED)
        stored = (await store.get([STORAGE_KEY]))[STORAGE_KEY]
        assert stored == [
            {
                "id": note.id,
                "title": "Title",
                "content": "Body",
                "color": RED,
                "createdAt": note.created_at,
                "updatedAt": note.updated_at,
            }
        ]

    asyncio.run(scenario())


def test_load_absent_key_yields_empty_list() -> None:
    async def scenario() -> None:
        repo = _repo()
        assert await repo.load() == []
        assert repo.list() == []

    asyncio.run(scenario())


def test_load_failure_keeps_last_known_notes() -> None:
    async def scenario() -> None:
        store = FlakyStore()
        repo = _repo(store)
        note = await repo.create("Kept", "")
        store.fail_get = True
        assert await repo.load() == [note]
        assert repo.list() == [note]

    asyncio.run(scenario())


def test_load_malformed_payload_keeps_last_known_notes() -> None:
    async def scenario() -> None:
        store = FlakyStore()
        repo = _repo(store)
        note = await repo.create("Kept", "")
        await store.set({STORAGE_KEY: {"not": "a list"}})
        assert await repo.load() == [note]

    asyncio.run(scenario())


def test_create_write_failure_leaves_cache_and_store_unchanged() -> None:
    async def scenario() -> None:
        store = FlakyStore()
        repo = _repo(store)
        existing = await repo.create("Existing", "")
        store.fail_set = True

        with pytest.raises(StorageWriteError):
            await repo.create("Lost", "")

        assert repo.list() == [existing]
        store.fail_set = False
        assert await repo.load() == [existing]

    asyncio.run(scenario())


def test_update_and_delete_failures_surface_errors() -> None:
    async def scenario() -> None:
        store = FlakyStore()
        repo = _repo(store)
        note = await repo.create("Title", "Body")

        store.fail_set = True
        with pytest.raises(StorageWriteError):
            await repo.update(note.id, "Changed", "Body", None)
        with pytest.raises(StorageWriteError):
            await repo.delete(note.id)
        assert repo.list() == [note]

        store.fail_set = False
        store.fail_get = True
        with pytest.raises(StorageReadError):
            await repo.update(note.id, "Changed", "Body", None)
        with pytest.raises(StorageReadError):
            await repo.create("New", "")
        assert repo.list() == [note]

    asyncio.run(scenario())


def test_update_missing_note_writes_nothing() -> None:
    async def scenario() -> None:
        store = FlakyStore()
        repo = _repo(store)
        await repo.create("Only", "")
        calls = store.set_calls

        assert await repo.update(42, "t", "c", None) is None
        assert await repo.delete(42) is False
        assert store.set_calls == calls

    asyncio.run(scenario())


def test_mutations_read_fresh_collection_from_store() -> None:
    async def scenario() -> None:
        store = FlakyStore()
        clock = FakeClock()
        ours = NoteRepository(store, clock=clock)
        theirs = NoteRepository(store, clock=clock)
        await ours.init()

        foreign = await theirs.create("From another tab", "")
        assert ours.get(foreign.id) is None

        updated = await ours.update(foreign.id, "Edited here", "", None)
        assert updated is not None
        assert [n.id for n in ours.list()] == [foreign.id]

    asyncio.run(scenario())


def test_note_writes_do_not_touch_theme_key() -> None:
    async def scenario() -> None:
        store = FlakyStore({THEME_KEY: "dark"})
        repo = _repo(store)
        note = await repo.create("Title", "")
        await repo.delete(note.id)
        assert (await store.get([THEME_KEY])) == {THEME_KEY: "dark"}

    asyncio.run(scenario())


def test_init_loads_once() -> None:
    async def scenario() -> None:
        store = FlakyStore()
        seed = NoteRepository(store, clock=FakeClock())
        note = await seed.create("Seeded", "")

        repo = NoteRepository(store)
        assert await repo.init() == [note]
        store.fail_get = True
        assert await repo.init() == [note]

    asyncio.run(scenario())


def test_update_keeps_stored_color_outside_palette() -> None:
    async def scenario() -> None:
        store = FlakyStore()
        seed = NoteRepository(store, clock=FakeClock())
        note = await seed.create("Old", "x")
        record = note.to_record() | {"color": "#fff59d"}
        await store.set({STORAGE_KEY: [record]})

        repo = _repo(store)
        updated = await repo.update(note.id, "Old", "y", "#fff59d")
        assert updated.color == "#fff59d"
        with pytest.raises(ValueError):
            await repo.update(note.id, "Old", "y", "#123456")
        assert await repo.load() == [updated]

    asyncio.run(scenario())
