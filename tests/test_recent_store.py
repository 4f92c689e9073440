"""Tests for the recent selection store."""

from __future__ import annotations

import json
import time

import pytest
from pathlib import Path
from unittest.mock import patch

from yacsend.send.recent_store import (
    RecencyStore,
    RecentFileSelection,
    RecentSelectionsData,
)


@pytest.fixture
def store(tmp_path: Path) -> RecencyStore:
    return RecencyStore(tmp_path / ".httpyac" / "recent.json")


def _sample() -> RecentSelectionsData:
    return RecentSelectionsData(
        selections={"/path/to/test.http": RecentFileSelection("getUsers", 1000)}
    )


class TestLoad:
    @pytest.mark.asyncio
    async def test_missing_file(self, store: RecencyStore):
        data = await store.load()
        assert data == RecentSelectionsData(version=1, selections={})

    @pytest.mark.asyncio
    async def test_existing_file(self, store: RecencyStore):
        store.path.parent.mkdir(parents=True)
        store.path.write_text(json.dumps({
            "version": 1,
            "selections": {"/path/to/test.http": {"regionName": "getUsers", "timestamp": 1000}},
        }), encoding="utf-8")

        data = await store.load()
        assert data == _sample()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", [
        "not valid json",
        json.dumps({"version": 999, "selections": {}}),
        json.dumps({"version": "1", "selections": {}}),
        json.dumps({"version": True, "selections": {}}),
        json.dumps({"version": 1}),
        json.dumps({"version": 1, "selections": []}),
        json.dumps([1, 2, 3]),
        "[" * 200000 + "]" * 200000,
    ])
    async def test_unusable_content(self, store: RecencyStore, content: str):
        store.path.parent.mkdir(parents=True)
        store.path.write_text(content, encoding="utf-8")

        data = await store.load()
        assert data == RecentSelectionsData()

    @pytest.mark.asyncio
    async def test_malformed_entry_discards_whole_document(self, store: RecencyStore):
        store.path.parent.mkdir(parents=True)
        store.path.write_text(json.dumps({
            "version": 1,
            "selections": {
                "/a.http": {"regionName": "getUsers", "timestamp": 1000},
                "/b.http": {"timestamp": 1000},
            },
        }), encoding="utf-8")

        data = await store.load()
        assert data.selections == {}

    @pytest.mark.asyncio
    async def test_unreadable_path(self, tmp_path: Path):
        # A directory where the file should be
        (tmp_path / "recent.json").mkdir()
        data = await RecencyStore(tmp_path / "recent.json").load()
        assert data == RecentSelectionsData()


class TestSave:
    @pytest.mark.asyncio
    async def test_writes_document(self, store: RecencyStore):
        assert await store.save(_sample()) is True

        written = json.loads(store.path.read_text(encoding="utf-8"))
        assert written == {
            "version": 1,
            "selections": {"/path/to/test.http": {"regionName": "getUsers", "timestamp": 1000}},
        }

    @pytest.mark.asyncio
    async def test_creates_directory(self, store: RecencyStore):
        assert not store.path.parent.exists()
        await store.save(RecentSelectionsData())
        assert store.path.parent.is_dir()

    @pytest.mark.asyncio
    async def test_pretty_printed(self, store: RecencyStore):
        await store.save(_sample())
        assert '\n  "version": 1' in store.path.read_text(encoding="utf-8")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("data", [RecentSelectionsData(), _sample()])
    async def test_save_then_load(self, store: RecencyStore, data: RecentSelectionsData):
        await store.save(data)
        assert await store.load() == data

    @pytest.mark.asyncio
    async def test_write_failure_is_swallowed(self, store: RecencyStore):
        with patch.object(Path, "write_text", side_effect=PermissionError("EPERM")):
            assert await store.save(_sample()) is False

    @pytest.mark.asyncio
    async def test_mkdir_failure_is_swallowed(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        store = RecencyStore(blocker / "recent.json")
        assert await store.save(_sample()) is False


class TestGetSet:
    def test_get_missing(self):
        assert RecencyStore.get(RecentSelectionsData(), "/path/to/test.http") is None

    def test_get_existing(self):
        assert RecencyStore.get(_sample(), "/path/to/test.http") == "getUsers"

    def test_get_exact_key_only(self):
        assert RecencyStore.get(_sample(), "/path/to/../to/test.http") is None

    def test_set_new(self):
        data = RecentSelectionsData()
        RecencyStore.set(data, "/path/to/test.http", "getUsers")

        entry = data.selections["/path/to/test.http"]
        assert entry.region_name == "getUsers"
        assert entry.timestamp > 0

    def test_set_replaces(self):
        data = _sample()
        RecencyStore.set(data, "/path/to/test.http", "createUser")

        assert RecencyStore.get(data, "/path/to/test.http") == "createUser"
        assert data.selections["/path/to/test.http"].timestamp > 1000

    def test_timestamp_advances(self):
        data = RecentSelectionsData()
        RecencyStore.set(data, "/a.http", "getUsers")
        first = data.selections["/a.http"].timestamp
        time.sleep(0.01)
        RecencyStore.set(data, "/a.http", "all")
        assert data.selections["/a.http"].timestamp > first

    def test_all_sentinel(self):
        data = RecentSelectionsData()
        RecencyStore.set(data, "/a.http", "all")
        assert RecencyStore.get(data, "/a.http") == "all"

    def test_paths_are_independent(self):
        data = _sample()
        RecencyStore.set(data, "/other.http", "ping")

        assert data.selections["/path/to/test.http"] == RecentFileSelection("getUsers", 1000)
        assert RecencyStore.get(data, "/other.http") == "ping"
