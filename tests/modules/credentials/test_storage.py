"""Tests for key/value storage providers."""

import json

import pytest

from tourline.modules.credentials.interfaces import IKeyValueStorage
from tourline.modules.credentials.storage import JsonFileStorage, MemoryStorage
from tourline.modules.credentials.exceptions import StorageWriteError


class TestMemoryStorage:
    def test_implements_interface(self):
        assert isinstance(MemoryStorage(), IKeyValueStorage)

    @pytest.mark.asyncio
    async def test_set_get_remove(self):
        """Should round-trip values and ignore missing keys on removal."""
        storage = MemoryStorage()
        await storage.multi_set({"a": "1", "b": "2"})
        assert await storage.get_item("a") == "1"
        assert await storage.multi_get(["a", "b", "c"]) == {"a": "1", "b": "2", "c": None}

        await storage.multi_remove(["a", "missing"])
        assert await storage.get_item("a") is None
        assert storage.snapshot() == {"b": "2"}


class TestJsonFileStorage:
    def test_implements_interface(self, tmp_path):
        assert isinstance(JsonFileStorage(tmp_path / "s.json"), IKeyValueStorage)

    @pytest.mark.asyncio
    async def test_persists_across_instances(self, tmp_path):
        """Values written by one instance should be visible to a new one."""
        path = tmp_path / "nested" / "store.json"
        await JsonFileStorage(path).multi_set({"@tourline_token": "abc"})

        reopened = JsonFileStorage(path)
        assert await reopened.get_item("@tourline_token") == "abc"
        assert json.loads(path.read_text()) == {"@tourline_token": "abc"}

    @pytest.mark.asyncio
    async def test_missing_file_reads_empty(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "absent.json")
        assert await storage.get_item("anything") is None

    @pytest.mark.asyncio
    async def test_corrupt_file_reads_empty(self, tmp_path):
        """A corrupt file should be treated as empty, not crash."""
        path = tmp_path / "store.json"
        path.write_text("{not json")
        storage = JsonFileStorage(path)
        assert await storage.multi_get(["x"]) == {"x": None}

    @pytest.mark.asyncio
    async def test_multi_remove(self, tmp_path):
        path = tmp_path / "store.json"
        storage = JsonFileStorage(path)
        await storage.multi_set({"a": "1", "b": "2"})
        await storage.multi_remove(["a"])
        assert json.loads(path.read_text()) == {"b": "2"}

    @pytest.mark.asyncio
    async def test_remove_without_file_does_not_create_it(self, tmp_path):
        path = tmp_path / "store.json"
        await JsonFileStorage(path).multi_remove(["a"])
        assert not path.exists()

    @pytest.mark.asyncio
    async def test_write_failure_raises(self, tmp_path):
        """A path under a regular file cannot be written."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        storage = JsonFileStorage(blocker / "store.json")
        with pytest.raises(StorageWriteError):
            await storage.multi_set({"a": "1"})
