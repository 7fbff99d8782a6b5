"""
Key/value storage providers for the credential module.

This module implements the IKeyValueStorage interface with two backends:
- MemoryStorage: Process-local dict, used in tests and ephemeral sessions
- JsonFileStorage: Durable JSON file on disk
"""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, Optional

from .exceptions import StorageWriteError

logger = logging.getLogger(__name__)


class MemoryStorage:
    """In-memory storage. Contents are lost when the process exits."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def multi_get(self, keys: Iterable[str]) -> dict[str, Optional[str]]:
        return {key: self._data.get(key) for key in keys}

    async def multi_set(self, items: dict[str, str]) -> None:
        self._data.update(items)

    async def multi_remove(self, keys: Iterable[str]) -> None:
        for key in keys:
            self._data.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        """Return a copy of the stored data."""
        return dict(self._data)


class JsonFileStorage:
    """
    Durable storage backed by a single JSON object on disk.

    Writes go to a temporary file in the same directory and are moved into
    place with os.replace, so a crash never leaves a half-written file.
    Disk I/O runs in a worker thread to keep the event loop responsive.
    """

    def __init__(self, path: Path):
        """
        Initialize the file storage.

        Args:
            path: Location of the JSON file. Parent directories are created
                  on first write.
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Ignoring corrupt storage file at {self._path}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring non-object storage file at {self._path}")
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self._path.parent, prefix=".tourline-", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(data, handle)
                os.replace(tmp_path, self._path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise StorageWriteError(str(self._path), str(e)) from e

    def _update(self, items: dict[str, str]) -> None:
        data = self._read()
        data.update(items)
        self._write(data)

    def _remove(self, keys: list[str]) -> None:
        data = self._read()
        if not any(key in data for key in keys):
            return
        for key in keys:
            data.pop(key, None)
        self._write(data)

    async def get_item(self, key: str) -> Optional[str]:
        data = await asyncio.to_thread(self._read)
        return data.get(key)

    async def multi_get(self, keys: Iterable[str]) -> dict[str, Optional[str]]:
        data = await asyncio.to_thread(self._read)
        return {key: data.get(key) for key in keys}

    async def multi_set(self, items: dict[str, str]) -> None:
        await asyncio.to_thread(self._update, dict(items))

    async def multi_remove(self, keys: Iterable[str]) -> None:
        await asyncio.to_thread(self._remove, list(keys))
