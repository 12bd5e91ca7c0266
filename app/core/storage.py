"""Key-value persistence adapters.

The collection store depends only on :class:`StorageAdapter`: an async
``get``/``set`` pair over string keys and string values.

:class:`JsonFileStorage` keeps every key in a single JSON object on disk:

    {storage_file}  ->  {"game-collection": "[...]", "theme-preference": "dark"}

Writes go through a ``.tmp`` sibling and ``os.replace`` so a crash never
leaves a half-written document behind.
"""

from __future__ import annotations

import asyncio
import json
import os
from abc import ABC, abstractmethod
from pathlib import Path

from loguru import logger


class StorageAdapter(ABC):
    """Async string key-value store consumed by the collection store."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the stored value for *key*, or ``None`` when absent.

        May raise; callers treat any failure as "not found".
        """
        ...

    @abstractmethod
    async def set(self, key: str, value: str) -> bool:
        """Store *value* under *key*.

        Returns ``False`` or raises ``OSError`` on failure.
        """
        ...


class MemoryStorage(StorageAdapter):
    """In-process adapter; contents vanish with the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> bool:
        self._data[key] = value
        return True

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)


class JsonFileStorage(StorageAdapter):
    """Adapter persisting all keys in one JSON file.

    Blocking file I/O runs in a worker thread via :func:`asyncio.to_thread`.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    async def get(self, key: str) -> str | None:
        data = await asyncio.to_thread(self._read_all)
        value = data.get(key)
        return value if isinstance(value, str) else None

    async def set(self, key: str, value: str) -> bool:
        await asyncio.to_thread(self._write_key, key, value)
        return True

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _read_all(self) -> dict:
        if not self._path.exists():
            return {}
        with open(self._path, "r", encoding="utf-8") as f:
            text = f.read()
        try:
            data = json.loads(text)
        except (ValueError, RecursionError) as e:
            logger.warning("Storage file {} is corrupt, ignoring it: {}", self._path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Storage file {} has no key table, ignoring it", self._path)
            return {}
        return data

    def _write_key(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value

        self._path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            with open(temp_path, "w", encoding="utf-8", newline="\n") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(temp_path, self._path)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise
        logger.debug("Wrote key '{}' to {}", key, self._path)
