from __future__ import annotations

import pytest

from app.core.storage import StorageAdapter


class FakeStorage(StorageAdapter):
    """In-memory adapter that records writes and can be told to fail."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})
        self.writes: list[tuple[str, str]] = []
        self.fail_reads = False
        self.fail_writes = False
        self.refuse_writes = False

    async def get(self, key: str) -> str | None:
        if self.fail_reads:
            raise OSError("disk unavailable")
        return self.data.get(key)

    async def set(self, key: str, value: str) -> bool:
        if self.fail_writes:
            raise OSError("disk full")
        if self.refuse_writes:
            return False
        self.writes.append((key, value))
        self.data[key] = value
        return True


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()
