"""In-memory source for unit tests."""

from __future__ import annotations


class MemoryConfigSource:
    """IConfigSource holding the table bytes in memory."""

    def __init__(self, data: bytes | str = b"", name: str = "memory") -> None:
        self._data = data.encode("utf-8") if isinstance(data, str) else data
        self._name = name

    def read(self) -> bytes:
        return self._data

    def write(self, data: bytes) -> str:
        self._data = data
        return self.describe()

    def describe(self) -> str:
        return f"<{self._name}>"
