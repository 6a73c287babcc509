"""Local filesystem source for the dispatch table."""

from __future__ import annotations

from pathlib import Path

from slabconf.core.exceptions import ConfigSourceError


class FileConfigSource:
    """IConfigSource backed by a file on disk."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> bytes:
        try:
            return self._path.read_bytes()
        except FileNotFoundError as exc:
            raise ConfigSourceError(f"Config file not found: {self._path}") from exc
        except OSError as exc:
            raise ConfigSourceError(f"Failed to read config file {self._path}: {exc}") from exc

    def describe(self) -> str:
        return str(self._path)
