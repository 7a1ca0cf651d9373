"""Key-value persistence for the best score."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from .config import DATA_DIR, HIGHSCORE_KEY

logger = logging.getLogger(__name__)


class StorageUnavailable(OSError):
    """Raised by a storage backend that cannot be reached at all."""


class KeyValueStorage(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """Dict-backed storage; ``available=False`` simulates a dead backend."""

    def __init__(self, initial: dict[str, str] | None = None, available: bool = True):
        self.values: dict[str, str] = dict(initial or {})
        self.available = available

    def get(self, key: str) -> str | None:
        if not self.available:
            raise StorageUnavailable("memory storage disabled")
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        if not self.available:
            raise StorageUnavailable("memory storage disabled")
        self.values[key] = value


class FileStorage:
    """Stores each key as ``<directory>/<key>.txt``."""

    def __init__(self, directory: Path | str = DATA_DIR) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.txt"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(key).write_text(value, encoding="utf-8")


class HighScoreStore:
    """Reads and writes the single persisted high score.

    Storage problems never escape: a missing key, a garbled value or a
    failing backend all read as 0, and a failed write is skipped.
    """

    def __init__(self, storage: KeyValueStorage, key: str = HIGHSCORE_KEY) -> None:
        self.storage = storage
        self.key = key

    def load(self) -> int:
        try:
            raw = self.storage.get(self.key)
            return int(raw.strip()) if raw and raw.strip() else 0
        except (OSError, ValueError) as exc:
            logger.warning("Could not load high score: %s", exc)
            return 0

    def save(self, score: int) -> bool:
        """Persist ``score`` if it beats the stored value; report whether it did."""
        if score <= self.load():
            return False
        try:
            self.storage.set(self.key, str(score))
        except OSError as exc:
            logger.warning("Could not save high score %d: %s", score, exc)
            return False
        logger.info("New high score saved: %d", score)
        return True
