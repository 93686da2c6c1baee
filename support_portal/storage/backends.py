"""Key/value adapters backing the persistent store.

Both adapters mirror a browser's local storage primitive: string keys,
string values, whole-value replacement and an optional byte quota.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import MutableMapping, Protocol
from urllib.parse import quote

logger = logging.getLogger(__name__)


class StorageQuotaExceededError(OSError):
    """Raised when a write would grow the backend past its byte quota."""


class StorageBackend(Protocol):
    def get_item(self, key: str) -> str | None:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...


def _encoded_size(value: str) -> int:
    return len(value.encode("utf-8"))


class InMemoryBackend:
    """Process-local backend used by tests and ephemeral sessions."""

    def __init__(self, *, quota_bytes: int | None = None) -> None:
        self._items: MutableMapping[str, str] = {}
        self._quota_bytes = quota_bytes

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self._quota_bytes is not None:
            used = sum(_encoded_size(item) for name, item in self._items.items() if name != key)
            if used + _encoded_size(value) > self._quota_bytes:
                raise StorageQuotaExceededError(
                    f"Writing {key!r} exceeds the {self._quota_bytes} byte storage quota"
                )
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileBackend:
    """Store each key as a JSON file inside a profile directory."""

    def __init__(self, directory: str | os.PathLike[str], *, quota_bytes: int | None = None) -> None:
        self._directory = Path(directory)
        self._quota_bytes = quota_bytes

    @property
    def directory(self) -> Path:
        return self._directory

    def _path_for(self, key: str) -> Path:
        return self._directory / f"{quote(key, safe='')}.json"

    def get_item(self, key: str) -> str | None:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set_item(self, key: str, value: str) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)
        target = self._path_for(key)
        if self._quota_bytes is not None:
            used = sum(
                path.stat().st_size for path in self._directory.glob("*.json") if path != target
            )
            if used + _encoded_size(value) > self._quota_bytes:
                raise StorageQuotaExceededError(
                    f"Writing {key!r} exceeds the {self._quota_bytes} byte storage quota"
                )

        fd, tmp_name = tempfile.mkstemp(dir=self._directory, prefix=".", suffix=".part")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Wrote %d bytes to %s", _encoded_size(value), target)

    def remove_item(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)
