"""Durable local key/value store (the device's "local storage").

Values are strings, exactly like browser storage; repositories decide how
to encode them.  A file that cannot be read or parsed is treated as empty
and logged; it is never a fatal error.  Writes that fail raise OSError.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)


class LocalStore(ABC):

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None if absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store *value* under *key*."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete *key*; no-op if absent."""


class JsonFileLocalStore(LocalStore):
    """All keys in one JSON object file."""

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    def get(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._persist(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._persist(data)

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> dict[str, str]:
        if not self._file_path.exists():
            return {}
        try:
            data = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("persistence_warning", path=str(self._file_path), error=str(exc))
            return {}
        if not isinstance(data, dict):
            logger.warning("persistence_warning", path=str(self._file_path), error="not an object")
            return {}
        return data

    def _persist(self, data: dict[str, str]) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._file_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
