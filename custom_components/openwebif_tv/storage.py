"""Small JSON file stores for per-device state."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Any

from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.json import save_json
from homeassistant.util.json import load_json_object

from .api.errors import OpenWebIfPersistenceError

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreResult:
    """Outcome of a load or flush; errors are returned, not raised."""

    ok: bool
    error: OpenWebIfPersistenceError | None = None

    @classmethod
    def success(cls) -> StoreResult:
        return cls(ok=True)

    @classmethod
    def failure(cls, message: str, err: Exception) -> StoreResult:
        error = OpenWebIfPersistenceError(f"{message}: {err}")
        error.__cause__ = err

        return cls(ok=False, error=error)


class PersistenceStore(ABC):
    """Key-value store that is loaded and flushed as a whole."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Return the value for key."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Set key in memory; call flush to persist."""

    @abstractmethod
    def replace(self, data: dict[str, Any]) -> None:
        """Replace the whole in-memory mapping."""

    @abstractmethod
    def as_dict(self) -> dict[str, Any]:
        """Return a copy of the in-memory mapping."""

    @abstractmethod
    def load(self) -> StoreResult:
        """Read durable state into memory."""

    @abstractmethod
    def flush(self) -> StoreResult:
        """Write the whole in-memory mapping to durable storage."""


class MemoryStore(PersistenceStore):
    """Store kept only in memory."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(data or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def replace(self, data: dict[str, Any]) -> None:
        self._data = dict(data)

    def as_dict(self) -> dict[str, Any]:
        return dict(self._data)

    def load(self) -> StoreResult:
        return StoreResult.success()

    def flush(self) -> StoreResult:
        return StoreResult.success()


class JsonFileStore(MemoryStore):
    """Store backed by one JSON file in the Home Assistant storage dir.

    A missing file loads as an empty mapping; an unreadable one loads
    empty and reports the error. A flush atomically rewrites the file
    with the full mapping. Both calls block and belong in a worker
    thread when used from the event loop.
    """

    def __init__(self, path: Path | str) -> None:
        super().__init__()
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> StoreResult:
        try:
            data = load_json_object(self._path)
        except HomeAssistantError as err:
            self._data = {}
            return StoreResult.failure(f"Cannot load {self._path}", err)

        self._data = dict(data)
        _LOGGER.debug("Loaded %s keys from %s", len(self._data), self._path)

        return StoreResult.success()

    def flush(self) -> StoreResult:
        try:
            save_json(str(self._path), self._data, atomic_writes=True)
        except (HomeAssistantError, OSError) as err:
            return StoreResult.failure(f"Cannot write {self._path}", err)

        return StoreResult.success()
