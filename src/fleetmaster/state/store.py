"""Persistent store for the register state.

The whole ``AppState`` lives in a single key of a key-value slot, standing
in for a shared cloud file. Writes overwrite unconditionally (last writer
wins); reads that find nothing usable fall back to the seed dataset.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from fleetmaster._constants import STORAGE_KEY
from fleetmaster.config import FleetConfig
from fleetmaster.exceptions import FleetStorageError
from fleetmaster.models import AppState
from fleetmaster.models._base import utcnow
from fleetmaster.state.seed import seed_state

_logger = logging.getLogger(__name__)


class KeyValueBackend(Protocol):
    """Structural interface of a string key-value slot.

    Mirrors the browser ``localStorage`` surface so any dict-like or
    remote store can be dropped in.
    """

    def get_item(self, key: str) -> str | None:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...


class MemoryBackend:
    """Dict-backed slot; contents vanish with the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._items


class JsonFileBackend:
    """Slot stored as one JSON object file mapping keys to string values.

    A missing, unreadable, or corrupt file reads as an empty slot. Write
    failures raise :class:`FleetStorageError`.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except UnicodeDecodeError as exc:
            _logger.warning("Storage file %s is not valid UTF-8: %s", self._path, exc)
            return {}
        except OSError as exc:
            _logger.warning("Could not read storage file %s: %s", self._path, exc)
            return {}

        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            _logger.warning("Storage file %s is not valid JSON: %s", self._path, exc)
            return {}
        if not isinstance(data, dict):
            _logger.warning("Storage file %s does not hold a JSON object", self._path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: dict[str, str], *, key: str) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            raise FleetStorageError(f"Could not write storage file {self._path}: {exc}", key=key) from exc

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data, key=key)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data, key=key)


class FleetStore:
    """Loads and saves the full register state under one key.

    Usage::

        store = FleetStore(JsonFileBackend("fleet.json"))
        state = store.load()
        store.save(upsert_vehicle(state, vehicle))
    """

    def __init__(
        self,
        backend: KeyValueBackend,
        *,
        key: str = STORAGE_KEY,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._backend = backend
        self._key = key
        self._clock = clock

    @classmethod
    def from_config(cls, config: FleetConfig, *, clock: Callable[[], datetime] = utcnow) -> FleetStore:
        return cls(JsonFileBackend(config.storage_path), key=config.storage_key, clock=clock)

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> AppState:
        """Read the persisted state, or the seed dataset if there is none.

        Unparsable blobs are logged and treated as absent.
        """
        blob = self._backend.get_item(self._key)
        if blob is None:
            _logger.debug("No persisted state under %r, using seed data", self._key)
            return seed_state(self._clock())

        try:
            state = AppState.from_blob(blob)
        except ValidationError as exc:
            _logger.warning(
                "Persisted state under %r is unusable (%d errors), using seed data",
                self._key,
                exc.error_count(),
            )
            return seed_state(self._clock())

        _logger.debug(
            "Loaded %d vehicles and %d parts from %r",
            len(state.vehicles),
            len(state.parts),
            self._key,
        )
        return state

    def save(self, state: AppState) -> None:
        """Overwrite the persisted blob with *state*."""
        self._backend.set_item(self._key, state.to_blob())
        _logger.debug(
            "Saved %d vehicles and %d parts to %r",
            len(state.vehicles),
            len(state.parts),
            self._key,
        )

    def clear(self) -> None:
        """Forget the persisted state; the next :meth:`load` re-seeds."""
        self._backend.remove_item(self._key)
