"""
Key-value persistence for game progress.

The engine never touches a global store. Callers inject anything that
implements `KeyValueStore`; `MemoryStore` is the in-process implementation
used by the API (seeded from the database per request) and by tests.

All games share one store entry: a JSON map from persist key to snapshot.
Read and write failures are logged and ignored so a broken store never
breaks a game.
"""

import json
import logging
from typing import Any, Protocol

from pydantic import ValidationError

from sorcerify.config import PROGRESS_STORAGE_KEY, settings
from sorcerify.models.game import PersistedState

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised by a store that cannot read or write a value."""

    pass


class KeyValueStore(Protocol):
    def read(self, key: str) -> str | None: ...

    def write(self, key: str, value: str) -> None: ...


class MemoryStore:
    """
    Dict-backed store.

    Tracks which keys were written so callers can flush only changes.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(initial or {})
        self.dirty: set[str] = set()

    def read(self, key: str) -> str | None:
        return self.values.get(key)

    def write(self, key: str, value: str) -> None:
        self.values[key] = value
        self.dirty.add(key)

    def changes(self) -> dict[str, str]:
        """Values written since construction."""
        return {key: self.values[key] for key in sorted(self.dirty)}


def _read_progress_map(store: KeyValueStore) -> dict[str, Any]:
    raw = store.read(PROGRESS_STORAGE_KEY)
    if not raw:
        return {}
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("progress map is not a JSON object")
    return data


def read_snapshot(
    store: KeyValueStore, persist_key: str, max_attempts: int | None = None
) -> PersistedState | None:
    """
    Load the snapshot saved under a persist key.

    Returns None when nothing is stored or the stored data is unusable,
    including snapshots with more attempts left than `max_attempts`.
    """
    if max_attempts is None:
        max_attempts = settings.max_attempts
    try:
        entry = _read_progress_map(store).get(persist_key)
        if entry is None:
            return None
        return PersistedState.model_validate(entry, context={"max_attempts": max_attempts})
    except (StoreError, OSError, ValueError, ValidationError) as e:
        logger.warning("Ignoring unreadable progress for %s: %s", persist_key, e)
        return None


def write_snapshot(store: KeyValueStore, persist_key: str, snapshot: PersistedState) -> bool:
    """
    Save a snapshot under its persist key, keeping other games' entries.

    A corrupt progress map is replaced. Returns False if the write failed.
    """
    try:
        progress = _read_progress_map(store)
    except (StoreError, OSError, ValueError) as e:
        logger.warning("Replacing unreadable progress map: %s", e)
        progress = {}

    progress[persist_key] = snapshot.model_dump(by_alias=True)
    try:
        store.write(PROGRESS_STORAGE_KEY, json.dumps(progress))
    except (StoreError, OSError, TypeError) as e:
        logger.warning("Failed to save progress for %s: %s", persist_key, e)
        return False
    return True


def read_value(store: KeyValueStore, key: str) -> str | None:
    """Read a plain value, None on failure."""
    try:
        return store.read(key)
    except (StoreError, OSError) as e:
        logger.warning("Failed to read %s: %s", key, e)
        return None


def write_value(store: KeyValueStore, key: str, value: str) -> bool:
    """Write a plain value, False on failure."""
    try:
        store.write(key, value)
    except (StoreError, OSError) as e:
        logger.warning("Failed to write %s: %s", key, e)
        return False
    return True
