import json

import pytest

from sorcerify.config import PROGRESS_STORAGE_KEY
from sorcerify.models.game import GuessState, PersistedState
from sorcerify.services.progress_store import (
    MemoryStore,
    StoreError,
    read_snapshot,
    read_value,
    write_snapshot,
    write_value,
)


class BrokenStore:
    """Store whose every operation fails, like a full or blocked local storage."""

    def __init__(self, error: type[Exception] = StoreError) -> None:
        self.error = error

    def read(self, key: str) -> str | None:
        raise self.error("blocked")

    def write(self, key: str, value: str) -> None:
        raise self.error("quota exceeded")


@pytest.fixture(params=[StoreError, OSError], ids=["store-error", "os-error"])
def broken_store(request: pytest.FixtureRequest) -> BrokenStore:
    return BrokenStore(request.param)


@pytest.fixture
def snapshot() -> PersistedState:
    return PersistedState.from_state(
        GuessState(
            guessed={"e", "z"},
            correct={"e"},
            incorrect={"z"},
            remaining=5,
            results=["correct", "incorrect"],
        )
    )


class TestMemoryStore:
    def test_tracks_changes(self) -> None:
        store = MemoryStore({"a": "1"})

        store.write("b", "2")

        assert store.read("a") == "1"
        assert store.changes() == {"b": "2"}


class TestSnapshots:
    def test_round_trip(self, snapshot: PersistedState) -> None:
        store = MemoryStore()

        assert write_snapshot(store, "2024-03-09", snapshot)

        restored = read_snapshot(store, "2024-03-09")
        assert restored is not None
        state = restored.to_state()
        assert state.correct == {"e"}
        assert state.incorrect == {"z"}
        assert state.remaining == 5

    def test_sessions_share_one_entry(self, snapshot: PersistedState) -> None:
        """Games for different days live side by side in the progress map."""
        store = MemoryStore()

        write_snapshot(store, "2024-03-09", snapshot)
        write_snapshot(store, "2024-03-10", PersistedState())

        progress = json.loads(store.read(PROGRESS_STORAGE_KEY) or "{}")
        assert set(progress) == {"2024-03-09", "2024-03-10"}
        assert progress["2024-03-09"]["hasWon"] is False
        assert "nameGuessed" in progress["2024-03-09"]

    def test_missing_key(self) -> None:
        assert read_snapshot(MemoryStore(), "2024-03-09") is None

    def test_corrupt_map_reads_as_missing(self) -> None:
        store = MemoryStore({PROGRESS_STORAGE_KEY: "{not json"})

        assert read_snapshot(store, "2024-03-09") is None

    def test_corrupt_map_is_replaced_on_write(self, snapshot: PersistedState) -> None:
        store = MemoryStore({PROGRESS_STORAGE_KEY: "[1, 2]"})

        assert write_snapshot(store, "2024-03-09", snapshot)
        assert read_snapshot(store, "2024-03-09") is not None

    def test_invalid_entry_reads_as_missing(self) -> None:
        store = MemoryStore({PROGRESS_STORAGE_KEY: json.dumps({"k": {"remaining": "many"}})})

        assert read_snapshot(store, "k") is None

    def test_inconsistent_entry_reads_as_missing(self) -> None:
        raw = {
            "k": {
                "guessed": ["a"],
                "correct": [],
                "incorrect": ["b"],
                "remaining": 99,
                "results": ["correct", "correct", "correct"],
            }
        }
        store = MemoryStore({PROGRESS_STORAGE_KEY: json.dumps(raw)})

        assert read_snapshot(store, "k") is None

    def test_remaining_above_max_attempts_reads_as_missing(self, snapshot: PersistedState) -> None:
        store = MemoryStore()
        write_snapshot(store, "k", snapshot)

        assert read_snapshot(store, "k", max_attempts=4) is None
        assert read_snapshot(store, "k", max_attempts=5) is not None

    def test_old_snapshot_without_name_fields(self) -> None:
        raw = {
            "k": {
                "guessed": ["a"],
                "correct": ["a"],
                "incorrect": [],
                "remaining": 6,
                "hasWon": False,
            }
        }
        store = MemoryStore({PROGRESS_STORAGE_KEY: json.dumps(raw)})

        restored = read_snapshot(store, "k")

        assert restored is not None
        assert restored.name_guessed == []
        assert restored.results == []

    def test_broken_store_is_not_fatal(
        self, broken_store: BrokenStore, snapshot: PersistedState
    ) -> None:
        assert read_snapshot(broken_store, "k") is None
        assert write_snapshot(broken_store, "k", snapshot) is False


class TestPlainValues:
    def test_broken_store_is_not_fatal(self, broken_store: BrokenStore) -> None:
        assert read_value(broken_store, "k") is None
        assert write_value(broken_store, "k", "v") is False
