"""
Daily win streak.

A win on the day after the last win extends the streak; any other win
starts a new streak of 1. A loss resets the streak to 0 unless the day
was already won. Every change is broadcast to listeners.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from sorcerify.config import (
    LAST_WIN_DATE_STORAGE_KEY,
    STREAK_STORAGE_KEY,
    STREAK_UPDATED_EVENT,
)
from sorcerify.services.daily import previous_date_key
from sorcerify.services.progress_store import KeyValueStore, read_value, write_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StreakUpdate:
    """Payload of the streak-updated event."""

    streak: int
    last_win_date: str | None
    event: str = STREAK_UPDATED_EVENT


Listener = Callable[[StreakUpdate], None]


class StreakEvents:
    """Broadcast channel for streak changes."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, update: StreakUpdate) -> None:
        for listener in list(self._listeners):
            listener(update)


def _parse_streak(raw: str | None) -> int:
    if not raw:
        return 0
    try:
        return max(0, int(raw))
    except ValueError:
        return 0


class StreakTracker:
    """Daily streak persisted in a key-value store."""

    def __init__(self, store: KeyValueStore, events: StreakEvents | None = None) -> None:
        self.store = store
        self.events = events or StreakEvents()
        self.streak = _parse_streak(read_value(store, STREAK_STORAGE_KEY))
        self.last_win_date = read_value(store, LAST_WIN_DATE_STORAGE_KEY) or None

    def record_win(self, today_key: str) -> None:
        if self.last_win_date == today_key:
            return
        if self.last_win_date == previous_date_key(today_key):
            self.streak += 1
        else:
            self.streak = 1
        self.last_win_date = today_key
        self._save()
        logger.info("Daily streak is now %d", self.streak)
        self.events.emit(StreakUpdate(streak=self.streak, last_win_date=today_key))

    def record_loss(self, today_key: str) -> None:
        if self.last_win_date == today_key:
            return
        self.streak = 0
        self._save()
        logger.info("Daily streak reset")
        self.events.emit(StreakUpdate(streak=0, last_win_date=self.last_win_date))

    def _save(self) -> None:
        write_value(self.store, STREAK_STORAGE_KEY, str(self.streak))
        if self.last_win_date is not None:
            write_value(self.store, LAST_WIN_DATE_STORAGE_KEY, self.last_win_date)
