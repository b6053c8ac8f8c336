from sorcerify.config import LAST_WIN_DATE_STORAGE_KEY, STREAK_STORAGE_KEY
from sorcerify.services.progress_store import MemoryStore
from sorcerify.services.streak import StreakEvents, StreakTracker, StreakUpdate


def tracker_with(streak: str | None = None, last_win: str | None = None) -> StreakTracker:
    values = {}
    if streak is not None:
        values[STREAK_STORAGE_KEY] = streak
    if last_win is not None:
        values[LAST_WIN_DATE_STORAGE_KEY] = last_win
    return StreakTracker(MemoryStore(values))


class TestRecordWin:
    def test_first_win(self) -> None:
        tracker = tracker_with()

        tracker.record_win("2024-03-09")

        assert tracker.streak == 1
        assert tracker.store.read(STREAK_STORAGE_KEY) == "1"
        assert tracker.store.read(LAST_WIN_DATE_STORAGE_KEY) == "2024-03-09"

    def test_win_after_yesterday_extends(self) -> None:
        tracker = tracker_with("4", "2024-03-08")

        tracker.record_win("2024-03-09")

        assert tracker.streak == 5

    def test_win_after_gap_restarts(self) -> None:
        tracker = tracker_with("4", "2024-03-01")

        tracker.record_win("2024-03-09")

        assert tracker.streak == 1

    def test_second_win_same_day_ignored(self) -> None:
        tracker = tracker_with("4", "2024-03-09")

        tracker.record_win("2024-03-09")

        assert tracker.streak == 4

    def test_garbage_streak_reads_as_zero(self) -> None:
        assert tracker_with("lots").streak == 0


class TestRecordLoss:
    def test_loss_resets(self) -> None:
        tracker = tracker_with("4", "2024-03-08")

        tracker.record_loss("2024-03-09")

        assert tracker.streak == 0
        assert tracker.last_win_date == "2024-03-08"

    def test_loss_after_winning_today_ignored(self) -> None:
        tracker = tracker_with("4", "2024-03-09")

        tracker.record_loss("2024-03-09")

        assert tracker.streak == 4


class TestStreakEvents:
    def test_updates_are_broadcast(self) -> None:
        events = StreakEvents()
        received: list[StreakUpdate] = []
        events.subscribe(received.append)
        tracker = StreakTracker(MemoryStore(), events)

        tracker.record_win("2024-03-09")
        tracker.record_loss("2024-03-10")

        assert received == [
            StreakUpdate(streak=1, last_win_date="2024-03-09"),
            StreakUpdate(streak=0, last_win_date="2024-03-09"),
        ]
        assert received[0].event == "sorcerify:streak-updated"

    def test_unsubscribe(self) -> None:
        events = StreakEvents()
        received: list[StreakUpdate] = []
        unsubscribe = events.subscribe(received.append)

        unsubscribe()
        events.emit(StreakUpdate(streak=1, last_win_date=None))

        assert received == []
