"""
Game session state machine.

One session plays one card:

    IN_PROGRESS --guess_name(correct)--> WON
    IN_PROGRESS --remaining hits 0-----> LOST

Letter, digit and threshold guesses spend one attempt each, but the final
attempt is reserved for a name guess. Only a correct name guess wins.

Invalid calls (repeat guesses, guesses after the game ended, empty names)
are silent no-ops so double clicks from a UI never raise.
"""

import logging
from collections.abc import Callable, Iterable

from sorcerify.config import settings
from sorcerify.models.card import Card
from sorcerify.models.game import GameStatus, GuessResult, GuessState, PersistedState
from sorcerify.services.masking import MaskedCard, render_card
from sorcerify.services.progress_store import KeyValueStore, read_snapshot, write_snapshot
from sorcerify.services.reveal import reveals
from sorcerify.services.tokens import keyboard, normalize

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class GameSession:
    """
    Tracks guesses against a single card.

    Args:
        card: The card to guess
        persist_key: Key of this game inside the progress map (e.g., the UTC
            date for daily games). Without it nothing is persisted.
        store: Key-value store for snapshots
        on_win: Called once when the game is won
        on_lose: Called once when the game is lost
        max_attempts: Attempts for a fresh game
        notify_restored: Fire on_win/on_lose immediately if the restored
            snapshot is already finished
    """

    def __init__(
        self,
        card: Card,
        *,
        persist_key: str | None = None,
        store: KeyValueStore | None = None,
        on_win: Callback | None = None,
        on_lose: Callback | None = None,
        max_attempts: int | None = None,
        notify_restored: bool = True,
    ) -> None:
        self.card = card
        self.persist_key = persist_key
        self.store = store
        self.on_win = on_win
        self.on_lose = on_lose
        self._win_reported = False
        self._lose_reported = False

        self.max_attempts = settings.max_attempts if max_attempts is None else max_attempts
        self.state = self._restore() or GuessState(remaining=self.max_attempts)

        if notify_restored:
            self._report_outcome()
        else:
            self._win_reported = self.state.has_won
            self._lose_reported = self.state.has_lost

    # --- Derived state ---

    @property
    def status(self) -> GameStatus:
        return self.state.status

    @property
    def remaining(self) -> int:
        return self.state.remaining

    @property
    def has_won(self) -> bool:
        return self.state.has_won

    @property
    def has_lost(self) -> bool:
        return self.state.has_lost

    @property
    def is_over(self) -> bool:
        return self.state.is_over

    @property
    def keyboard_disabled(self) -> bool:
        """Letter guesses stop once only the reserved name attempt is left."""
        return self.is_over or self.state.remaining <= 1

    # --- Transitions ---

    def guess_char(self, token: str) -> bool | None:
        """
        Guess a letter, digit or threshold.

        Returns True for a hit, False for a miss, None if ignored.
        """
        if self.keyboard_disabled:
            logger.debug("Ignoring guess %r: no letter guesses left", token)
            return None

        normalized = normalize(token)
        if normalized in self.state.guessed:
            logger.debug("Ignoring repeat guess %r", normalized)
            return None

        hit = reveals(self.card, normalized)
        self.state.guessed.add(normalized)
        if hit:
            self.state.correct.add(normalized)
        else:
            self.state.incorrect.add(normalized)
        self._record(hit)
        self._spend_attempt()
        self._after_mutation()
        return hit

    def guess_name(self, name: str) -> bool | None:
        """
        Guess the full card name.

        A correct name wins without spending an attempt; a wrong one spends
        one. Names already tried are ignored. Returns None if ignored.
        """
        if not name or self.is_over or self.state.remaining <= 0:
            logger.debug("Ignoring name guess %r", name)
            return None
        if name in self.state.name_guessed:
            logger.debug("Ignoring repeat name guess %r", name)
            return None

        self.state.name_guessed.append(name)
        won = name == self.card.name
        self._record(won)
        if won:
            self.state.has_won = True
        else:
            self._spend_attempt()
        self._after_mutation()
        return won

    def select_name(self, name: str) -> None:
        """Remember the name picked in the name selector."""
        if self.state.name_guess_selection == name:
            return
        self.state.name_guess_selection = name
        self._persist()

    # --- Views ---

    def view(self, reveal_all: bool | None = None) -> MaskedCard:
        """Masked card; fully revealed once the game is over."""
        if reveal_all is None:
            reveal_all = self.is_over
        return render_card(self.card, self.state.guessed, reveal_all)

    def available_names(self, all_names: Iterable[str]) -> list[str]:
        """Name options minus the names already tried."""
        tried = set(self.state.name_guessed)
        return [name for name in all_names if name not in tried]

    def key_states(self) -> dict[str, str]:
        """Keyboard token -> "correct", "incorrect" or "unguessed"."""
        states: dict[str, str] = {}
        for key in keyboard():
            if key in self.state.correct:
                states[key] = "correct"
            elif key in self.state.incorrect:
                states[key] = "incorrect"
            else:
                states[key] = "unguessed"
        return states

    # --- Internals ---

    def _record(self, hit: bool) -> None:
        result: GuessResult = "correct" if hit else "incorrect"
        self.state.results.append(result)

    def _spend_attempt(self) -> None:
        self.state.remaining = max(0, self.state.remaining - 1)

    def _after_mutation(self) -> None:
        self._persist()
        self._report_outcome()

    def _report_outcome(self) -> None:
        if self.state.has_won and not self._win_reported:
            self._win_reported = True
            logger.info(
                "Game won after %d attempts: %s",
                len(self.state.results),
                self.persist_key or "practice",
            )
            if self.on_win:
                self.on_win()
        elif self.state.has_lost and not self._lose_reported:
            self._lose_reported = True
            logger.info("Game lost: %s", self.persist_key or "practice")
            if self.on_lose:
                self.on_lose()

    def _restore(self) -> GuessState | None:
        if not self.persist_key or self.store is None:
            return None
        snapshot = read_snapshot(self.store, self.persist_key, self.max_attempts)
        return snapshot.to_state() if snapshot else None

    def _persist(self) -> None:
        if not self.persist_key or self.store is None:
            return
        write_snapshot(self.store, self.persist_key, PersistedState.from_state(self.state))
