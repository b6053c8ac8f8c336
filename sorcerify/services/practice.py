"""
Practice mode.

Practice games are not persisted. Each round picks a random card that
differs from the previous one, and a streak counts consecutive wins.
"""

import random
from collections.abc import Sequence

from sorcerify.models.card import Card
from sorcerify.services.game_session import GameSession


def pick_practice_index(card_count: int, current: int | None, rng: random.Random) -> int:
    """
    Random card index, never `current` while more than one card exists.

    Returns 0 for empty or single-card sets.
    """
    if card_count <= 1:
        return 0
    index = rng.randrange(card_count)
    if index == current:
        index = (index + 1) % card_count
    return index


class PracticeRun:
    """
    A sequence of practice rounds over a card list.

    Args:
        cards: Loaded card set, must not be empty
        rng: Random source; seed it for reproducible runs
    """

    def __init__(self, cards: Sequence[Card], rng: random.Random | None = None) -> None:
        if not cards:
            raise ValueError("Practice needs at least one card")
        self.cards = cards
        self.rng = rng or random.Random()
        self.streak = 0
        self.round_ended = False
        self.index = pick_practice_index(len(cards), None, self.rng)
        self.session = self._new_session()

    @property
    def card(self) -> Card:
        return self.cards[self.index]

    def next_card(self) -> bool:
        """Start a new round. Ignored until the current round has ended."""
        if not self.round_ended:
            return False
        self.index = pick_practice_index(len(self.cards), self.index, self.rng)
        self.round_ended = False
        self.session = self._new_session()
        return True

    def _new_session(self) -> GameSession:
        return GameSession(self.card, on_win=self._on_win, on_lose=self._on_lose)

    def _on_win(self) -> None:
        self.streak += 1
        self.round_ended = True

    def _on_lose(self) -> None:
        self.streak = 0
        self.round_ended = True
