from sorcerify.models.card import Card, CardType, Guardian, Rarity, SetEntry, Thresholds, Variant
from sorcerify.models.game import GameStatus, GuessResult, GuessState, PersistedState

__all__ = [
    "Card",
    "CardType",
    "GameStatus",
    "Guardian",
    "GuessResult",
    "GuessState",
    "PersistedState",
    "Rarity",
    "SetEntry",
    "Thresholds",
    "Variant",
]
