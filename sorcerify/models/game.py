from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, model_validator

from sorcerify.config import settings

GuessResult = Literal["correct", "incorrect"]


class GameStatus(str, Enum):
    """Lifecycle of a single game."""

    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"


@dataclass
class GuessState:
    """
    Mutable state of one game.

    `correct` and `incorrect` partition `guessed`. `results` holds one entry
    per attempt, letter and name guesses alike, in the order they were made.
    `name_guessed` keeps tried names in submission order without duplicates.

    Attributes:
        guessed: Every normalized token guessed so far
        correct: Tokens that revealed something on the card
        incorrect: Tokens that revealed nothing
        remaining: Attempts left, never below 0
        has_won: True once the card name was guessed, terminal
        name_guessed: Full names already submitted
        name_guess_selection: Name currently picked but not yet submitted
        results: Outcome tag per attempt
    """

    guessed: set[str] = field(default_factory=set)
    correct: set[str] = field(default_factory=set)
    incorrect: set[str] = field(default_factory=set)
    remaining: int = field(default_factory=lambda: settings.max_attempts)
    has_won: bool = False
    name_guessed: list[str] = field(default_factory=list)
    name_guess_selection: str = ""
    results: list[GuessResult] = field(default_factory=list)

    @property
    def has_lost(self) -> bool:
        return self.remaining <= 0 and not self.has_won

    @property
    def status(self) -> GameStatus:
        if self.has_won:
            return GameStatus.WON
        if self.has_lost:
            return GameStatus.LOST
        return GameStatus.IN_PROGRESS

    @property
    def is_over(self) -> bool:
        return self.status is not GameStatus.IN_PROGRESS


class PersistedState(BaseModel):
    """
    JSON snapshot of a GuessState.

    Stored inside the central progress map under the game's persist key.
    Older snapshots may lack the name-guess fields and results; they default
    to empty. Snapshots whose fields contradict each other are rejected.
    Validation context may carry "max_attempts" to bound `remaining`.
    """

    model_config = ConfigDict(populate_by_name=True)

    guessed: list[str] = Field(default_factory=list)
    correct: list[str] = Field(default_factory=list)
    incorrect: list[str] = Field(default_factory=list)
    remaining: int = Field(default_factory=lambda: settings.max_attempts)
    has_won: bool = Field(default=False, alias="hasWon")
    name_guessed: list[str] = Field(default_factory=list, alias="nameGuessed")
    name_guess_selection: str = Field(default="", alias="nameGuessSelection")
    results: list[GuessResult] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_consistency(self, info: ValidationInfo) -> "PersistedState":
        guessed = set(self.guessed)
        correct = set(self.correct)
        incorrect = set(self.incorrect)
        if correct & incorrect:
            raise ValueError("correct and incorrect tokens overlap")
        if correct | incorrect != guessed:
            raise ValueError("correct and incorrect do not partition guessed")

        if "results" in self.model_fields_set:
            attempts = len(guessed) + len(dict.fromkeys(self.name_guessed))
            if len(self.results) != attempts:
                raise ValueError(
                    f"{len(self.results)} results recorded for {attempts} attempts"
                )

        max_attempts = (info.context or {}).get("max_attempts")
        if max_attempts is not None and self.remaining > max_attempts:
            raise ValueError(f"remaining {self.remaining} exceeds {max_attempts} attempts")
        return self

    @classmethod
    def from_state(cls, state: GuessState) -> "PersistedState":
        return cls(
            guessed=sorted(state.guessed),
            correct=sorted(state.correct),
            incorrect=sorted(state.incorrect),
            remaining=state.remaining,
            has_won=state.has_won,
            name_guessed=list(state.name_guessed),
            name_guess_selection=state.name_guess_selection,
            results=list(state.results),
        )

    def to_state(self) -> GuessState:
        return GuessState(
            guessed=set(self.guessed),
            correct=set(self.correct),
            incorrect=set(self.incorrect),
            remaining=max(0, self.remaining),
            has_won=self.has_won,
            name_guessed=list(dict.fromkeys(self.name_guessed)),
            name_guess_selection=self.name_guess_selection,
            results=list(self.results),
        )
