"""
Daily game API endpoints.

Each request rebuilds the player's game from their stored values, applies
one action, and writes back whatever changed. The day is always the
current UTC day.
"""

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from sorcerify.api.deps import get_cards, get_now
from sorcerify.db import load_player_store, save_player_store
from sorcerify.db.database import get_session
from sorcerify.models.card import Card
from sorcerify.models.game import GameStatus, GuessResult
from sorcerify.services.card_database import card_names
from sorcerify.services.daily import format_utc_date_key, select_daily_index
from sorcerify.services.game_session import GameSession
from sorcerify.services.masking import MaskedCard
from sorcerify.services.progress_store import MemoryStore
from sorcerify.services.results import card_info_url, result_row, share_text
from sorcerify.services.streak import StreakTracker
from sorcerify.services.tokens import is_guessable

router = APIRouter(prefix="/daily", tags=["daily"])


class SegmentResponse(BaseModel):
    """One piece of rules text: plain text, a threshold icon or a numeral badge."""

    kind: Literal["text", "threshold", "numeral"]
    text: str | None = None
    element: str | None = None
    value: str | None = None
    revealed: bool | None = None


class MaskedCardResponse(BaseModel):
    """Card fields as currently visible to the player."""

    name: str
    type_text: str
    left_top: str
    left_top_kind: Literal["life", "cost"]
    stats: str
    thresholds: list[SegmentResponse] = Field(default_factory=list)
    rules: list[SegmentResponse] = Field(default_factory=list)
    orientation: Literal["portrait", "landscape"]
    revealed: bool = False

    @classmethod
    def from_masked(cls, masked: MaskedCard) -> "MaskedCardResponse":
        data = asdict(masked)
        return cls.model_validate(data)


class GameResponse(BaseModel):
    """State of the player's daily game."""

    player_id: str
    date_key: str
    status: GameStatus
    remaining: int
    results: list[GuessResult] = Field(default_factory=list)
    correct: list[str] = Field(default_factory=list)
    incorrect: list[str] = Field(default_factory=list)
    name_guessed: list[str] = Field(default_factory=list)
    name_guess_selection: str = ""
    keyboard_disabled: bool
    keys: dict[str, str] = Field(
        default_factory=dict,
        description="Keyboard token -> correct, incorrect or unguessed",
    )
    name_options: list[str] = Field(
        default_factory=list,
        description="Card names not yet tried",
    )
    card: MaskedCardResponse
    card_name: str | None = Field(
        default=None,
        description="The answer, only once the game is over",
    )
    streak: int = 0
    hit: bool | None = Field(
        default=None,
        description="Outcome of the guess made by this request, null if it was ignored",
    )


class GuessRequest(BaseModel):
    """Request model for a letter, digit or threshold guess."""

    token: str = Field(..., examples=["e", "7", "fire"])


class NameRequest(BaseModel):
    """Request model for naming the card."""

    name: str = Field(..., examples=["Fire Drake"])


class ResultsResponse(BaseModel):
    """Shareable summary of a finished daily game."""

    player_id: str
    date_key: str
    has_won: bool
    card_name: str
    results: list[GuessResult] = Field(default_factory=list)
    row: str
    share_text: str
    card_url: str


@dataclass
class _DailyGame:
    date_key: str
    store: MemoryStore
    streak: StreakTracker
    game: GameSession


async def _open_game(
    session: AsyncSession, player_id: str, cards: tuple[Card, ...], now: datetime
) -> _DailyGame:
    store = await load_player_store(session, player_id)
    date_key = format_utc_date_key(now)
    card = cards[select_daily_index(len(cards), now)]
    streak = StreakTracker(store)
    game = GameSession(
        card,
        persist_key=date_key,
        store=store,
        on_win=lambda: streak.record_win(date_key),
        on_lose=lambda: streak.record_loss(date_key),
        notify_restored=False,
    )
    return _DailyGame(date_key=date_key, store=store, streak=streak, game=game)


def _game_response(
    player_id: str, daily: _DailyGame, cards: tuple[Card, ...], hit: bool | None = None
) -> GameResponse:
    game = daily.game
    state = game.state
    return GameResponse(
        player_id=player_id,
        date_key=daily.date_key,
        status=game.status,
        remaining=state.remaining,
        results=list(state.results),
        correct=sorted(state.correct),
        incorrect=sorted(state.incorrect),
        name_guessed=list(state.name_guessed),
        name_guess_selection=state.name_guess_selection,
        keyboard_disabled=game.keyboard_disabled,
        keys=game.key_states(),
        name_options=[] if game.is_over else game.available_names(card_names(cards)),
        card=MaskedCardResponse.from_masked(game.view()),
        card_name=game.card.name if game.is_over else None,
        streak=daily.streak.streak,
        hit=hit,
    )


@router.get("/{player_id}", response_model=GameResponse)
async def get_daily_game(
    player_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    cards: Annotated[tuple[Card, ...], Depends(get_cards)],
    now: Annotated[datetime, Depends(get_now)],
) -> GameResponse:
    """
    Get today's game for a player.

    Starts a fresh game if the player has not played today.
    """
    daily = await _open_game(session, player_id, cards, now)
    return _game_response(player_id, daily, cards)


@router.post("/{player_id}/guess", response_model=GameResponse)
async def guess_token(
    player_id: str,
    request: GuessRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
    cards: Annotated[tuple[Card, ...], Depends(get_cards)],
    now: Annotated[datetime, Depends(get_now)],
) -> GameResponse:
    """
    Guess a letter, digit or threshold.

    Repeat guesses and guesses after the game ended are ignored and
    reported with hit=null.
    """
    if not is_guessable(request.token):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"'{request.token}' is not a letter, digit or threshold",
        )

    daily = await _open_game(session, player_id, cards, now)
    hit = daily.game.guess_char(request.token)
    await save_player_store(session, player_id, daily.store)
    return _game_response(player_id, daily, cards, hit)


@router.post("/{player_id}/name", response_model=GameResponse)
async def guess_name(
    player_id: str,
    request: NameRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
    cards: Annotated[tuple[Card, ...], Depends(get_cards)],
    now: Annotated[datetime, Depends(get_now)],
) -> GameResponse:
    """
    Guess the card name.

    A correct name wins. Empty or repeated names are ignored.
    """
    daily = await _open_game(session, player_id, cards, now)
    hit = daily.game.guess_name(request.name)
    await save_player_store(session, player_id, daily.store)
    return _game_response(player_id, daily, cards, hit)


@router.put("/{player_id}/selection", response_model=GameResponse)
async def select_name(
    player_id: str,
    request: NameRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
    cards: Annotated[tuple[Card, ...], Depends(get_cards)],
    now: Annotated[datetime, Depends(get_now)],
) -> GameResponse:
    """Remember the name currently picked in the name selector."""
    daily = await _open_game(session, player_id, cards, now)
    daily.game.select_name(request.name)
    await save_player_store(session, player_id, daily.store)
    return _game_response(player_id, daily, cards)


@router.get("/{player_id}/results", response_model=ResultsResponse)
async def get_results(
    player_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    cards: Annotated[tuple[Card, ...], Depends(get_cards)],
    now: Annotated[datetime, Depends(get_now)],
) -> ResultsResponse:
    """
    Shareable results of today's game.

    Only available once the game is over.
    """
    daily = await _open_game(session, player_id, cards, now)
    game = daily.game
    if not game.is_over:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Today's game is still in progress",
        )

    results = game.state.results
    return ResultsResponse(
        player_id=player_id,
        date_key=daily.date_key,
        has_won=game.has_won,
        card_name=game.card.name,
        results=list(results),
        row=result_row(results, game.has_won),
        share_text=share_text(results, game.has_won, daily.date_key),
        card_url=card_info_url(game.card.name),
    )
