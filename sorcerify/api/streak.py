"""
Streak endpoint.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from sorcerify.db import load_player_store
from sorcerify.db.database import get_session
from sorcerify.services.streak import StreakTracker

router = APIRouter(prefix="/streak", tags=["streak"])


class StreakResponse(BaseModel):
    """A player's daily win streak."""

    player_id: str
    streak: int = 0
    last_win_date: str | None = None


@router.get("/{player_id}", response_model=StreakResponse)
async def get_streak(
    player_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> StreakResponse:
    """Current daily streak; 0 for players who never won."""
    tracker = StreakTracker(await load_player_store(session, player_id))
    return StreakResponse(
        player_id=player_id,
        streak=tracker.streak,
        last_win_date=tracker.last_win_date,
    )
