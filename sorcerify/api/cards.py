"""
Card data endpoint.

Serves the validated card set in its original camelCase shape.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends

from sorcerify.api.deps import get_cards
from sorcerify.models.card import Card
from sorcerify.services.card_database import dump_cards

router = APIRouter(tags=["cards"])


@router.get("/cards")
async def list_cards(
    cards: Annotated[tuple[Card, ...], Depends(get_cards)],
) -> list[dict[str, Any]]:
    """Return every card record."""
    return dump_cards(cards)
