"""
Shared API dependencies.

Card data and the current time are injected so tests can override them.
"""

import logging
from datetime import UTC, datetime

from fastapi import HTTPException, status

from sorcerify.models.card import Card
from sorcerify.services.card_database import CardDataError, get_card_database

logger = logging.getLogger(__name__)


def get_cards() -> tuple[Card, ...]:
    """
    Loaded card data.

    Card data failures are fatal for the request and surface as 503.
    """
    try:
        cards = get_card_database()
    except (FileNotFoundError, CardDataError) as e:
        logger.error("Card data unavailable: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Card data is unavailable. Please try again later.",
        ) from e

    if not cards:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="No cards are available.",
        )
    return cards


def get_now() -> datetime:
    return datetime.now(UTC)
