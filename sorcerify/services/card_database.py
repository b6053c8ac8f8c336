"""
Card database service.

Loads, validates and caches the card data set. Records are validated once
at the boundary; anything malformed fails the whole load.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from sorcerify.config import settings
from sorcerify.models.card import Card

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent.parent / "data"

_CARDS_ADAPTER = TypeAdapter(tuple[Card, ...])


class CardDataError(Exception):
    """Raised when card data cannot be fetched, parsed or validated."""

    pass


def default_cards_path() -> Path:
    return settings.cards_path or DATA_DIR / "cards.json"


def parse_cards(payload: Any) -> tuple[Card, ...]:
    """
    Validate raw JSON card records.

    Raises:
        CardDataError: If any record does not match the card schema
    """
    try:
        return _CARDS_ADAPTER.validate_python(payload)
    except ValidationError as e:
        raise CardDataError(f"Card data failed validation: {e.error_count()} error(s)") from e


async def fetch_cards(url: str | None = None) -> tuple[Card, ...]:
    """
    Fetch and validate cards from the remote source.

    Raises:
        CardDataError: On HTTP errors, invalid JSON or invalid records
    """
    url = url or settings.cards_url
    try:
        async with httpx.AsyncClient(timeout=30.0) as client:
            response = await client.get(url)
            response.raise_for_status()
            payload = response.json()
    except httpx.HTTPStatusError as e:
        raise CardDataError(f"Failed to fetch cards: HTTP {e.response.status_code}") from e
    except httpx.RequestError as e:
        raise CardDataError(f"Failed to fetch cards: {e}") from e
    except ValueError as e:
        raise CardDataError("Card source returned invalid JSON") from e

    return parse_cards(payload)


async def download_card_database(url: str | None = None, output_path: Path | None = None) -> Path:
    """
    Download the card data set to a local file.

    The payload is validated before anything is written, so a bad download
    never replaces a good file.

    Returns:
        Path to the written file.

    Raises:
        CardDataError: If the download or validation fails
    """
    if output_path is None:
        output_path = default_cards_path()

    cards = await fetch_cards(url)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(dump_cards(cards), f, ensure_ascii=False)

    logger.info("Saved %d cards to %s", len(cards), output_path)
    return output_path


def load_card_database(path: Path | None = None) -> tuple[Card, ...]:
    """
    Load and validate cards from a local JSON file.

    Raises:
        FileNotFoundError: If the data file doesn't exist
        CardDataError: If the file is corrupted or fails validation
    """
    if path is None:
        path = default_cards_path()

    if not path.exists():
        raise FileNotFoundError(
            f"Card data not found at {path}. "
            "Run `python -m sorcerify.jobs.download_cards` first."
        )

    with open(path, encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as e:
            raise CardDataError(f"Card data file {path} is corrupted") from e

    return parse_cards(payload)


@lru_cache(maxsize=1)
def get_card_database() -> tuple[Card, ...]:
    """
    Get cached card data.

    Loaded once per process.
    """
    cards = load_card_database()
    logger.info("Loaded %d cards", len(cards))
    return cards


def dump_cards(cards: tuple[Card, ...]) -> list[dict[str, Any]]:
    """Cards as camelCase JSON records."""
    return [card.model_dump(mode="json", by_alias=True) for card in cards]


def card_names(cards: tuple[Card, ...]) -> list[str]:
    """Unique card names in data order, the options for name guesses."""
    return list(dict.fromkeys(card.name for card in cards))
