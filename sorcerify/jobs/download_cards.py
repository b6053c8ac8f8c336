"""
Download or verify the card data set.

Run this job before starting the service so the daily game has cards:

    sorcerify-download-cards
    sorcerify-download-cards --check --output data/cards.json

Exits with status 1 when the data cannot be fetched or fails validation.
"""

import argparse
import asyncio
import logging
import sys
from collections import Counter
from pathlib import Path

from sorcerify.models.card import Card
from sorcerify.services.card_database import (
    CardDataError,
    card_names,
    download_card_database,
    load_card_database,
)

logger = logging.getLogger(__name__)


def summarize_cards(cards: tuple[Card, ...]) -> dict[str, int]:
    """Card count per card type, most common first."""
    return dict(Counter(card.guardian.type for card in cards).most_common())


async def run_download(url: str | None = None, output: Path | None = None) -> tuple[Card, ...]:
    """Download the card data set and read the written file back."""
    logger.info("Downloading card data from %s", url or "default source")

    path = await download_card_database(url, output)
    cards = load_card_database(path)

    duplicates = len(cards) - len(card_names(cards))
    if duplicates:
        logger.warning("%d cards share a name with another card", duplicates)
    logger.info("Downloaded %d cards to %s", len(cards), path)
    return cards


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit status."""
    parser = argparse.ArgumentParser(description="Download Sorcery card data")
    parser.add_argument(
        "--url",
        default=None,
        help="Card source URL (default: CARDS_URL setting)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Card data file (default: CARDS_PATH setting or the packaged data file)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Validate the existing file instead of downloading",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        if args.check:
            cards = load_card_database(args.output)
        else:
            cards = asyncio.run(run_download(args.url, args.output))
    except (CardDataError, FileNotFoundError) as e:
        logger.error("Card data unavailable: %s", e)
        return 1

    print(f"{len(cards)} cards:")
    for card_type, count in summarize_cards(cards).items():
        print(f"  {card_type}: {count}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
