from typing import Any

import pytest

from sorcerify.models.card import Card


def card_record(
    name: str = "Fire Drake",
    *,
    card_type: str = "Minion",
    rules_text: str = "Breathes (F)(1) and roars ①",
    cost: int | None = 3,
    attack: int | None = 4,
    defence: int | None = 3,
    life: int | None = None,
    thresholds: dict[str, int] | None = None,
    type_text: str = "Minion — Dragon",
) -> dict[str, Any]:
    """Raw card JSON as served by the card data source."""
    guardian = {
        "rarity": "Elite",
        "type": card_type,
        "rulesText": rules_text,
        "cost": cost,
        "attack": attack,
        "defence": defence,
        "life": life,
        "thresholds": thresholds or {"air": 0, "earth": 0, "fire": 1, "water": 0},
    }
    return {
        "name": name,
        "guardian": guardian,
        "elements": "Fire",
        "subTypes": "Dragon",
        "sets": [
            {
                "name": "Alpha",
                "releasedAt": "2023-01-01T00:00:00Z",
                "metadata": guardian,
                "variants": [
                    {
                        "slug": "alpha-standard",
                        "finish": "Standard",
                        "product": "Booster",
                        "artist": "Artist",
                        "flavorText": "Flavor",
                        "typeText": type_text,
                    }
                ],
            }
        ],
    }


def make_card(name: str = "Fire Drake", **overrides: Any) -> Card:
    return Card.model_validate(card_record(name, **overrides))


@pytest.fixture
def fire_drake() -> Card:
    """The Fire Drake demo card."""
    return make_card()


@pytest.fixture
def avatar() -> Card:
    """An Avatar: shows life instead of cost and has no stats."""
    return make_card(
        "Sorcerer",
        card_type="Avatar",
        rules_text="Tap → Play or draw a site.",
        cost=None,
        attack=0,
        defence=None,
        life=20,
        thresholds={"air": 0, "earth": 0, "fire": 0, "water": 0},
        type_text="Avatar",
    )


@pytest.fixture
def sample_cards(fire_drake: Card, avatar: Card) -> tuple[Card, ...]:
    return (
        fire_drake,
        avatar,
        make_card(
            "Alpha Wolf",
            rules_text="Pack tactics",
            cost=1,
            attack=1,
            defence=1,
            thresholds={"air": 0, "earth": 1, "fire": 0, "water": 0},
            type_text="Minion — Beast",
        ),
    )


@pytest.fixture
def card_factory():
    """Build a validated card, overriding any field of the demo card."""
    return make_card
