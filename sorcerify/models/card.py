"""
Card records as served by the card data source.

Cards are validated once when loaded and are immutable afterwards.
JSON keys are camelCase; attributes are snake_case.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Rarity = Literal["Ordinary", "Exceptional", "Elite", "Unique", "Legendary"]
CardType = Literal["Avatar", "Minion", "Magic", "Aura", "Artifact", "Relic", "Site", "Spell"]
Finish = Literal["Standard", "Foil", "Rainbow"]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Thresholds(_Frozen):
    """Elemental threshold counts printed on a card."""

    air: int = Field(default=0, ge=0)
    earth: int = Field(default=0, ge=0)
    fire: int = Field(default=0, ge=0)
    water: int = Field(default=0, ge=0)

    def count(self, element: str) -> int:
        """Threshold count for an element name, 0 for unknown names."""
        if element not in type(self).model_fields:
            return 0
        return int(getattr(self, element))


class Guardian(_Frozen):
    """
    Gameplay metadata block.

    Attributes:
        rarity: Print rarity
        type: Card type; Avatars show life instead of cost
        rules_text: Rules text with inline codes such as (F), (2) and circled digits
        cost: Mana cost
        attack: Attack power, None for cards without one
        defence: Defence power, None for cards without one
        life: Life total, only set for Avatars
        thresholds: Element threshold counts
    """

    rarity: Rarity
    type: CardType
    rules_text: str = Field(alias="rulesText")
    cost: int | None = None
    attack: int | None = None
    defence: int | None = None
    life: int | None = None
    thresholds: Thresholds = Field(default_factory=Thresholds)


class Variant(_Frozen):
    """A single printing variant inside a set."""

    slug: str
    finish: Finish
    product: str
    artist: str
    flavor_text: str = Field(alias="flavorText")
    type_text: str = Field(alias="typeText")


class SetEntry(_Frozen):
    """A print run of a card."""

    name: str
    released_at: str = Field(alias="releasedAt")
    metadata: Guardian
    variants: tuple[Variant, ...] = ()


class Card(_Frozen):
    """
    A card record.

    Attributes:
        name: Card name, the answer of a game
        guardian: Gameplay metadata
        elements: Element names (e.g., "Fire")
        sub_types: Subtypes (e.g., "Dragon")
        sets: Print runs, oldest first
    """

    name: str
    guardian: Guardian
    elements: str = ""
    sub_types: str = Field(default="", alias="subTypes")
    sets: tuple[SetEntry, ...] = ()

    @property
    def type_text(self) -> str:
        """Type line of the first variant of the first set, empty if absent."""
        if not self.sets or not self.sets[0].variants:
            return ""
        return self.sets[0].variants[0].type_text
