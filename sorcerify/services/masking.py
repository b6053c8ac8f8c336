"""
Hangman-style masking of card text.

Maskable characters (ASCII letters and digits) are replaced with a
placeholder until their normalized form has been guessed. Everything else
passes through. Rules text additionally carries inline markup:

    (F) (A) (E) (W)   threshold icons, revealed by guessing the element
    (3)               numeral badge, revealed by guessing "3" exactly

Masking is monotonic: guessing more tokens never hides anything.
"""

import re
from collections.abc import Collection
from dataclasses import dataclass
from typing import Literal

from sorcerify.models.card import Card, Thresholds
from sorcerify.services.reveal import left_top_text, stat_display
from sorcerify.services.tokens import THRESHOLD_TOKENS, is_maskable, normalize

PLACEHOLDER = "_"

CODE_TO_TOKEN: dict[str, str] = {
    "F": "fire",
    "A": "air",
    "E": "earth",
    "W": "water",
}

_INLINE_MARKUP_RE = re.compile(r"\((?:([FAEW])|([0-9]+))\)")


@dataclass(frozen=True)
class TextSegment:
    text: str
    kind: Literal["text"] = "text"


@dataclass(frozen=True)
class ThresholdIcon:
    element: str
    revealed: bool
    kind: Literal["threshold"] = "threshold"


@dataclass(frozen=True)
class NumeralBadge:
    value: str
    revealed: bool
    kind: Literal["numeral"] = "numeral"


Segment = TextSegment | ThresholdIcon | NumeralBadge


@dataclass(frozen=True)
class MaskedCard:
    """
    Display form of a card for a given set of guessed tokens.

    Each field is masked independently with the same guessed set.

    Attributes:
        name: Masked card name
        type_text: Masked type line
        left_top: Masked life (Avatars) or cost
        left_top_kind: "life" or "cost"
        stats: Masked attack/defence display, empty when the card has none
        thresholds: One icon per threshold pip
        rules: Rules text as display segments
        orientation: "landscape" for Sites, "portrait" otherwise
        revealed: True when masking was bypassed
    """

    name: str
    type_text: str
    left_top: str
    left_top_kind: Literal["life", "cost"]
    stats: str
    thresholds: tuple[ThresholdIcon, ...]
    rules: tuple[Segment, ...]
    orientation: Literal["portrait", "landscape"]
    revealed: bool = False


def mask_text(text: str, guessed: Collection[str], reveal_all: bool = False) -> str:
    """Replace un-guessed maskable characters with the placeholder."""
    if reveal_all:
        return text
    return "".join(
        char if not is_maskable(char) or normalize(char) in guessed else PLACEHOLDER
        for char in text
    )


def render_rules_text(
    text: str, guessed: Collection[str], reveal_all: bool = False
) -> list[Segment]:
    """
    Split rules text into masked text, threshold icons and numeral badges.

    Adjacent plain text is emitted as a single segment. Empty text yields
    no segments.
    """
    segments: list[Segment] = []
    cursor = 0

    def push_text(chunk: str) -> None:
        if chunk:
            segments.append(TextSegment(text=mask_text(chunk, guessed, reveal_all)))

    for match in _INLINE_MARKUP_RE.finditer(text):
        push_text(text[cursor : match.start()])
        code, number = match.groups()
        if code:
            element = CODE_TO_TOKEN[code]
            segments.append(
                ThresholdIcon(element=element, revealed=reveal_all or element in guessed)
            )
        else:
            shown = reveal_all or number in guessed
            segments.append(NumeralBadge(value=number if shown else PLACEHOLDER, revealed=shown))
        cursor = match.end()

    push_text(text[cursor:])
    return segments


def render_thresholds(
    thresholds: Thresholds, guessed: Collection[str], reveal_all: bool = False
) -> list[ThresholdIcon]:
    """One icon per threshold pip, in element order."""
    icons: list[ThresholdIcon] = []
    for element in THRESHOLD_TOKENS:
        shown = reveal_all or element in guessed
        icons.extend(
            ThresholdIcon(element=element, revealed=shown)
            for _ in range(thresholds.count(element))
        )
    return icons


def render_card(card: Card, guessed: Collection[str], reveal_all: bool = False) -> MaskedCard:
    """Mask every displayed field of a card."""
    guardian = card.guardian
    return MaskedCard(
        name=mask_text(card.name, guessed, reveal_all),
        type_text=mask_text(card.type_text, guessed, reveal_all),
        left_top=mask_text(left_top_text(card), guessed, reveal_all),
        left_top_kind="life" if guardian.type == "Avatar" else "cost",
        stats=mask_text(stat_display(guardian.attack, guardian.defence), guessed, reveal_all),
        thresholds=tuple(render_thresholds(guardian.thresholds, guessed, reveal_all)),
        rules=tuple(render_rules_text(guardian.rules_text, guessed, reveal_all)),
        orientation="landscape" if guardian.type == "Site" else "portrait",
        revealed=reveal_all,
    )
