"""
Reveal predicate.

Decides whether a guessed token shows up anywhere searchable on a card:
thresholds, circled-digit markers in the rules text, or any character of
the displayed text fields.
"""

import re

from sorcerify.models.card import Card
from sorcerify.services.tokens import THRESHOLD_TOKENS, normalize

# Unicode ① is U+2460; the enclosed numbers run sequentially up to ⑳
CIRCLED_DIGIT_START = 0x2460
MAX_CIRCLED_DIGIT = 20

THRESHOLD_CODES: dict[str, str] = {
    "air": "A",
    "earth": "E",
    "fire": "F",
    "water": "W",
}

_SINGLE_DIGIT_RE = re.compile(r"[0-9]")
_THRESHOLD_CODE_RES: dict[str, re.Pattern[str]] = {
    token: re.compile(rf"\({code}\)") for token, code in THRESHOLD_CODES.items()
}


def circled_digit(number: int) -> str | None:
    """The circled glyph for 1-20, None outside that range."""
    if number < 1 or number > MAX_CIRCLED_DIGIT:
        return None
    return chr(CIRCLED_DIGIT_START + number - 1)


def has_circled_digit(text: str, number: int) -> bool:
    glyph = circled_digit(number)
    return glyph is not None and glyph in text


def stat_display(attack: int | None, defence: int | None) -> str:
    """
    Attack/defence as printed on the card.

    Examples:
        (None, None) -> ""
        (3, 3) -> "3"
        (4, 3) -> "4/3"
        (2, None) -> "2/-"
    """
    if attack is None and defence is None:
        return ""
    if attack == defence:
        return str(attack)
    left = "-" if attack is None else str(attack)
    right = "-" if defence is None else str(defence)
    return f"{left}/{right}"


def left_top_text(card: Card) -> str:
    """Life for Avatars, cost for everything else."""
    guardian = card.guardian
    value = guardian.life if guardian.type == "Avatar" else guardian.cost
    return "" if value is None else str(value)


def searchable_texts(card: Card) -> list[str]:
    """Text fields scanned for literal hits, in display order."""
    guardian = card.guardian
    return [
        left_top_text(card),
        stat_display(guardian.attack, guardian.defence),
        card.name,
        card.type_text,
        guardian.rules_text,
    ]


def matches_threshold(card: Card, token: str) -> bool:
    if token not in THRESHOLD_TOKENS:
        return False
    if card.guardian.thresholds.count(token) > 0:
        return True
    return bool(_THRESHOLD_CODE_RES[token].search(card.guardian.rules_text))


def matches_circled_digit(card: Card, token: str) -> bool:
    if not _SINGLE_DIGIT_RE.fullmatch(token):
        return False
    return has_circled_digit(card.guardian.rules_text, int(token))


def text_contains_token(token: str, texts: list[str]) -> bool:
    return any(normalize(char) == token for text in texts for char in text)


def reveals(card: Card, token: str) -> bool:
    """
    True if the normalized token reveals anything on the card.

    Thresholds are checked first, then circled digits in the rules text,
    then every character of the searchable text fields.
    """
    if matches_threshold(card, token):
        return True
    if matches_circled_digit(card, token):
        return True
    return text_contains_token(token, searchable_texts(card))
