"""Shareable result summaries."""

import re
from collections.abc import Sequence

from sorcerify.config import CARD_INFO_URL, SHARE_URL
from sorcerify.models.game import GuessResult

CORRECT_SQUARE = "\U0001f7e9"
INCORRECT_SQUARE = "\U0001f7e5"
WIN_MARK = "✅"
LOSS_MARK = "❌"

_APOSTROPHE_RE = re.compile(r"[’']")
_WHITESPACE_RE = re.compile(r"\s+")


def result_emoji(results: Sequence[GuessResult], index: int, has_won: bool) -> str:
    """The final attempt shows the game outcome; earlier ones show hit or miss."""
    if index == len(results) - 1:
        return WIN_MARK if has_won else LOSS_MARK
    return CORRECT_SQUARE if results[index] == "correct" else INCORRECT_SQUARE


def result_row(results: Sequence[GuessResult], has_won: bool) -> str:
    return "".join(result_emoji(results, i, has_won) for i in range(len(results)))


def share_text(results: Sequence[GuessResult], has_won: bool, persist_key: str | None) -> str:
    """
    Text copied by the share button.

    Example:
        Sorcerify 2024-03-09
        🟩🟥🟩✅
        https://sorcerify.com
    """
    header = f"Sorcerify {persist_key}" if persist_key else "Sorcerify"
    return f"{header}\n{result_row(results, has_won)}\n{SHARE_URL}"


def card_info_url(card_name: str) -> str:
    """Link to the card's page on curiosa.io."""
    slug = _WHITESPACE_RE.sub("_", _APOSTROPHE_RE.sub("", card_name.lower()))
    return f"{CARD_INFO_URL}/{slug}"
