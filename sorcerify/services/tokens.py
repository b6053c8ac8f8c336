"""
Guess tokens.

A token is what a player can guess: a lowercase letter, a digit, or one of
the four threshold names.
"""

import string

THRESHOLD_TOKENS: tuple[str, ...] = ("air", "earth", "fire", "water")

KEYBOARD_LETTERS: tuple[str, ...] = tuple(string.ascii_uppercase)
KEYBOARD_DIGITS: tuple[str, ...] = tuple(string.digits)
KEYBOARD_TOKENS: tuple[str, ...] = THRESHOLD_TOKENS

_ASCII_LETTERS = frozenset(string.ascii_letters)
_ASCII_ALNUM = frozenset(string.ascii_letters + string.digits)
_GUESSABLE = frozenset(string.ascii_lowercase + string.digits) | frozenset(THRESHOLD_TOKENS)


def normalize(token: str) -> str:
    """
    Map a raw character or token to its canonical guess key.

    Letters are lowercased. Digits, threshold names and anything else
    are returned unchanged.
    """
    if token in _ASCII_LETTERS:
        return token.lower()
    return token


def is_maskable(char: str) -> bool:
    """True for characters that hide behind a placeholder until guessed."""
    return char in _ASCII_ALNUM or char in THRESHOLD_TOKENS


def is_threshold(token: str) -> bool:
    return token in THRESHOLD_TOKENS


def is_guessable(token: str) -> bool:
    """True if the token normalizes to a key on the game keyboard."""
    return normalize(token) in _GUESSABLE


def keyboard() -> tuple[str, ...]:
    """All guess keys in keyboard order, normalized."""
    return tuple(normalize(key) for key in KEYBOARD_LETTERS + KEYBOARD_DIGITS + KEYBOARD_TOKENS)
