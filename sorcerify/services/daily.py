"""
Daily card selection.

Maps a UTC calendar day to a card index without any server coordination.
The card set is shuffled once with a seeded generator; day N shows the
card at position N mod card_count of that shuffle. Every card therefore
appears exactly once per card_count-day cycle, and every client computes
the same card for the same UTC day.

The shuffle depends only on the number of cards, so it stays stable as
long as the card set size does not change.
"""

from datetime import UTC, date, datetime, timedelta
from functools import lru_cache

EPOCH = date(1970, 1, 1)

# Polynomial rolling hash: large prime below 2**53 and a small base
HASH_MODULUS = 9_007_199_254_740_881
HASH_BASE = 131

# Numerical Recipes LCG constants, modulus 2**32
LCG_MULTIPLIER = 1_664_525
LCG_INCREMENT = 1_013_904_223
LCG_MODULUS = 2**32

SEED_PREFIX = "sorcerify:daily"


def _utc_date(moment: datetime | date) -> date:
    """Calendar date in UTC. Naive datetimes are taken to be UTC already."""
    if isinstance(moment, datetime):
        if moment.tzinfo is not None:
            moment = moment.astimezone(UTC)
        return moment.date()
    return moment


def format_utc_date_key(moment: datetime | date) -> str:
    """Persist key for a daily game, e.g. "2024-03-09"."""
    return _utc_date(moment).isoformat()


def previous_date_key(date_key: str) -> str:
    """Date key of the day before."""
    return (date.fromisoformat(date_key) - timedelta(days=1)).isoformat()


def day_number(moment: datetime | date) -> int:
    """Whole UTC days elapsed since 1970-01-01."""
    return (_utc_date(moment) - EPOCH).days


def hash_string_to_number(text: str) -> int:
    """Deterministic, non-negative hash of a string."""
    value = 0
    for char in text:
        value = (value * HASH_BASE + ord(char)) % HASH_MODULUS
    return value


class LinearCongruentialGenerator:
    """
    Minimal seeded PRNG.

    Only used to drive the daily shuffle; the exact constants matter for
    reproducing the same sequence across runs.
    """

    def __init__(self, seed: int) -> None:
        self.state = seed % LCG_MODULUS

    def next_int(self) -> int:
        self.state = (LCG_MULTIPLIER * self.state + LCG_INCREMENT) % LCG_MODULUS
        return self.state

    def next_float(self) -> float:
        """Uniform float in [0, 1)."""
        return self.next_int() / LCG_MODULUS

    def next_below(self, bound: int) -> int:
        """Integer in [0, bound)."""
        return int(self.next_float() * bound)


@lru_cache(maxsize=8)
def build_permutation(card_count: int) -> tuple[int, ...]:
    """
    Seeded Fisher-Yates shuffle of range(card_count).

    Cached per card count.
    """
    order = list(range(max(0, card_count)))
    rng = LinearCongruentialGenerator(hash_string_to_number(f"{SEED_PREFIX}:{card_count}"))
    for i in range(len(order) - 1, 0, -1):
        j = rng.next_below(i + 1)
        order[i], order[j] = order[j], order[i]
    return tuple(order)


def select_daily_index(card_count: int, moment: datetime | date) -> int:
    """
    Card index shown on the given UTC day.

    Returns 0 for an empty card set.
    """
    if card_count <= 0:
        return 0
    permutation = build_permutation(card_count)
    return permutation[day_number(moment) % card_count]


def select_index_for_day(card_count: int, day: int) -> int:
    """Card index for a raw day number."""
    return select_daily_index(card_count, EPOCH + timedelta(days=day))
