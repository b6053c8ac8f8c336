"""
Sorcerify services.

The guessing engine: tokens, reveal checks, masking, daily selection and
the game session, plus card loading, progress storage and streaks.
"""

from sorcerify.services.card_database import (
    CardDataError,
    card_names,
    fetch_cards,
    get_card_database,
    load_card_database,
    parse_cards,
)
from sorcerify.services.daily import (
    build_permutation,
    day_number,
    format_utc_date_key,
    select_daily_index,
)
from sorcerify.services.game_session import GameSession
from sorcerify.services.masking import (
    MaskedCard,
    NumeralBadge,
    TextSegment,
    ThresholdIcon,
    mask_text,
    render_card,
    render_rules_text,
)
from sorcerify.services.practice import PracticeRun, pick_practice_index
from sorcerify.services.progress_store import (
    KeyValueStore,
    MemoryStore,
    StoreError,
    read_snapshot,
    write_snapshot,
)
from sorcerify.services.results import card_info_url, result_row, share_text
from sorcerify.services.reveal import reveals, searchable_texts, stat_display
from sorcerify.services.streak import StreakEvents, StreakTracker, StreakUpdate
from sorcerify.services.tokens import THRESHOLD_TOKENS, is_maskable, normalize

__all__ = [
    "CardDataError",
    "GameSession",
    "KeyValueStore",
    "MaskedCard",
    "MemoryStore",
    "NumeralBadge",
    "PracticeRun",
    "StoreError",
    "StreakEvents",
    "StreakTracker",
    "StreakUpdate",
    "THRESHOLD_TOKENS",
    "TextSegment",
    "ThresholdIcon",
    "build_permutation",
    "card_info_url",
    "card_names",
    "day_number",
    "fetch_cards",
    "format_utc_date_key",
    "get_card_database",
    "is_maskable",
    "load_card_database",
    "mask_text",
    "normalize",
    "parse_cards",
    "pick_practice_index",
    "read_snapshot",
    "render_card",
    "render_rules_text",
    "result_row",
    "reveals",
    "searchable_texts",
    "select_daily_index",
    "share_text",
    "stat_display",
    "write_snapshot",
]
