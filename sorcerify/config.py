from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "Sorcerify"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./sorcerify.db"

    # Remote source used by the download job
    cards_url: str = "https://api.sorcerytcg.com/api/cards"

    # Local card data file; None means data/cards.json inside the package
    cards_path: Path | None = None

    max_attempts: int = 7


settings = Settings()


# =============================================================================
# KEY-VALUE STORE KEYS
# =============================================================================

# Every game's progress lives in one JSON map under this key, keyed by persist key
PROGRESS_STORAGE_KEY = "sorcerify:progress"

STREAK_STORAGE_KEY = "sorcerify:streak"
LAST_WIN_DATE_STORAGE_KEY = "sorcerify:lastWinDate"

# Name of the event broadcast when the daily streak changes
STREAK_UPDATED_EVENT = "sorcerify:streak-updated"

SHARE_URL = "https://sorcerify.com"
CARD_INFO_URL = "https://curiosa.io/cards"
