from sorcerify.db.database import get_session, init_db
from sorcerify.db.operations import (
    delete_player_values,
    get_player_values,
    load_player_store,
    save_player_store,
    set_player_values,
)

__all__ = [
    "delete_player_values",
    "get_player_values",
    "get_session",
    "init_db",
    "load_player_store",
    "save_player_store",
    "set_player_values",
]
