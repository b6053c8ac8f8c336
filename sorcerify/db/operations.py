"""
Database operations for player key-value storage.
"""

from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from sorcerify.models.db import PlayerValueDB
from sorcerify.services.progress_store import MemoryStore

_UPSERT_DIALECTS: dict[str, Any] = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


async def get_player_values(session: AsyncSession, player_id: str) -> dict[str, str]:
    """All stored values of a player. Empty dict for unknown players."""
    result = await session.execute(
        select(PlayerValueDB.key, PlayerValueDB.value).where(PlayerValueDB.player_id == player_id)
    )
    return {key: value for key, value in result.all()}


async def set_player_values(session: AsyncSession, player_id: str, values: dict[str, str]) -> int:
    """
    Insert or update values for a player.

    Uses a single INSERT ... ON CONFLICT DO UPDATE so two requests creating
    the same key never collide on the unique constraint; the later write wins.
    Keys not mentioned are left alone. Returns the number of keys written.
    """
    if not values:
        return 0

    dialect = session.get_bind().dialect.name
    insert = _UPSERT_DIALECTS.get(dialect)
    if insert is None:
        raise NotImplementedError(f"Upsert not supported for database dialect {dialect!r}")

    stmt = insert(PlayerValueDB).values(
        [{"player_id": player_id, "key": key, "value": value} for key, value in values.items()]
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["player_id", "key"],
        set_={"value": stmt.excluded.value, "updated_at": func.now()},
    )
    await session.execute(stmt)
    return len(values)


async def delete_player_values(session: AsyncSession, player_id: str) -> int:
    """Delete everything stored for a player. Returns the number of rows removed."""
    result = await session.execute(delete(PlayerValueDB).where(PlayerValueDB.player_id == player_id))
    # rowcount is available on DELETE results; type stubs incomplete for async
    return int(result.rowcount)  # type: ignore[attr-defined]


async def load_player_store(session: AsyncSession, player_id: str) -> MemoryStore:
    """A MemoryStore seeded with the player's stored values."""
    return MemoryStore(await get_player_values(session, player_id))


async def save_player_store(session: AsyncSession, player_id: str, store: MemoryStore) -> int:
    """Write back the values changed in a store."""
    return await set_player_values(session, player_id, store.changes())
