"""
SQLAlchemy ORM models for persistent storage.

Each player gets a small key-value namespace, the server-side stand-in for
a browser's local storage.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class PlayerValueDB(Base):
    """
    One stored value for one player.

    Keys follow the client storage names, e.g. "sorcerify:progress".
    """

    __tablename__ = "player_values"
    __table_args__ = (UniqueConstraint("player_id", "key", name="uq_player_key"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    player_id: Mapped[str] = mapped_column(String(255), index=True)
    key: Mapped[str] = mapped_column(String(255))
    value: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<PlayerValueDB(player={self.player_id}, key={self.key})>"
