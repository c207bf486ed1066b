"""
SQLAlchemy ORM models for persistent storage.

The catalog is stored as one row per card. Rows carry the card's stable id
and its position in display order; the whole table is rewritten on every
save.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class CardDB(Base):
    """A card record in the stored catalog."""

    __tablename__ = "cards"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    position: Mapped[int] = mapped_column(Integer, index=True)

    name: Mapped[str] = mapped_column(String(255), default="")
    element: Mapped[str] = mapped_column(String(64), default="")
    hair_color: Mapped[str] = mapped_column(String(128), default="")
    type: Mapped[str] = mapped_column(String(32), default="")

    # Stats are free text, parsed on demand
    hp: Mapped[str] = mapped_column(String(32), default="")
    atk: Mapped[str] = mapped_column(String(32), default="")
    def_: Mapped[str] = mapped_column("def", String(32), default="")
    spd: Mapped[str] = mapped_column(String(32), default="")

    talents: Mapped[str] = mapped_column(Text, default="")
    talent_type: Mapped[str] = mapped_column(String(32), default="")
    notes: Mapped[str] = mapped_column(Text, default="")

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<CardDB(id={self.id}, name={self.name})>"
