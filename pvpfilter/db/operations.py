"""
Database CRUD operations.

The catalog is read and written as a whole: load returns every card in
display order, replace deletes all rows and inserts the new set.
"""

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pvpfilter.models.card import Card, CatalogEntry
from pvpfilter.models.db import CardDB


def entry_to_row(entry: CatalogEntry, position: int) -> CardDB:
    """Convert a catalog entry to a database row."""
    card = entry.card
    return CardDB(
        id=entry.id,
        position=position,
        name=card.name,
        element=card.element,
        hair_color=card.hair_color,
        type=card.type,
        hp=card.hp,
        atk=card.atk,
        def_=card.def_,
        spd=card.spd,
        talents=card.talents,
        talent_type=card.talent_type,
        notes=card.notes,
    )


def row_to_entry(row: CardDB) -> CatalogEntry:
    """Convert a database row to a catalog entry."""
    return CatalogEntry(
        id=row.id,
        card=Card(
            name=row.name,
            element=row.element,
            hair_color=row.hair_color,
            type=row.type,
            hp=row.hp,
            atk=row.atk,
            def_=row.def_,
            spd=row.spd,
            talents=row.talents,
            talent_type=row.talent_type,
            notes=row.notes,
        ),
    )


async def load_cards(session: AsyncSession) -> list[CatalogEntry]:
    """Get every stored card in display order."""
    result = await session.execute(select(CardDB).order_by(CardDB.position))
    return [row_to_entry(row) for row in result.scalars().all()]


async def count_cards(session: AsyncSession) -> int:
    """Number of stored cards."""
    result = await session.execute(select(func.count()).select_from(CardDB))
    return int(result.scalar_one())


async def replace_all_cards(session: AsyncSession, entries: list[CatalogEntry]) -> int:
    """
    Replace the stored catalog with the given entries.

    Deletes every existing row, then inserts the new set with positions
    matching list order. Returns the number of cards written.
    """
    await session.execute(delete(CardDB))
    session.add_all(entry_to_row(entry, position) for position, entry in enumerate(entries))
    await session.flush()
    return len(entries)
