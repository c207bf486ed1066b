"""
Card store: the persistence collaborator.

The catalog service only needs two operations: load everything at startup
and overwrite everything after a change. Connectivity problems surface as
StoreUnavailableError; nothing is retried.
"""

import logging
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pvpfilter.db.operations import load_cards, replace_all_cards
from pvpfilter.models.card import CatalogEntry
from pvpfilter.models.failure import StoreUnavailableError

logger = logging.getLogger(__name__)


class CardStore(Protocol):
    """Persistence interface used by the catalog service."""

    async def load(self) -> list[CatalogEntry] | None:
        """All stored cards in order, or None when the store is empty."""
        ...

    async def save_all(self, entries: list[CatalogEntry]) -> None:
        """Overwrite the stored catalog with `entries`."""
        ...


class SqlCardStore:
    """CardStore backed by the `cards` table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def load(self) -> list[CatalogEntry] | None:
        try:
            async with self._session_factory() as session:
                entries = await load_cards(session)
        except (SQLAlchemyError, OSError) as e:
            logger.error("Failed to load cards: %s", e)
            raise StoreUnavailableError("load", type(e).__name__) from e

        logger.info("Loaded %d cards from store", len(entries))
        return entries or None

    async def save_all(self, entries: list[CatalogEntry]) -> None:
        try:
            async with self._session_factory() as session, session.begin():
                await replace_all_cards(session, entries)
        except (SQLAlchemyError, OSError) as e:
            logger.error("Failed to save %d cards: %s", len(entries), e)
            raise StoreUnavailableError("save", type(e).__name__) from e

        logger.info("Saved %d cards to store", len(entries))
