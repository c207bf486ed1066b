"""
Catalog service: the in-memory record set and its view state.

Holds the card list loaded at startup, the current FilterState and SortSpec,
and performs CRUD against the card store. There is one logical writer, so no
locking is done.

Persistence rules:
- Every mutation changes the in-memory list first, then saves the FULL set
- A failed save raises StoreUnavailableError and leaves the in-memory edit
  in place (no rollback); the next successful save persists it
- A failed load leaves the catalog empty and marks the store disconnected
"""

import logging
from collections.abc import Callable

from pvpfilter.config import settings
from pvpfilter.db.database import async_session_factory
from pvpfilter.filtering.presets import toggle_preset
from pvpfilter.filtering.view import CatalogView, FilterOptions, build_view, filter_options
from pvpfilter.models.card import Card, CatalogEntry, entries_from_cards
from pvpfilter.models.failure import CardNotFoundError, StoreUnavailableError
from pvpfilter.models.filter_state import FilterState, SortSpec
from pvpfilter.services.card_store import CardStore, SqlCardStore
from pvpfilter.services.default_cards import get_default_cards

logger = logging.getLogger(__name__)


class CatalogService:
    """In-memory card catalog with full-overwrite persistence."""

    def __init__(self, store: CardStore, seed_when_empty: bool = False):
        self._store = store
        self._seed_when_empty = seed_when_empty
        self._entries: list[CatalogEntry] = []
        self.state = FilterState()
        self.sort = SortSpec()
        # None until the first load or save has been attempted
        self.store_connected: bool | None = None

    @property
    def entries(self) -> list[CatalogEntry]:
        """Copy of the full record set in stored order."""
        return list(self._entries)

    @property
    def cards(self) -> list[Card]:
        return [entry.card for entry in self._entries]

    # --- Persistence ---

    async def load(self) -> int:
        """
        Load the catalog from the store.

        An empty store yields an empty catalog, or the default cards when
        seeding is enabled. Returns the number of cards loaded.

        Raises:
            StoreUnavailableError: the store could not be read
        """
        try:
            loaded = await self._store.load()
        except StoreUnavailableError:
            self._entries = []
            self.store_connected = False
            raise

        self.store_connected = True

        if loaded is None:
            logger.info("Card store is empty")
            if self._seed_when_empty:
                await self.reset_to_defaults()
            else:
                self._entries = []
            return len(self._entries)

        self._entries = list(loaded)
        return len(self._entries)

    async def _save(self) -> None:
        try:
            await self._store.save_all(list(self._entries))
        except StoreUnavailableError:
            self.store_connected = False
            raise
        self.store_connected = True

    # --- Record CRUD ---

    def _index_of(self, card_id: str) -> int:
        for index, entry in enumerate(self._entries):
            if entry.id == card_id:
                return index
        raise CardNotFoundError(card_id)

    def get(self, card_id: str) -> CatalogEntry:
        """Get a card by its id."""
        return self._entries[self._index_of(card_id)]

    async def add(self, card: Card) -> CatalogEntry:
        """Append a new card and save."""
        entry = CatalogEntry.new(card)
        self._entries.append(entry)
        logger.info("Added card %s (%s)", entry.id, card.name)
        await self._save()
        return entry

    async def update(self, card_id: str, card: Card) -> CatalogEntry:
        """Replace a card in place, keeping its id and position, and save."""
        index = self._index_of(card_id)
        entry = CatalogEntry(id=card_id, card=card)
        self._entries[index] = entry
        logger.info("Updated card %s (%s)", card_id, card.name)
        await self._save()
        return entry

    async def delete(self, card_id: str) -> CatalogEntry:
        """Remove a card and save."""
        entry = self._entries.pop(self._index_of(card_id))
        logger.info("Deleted card %s (%s)", card_id, entry.card.name)
        await self._save()
        return entry

    async def replace_all(self, cards: list[Card]) -> list[CatalogEntry]:
        """
        Replace the whole catalog (import) and save.

        Cards get fresh ids. Callers validate the payload before calling, so
        a malformed import never reaches this point.
        """
        self._entries = entries_from_cards(cards)
        logger.info("Replaced catalog with %d cards", len(self._entries))
        await self._save()
        return self.entries

    async def reset_to_defaults(self) -> list[CatalogEntry]:
        """Replace the catalog with the shipped default cards."""
        return await self.replace_all(get_default_cards())

    # --- View state ---

    def update_state(self, transition: Callable[[FilterState], FilterState]) -> FilterState:
        """Apply a pure transition to the filter state."""
        self.state = transition(self.state)
        return self.state

    def toggle_preset(self, preset_id: str) -> FilterState:
        return self.update_state(lambda state: toggle_preset(state, preset_id))

    def click_sort(self, column: str) -> SortSpec:
        """Sort by a column, flipping direction when it is already the sort column."""
        self.sort = self.sort.clicked(column)
        return self.sort

    def clear(self) -> None:
        """Reset filters, rounds, search and sort."""
        self.state = FilterState()
        self.sort = SortSpec()

    def view(self) -> CatalogView:
        """Recompute the visible view from the current state."""
        return build_view(self._entries, self.state, self.sort)

    def options(self) -> FilterOptions:
        return filter_options(self._entries)


_catalog: CatalogService | None = None


def get_catalog() -> CatalogService:
    """
    Dependency that provides the process-wide catalog.

    Created on first use around the configured database.
    """
    global _catalog
    if _catalog is None:
        _catalog = CatalogService(
            SqlCardStore(async_session_factory),
            seed_when_empty=settings.seed_defaults_when_empty,
        )
    return _catalog
