"""
PvP Filter services.

Catalog state, persistence and seed data.
"""

from pvpfilter.services.card_store import CardStore, SqlCardStore
from pvpfilter.services.catalog import CatalogService, get_catalog
from pvpfilter.services.default_cards import DefaultCardsError, get_default_cards

__all__ = [
    "CardStore",
    "CatalogService",
    "DefaultCardsError",
    "SqlCardStore",
    "get_catalog",
    "get_default_cards",
]
