"""
Default card set.

The catalog can be reset to a fixed seed set shipped with the package. The
file is read once and cached; callers get fresh lists.
"""

from functools import lru_cache
from pathlib import Path

from pvpfilter.config import settings
from pvpfilter.models.card import Card
from pvpfilter.parsers.card_json import parse_cards_json


class DefaultCardsError(Exception):
    """Raised when the default card set cannot be loaded."""

    pass


@lru_cache(maxsize=4)
def _load_default_cards(path: Path) -> tuple[Card, ...]:
    if not path.exists():
        raise DefaultCardsError(f"Default cards file not found: {path}")

    cards = parse_cards_json(path.read_text(encoding="utf-8"))
    if not cards:
        raise DefaultCardsError(f"Default cards file is empty: {path}")
    return tuple(cards)


def get_default_cards(path: Path | None = None) -> list[Card]:
    """Load the default card set (a new list on every call)."""
    return list(_load_default_cards(path or settings.default_cards_path))
