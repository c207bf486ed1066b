"""
JSON interchange for the card catalog.

The file is an array of card objects using the exact wire field names.
Import replaces the whole catalog, so a payload is validated completely
before any card is returned: no partial imports.
"""

import json
from typing import Any

from pvpfilter.models.card import Card
from pvpfilter.models.failure import MalformedImportError


def cards_from_payload(payload: Any) -> list[Card]:
    """
    Convert decoded JSON into cards.

    Raises:
        MalformedImportError: payload is not an array of objects
    """
    if not isinstance(payload, list):
        raise MalformedImportError(f"expected a JSON array, got {type(payload).__name__}")

    cards: list[Card] = []
    for position, item in enumerate(payload):
        if not isinstance(item, dict):
            raise MalformedImportError(f"item {position} is not an object")
        cards.append(Card.from_dict(item))
    return cards


def parse_cards_json(text: str) -> list[Card]:
    """Parse exported JSON text into cards."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedImportError(f"invalid JSON ({e.msg} at line {e.lineno})") from e
    return cards_from_payload(payload)


def export_cards_json(cards: list[Card]) -> str:
    """Serialize cards as a pretty-printed JSON array."""
    return json.dumps([card.to_dict() for card in cards], indent=2, ensure_ascii=False)
