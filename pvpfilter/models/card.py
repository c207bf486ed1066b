import re
import uuid
from dataclasses import dataclass
from typing import Any

# Wire (JSON) field name -> Card attribute name
WIRE_FIELDS: dict[str, str] = {
    "name": "name",
    "element": "element",
    "hairColor": "hair_color",
    "type": "type",
    "hp": "hp",
    "atk": "atk",
    "def": "def_",
    "spd": "spd",
    "talents": "talents",
    "talentType": "talent_type",
    "notes": "notes",
}

STAT_FIELDS: tuple[str, ...] = ("hp", "atk", "def", "spd")

HUMAN = "Human"
NON_HUMAN = "Non-Human"

# Leading integer, parseInt-style: "85", " 85", "+85", "85abc"
_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


def parse_stat(value: object) -> int | None:
    """
    Parse a stat stored as text.

    Reads an optional sign and the leading run of ASCII digits (0-9),
    ignoring anything after them. Returns None when no digits lead the value.
    """
    if value is None:
        return None
    match = _LEADING_INT.match(str(value))
    if match is None:
        return None
    return int(match.group(1))


@dataclass(frozen=True, slots=True)
class Card:
    """
    A catalog record.

    Attributes:
        name: Display name
        element: Elemental category (Dark, Light, Neutral, Fire, ...)
        hair_color: Free text, matched by substring in filters
        type: "Human" or "Non-Human"
        hp, atk, def_, spd: Stats stored as text, parsed on demand
        talents: Free text talent list
        talent_type: "Passive", "Active" or empty
        notes: Free text
    """

    name: str = ""
    element: str = ""
    hair_color: str = ""
    type: str = ""
    hp: str = ""
    atk: str = ""
    def_: str = ""
    spd: str = ""
    talents: str = ""
    talent_type: str = ""
    notes: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Card":
        """Build a card from a wire-format dict. Missing fields become empty strings."""
        values: dict[str, str] = {}
        for wire_name, attr in WIRE_FIELDS.items():
            raw = data.get(wire_name)
            values[attr] = "" if raw is None else str(raw)
        return cls(**values)

    def to_dict(self) -> dict[str, str]:
        """Wire-format dict with the exact JSON field names."""
        return {wire_name: getattr(self, attr) for wire_name, attr in WIRE_FIELDS.items()}

    def value(self, column: str) -> str:
        """Get a field by its wire name."""
        return getattr(self, WIRE_FIELDS[column])

    def stats(self) -> list[int | None]:
        """Parsed hp, atk, def, spd (None where unparsable)."""
        return [parse_stat(self.value(stat)) for stat in STAT_FIELDS]


def _new_card_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """A card paired with the stable id that edit and delete target."""

    id: str
    card: Card

    @classmethod
    def new(cls, card: Card) -> "CatalogEntry":
        """Wrap a card with a freshly generated id."""
        return cls(id=_new_card_id(), card=card)


def entries_from_cards(cards: list[Card]) -> list[CatalogEntry]:
    """Assign fresh ids to a list of cards, keeping order."""
    return [CatalogEntry.new(card) for card in cards]


