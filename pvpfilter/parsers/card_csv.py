"""
CSV interchange for the card catalog.

Header row (column order follows the later schema):
    Name,Element,Talent,HP,ATK,DEF,Speed,Talent Type,Type,Hair,Notes

Every data field is double-quote wrapped, one card per line.
"""

import csv
from io import StringIO

from pvpfilter.models.card import Card
from pvpfilter.models.failure import MalformedImportError

# CSV column -> wire field name
CSV_COLUMNS: dict[str, str] = {
    "Name": "name",
    "Element": "element",
    "Talent": "talents",
    "HP": "hp",
    "ATK": "atk",
    "DEF": "def",
    "Speed": "spd",
    "Talent Type": "talentType",
    "Type": "type",
    "Hair": "hairColor",
    "Notes": "notes",
}

CSV_HEADER = ",".join(CSV_COLUMNS)


def export_cards_csv(cards: list[Card]) -> str:
    """Serialize cards to CSV text with a trailing newline per row."""
    out = StringIO()
    out.write(CSV_HEADER + "\n")

    writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for card in cards:
        writer.writerow(card.value(wire_name) for wire_name in CSV_COLUMNS.values())

    return out.getvalue()


def parse_cards_csv(text: str) -> list[Card]:
    """
    Parse CSV produced by export_cards_csv().

    Columns are matched by header name, so extra columns are ignored.

    Raises:
        MalformedImportError: the header is missing required columns
    """
    reader = csv.DictReader(StringIO(text.lstrip("\ufeff")))

    if not reader.fieldnames:
        raise MalformedImportError("CSV has no header row")

    header = [name.strip() for name in reader.fieldnames]
    missing = [column for column in CSV_COLUMNS if column not in header]
    if missing:
        raise MalformedImportError(f"CSV header missing columns: {', '.join(missing)}")
    reader.fieldnames = header

    # DictReader skips empty lines; a row of empty quoted fields is still a card
    return [
        Card.from_dict({wire: row.get(column) or "" for column, wire in CSV_COLUMNS.items()})
        for row in reader
    ]
