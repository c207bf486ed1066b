from pvpfilter.parsers.card_csv import CSV_HEADER, export_cards_csv, parse_cards_csv
from pvpfilter.parsers.card_json import cards_from_payload, export_cards_json, parse_cards_json

__all__ = [
    "CSV_HEADER",
    "cards_from_payload",
    "export_cards_csv",
    "export_cards_json",
    "parse_cards_csv",
    "parse_cards_json",
]
