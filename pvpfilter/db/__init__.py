from pvpfilter.db.database import get_session, init_db
from pvpfilter.db.operations import (
    count_cards,
    entry_to_row,
    load_cards,
    replace_all_cards,
    row_to_entry,
)

__all__ = [
    "count_cards",
    "entry_to_row",
    "get_session",
    "init_db",
    "load_cards",
    "replace_all_cards",
    "row_to_entry",
]
