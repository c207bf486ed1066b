from pvpfilter.models.card import (
    HUMAN,
    NON_HUMAN,
    STAT_FIELDS,
    WIRE_FIELDS,
    Card,
    CatalogEntry,
    entries_from_cards,
    parse_stat,
)
from pvpfilter.models.failure import (
    CardNotFoundError,
    FailureDetail,
    FailureKind,
    InvalidFilterFieldError,
    InvalidSortColumnError,
    KnownError,
    MalformedImportError,
    StoreUnavailableError,
    UnknownPresetError,
)
from pvpfilter.models.filter_state import (
    SORT_COLUMNS,
    FilterState,
    HairMode,
    HairRule,
    SortSpec,
)

__all__ = [
    "Card",
    "CardNotFoundError",
    "CatalogEntry",
    "FailureDetail",
    "FailureKind",
    "FilterState",
    "HUMAN",
    "HairMode",
    "HairRule",
    "InvalidFilterFieldError",
    "InvalidSortColumnError",
    "KnownError",
    "MalformedImportError",
    "NON_HUMAN",
    "SORT_COLUMNS",
    "STAT_FIELDS",
    "SortSpec",
    "StoreUnavailableError",
    "UnknownPresetError",
    "WIRE_FIELDS",
    "entries_from_cards",
    "parse_stat",
]
