"""
View builder: the visible, ordered subset of the catalog.

build_view() recomputes the whole view from scratch on every call. There is
no incremental diffing; callers rebuild after every state change.

INVARIANTS:
- Filtering is monotonic (only removes cards, never adds or reorders)
- Sorting is stable: equal keys keep their filtered order
- Human/non-human counts cover the FULL record set, not the filtered view
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from pvpfilter.filtering.predicate import matches
from pvpfilter.filtering.presets import describe_presets
from pvpfilter.models.card import HUMAN, NON_HUMAN, CatalogEntry, parse_stat
from pvpfilter.models.filter_state import NUMERIC_SORT_COLUMNS, FilterState, SortSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ViewCounts:
    """Aggregate counts shown next to the table."""

    total: int = 0
    filtered: int = 0
    human: int = 0
    non_human: int = 0


@dataclass(frozen=True, slots=True)
class CatalogView:
    """
    Result of one view build.

    Attributes:
        entries: Visible cards in display order, each with its stable id
        counts: Aggregate counts
        preset_description: Active round descriptions joined with " + "
        banned_talents: Banned talent tags, for display only
    """

    entries: list[CatalogEntry] = field(default_factory=list)
    counts: ViewCounts = field(default_factory=ViewCounts)
    preset_description: str = ""
    banned_talents: list[str] = field(default_factory=list)


def sort_key(entry: CatalogEntry, column: str) -> int | str:
    """Numeric columns sort by parsed value (unparsable = 0), others case-insensitively."""
    value = entry.card.value(column)
    if column in NUMERIC_SORT_COLUMNS:
        parsed = parse_stat(value)
        return 0 if parsed is None else parsed
    return value.lower()


def sort_entries(entries: Sequence[CatalogEntry], sort: SortSpec) -> list[CatalogEntry]:
    """Stable sort by the sort column. No column leaves the order untouched."""
    if sort.column is None:
        return list(entries)
    column = sort.column
    # sorted() with reverse=True keeps ties in original order
    return sorted(
        entries,
        key=lambda entry: sort_key(entry, column),
        reverse=sort.direction == "desc",
    )


def count_entries(entries: Sequence[CatalogEntry], filtered: int) -> ViewCounts:
    """Counts over the full set; `filtered` is the size of the visible view."""
    return ViewCounts(
        total=len(entries),
        filtered=filtered,
        human=sum(1 for entry in entries if entry.card.type == HUMAN),
        non_human=sum(1 for entry in entries if entry.card.type == NON_HUMAN),
    )


def build_view(
    entries: Sequence[CatalogEntry],
    state: FilterState,
    sort: SortSpec | None = None,
) -> CatalogView:
    """
    Build the visible view of the catalog.

    Args:
        entries: Full record set in stored order
        state: Filter state to apply
        sort: Optional sort; None or an empty column keeps filtered order

    Returns:
        CatalogView with visible entries, counts and display extras
    """
    visible = [entry for entry in entries if matches(entry.card, state)]

    if sort is not None:
        visible = sort_entries(visible, sort)

    counts = count_entries(entries, len(visible))
    logger.debug("Built view: %d of %d cards visible", counts.filtered, counts.total)

    return CatalogView(
        entries=visible,
        counts=counts,
        preset_description=describe_presets(state),
        banned_talents=sorted(state.banned_talents),
    )


@dataclass(frozen=True, slots=True)
class FilterOptions:
    """Distinct values offered as filter buttons."""

    elements: list[str] = field(default_factory=list)
    hair_colors: list[str] = field(default_factory=list)
    talent_types: list[str] = field(default_factory=list)


def filter_options(entries: Sequence[CatalogEntry]) -> FilterOptions:
    """Sorted distinct non-empty elements, hair colors and talent types."""
    return FilterOptions(
        elements=sorted({e.card.element for e in entries if e.card.element}),
        hair_colors=sorted({e.card.hair_color for e in entries if e.card.hair_color}),
        talent_types=sorted({e.card.talent_type for e in entries if e.card.talent_type}),
    )
