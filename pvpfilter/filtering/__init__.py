"""
Filter, sort and derived-view engine.

Everything here is pure: functions take the record set and immutable
state values and return new values.
"""

from pvpfilter.filtering.predicate import (
    STAT_BAND_MAX,
    STAT_BAND_MIN,
    hair_rule_matches,
    matches,
    stat_band_label,
)
from pvpfilter.filtering.presets import (
    PRESET_ORDER,
    PRESETS,
    RoundPreset,
    active_presets,
    apply_preset,
    describe_presets,
    toggle_preset,
)
from pvpfilter.filtering.view import (
    CatalogView,
    FilterOptions,
    ViewCounts,
    build_view,
    filter_options,
    sort_entries,
)

__all__ = [
    # Predicate evaluator
    "STAT_BAND_MAX",
    "STAT_BAND_MIN",
    "hair_rule_matches",
    "matches",
    "stat_band_label",
    # Round presets
    "PRESET_ORDER",
    "PRESETS",
    "RoundPreset",
    "active_presets",
    "apply_preset",
    "describe_presets",
    "toggle_preset",
    # View builder
    "CatalogView",
    "FilterOptions",
    "ViewCounts",
    "build_view",
    "filter_options",
    "sort_entries",
]
