"""
Round presets: cumulative filter bundles.

Each round is a fixed mutation of the filter state. Rounds are ranked in a
fixed order, and toggling one cascades along that order:

- Activating round k also activates every inactive lower-ranked round
- Deactivating round k also deactivates every active higher-ranked round

Click order never matters, only rank. Which rounds are active is part of the
FilterState itself.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace

from pvpfilter.models.failure import UnknownPresetError
from pvpfilter.models.filter_state import PRESET_ORDER, FilterState, HairRule

logger = logging.getLogger(__name__)

ROUND_7_ELEMENTS = frozenset({"Dark", "Neutral", "Light"})
ROUND_9_HAIR_RULES = frozenset({HairRule.contains("Brown"), HairRule.contains("White")})


@dataclass(frozen=True, slots=True)
class RoundPreset:
    """A named filter bundle with its apply and remove mutations."""

    preset_id: str
    description: str
    activate: Callable[[FilterState], FilterState]
    deactivate: Callable[[FilterState], FilterState]


PRESETS: dict[str, RoundPreset] = {
    "5": RoundPreset(
        "5",
        "Round 5: Cards with stats above 100 or below 60 are banned",
        activate=lambda s: replace(s, stat_band=True),
        deactivate=lambda s: replace(s, stat_band=False),
    ),
    "7": RoundPreset(
        "7",
        "Round 7: Only Dark, Neutral and Light elemental cards",
        activate=lambda s: replace(s, element=s.element | ROUND_7_ELEMENTS),
        deactivate=lambda s: replace(s, element=s.element - ROUND_7_ELEMENTS),
    ),
    "9": RoundPreset(
        "9",
        "Round 9: Only Brown and White hair colors",
        activate=lambda s: replace(s, hair_color=s.hair_color | ROUND_9_HAIR_RULES),
        deactivate=lambda s: replace(s, hair_color=s.hair_color - ROUND_9_HAIR_RULES),
    ),
    "10": RoundPreset(
        "10",
        "Round 10: At least 1 Neutral elemental card must be used",
        activate=lambda s: replace(s, element=s.element | {"Neutral"}),
        deactivate=lambda s: replace(s, element=s.element - {"Neutral"}),
    ),
    "12": RoundPreset(
        "12",
        "Round 12: Only Human cards allowed",
        activate=lambda s: replace(s, human=s.human | {"Human"}),
        deactivate=lambda s: replace(s, human=s.human - {"Human"}),
    ),
}


def _rank(preset_id: str) -> int:
    try:
        return PRESET_ORDER.index(preset_id)
    except ValueError:
        raise UnknownPresetError(preset_id, list(PRESET_ORDER)) from None


def _activate_one(state: FilterState, preset_id: str) -> FilterState:
    if preset_id in state.active_presets:
        return state
    state = PRESETS[preset_id].activate(state)
    return replace(state, active_presets=state.active_presets | {preset_id})


def _deactivate_one(state: FilterState, preset_id: str) -> FilterState:
    if preset_id not in state.active_presets:
        return state
    state = PRESETS[preset_id].deactivate(state)
    return replace(state, active_presets=state.active_presets - {preset_id})


def apply_preset(state: FilterState, preset_id: str, activating: bool) -> FilterState:
    """
    Apply or remove a round preset with its cascade.

    Args:
        state: Current filter state
        preset_id: One of PRESET_ORDER
        activating: True to turn the round on, False to turn it off

    Returns:
        New filter state. The input state is not modified.

    Raises:
        UnknownPresetError: preset_id is not a known round
    """
    rank = _rank(preset_id)

    if activating:
        # Lower ranks first so the chain is applied in order
        for lower_id in PRESET_ORDER[: rank + 1]:
            state = _activate_one(state, lower_id)
    else:
        # Highest first, unwinding the chain
        for higher_id in reversed(PRESET_ORDER[rank:]):
            state = _deactivate_one(state, higher_id)

    logger.debug(
        "Round %s %s, active rounds: %s",
        preset_id,
        "on" if activating else "off",
        active_presets(state),
    )
    return state


def toggle_preset(state: FilterState, preset_id: str) -> FilterState:
    """Turn a round off if it is active, on otherwise."""
    return apply_preset(state, preset_id, activating=preset_id not in state.active_presets)


def active_presets(state: FilterState) -> list[str]:
    """Active round ids in rank order."""
    return [preset_id for preset_id in PRESET_ORDER if preset_id in state.active_presets]


def describe_presets(state: FilterState) -> str:
    """Descriptions of the active rounds joined with " + ", empty when none is active."""
    return " + ".join(PRESETS[preset_id].description for preset_id in active_presets(state))
