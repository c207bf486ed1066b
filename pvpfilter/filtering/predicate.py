"""
Predicate evaluator: does a card belong in the view?

matches() is a short-circuit conjunction of independent clauses. Each clause
passes when its part of the filter state is empty. The banned talent clause
has the opposite polarity: it vetoes a card on any hit.

INVARIANTS:
- Pure and total: never raises, malformed fields simply fail to match
- Same card + state -> same answer
"""

from pvpfilter.models.card import Card, parse_stat
from pvpfilter.models.filter_state import FilterState, HairMode, HairRule

STAT_BAND_MIN = 60
STAT_BAND_MAX = 100


def _element_clause(card: Card, state: FilterState) -> bool:
    return not state.element or card.element in state.element


def _type_clause(card: Card, state: FilterState) -> bool:
    return not state.human or card.type in state.human


def hair_rule_matches(rule: HairRule, hair_color: str) -> bool:
    """Exact: trimmed case-insensitive equality. Contains: case-insensitive substring."""
    if rule.mode == HairMode.EXACT:
        return hair_color.strip().lower() == rule.value.strip().lower()
    return rule.value.lower() in hair_color.lower()


def _hair_clause(card: Card, state: FilterState) -> bool:
    if not state.hair_color:
        return True
    return any(hair_rule_matches(rule, card.hair_color) for rule in state.hair_color)


def _search_clause(card: Card, state: FilterState) -> bool:
    return not state.search or state.search in card.name.lower()


def _talent_type_clause(card: Card, state: FilterState) -> bool:
    return not state.talent_type or card.talent_type in state.talent_type


def _banned_talents_clause(card: Card, state: FilterState) -> bool:
    if not state.banned_talents:
        return True
    talents = card.talents.strip().lower()
    return not any(banned.lower() in talents for banned in state.banned_talents)


def stat_in_band(value: int) -> bool:
    return STAT_BAND_MIN <= value <= STAT_BAND_MAX


def _stat_band_clause(card: Card, state: FilterState) -> bool:
    if not state.stat_band:
        return True
    # Unparsable stats are skipped, not failed
    return all(stat is None or stat_in_band(stat) for stat in card.stats())


def stat_band_label(value: str) -> str | None:
    """Cell styling for a stat: "good" inside [60, 100], "bad" outside, None if unparsable."""
    parsed = parse_stat(value)
    if parsed is None:
        return None
    return "good" if stat_in_band(parsed) else "bad"


CLAUSES = (
    _element_clause,
    _type_clause,
    _hair_clause,
    _search_clause,
    _talent_type_clause,
    _banned_talents_clause,
    _stat_band_clause,
)


def matches(card: Card, state: FilterState) -> bool:
    """Return True if the card passes every clause of the filter state."""
    return all(clause(card, state) for clause in CLAUSES)
