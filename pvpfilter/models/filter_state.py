"""
Filter and sort state for the catalog view.

Both values are immutable. Every UI action produces a new FilterState or
SortSpec instead of mutating shared state, so a sequence of actions can be
replayed deterministically against the same record set.

INVARIANTS:
- Set-valued fields are OR within a field, AND across fields
- An empty set imposes no constraint
- banned_talents is a veto: any hit excludes the record
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

from pvpfilter.models.card import STAT_FIELDS, WIRE_FIELDS
from pvpfilter.models.failure import (
    InvalidFilterFieldError,
    InvalidSortColumnError,
    UnknownPresetError,
)


class HairMode(str, Enum):
    """How a hair color rule compares against a card's hair color."""

    EXACT = "exact"
    CONTAINS = "contains"


@dataclass(frozen=True, slots=True)
class HairRule:
    """One hair color match rule."""

    mode: HairMode
    value: str

    @classmethod
    def exact(cls, value: str) -> "HairRule":
        return cls(HairMode.EXACT, value)

    @classmethod
    def contains(cls, value: str) -> "HairRule":
        return cls(HairMode.CONTAINS, value)


# Round preset ids in cascade rank order
PRESET_ORDER: tuple[str, ...] = ("5", "7", "9", "10", "12")

# Filter fields that hold plain value sets, keyed by API name
VALUE_FILTER_FIELDS: dict[str, str] = {
    "element": "element",
    "human": "human",
    "talent_type": "talent_type",
}


def _toggled(values: frozenset[str], value: str) -> frozenset[str]:
    if value in values:
        return values - {value}
    return values | {value}


@dataclass(frozen=True, slots=True)
class FilterState:
    """
    Composite filter configuration.

    Attributes:
        element: Allowed element values
        human: Allowed type values ("Human", "Non-Human")
        hair_color: Hair color rules, any one matching passes
        talent_type: Allowed talent type values
        banned_talents: Lower-cased substrings that exclude a card
        search: Lower-cased substring matched against card names
        stat_band: Round 5 toggle, bans stats outside [60, 100]
        active_presets: Ids of the round presets currently applied
    """

    element: frozenset[str] = frozenset()
    human: frozenset[str] = frozenset()
    hair_color: frozenset[HairRule] = frozenset()
    talent_type: frozenset[str] = frozenset()
    banned_talents: frozenset[str] = frozenset()
    search: str = ""
    stat_band: bool = False
    active_presets: frozenset[str] = frozenset()

    def toggle_value(self, field_name: str, value: str) -> "FilterState":
        """Toggle a value in one of the plain value filters, by API name."""
        attr = VALUE_FILTER_FIELDS.get(field_name)
        if attr is None:
            raise InvalidFilterFieldError(field_name, sorted(VALUE_FILTER_FIELDS))
        return replace(self, **{attr: _toggled(getattr(self, attr), value)})

    def toggle_element(self, value: str) -> "FilterState":
        return replace(self, element=_toggled(self.element, value))

    def toggle_human(self, value: str) -> "FilterState":
        return replace(self, human=_toggled(self.human, value))

    def toggle_talent_type(self, value: str) -> "FilterState":
        return replace(self, talent_type=_toggled(self.talent_type, value))

    def toggle_hair_rule(self, rule: HairRule) -> "FilterState":
        if rule in self.hair_color:
            return replace(self, hair_color=self.hair_color - {rule})
        return replace(self, hair_color=self.hair_color | {rule})

    def add_banned_talent(self, talent: str) -> "FilterState":
        needle = talent.strip().lower()
        if not needle:
            return self
        return replace(self, banned_talents=self.banned_talents | {needle})

    def remove_banned_talent(self, talent: str) -> "FilterState":
        return replace(self, banned_talents=self.banned_talents - {talent.strip().lower()})

    def with_search(self, text: str) -> "FilterState":
        return replace(self, search=text.lower())


SortDirection = Literal["asc", "desc"]

SORT_COLUMNS: tuple[str, ...] = tuple(WIRE_FIELDS)
NUMERIC_SORT_COLUMNS: frozenset[str] = frozenset(STAT_FIELDS)


@dataclass(frozen=True, slots=True)
class SortSpec:
    """Optional single-column sort. column=None keeps filtered order."""

    column: str | None = None
    direction: SortDirection = "asc"

    def __post_init__(self) -> None:
        if self.column is not None and self.column not in SORT_COLUMNS:
            raise InvalidSortColumnError(self.column, list(SORT_COLUMNS))

    def clicked(self, column: str) -> "SortSpec":
        """Same column flips direction; a new column starts ascending."""
        if column == self.column:
            return SortSpec(column, "desc" if self.direction == "asc" else "asc")
        return SortSpec(column, "asc")


# --- Wire models ---


class HairRuleModel(BaseModel):
    """Wire form of a hair color rule."""

    mode: HairMode = HairMode.CONTAINS
    value: str = Field(..., min_length=1)

    def to_rule(self) -> HairRule:
        return HairRule(self.mode, self.value)


class FilterStateModel(BaseModel):
    """Wire form of a filter state."""

    element: list[str] = Field(default_factory=list)
    human: list[str] = Field(default_factory=list)
    hair_color: list[HairRuleModel] = Field(default_factory=list)
    talent_type: list[str] = Field(default_factory=list)
    banned_talents: list[str] = Field(default_factory=list)
    search: str = ""
    stat_band: bool = False
    active_presets: list[str] = Field(default_factory=list)

    def to_state(self) -> FilterState:
        """
        Convert to a FilterState.

        Raises:
            UnknownPresetError: active_presets names a round that does not exist
        """
        for preset_id in self.active_presets:
            if preset_id not in PRESET_ORDER:
                raise UnknownPresetError(preset_id, list(PRESET_ORDER))

        state = FilterState(
            element=frozenset(self.element),
            human=frozenset(self.human),
            hair_color=frozenset(rule.to_rule() for rule in self.hair_color),
            talent_type=frozenset(self.talent_type),
            stat_band=self.stat_band,
            active_presets=frozenset(self.active_presets),
        )
        for talent in self.banned_talents:
            state = state.add_banned_talent(talent)
        return state.with_search(self.search)

    @classmethod
    def from_state(cls, state: FilterState) -> "FilterStateModel":
        return cls(
            element=sorted(state.element),
            human=sorted(state.human),
            hair_color=[
                HairRuleModel(mode=rule.mode, value=rule.value)
                for rule in sorted(state.hair_color, key=lambda r: (r.mode.value, r.value))
            ],
            talent_type=sorted(state.talent_type),
            banned_talents=sorted(state.banned_talents),
            search=state.search,
            stat_band=state.stat_band,
            active_presets=sorted(state.active_presets, key=_preset_rank),
        )


class SortSpecModel(BaseModel):
    """Wire form of a sort spec."""

    column: str | None = None
    direction: SortDirection = "asc"

    def to_spec(self) -> SortSpec:
        return SortSpec(self.column, self.direction)


def _preset_rank(preset_id: str) -> int:
    if preset_id in PRESET_ORDER:
        return PRESET_ORDER.index(preset_id)
    return len(PRESET_ORDER)
