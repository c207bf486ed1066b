"""
View API endpoints.

Every endpoint that changes the filter or sort state returns the freshly
rebuilt view, so the front end only ever renders what it is given.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from pvpfilter.api.cards import CardResponse
from pvpfilter.filtering.predicate import stat_band_label
from pvpfilter.filtering.view import CatalogView, build_view
from pvpfilter.models.card import STAT_FIELDS, CatalogEntry
from pvpfilter.models.filter_state import (
    FilterStateModel,
    HairRuleModel,
    SortSpecModel,
)
from pvpfilter.services.catalog import CatalogService, get_catalog

router = APIRouter(prefix="/view", tags=["view"])


class ViewCard(CardResponse):
    """A visible card with per-stat band labels for cell styling."""

    stat_bands: dict[str, str | None] = Field(
        default_factory=dict,
        description="'good' inside [60, 100], 'bad' outside, null if not a number",
    )

    @classmethod
    def from_view_entry(cls, entry: CatalogEntry) -> "ViewCard":
        card = entry.card
        return cls.model_validate(
            {
                "id": entry.id,
                **card.to_dict(),
                "stat_bands": {stat: stat_band_label(card.value(stat)) for stat in STAT_FIELDS},
            }
        )


class CountsResponse(BaseModel):
    """Aggregate counts. human/non_human cover the full catalog."""

    total: int = 0
    filtered: int = 0
    human: int = 0
    non_human: int = 0


class FilterOptionsResponse(BaseModel):
    """Distinct values available as filter buttons."""

    elements: list[str] = Field(default_factory=list)
    hair_colors: list[str] = Field(default_factory=list)
    talent_types: list[str] = Field(default_factory=list)


class ViewResponse(BaseModel):
    """Response model for the current view."""

    cards: list[ViewCard]
    counts: CountsResponse
    preset_description: str = ""
    active_presets: list[str] = Field(default_factory=list)
    banned_talents: list[str] = Field(default_factory=list)
    filters: FilterStateModel
    sort: SortSpecModel
    options: FilterOptionsResponse
    store_connected: bool | None = None


class ViewQueryRequest(BaseModel):
    """Request model for a stateless view query."""

    filters: FilterStateModel = Field(default_factory=FilterStateModel)
    sort: SortSpecModel = Field(default_factory=SortSpecModel)


class ValueRequest(BaseModel):
    """A single filter value to toggle."""

    value: str = Field(..., examples=["Dark"])


class SearchRequest(BaseModel):
    """Search box contents."""

    text: str = Field(default="", examples=["aka"])


class BannedTalentRequest(BaseModel):
    """A talent substring to ban."""

    talent: str = Field(..., min_length=1, examples=["heal"])


def _view_response(
    catalog: CatalogService,
    view: CatalogView,
    filters: FilterStateModel,
    sort: SortSpecModel,
) -> ViewResponse:
    options = catalog.options()
    return ViewResponse(
        cards=[ViewCard.from_view_entry(entry) for entry in view.entries],
        counts=CountsResponse(
            total=view.counts.total,
            filtered=view.counts.filtered,
            human=view.counts.human,
            non_human=view.counts.non_human,
        ),
        preset_description=view.preset_description,
        active_presets=filters.active_presets,
        banned_talents=view.banned_talents,
        filters=filters,
        sort=sort,
        options=FilterOptionsResponse(
            elements=options.elements,
            hair_colors=options.hair_colors,
            talent_types=options.talent_types,
        ),
        store_connected=catalog.store_connected,
    )


def current_view(catalog: CatalogService) -> ViewResponse:
    """Rebuild the view from the catalog's own state."""
    return _view_response(
        catalog,
        catalog.view(),
        FilterStateModel.from_state(catalog.state),
        SortSpecModel(column=catalog.sort.column, direction=catalog.sort.direction),
    )


@router.get("", response_model=ViewResponse)
async def get_view(
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> ViewResponse:
    """Get the current filtered and sorted view."""
    return current_view(catalog)


@router.post("/query", response_model=ViewResponse)
async def query_view(
    request: ViewQueryRequest,
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> ViewResponse:
    """
    Build a view for an explicit filter state and sort.

    Does not change the catalog's stored view state.
    """
    view = build_view(catalog.entries, request.filters.to_state(), request.sort.to_spec())
    return _view_response(
        catalog,
        view,
        FilterStateModel.from_state(request.filters.to_state()),
        request.sort,
    )


@router.post("/filters/hair_color", response_model=ViewResponse)
async def toggle_hair_color(
    request: HairRuleModel,
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> ViewResponse:
    """Toggle a hair color rule (exact or contains)."""
    rule = request.to_rule()
    catalog.update_state(lambda state: state.toggle_hair_rule(rule))
    return current_view(catalog)


@router.post("/filters/{field_name}", response_model=ViewResponse)
async def toggle_filter(
    field_name: str,
    request: ValueRequest,
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> ViewResponse:
    """Toggle a value in the element, human or talent_type filter."""
    catalog.update_state(lambda state: state.toggle_value(field_name, request.value))
    return current_view(catalog)


@router.put("/search", response_model=ViewResponse)
async def set_search(
    request: SearchRequest,
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> ViewResponse:
    """Set the name search text (case-insensitive)."""
    catalog.update_state(lambda state: state.with_search(request.text))
    return current_view(catalog)


@router.post("/banned-talents", response_model=ViewResponse)
async def ban_talent(
    request: BannedTalentRequest,
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> ViewResponse:
    """Exclude every card whose talents contain this text."""
    catalog.update_state(lambda state: state.add_banned_talent(request.talent))
    return current_view(catalog)


@router.delete("/banned-talents/{talent}", response_model=ViewResponse)
async def unban_talent(
    talent: str,
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> ViewResponse:
    """Remove a banned talent tag."""
    catalog.update_state(lambda state: state.remove_banned_talent(talent))
    return current_view(catalog)


@router.post("/presets/{preset_id}", response_model=ViewResponse)
async def toggle_round(
    preset_id: str,
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> ViewResponse:
    """
    Toggle a round preset.

    Turning a round on also turns on every lower round; turning it off also
    turns off every higher round.
    """
    catalog.toggle_preset(preset_id)
    return current_view(catalog)


@router.post("/sort/{column}", response_model=ViewResponse)
async def click_sort(
    column: str,
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> ViewResponse:
    """Sort by a column. Clicking the current sort column flips direction."""
    catalog.click_sort(column)
    return current_view(catalog)


@router.post("/clear", response_model=ViewResponse)
async def clear_view(
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> ViewResponse:
    """Clear every filter, round, search and sort."""
    catalog.clear()
    return current_view(catalog)
