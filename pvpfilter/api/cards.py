"""
Card API endpoints.

Provides CRUD operations on the card catalog. Cards are addressed by their
stable id, never by position. Every mutation saves the full catalog.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field, field_validator

from pvpfilter.models.card import STAT_FIELDS, Card, CatalogEntry
from pvpfilter.services.catalog import CatalogService, get_catalog

router = APIRouter(prefix="/cards", tags=["cards"])


class CardPayload(BaseModel):
    """A card in wire format (field names match the JSON interchange file)."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    element: str = ""
    hairColor: str = ""
    type: str = ""
    hp: str = ""
    atk: str = ""
    def_: str = Field(default="", alias="def")
    spd: str = ""
    talents: str = ""
    talentType: str = ""
    notes: str = ""

    @field_validator("hp", "atk", "def_", "spd", mode="before")
    @classmethod
    def _stat_as_text(cls, value: Any) -> Any:
        # Stats are stored as text; accept numbers from the form
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value

    def to_card(self) -> Card:
        """Convert to a Card. Blank stats default to "0"."""
        data = self.model_dump(by_alias=True)
        for stat in STAT_FIELDS:
            if not data[stat].strip():
                data[stat] = "0"
        return Card.from_dict(data)


class CardResponse(CardPayload):
    """A card with its stable id."""

    id: str

    @classmethod
    def from_entry(cls, entry: CatalogEntry) -> "CardResponse":
        return cls.model_validate({"id": entry.id, **entry.card.to_dict()})


class CardListResponse(BaseModel):
    """Response model for the full catalog."""

    cards: list[CardResponse]
    total: int


class DeleteResponse(BaseModel):
    """Response model for delete operations."""

    id: str
    deleted: bool
    message: str = ""


def card_list(entries: list[CatalogEntry]) -> CardListResponse:
    return CardListResponse(
        cards=[CardResponse.from_entry(entry) for entry in entries],
        total=len(entries),
    )


@router.get("", response_model=CardListResponse)
async def list_cards(
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> CardListResponse:
    """Get every card in stored order."""
    return card_list(catalog.entries)


@router.get("/{card_id}", response_model=CardResponse)
async def get_card(
    card_id: str,
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> CardResponse:
    """Get a single card by id."""
    return CardResponse.from_entry(catalog.get(card_id))


@router.post("", response_model=CardResponse, status_code=status.HTTP_201_CREATED)
async def add_card(
    request: CardPayload,
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> CardResponse:
    """
    Add a card to the end of the catalog.

    Blank stats are stored as "0". If the save fails the card stays in the
    in-memory catalog and the error is returned (503).
    """
    entry = await catalog.add(request.to_card())
    return CardResponse.from_entry(entry)


@router.put("/{card_id}", response_model=CardResponse)
async def update_card(
    card_id: str,
    request: CardPayload,
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> CardResponse:
    """Replace a card in place, keeping its id and position."""
    entry = await catalog.update(card_id, request.to_card())
    return CardResponse.from_entry(entry)


@router.delete("/{card_id}", response_model=DeleteResponse)
async def delete_card(
    card_id: str,
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> DeleteResponse:
    """Delete a card. This cannot be undone."""
    entry = await catalog.delete(card_id)
    return DeleteResponse(
        id=card_id,
        deleted=True,
        message=f'Deleted "{entry.card.name}".',
    )


@router.post("/reset", response_model=CardListResponse)
async def reset_cards(
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> CardListResponse:
    """Replace the whole catalog with the default card set."""
    return card_list(await catalog.reset_to_defaults())
