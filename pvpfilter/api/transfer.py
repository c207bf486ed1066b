"""
Import/export API endpoints.

JSON export and import use the same array-of-cards file. CSV is offered
for spreadsheets. Import always replaces the whole catalog, and a payload
that fails to parse is rejected before anything changes.
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel

from pvpfilter.config import settings
from pvpfilter.models.failure import MalformedImportError
from pvpfilter.parsers.card_csv import export_cards_csv, parse_cards_csv
from pvpfilter.parsers.card_json import export_cards_json, parse_cards_json
from pvpfilter.services.catalog import CatalogService, get_catalog

router = APIRouter(tags=["transfer"])


class ImportResponse(BaseModel):
    """Response model for an import."""

    cards_imported: int
    total: int
    message: str = ""


def export_filename(extension: str, today: date | None = None) -> str:
    """Download name such as anime-cards-2024-05-01.json."""
    day = today or date.today()
    return f"{settings.export_basename}-{day.isoformat()}.{extension}"


def _attachment(content: str, media_type: str, extension: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{export_filename(extension)}"'},
    )


async def _body_text(request: Request) -> str:
    raw = await request.body()
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedImportError("file is not UTF-8 text") from e


@router.get("/export/json")
async def export_json(
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> Response:
    """Download the full catalog as a JSON array."""
    return _attachment(export_cards_json(catalog.cards), "application/json", "json")


@router.get("/export/csv")
async def export_csv(
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> Response:
    """Download the full catalog as CSV."""
    return _attachment(export_cards_csv(catalog.cards), "text/csv", "csv")


@router.post("/import/json", response_model=ImportResponse)
async def import_json(
    request: Request,
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> ImportResponse:
    """
    Replace the catalog with the cards in an exported JSON file.

    The request body is the raw file contents.
    """
    cards = parse_cards_json(await _body_text(request))
    entries = await catalog.replace_all(cards)
    return ImportResponse(
        cards_imported=len(cards),
        total=len(entries),
        message=f"Imported {len(cards)} cards.",
    )


@router.post("/import/csv", response_model=ImportResponse)
async def import_csv(
    request: Request,
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> ImportResponse:
    """Replace the catalog with the cards in an exported CSV file."""
    cards = parse_cards_csv(await _body_text(request))
    entries = await catalog.replace_all(cards)
    return ImportResponse(
        cards_imported=len(cards),
        total=len(entries),
        message=f"Imported {len(cards)} cards.",
    )
