"""
Health check endpoints.

Provides liveness and readiness probes with database connectivity checks.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from pvpfilter.db.database import get_session
from pvpfilter.services.catalog import CatalogService, get_catalog

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    database: str | None = None
    catalog_loaded: bool | None = None
    card_count: int | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    Does not check dependencies.
    """
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> HealthResponse:
    """
    Readiness probe.

    Checks database connectivity and reports whether the catalog was
    loaded at startup. Returns 503 if the database is unavailable.
    """
    catalog_loaded = catalog.store_connected is True
    try:
        await session.execute(text("SELECT 1"))
        return HealthResponse(
            status="ready",
            database="connected",
            catalog_loaded=catalog_loaded,
            card_count=len(catalog.entries),
        )
    except Exception:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(
            status="not ready",
            database="disconnected",
            catalog_loaded=catalog_loaded,
        )
