import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from pvpfilter.api import (
    cards_router,
    health_router,
    transfer_router,
    view_router,
)
from pvpfilter.config import settings
from pvpfilter.db.database import init_db
from pvpfilter.models.failure import KnownError
from pvpfilter.services.catalog import get_catalog

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    catalog = get_catalog()
    # On failure serve an empty catalog; /ready reports it as not loaded
    try:
        await init_db()
        await catalog.load()
    except (SQLAlchemyError, OSError) as e:
        catalog.store_connected = False
        logger.error("Database unavailable at startup: %s", e)
    except KnownError as e:
        logger.error("Catalog not loaded at startup: %s", e.message)
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("pvpfilter"),
    lifespan=lifespan,
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Return known failures as a classified JSON body."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_detail().model_dump(mode="json"),
    )


app.include_router(cards_router)
app.include_router(health_router)
app.include_router(transfer_router)
app.include_router(view_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
