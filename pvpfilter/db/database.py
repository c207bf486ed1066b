"""
Database engine and sessions for the card store.

Catalog reads and writes go through SqlCardStore, which opens its own
sessions from async_session_factory. get_session is only used by request
handlers that talk to the database directly (the /ready probe).
"""

from collections.abc import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from pvpfilter.config import settings
from pvpfilter.models.db import Base

engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

# Shared by SqlCardStore and the seed job
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency yielding a session, committed on success."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create the cards table if it does not exist. Called at startup and by the seed job."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
