import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from pvpfilter.db.database import get_session
from pvpfilter.main import app
from pvpfilter.models.card import Card, CatalogEntry
from pvpfilter.models.db import Base
from pvpfilter.models.failure import StoreUnavailableError
from pvpfilter.services.card_store import SqlCardStore
from pvpfilter.services.catalog import CatalogService, get_catalog


def _make_card(
    name: str,
    element: str = "Fire",
    hair_color: str = "Black",
    type: str = "Human",
    hp: str = "80",
    atk: str = "80",
    def_: str = "80",
    spd: str = "80",
    talents: str = "",
    talent_type: str = "",
    notes: str = "",
) -> Card:
    """Build a card with in-band stats unless overridden."""
    return Card(
        name=name,
        element=element,
        hair_color=hair_color,
        type=type,
        hp=hp,
        atk=atk,
        def_=def_,
        spd=spd,
        talents=talents,
        talent_type=talent_type,
        notes=notes,
    )


@pytest.fixture
def make_card():
    """Factory for cards with in-band stats."""
    return _make_card


@pytest.fixture
def sample_cards() -> list[Card]:
    """A small catalog covering every filter dimension."""
    return [
        _make_card("Akane", element="Fire", hair_color="Red", talents="Blazing Strike"),
        _make_card("Yuki", element="Light", hair_color="White", talents="Holy Heal"),
        _make_card(
            "Kuro",
            element="Dark",
            hair_color="Black",
            type="Non-Human",
            atk="110",
            talent_type="Active",
        ),
        _make_card("Daichi", element="Earth", hair_color="Brown", spd="55"),
        _make_card("Sora", element="Neutral", hair_color="Light Brown", talent_type="Passive"),
        _make_card("Tsubaki", element="Neutral", hair_color="Off-White", type="Non-Human"),
    ]


@pytest.fixture
def sample_entries(sample_cards: list[Card]) -> list[CatalogEntry]:
    """Sample cards with predictable ids (card-0, card-1, ...)."""
    return [CatalogEntry(id=f"card-{i}", card=card) for i, card in enumerate(sample_cards)]


class MemoryCardStore:
    """CardStore kept in a list, with switchable failures."""

    def __init__(self, entries: list[CatalogEntry] | None = None):
        self.saved: list[CatalogEntry] | None = list(entries) if entries else None
        self.fail_load = False
        self.fail_save = False
        self.save_calls = 0

    async def load(self) -> list[CatalogEntry] | None:
        if self.fail_load:
            raise StoreUnavailableError("load", "ConnectionRefusedError")
        return list(self.saved) if self.saved else None

    async def save_all(self, entries: list[CatalogEntry]) -> None:
        self.save_calls += 1
        if self.fail_save:
            raise StoreUnavailableError("save", "ConnectionRefusedError")
        self.saved = list(entries)


@pytest.fixture
def memory_store(sample_entries: list[CatalogEntry]) -> MemoryCardStore:
    """In-memory store preloaded with the sample entries."""
    return MemoryCardStore(sample_entries)


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory) -> AsyncSession:
    """Provide a database session for tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def sql_store(session_factory) -> SqlCardStore:
    return SqlCardStore(session_factory)


@pytest.fixture
def catalog(sql_store: SqlCardStore) -> CatalogService:
    """An empty catalog backed by the in-memory database."""
    return CatalogService(sql_store)


@pytest.fixture
async def client(catalog: CatalogService, session_factory):
    """Provide an async test client wired to the test catalog and database."""

    async def override_get_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_catalog] = lambda: catalog

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def seeded_catalog(
    catalog: CatalogService, sql_store: SqlCardStore, sample_entries: list[CatalogEntry]
) -> CatalogService:
    """The test catalog loaded with the sample entries."""
    await sql_store.save_all(sample_entries)
    await catalog.load()
    return catalog
