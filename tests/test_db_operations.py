"""Tests for database CRUD operations and the SQL card store."""

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from pvpfilter.db.operations import count_cards, load_cards, replace_all_cards
from pvpfilter.models.card import CatalogEntry
from pvpfilter.models.failure import StoreUnavailableError
from pvpfilter.services.card_store import SqlCardStore


class TestCardOperations:
    async def test_load_empty(self, session: AsyncSession) -> None:
        assert await load_cards(session) == []
        assert await count_cards(session) == 0

    async def test_replace_and_load_keeps_order_and_ids(
        self, session: AsyncSession, sample_entries: list[CatalogEntry]
    ) -> None:
        written = await replace_all_cards(session, sample_entries)
        await session.commit()

        loaded = await load_cards(session)

        assert written == len(sample_entries)
        assert loaded == sample_entries

    async def test_replace_overwrites_previous_set(
        self, session: AsyncSession, sample_entries: list[CatalogEntry]
    ) -> None:
        await replace_all_cards(session, sample_entries)
        await session.commit()

        await replace_all_cards(session, sample_entries[:2])
        await session.commit()

        assert await count_cards(session) == 2
        assert [e.id for e in await load_cards(session)] == ["card-0", "card-1"]

    async def test_reordered_entries_are_stored_in_new_order(
        self, session: AsyncSession, sample_entries: list[CatalogEntry]
    ) -> None:
        reordered = list(reversed(sample_entries))

        await replace_all_cards(session, reordered)
        await session.commit()

        assert await load_cards(session) == reordered

    async def test_def_column_round_trip(
        self, session: AsyncSession, make_card
    ) -> None:
        entry = CatalogEntry(id="tank", card=make_card("Tank", def_="115"))

        await replace_all_cards(session, [entry])
        await session.commit()

        loaded = await load_cards(session)
        assert loaded[0].card.def_ == "115"


class TestSqlCardStore:
    async def test_empty_store_loads_none(self, sql_store: SqlCardStore) -> None:
        assert await sql_store.load() is None

    async def test_save_then_load(
        self, sql_store: SqlCardStore, sample_entries: list[CatalogEntry]
    ) -> None:
        await sql_store.save_all(sample_entries)

        assert await sql_store.load() == sample_entries

    async def test_database_errors_become_store_unavailable(self) -> None:
        class BrokenSession:
            async def __aenter__(self):
                raise OperationalError("SELECT 1", {}, Exception("connection refused"))

            async def __aexit__(self, *args):
                return False

        store = SqlCardStore(lambda: BrokenSession())  # type: ignore[arg-type]

        with pytest.raises(StoreUnavailableError) as exc_info:
            await store.load()

        assert exc_info.value.status_code == 503
        assert exc_info.value.operation == "load"
