"""Tests for the seed job and the default card set."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from pvpfilter.db.operations import load_cards
from pvpfilter.jobs.seed_cards import run_seed
from pvpfilter.services.default_cards import DefaultCardsError, get_default_cards


class TestDefaultCards:
    def test_default_cards_load(self) -> None:
        cards = get_default_cards()

        assert len(cards) == 16
        assert cards[0].name == "Akane Hoshino"
        assert all(card.name for card in cards)

    def test_returns_fresh_list(self) -> None:
        first = get_default_cards()
        first.clear()

        assert len(get_default_cards()) == 16

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DefaultCardsError, match="not found"):
            get_default_cards(tmp_path / "missing.json")

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(DefaultCardsError, match="empty"):
            get_default_cards(path)


class TestRunSeed:
    async def test_seeds_empty_store(self, session_factory) -> None:
        with (
            patch("pvpfilter.jobs.seed_cards.init_db", new_callable=AsyncMock),
            patch("pvpfilter.jobs.seed_cards.async_session_factory", session_factory),
        ):
            written = await run_seed()

        assert written == 16
        async with session_factory() as session:
            loaded = await load_cards(session)
        assert loaded[0].card.name == "Akane Hoshino"

    async def test_skips_populated_store_without_force(
        self, session_factory, sql_store, sample_entries
    ) -> None:
        await sql_store.save_all(sample_entries)

        with (
            patch("pvpfilter.jobs.seed_cards.init_db", new_callable=AsyncMock),
            patch("pvpfilter.jobs.seed_cards.async_session_factory", session_factory),
        ):
            written = await run_seed()

        assert written == 0
        assert await sql_store.load() == sample_entries

    async def test_force_replaces_store(
        self, session_factory, sql_store, sample_entries, tmp_path: Path
    ) -> None:
        await sql_store.save_all(sample_entries)
        path = tmp_path / "seed.json"
        path.write_text(json.dumps([{"name": "Seeded"}]), encoding="utf-8")

        with (
            patch("pvpfilter.jobs.seed_cards.init_db", new_callable=AsyncMock),
            patch("pvpfilter.jobs.seed_cards.async_session_factory", session_factory),
        ):
            written = await run_seed(force=True, path=path)

        assert written == 1
        loaded = await sql_store.load()
        assert [entry.card.name for entry in loaded] == ["Seeded"]
